from tailscheme.repl import app

app(prog_name="tailscheme")
