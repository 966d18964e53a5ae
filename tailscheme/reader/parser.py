"""
  Reader: Lexer and Parser

- Regex-driven lexer yielding (token_type, token_value) pairs
- Recursive-descent parser emitting runtime values directly, so code is data:

    - integers -> int (signed 64-bit range)
    - #t / #f -> bool
    - symbols -> Symbol
    - strings -> str (escapes \\n \\t \\\\ \\" resolved)
    - (a b c) -> list
    - [a, b, c] -> Array of the unevaluated elements
    - {k: v, ...} -> Map from key text to the unevaluated values
    - 'x -> [Symbol("quote"), x]
    - blank input -> Symbol("") (inert sentinel, evaluates to Nil)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from tailscheme import SExpression
from tailscheme.errors import SchemeParserError
from tailscheme.types.symbol import Symbol
from tailscheme.types.containers import Array, Map
from tailscheme.types.values import INT_MIN, INT_MAX


TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbracket>\[)"  # [
    r"|(?P<rbracket>\])"  # ]
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<quote>')"  # '
    r"|(?P<colon>:)"  # map key separator
    r"|(?P<comma>,)"  # array/map element separator
    r"|(?P<dot>\.)"  # reserved
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<unterminated>")'  # opening quote with no closing one
    r"|(?P<integer>-?\d+)"
    r"|(?P<boolean>#.?)"  # #t / #f, anything else is rejected below
    r"|(?P<symbol>[^\s()\[\]{}:,'\"#;.\d][^\s()\[\]{}:,']*)",  # fallback: symbols
    re.DOTALL,
)

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}

UNEXPECTED: dict[str, str] = {
    "rparen": ")",
    "rbracket": "]",
    "rbrace": "}",
    "colon": ":",
    "comma": ",",
    "dot": ".",
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise SchemeParserError(f"Unexpected character: {source[pos]}")
        kind = m.lastgroup
        text = m.group()
        pos = m.end()

        if kind in ("whitespace", "comment"):
            continue
        if kind == "unterminated":
            raise SchemeParserError("Unterminated string literal")
        if kind == "boolean":
            if len(text) == 1:
                raise SchemeParserError("Incomplete boolean literal: #")
            if text not in ("#t", "#f"):
                raise SchemeParserError(f"Invalid boolean literal: {text}")
        yield kind, text


def unescape(literal: str) -> str:
    """Resolve escapes in a quoted string token (quotes included)."""
    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\":
            # The token pattern guarantees a character after every backslash
            escaped = body[i + 1]
            if escaped not in STRING_ESCAPES:
                raise SchemeParserError(f"Invalid escape sequence: \\{escaped}")
            out.append(STRING_ESCAPES[escaped])
            i += 2
        else:
            out.append(c)
            i += 1
    return "".join(out)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise SchemeParserError("Unexpected end of input")

        if tok_type == "lparen":
            return self._parse_list()
        if tok_type == "lbracket":
            return self._parse_array()
        if tok_type == "lbrace":
            return self._parse_map()

        # Quote forms
        if tok_type == "quote":
            return [Symbol("quote"), self.parse_expr()]

        if tok_type == "symbol":
            return Symbol(tok_val)

        if tok_type == "integer":
            value = int(tok_val)
            if value < INT_MIN or value > INT_MAX:
                raise SchemeParserError(f"Invalid integer literal: {tok_val}")
            return value

        if tok_type == "boolean":
            return tok_val == "#t"

        if tok_type == "string":
            return unescape(tok_val)

        if tok_type in UNEXPECTED:
            raise SchemeParserError(f"Unexpected '{UNEXPECTED[tok_type]}'")

        raise SchemeParserError(f"Unknown token: {tok_type} {tok_val}")

    def _parse_list(self) -> list[SExpression]:
        items: list[SExpression] = []
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise SchemeParserError("Unmatched '('")
            if tok_type == "rparen":
                self.advance()
                return items
            items.append(self.parse_expr())

    def _parse_array(self) -> Array:
        items: list[SExpression] = []
        expect_comma = False
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise SchemeParserError("Unmatched '['")
            if tok_type == "rbracket":
                self.advance()
                return Array(items)
            if tok_type == "comma":
                if not expect_comma:
                    raise SchemeParserError("Unexpected comma in array literal")
                self.advance()
                # A trailing comma before ']' is allowed
                expect_comma = False
                continue
            if expect_comma:
                raise SchemeParserError("Expected comma or ']' in array literal")
            items.append(self.parse_expr())
            expect_comma = True

    def _parse_map(self) -> Map:
        entries: dict[str, SExpression] = {}
        expect_comma = False
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise SchemeParserError("Unmatched '{'")
            if tok_type == "rbrace":
                self.advance()
                return Map(entries)
            if tok_type == "comma":
                if not expect_comma:
                    raise SchemeParserError("Unexpected comma in map literal")
                self.advance()
                expect_comma = False
                continue
            if expect_comma:
                raise SchemeParserError("Expected comma before next key in map literal")
            if tok_type != "symbol":
                raise SchemeParserError("Unexpected token in map literal; expected key (symbol)")
            key = tok_val
            self.advance()

            tok_type, _ = self.peek()
            if tok_type == "rbrace":
                raise SchemeParserError("Expected ':' and value before '}' in map literal")
            if tok_type != "colon":
                raise SchemeParserError(f"Expected ':' after map key '{key}'")
            self.advance()

            tok_type, _ = self.peek()
            if tok_type is None:
                raise SchemeParserError("Unmatched '{'")
            if tok_type == "rbrace":
                raise SchemeParserError("Expected value before '}' in map literal")
            if tok_type in ("comma", "colon"):
                raise SchemeParserError("Unexpected comma or colon after map key")
            entries[key] = self.parse_expr()
            expect_comma = True

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> SExpression:
    """Read exactly one expression from `source`.

    Blank or comment-only input yields the inert Symbol("") sentinel; anything
    after the first expression is a parser fault.
    """
    # Tokenize eagerly so lexical errors win over grammar errors
    tokens = list(lex(source))
    if not tokens:
        return Symbol("")
    stream = TokenStream(iter(tokens))
    expr = stream.parse_expr()
    if stream.peek()[0] is not None:
        raise SchemeParserError("Unexpected tokens after expression")
    return expr


def read_all(source: str) -> list[SExpression]:
    """Read every expression in `source`, in order."""
    stream = TokenStream(iter(list(lex(source))))
    return list(stream.parse_all())
