# setup.py
from setuptools import setup, find_packages

setup(
    name="tailscheme",
    version="0.1.0",
    description="A small Scheme interpreter with a trampolined evaluator and proper tail calls",
    packages=find_packages(include=["tailscheme", "tailscheme.*"]),
    python_requires=">=3.10",
    install_requires=[
        "prompt_toolkit>=3.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["tailscheme=tailscheme.repl:app"],
    },
    zip_safe=False,
)
