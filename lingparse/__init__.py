"""
lingparse - front end for a small case-marking constructed language

Turns source text into a syntax tree in two stages:

    lingparse/
    ├── lexer/           # Character classes, word segmentation, suffix splitting, tokens
    └── parser/          # Recursive-descent parser and AST nodes

Typical use:

    >>> from lingparse import parse_string
    >>> program = parse_string("selsurle es iu.")
    >>> program.statements[0].node_type.value
    'VarDecl'
"""

__version__ = "0.3.0"
__license__ = "MIT"

from .lexer import Lexer, LexerError, tokenize_string, tokenize_file
from .parser import Parser, ParseError, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",

    # Conveniences
    "tokenize_string",
    "tokenize_file",
    "parse_string",
    "parse_file",

    # Errors
    "LexerError",
    "ParseError",

    # Version info
    "__version__",
    "__license__",
]
