"""
lingparse Lexer Package

Character-level scanner for the language: classifies characters, segments
text into words, punctuation and `<...>` string literals, splits reserved
morphological endings off words and maps every surface string to a token.

Key Features:
- Finite-state word segmenter with literal-aware flushing
- Reserved ending splitting ('d, 'c, 'st, -il, -o, 'i)
- Source location tracking for diagnostics
- Lexical errors reported as LexerError, never a crash
"""

from .tokens import Token, TokenType, Reserved, Preposition, SourceLocation
from .lexer import (
    Lexer, CharKind, classify_char, split_off_reserved, classify_token,
    to_words, tokenize_string, tokenize_file
)
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Reserved",
    "Preposition",
    "SourceLocation",
    "CharKind",
    "classify_char",
    "split_off_reserved",
    "classify_token",
    "to_words",
    "tokenize_string",
    "tokenize_file",
    "LexerError",
    "Diagnostic",
]
