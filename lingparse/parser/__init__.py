"""
lingparse Parser Package

Recursive-descent parser over the lexer's token list. Produces structurally
comparable AST nodes (nouns, case-marked noun phrases, conditions, variable
and predicate declarations, imports) or raises the first ParseError.

Key Features:
- One public entry point per grammar production
- Cursor that only moves forward; no backtracking
- Bounded lookahead for noun lists, condition elements and imports
- Diagnostics with source locations and keyword spelling suggestions
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_file
from .errors import ParseError, EndOfFileError, UnexpectedTokenError

__all__ = [
    # Core parser
    "Parser",
    "parse_string",
    "parse_file",

    # AST nodes
    "AST", "ASTNode", "ASTNodeType",
    "Program", "Statement", "Sentence",
    "VarDecl", "PredicateDecl", "Import",
    "Cond", "CondElem",
    "PrimaryNoun", "Identifier", "StringLiteral",
    "Noun", "Case", "NounsWithCase", "Verb",

    # Error handling
    "ParseError", "EndOfFileError", "UnexpectedTokenError",
]
