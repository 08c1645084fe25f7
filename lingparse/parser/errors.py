"""
Error handling for the lingparse parser.

Two failure shapes exist: the input ended where more tokens were required
(EndOfFileError) or a concrete token was found where a different shape was
required (UnexpectedTokenError). Both are ParseError subclasses; the first
one raised aborts the parse.
"""

from typing import Optional, List

from ..lexer.tokens import Token, SourceLocation, KEYWORDS
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)

    def to_dict(self) -> dict:
        d = self.diagnostic.to_dict()
        if self.token is not None:
            d["token"] = self.token.to_dict()
        return d


class EndOfFileError(ParseError):
    """The token sequence ran out where more input was required."""

    def __init__(self, expected: Optional[str] = None, location: Optional[SourceLocation] = None):
        message = "Unexpected end of input"
        help_text = "The parser reached the end of the input in the middle of a construct."
        if expected:
            message += f", expected {expected}"
            help_text = f"The parser reached the end of the input while expecting {expected}."
        super().__init__(
            message=message,
            location=location,
            code="P010",
            help_text=help_text,
            suggestions=[f"Add the missing {expected}"] if expected else None
        )
        self.expected = expected


class UnexpectedTokenError(ParseError):
    """A token of the wrong shape was found; `expected` describes the right one."""

    def __init__(self, expected: str, actual: Token):
        super().__init__(
            message=f"Expected {expected}, found {describe_token(actual)}",
            location=actual.location,
            token=actual,
            code="P001",
            help_text=f"The parser expected to see {expected} at this position.",
            suggestions=SyntaxSuggestions.suggest_keyword_corrections(actual)
        )
        self.expected = expected
        self.actual = actual


def describe_token(token: Token) -> str:
    """Human-readable description of a token for error messages."""
    if token.reserved is not None:
        return f"'{token.lexeme}'"
    if token.is_string_literal:
        return f"string literal {token.lexeme}"
    return f"identifier '{token.lexeme}'"


class SyntaxSuggestions:
    """Spelling suggestions for tokens that look like misspelled keywords."""

    @staticmethod
    def suggest_keyword_corrections(found: Token) -> List[str]:
        """Suggest reserved words within edit distance 2 of an identifier."""
        if not found.is_identifier:
            return []

        word = found.lexeme
        candidates = []
        for keyword in KEYWORDS:
            if not keyword[0].isalpha():
                continue
            distance = SyntaxSuggestions._edit_distance(word, keyword)
            if 0 < distance <= 2:
                candidates.append((distance, keyword))

        return [f"Did you mean '{keyword}'?" for _, keyword in sorted(candidates)[:3]]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return SyntaxSuggestions._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]
