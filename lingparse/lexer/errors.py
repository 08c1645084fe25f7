"""
Error handling for the lingparse lexer.

Lexical failures (a character outside the alphabet, a stray `>`, a string
literal left open at end of input) are reported as LexerError carrying a
Diagnostic with the offending character and its source location.

Author: lingparse developers
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation

@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result

    def to_dict(self) -> dict:
        d = {
            "severity": self.severity,
            "message": self.message,
        }
        if self.code:
            d["code"] = self.code
        if self.location is not None:
            d["location"] = self.location.to_dict()
        if self.help_text:
            d["help"] = self.help_text
        if self.suggestions:
            d["suggestions"] = list(self.suggestions)
        return d

class LexerError(Exception):
    """
    Exception raised when the lexer meets input it cannot segment.

    `character` is the offending character and `location` where it sits.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        character: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.character = character
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return str(self.diagnostic)

    def to_dict(self) -> dict:
        d = self.diagnostic.to_dict()
        d["character"] = self.character
        return d


def create_invalid_character_error(char: str, location: Optional[SourceLocation] = None) -> LexerError:
    """Create an error for a character outside the alphabet."""
    if char.isupper() and char.lower().isascii():
        help_text = "Only lowercase letters are allowed."
        suggestions = [f"Write '{char.lower()}' instead of '{char}'"]
    elif char.isprintable():
        help_text = f"The character '{char}' is not part of the alphabet."
        suggestions = ["Wrap arbitrary text in a string literal: <...>"]
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."
        suggestions = []

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        character=char,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )

def create_unmatched_delimiter_error(location: SourceLocation) -> LexerError:
    """Create an error for a '>' with no open string literal."""
    return LexerError(
        message="Unmatched closing delimiter '>'",
        location=location,
        character=">",
        code="L002",
        help_text="'>' may only close a string literal opened with '<'.",
        suggestions=["Add the opening '<'", "Remove the stray '>'"]
    )

def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for a string literal still open at end of input."""
    return LexerError(
        message="Unterminated string literal",
        location=location,
        character="<",
        code="L003",
        help_text="String literals must be closed with a matching '>'.",
        suggestions=["Add a closing '>'"]
    )
