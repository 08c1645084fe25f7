"""
Token definitions for the lingparse lexer.

The language has a deliberately small token vocabulary:
- Reserved words (prepositions, morphological markers, connectives)
- Punctuation (`,` `.` `:`), which is reserved as well
- String literals delimited by `<` and `>`
- Identifiers (everything else)

Author: lingparse developers
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Optional


class TokenType(Enum):
    """The three shapes a token can take."""

    STRING_LITERAL = auto()         # <selsurle>
    IDENTIFIER = auto()             # xakant, es_tydivexy, 204
    RESERVED = auto()               # el, 'd, mal, ...


class Preposition(Enum):
    """Fronting case markers."""

    EL = auto()
    LERJ = auto()
    FAL = auto()
    CECIOJ = auto()


class Reserved(Enum):
    """
    Closed set of reserved surface forms.

    Adding a keyword means adding a member here and an entry in KEYWORDS.
    """

    # ========================================================================
    # Prepositions
    # ========================================================================
    EL = auto()                     # el
    LERJ = auto()                   # lerj
    FAL = auto()                    # fal
    CECIOJ = auto()                 # cecioj

    # ========================================================================
    # Morphological markers (split off word endings)
    # ========================================================================
    APOSTROPHE_D = auto()           # 'd  (modifier)
    APOSTROPHE_C = auto()           # 'c  (trailing case)
    APOSTROPHE_I = auto()           # 'i
    APOSTROPHE_ST = auto()          # 'st (topic of a predicate declaration)
    HYPHEN_O = auto()               # -o
    HYPHEN_IL = auto()              # -il

    # ========================================================================
    # Punctuation
    # ========================================================================
    COMMA = auto()                  # ,
    PERIOD = auto()                 # .
    COLON = auto()                  # :

    # ========================================================================
    # Connectives
    # ========================================================================
    MAL = auto()                    # mal  (joins condition conjuncts)
    ES = auto()                     # es   (variable declaration)
    LUS = auto()                    # lus  (import)
    IO = auto()                     # io
    ADIT = auto()                   # adit (three or more nouns)
    AD = auto()                     # ad   (two nouns)
    ELX = auto()                    # elx
    SHRLO = auto()                  # shrlo
    MELX = auto()                   # melx
    FELX = auto()                   # felx
    MEA = auto()                    # mea

    @property
    def spelling(self) -> str:
        """Surface form of this reserved word."""
        return SPELLINGS[self]

    @property
    def preposition(self) -> Optional[Preposition]:
        """The matching Preposition, or None for non-prepositions."""
        return PREPOSITIONS.get(self)

    @property
    def is_preposition(self) -> bool:
        return self in PREPOSITIONS


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting; never part of token or node equality.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"

    def shifted(self, columns: int) -> 'SourceLocation':
        """Location `columns` characters further along the same line."""
        return SourceLocation(self.filename, self.line, self.column + columns, self.offset + columns)

    def to_dict(self) -> dict:
        return {
            "file": self.filename,
            "line": self.line,
            "column": self.column,
            "offset": self.offset,
        }


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Equality is structural over type, lexeme and reserved kind; the
    location rides along for diagnostics only.
    """
    type: TokenType
    lexeme: str                                 # Surface text
    reserved: Optional[Reserved] = None         # Set only for RESERVED tokens
    location: Optional[SourceLocation] = field(default=None, compare=False, hash=False)

    @classmethod
    def identifier(cls, text: str, location: Optional[SourceLocation] = None) -> 'Token':
        return cls(TokenType.IDENTIFIER, text, None, location)

    @classmethod
    def string_literal(cls, text: str, location: Optional[SourceLocation] = None) -> 'Token':
        return cls(TokenType.STRING_LITERAL, text, None, location)

    @classmethod
    def keyword(cls, kind: Reserved, location: Optional[SourceLocation] = None) -> 'Token':
        return cls(TokenType.RESERVED, kind.spelling, kind, location)

    def __str__(self) -> str:
        if self.reserved is not None:
            return f"{self.reserved.name}({self.lexeme!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.location!r})"

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER

    @property
    def is_string_literal(self) -> bool:
        return self.type == TokenType.STRING_LITERAL

    @property
    def is_preposition(self) -> bool:
        return self.reserved is not None and self.reserved.is_preposition

    def is_reserved(self, *kinds: Reserved) -> bool:
        """Check if this token is one of the given reserved kinds."""
        return self.reserved is not None and self.reserved in kinds

    def to_dict(self) -> dict:
        result = {"type": self.type.name, "lexeme": self.lexeme}
        if self.reserved is not None:
            result["reserved"] = self.reserved.name
        if self.location is not None:
            result["location"] = self.location.to_dict()
        return result


# Lookup table for keyword recognition. Punctuation lives here too since the
# segmenter hands it over as one-character words.
KEYWORDS = {
    # Prepositions
    "el": Reserved.EL,
    "lerj": Reserved.LERJ,
    "fal": Reserved.FAL,
    "cecioj": Reserved.CECIOJ,

    # Markers
    "'d": Reserved.APOSTROPHE_D,
    "'c": Reserved.APOSTROPHE_C,
    "'i": Reserved.APOSTROPHE_I,
    "'st": Reserved.APOSTROPHE_ST,
    "-o": Reserved.HYPHEN_O,
    "-il": Reserved.HYPHEN_IL,

    # Punctuation
    ",": Reserved.COMMA,
    ".": Reserved.PERIOD,
    ":": Reserved.COLON,

    # Connectives
    "mal": Reserved.MAL,
    "es": Reserved.ES,
    "lus": Reserved.LUS,
    "io": Reserved.IO,
    "adit": Reserved.ADIT,
    "ad": Reserved.AD,
    "elx": Reserved.ELX,
    "shrlo": Reserved.SHRLO,
    "melx": Reserved.MELX,
    "felx": Reserved.FELX,
    "mea": Reserved.MEA,
}

SPELLINGS = {kind: spelling for spelling, kind in KEYWORDS.items()}

PREPOSITIONS = {
    Reserved.EL: Preposition.EL,
    Reserved.LERJ: Preposition.LERJ,
    Reserved.FAL: Preposition.FAL,
    Reserved.CECIOJ: Preposition.CECIOJ,
}

# Word endings split off by the lexer. Checked top to bottom, first match
# wins; none of these is currently a suffix of another.
RESERVED_ENDINGS = ("'d", "'c", "'st", "-il", "-o", "'i")

# Letters beyond a-z that may appear in words
EXTRA_LETTERS = frozenset({'φ', 'β', 'ж'})
