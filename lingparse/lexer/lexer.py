"""
lingparse lexer - turns raw text into tokens.

Four stages, each producing a fresh sequence for the next:

    text -> character classes -> words / punctuation / literals
         -> words with reserved endings split off -> tokens

The word segmenter is a small finite-state machine driven by a
(character class, state) transition table. String literals are allowed to
touch the surrounding words, so `xakant<selsurle>'c` and
`xakant <selsurle> 'c` segment identically.
"""

import logging
from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, RESERVED_ENDINGS, EXTRA_LETTERS
)
from .errors import (
    create_invalid_character_error,
    create_unmatched_delimiter_error, create_unterminated_string_error
)

logger = logging.getLogger(__name__)


class CharKind(Enum):
    """Semantic class of a single input character."""
    WORD_CONSTITUENT = auto()
    SPACE = auto()
    SIMPLE_PUNCTUATION = auto()
    STARTS_STRING_LITERAL = auto()
    ENDS_STRING_LITERAL = auto()


class ScanState(Enum):
    """States of the word segmenter."""
    EXPECTING_WORD_INITIAL = auto()
    WORD_INTERNAL = auto()
    STRING_LITERAL_INTERNAL = auto()


class SegmentKind(Enum):
    WORD = auto()
    PUNCTUATION = auto()
    STRING_LITERAL = auto()


@dataclass(frozen=True)
class Segment:
    """A raw word, punctuation mark or whole string literal."""
    text: str
    kind: SegmentKind
    location: Optional[SourceLocation] = None


_PUNCTUATION = frozenset('.,:')
_WORD_SYMBOLS = frozenset("'-_")


def classify_char(char: str, location: Optional[SourceLocation] = None) -> CharKind:
    """
    Map one character to its class.

    Raises:
        LexerError: If the character is outside the alphabet
    """
    if ('a' <= char <= 'z' or char in EXTRA_LETTERS or
            '0' <= char <= '9' or char in _WORD_SYMBOLS):
        return CharKind.WORD_CONSTITUENT
    if char.isspace():
        return CharKind.SPACE
    if char in _PUNCTUATION:
        return CharKind.SIMPLE_PUNCTUATION
    if char == '<':
        return CharKind.STARTS_STRING_LITERAL
    if char == '>':
        return CharKind.ENDS_STRING_LITERAL
    raise create_invalid_character_error(char, location)


def split_off_reserved(word: str) -> List[str]:
    """
    Split a reserved ending off a word.

    The first ending in RESERVED_ENDINGS that the word ends with wins. The
    word is split only if a non-empty stem remains, so a bare `'d` stays
    whole.
    """
    for ending in RESERVED_ENDINGS:
        if word.endswith(ending):
            stem = word[:-len(ending)]
            if stem:
                return [stem, ending]
    return [word]


def classify_token(text: str, location: Optional[SourceLocation] = None) -> Token:
    """Map a surface string to a token. Never fails."""
    reserved = KEYWORDS.get(text)
    if reserved is not None:
        return Token(TokenType.RESERVED, text, reserved, location)
    if text.startswith('<') and text.endswith('>'):
        return Token(TokenType.STRING_LITERAL, text, None, location)
    return Token(TokenType.IDENTIFIER, text, None, location)


class Lexer:
    """
    lingparse lexical analyzer.

    Scanning stops at the first lexical error; there is no recovery.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        """
        Initialize the lexer with source text.

        Args:
            source: Source text
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

        self._state = ScanState.EXPECTING_WORD_INITIAL
        self._partial: List[str] = []
        self._partial_start: Optional[SourceLocation] = None
        self._segments: List[Segment] = []

        self._init_transition_table()

    def _init_transition_table(self):
        """Build the (character class, state) -> action table."""
        expecting = ScanState.EXPECTING_WORD_INITIAL
        internal = ScanState.WORD_INTERNAL

        self.transitions: Dict[Tuple[CharKind, ScanState], Callable[[str, SourceLocation], None]] = {
            (CharKind.WORD_CONSTITUENT, expecting): self._start_word,
            (CharKind.WORD_CONSTITUENT, internal): self._continue_word,
            (CharKind.SPACE, expecting): self._ignore,
            (CharKind.SPACE, internal): self._end_word,
            (CharKind.SIMPLE_PUNCTUATION, expecting): self._emit_punctuation,
            (CharKind.SIMPLE_PUNCTUATION, internal): self._end_word_then_punctuation,
            (CharKind.STARTS_STRING_LITERAL, expecting): self._start_literal,
            (CharKind.STARTS_STRING_LITERAL, internal): self._end_word_then_literal,
            (CharKind.ENDS_STRING_LITERAL, expecting): self._unmatched_close,
            (CharKind.ENDS_STRING_LITERAL, internal): self._unmatched_close,
        }

    def tokenize(self) -> List[Token]:
        """
        Tokenize the whole source.

        Returns:
            List of tokens; empty for empty or blank input

        Raises:
            LexerError: On the first lexical error
        """
        tokens: List[Token] = []
        for segment in self.to_words():
            if segment.kind != SegmentKind.WORD:
                tokens.append(classify_token(segment.text, segment.location))
                continue

            parts = split_off_reserved(segment.text)
            tokens.append(classify_token(parts[0], segment.location))
            if len(parts) == 2:
                ending_location = None
                if segment.location is not None:
                    ending_location = segment.location.shifted(len(parts[0]))
                tokens.append(classify_token(parts[1], ending_location))

        logger.debug("Tokenized %s into %d tokens", self.filename, len(tokens))
        return tokens

    def to_words(self) -> List[Segment]:
        """Run the word segmenter over the source."""
        self._reset()

        for char in self.source:
            location = self._loc()
            if self._state == ScanState.STRING_LITERAL_INTERNAL:
                # Literal contents are taken verbatim; only '>' matters.
                self._partial.append(char)
                if char == '>':
                    self._flush(SegmentKind.STRING_LITERAL)
            else:
                kind = classify_char(char, location)
                self.transitions[(kind, self._state)](char, location)
            self._advance(char)

        # End of input acts as one trailing space.
        if self._state == ScanState.WORD_INTERNAL:
            self._flush(SegmentKind.WORD)
        elif self._state == ScanState.STRING_LITERAL_INTERNAL:
            raise create_unterminated_string_error(self._partial_start)

        return list(self._segments)

    def _reset(self):
        self.pos = 0
        self.line = 1
        self.column = 1
        self._state = ScanState.EXPECTING_WORD_INITIAL
        self._partial = []
        self._partial_start = None
        self._segments = []

    # Transition actions

    def _ignore(self, char: str, location: SourceLocation):
        pass

    def _start_word(self, char: str, location: SourceLocation):
        self._partial = [char]
        self._partial_start = location
        self._state = ScanState.WORD_INTERNAL

    def _continue_word(self, char: str, location: SourceLocation):
        self._partial.append(char)

    def _end_word(self, char: str, location: SourceLocation):
        self._flush(SegmentKind.WORD)

    def _emit_punctuation(self, char: str, location: SourceLocation):
        self._segments.append(Segment(char, SegmentKind.PUNCTUATION, location))

    def _end_word_then_punctuation(self, char: str, location: SourceLocation):
        self._flush(SegmentKind.WORD)
        self._emit_punctuation(char, location)

    def _start_literal(self, char: str, location: SourceLocation):
        self._partial = [char]
        self._partial_start = location
        self._state = ScanState.STRING_LITERAL_INTERNAL

    def _end_word_then_literal(self, char: str, location: SourceLocation):
        self._flush(SegmentKind.WORD)
        self._start_literal(char, location)

    def _unmatched_close(self, char: str, location: SourceLocation):
        raise create_unmatched_delimiter_error(location)

    def _flush(self, kind: SegmentKind):
        """Emit the accumulated text and return to the initial state."""
        self._segments.append(Segment(''.join(self._partial), kind, self._partial_start))
        self._partial = []
        self._partial_start = None
        self._state = ScanState.EXPECTING_WORD_INITIAL

    def _loc(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self, char: str):
        """Advance position by one character, updating line/column."""
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1


def to_words(source: str) -> List[str]:
    """Segment source text into raw words, punctuation and literals."""
    return [segment.text for segment in Lexer(source, "<string>").to_words()]


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source text
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
