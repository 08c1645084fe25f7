"""
lingparse recursive-descent parser.

The parser owns its token list and a cursor index that only ever moves
forward. Each production either returns a node with the cursor advanced
past what it consumed, or raises a ParseError; nothing is retried and no
partial result survives an error.

Grammar:

    primary_noun    = identifier | string_literal
    noun            = (primary_noun "'d")* primary_noun
    noun_list       = noun | noun "ad" noun | noun "adit" noun ("," noun)+
    case            = preposition | "'c"
    nouns_with_case = preposition noun_list | noun_list "'c"
    verb            = identifier
    cond_elem       = noun verb [nouns_with_case]
    cond            = cond_elem ("mal" cond_elem)*
    var_decl        = noun "es" noun
    predicate_decl  = noun_list "'st" verb "-o" ":" cond
    module          = identifier
    import          = "lus" (module "'d")+ import_tail
    import_tail     = identifier "." | identifier "ad" identifier
                    | identifier "adit" identifier ("," identifier)+
"""

import logging
from enum import Enum, auto
from typing import List, Optional

from ..lexer.tokens import Token, Reserved, SourceLocation
from .ast_nodes import (
    PrimaryNoun, Identifier, StringLiteral, Noun, Case, NounsWithCase, Verb,
    CondElem, Cond, Statement, Sentence, VarDecl, PredicateDecl, Import, Program
)
from .errors import EndOfFileError, UnexpectedTokenError

logger = logging.getLogger(__name__)


# Tokens after which a cond_elem has no case-marked noun phrase
COND_ELEM_TERMINATORS = (Reserved.FELX, Reserved.MAL, Reserved.PERIOD)


class ImportShape(Enum):
    """What the tokens at the cursor look like inside an import."""
    MODULE_SEGMENT = auto()     # ident 'd
    SINGLE = auto()             # ident .
    PAIR = auto()               # ident ad ident
    LIST = auto()               # ident adit ident , ident ...


class Parser:
    """
    lingparse recursive-descent parser.

    Every `parse_*` method is an independent entry point; callers that need
    several unrelated parses should use one Parser per parse.
    """

    def __init__(self, tokens: List[Token], filename: str = "<unknown>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
            filename: Name used for the resulting Program
        """
        self.tokens = list(tokens)
        self.current = 0
        self.filename = filename

    # ------------------------------------------------------------------
    # Cursor primitives
    # ------------------------------------------------------------------

    def is_at_end(self) -> bool:
        """True once every token has been consumed."""
        return self.current >= len(self.tokens)

    def remaining(self) -> List[Token]:
        """The tokens not yet consumed."""
        return self.tokens[self.current:]

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Token `offset` places past the cursor, or None past the end."""
        index = self.current + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def next(self, expected: Optional[str] = None) -> Token:
        """
        Consume and return the next token.

        Raises:
            EndOfFileError: If no tokens remain
        """
        if self.is_at_end():
            raise EndOfFileError(expected, self._end_location())
        token = self.tokens[self.current]
        self.current += 1
        return token

    def expect(self, kind: Reserved, description: Optional[str] = None) -> Token:
        """Consume one token, which must be the reserved word `kind`."""
        description = description or f"'{kind.spelling}'"
        token = self.next(description)
        if token.reserved is not kind:
            raise UnexpectedTokenError(description, token)
        return token

    def _check(self, *kinds: Reserved) -> bool:
        token = self.peek()
        return token is not None and token.is_reserved(*kinds)

    def _previous(self) -> Optional[Token]:
        if self.current == 0:
            return None
        return self.tokens[self.current - 1]

    def _end_location(self) -> Optional[SourceLocation]:
        if self.tokens:
            return self.tokens[-1].location
        return None

    def _parse_identifier(self, description: str) -> Token:
        token = self.next(description)
        if not token.is_identifier:
            raise UnexpectedTokenError(description, token)
        return token

    # ------------------------------------------------------------------
    # Nouns
    # ------------------------------------------------------------------

    def parse_primary_noun(self) -> PrimaryNoun:
        """primary_noun = identifier | string_literal"""
        description = "identifier or string literal"
        token = self.next(description)
        if token.is_identifier:
            return Identifier(token.lexeme, token.location)
        if token.is_string_literal:
            return StringLiteral(token.lexeme, token.location)
        raise UnexpectedTokenError(description, token)

    def parse_noun(self) -> Noun:
        """
        noun = (primary_noun "'d")* primary_noun

        Every primary noun followed by 'd is a modifier; the first one that
        is not becomes the head.
        """
        primaries = [self.parse_primary_noun()]
        while self._check(Reserved.APOSTROPHE_D):
            self.next()
            primaries.append(self.parse_primary_noun())
        return Noun.from_primaries(primaries)

    def parse_noun_list(self) -> List[Noun]:
        """noun_list = noun | noun "ad" noun | noun "adit" noun ("," noun)+"""
        return self._parse_noun_list_tail(self.parse_noun())

    def _parse_noun_list_tail(self, first: Noun) -> List[Noun]:
        nouns = [first]
        if self._check(Reserved.AD):
            self.next()
            nouns.append(self.parse_noun())
        elif self._check(Reserved.ADIT):
            self.next()
            nouns.append(self.parse_noun())
            self.expect(Reserved.COMMA, "',' in an 'adit' list")
            nouns.append(self.parse_noun())
            while self._check(Reserved.COMMA):
                self.next()
                nouns.append(self.parse_noun())
        return nouns

    def parse_case(self) -> Case:
        """case = preposition | "'c" """
        description = "preposition or 'c"
        token = self.next(description)
        if token.is_preposition:
            return Case.fronted(token.reserved.preposition)
        if token.is_reserved(Reserved.APOSTROPHE_C):
            return Case.trailing()
        raise UnexpectedTokenError(description, token)

    def parse_nouns_with_case(self) -> NounsWithCase:
        """nouns_with_case = preposition noun_list | noun_list "'c" """
        token = self.peek()
        if token is not None and token.is_preposition:
            case = self.parse_case()
            nouns = self.parse_noun_list()
            return NounsWithCase(nouns, case)

        nouns = self.parse_noun_list()
        self.expect(Reserved.APOSTROPHE_C, "case marker 'c")
        return NounsWithCase(nouns, Case.trailing())

    def parse_verb(self) -> Verb:
        """verb = identifier"""
        token = self._parse_identifier("verb")
        return Verb(token.lexeme, token.location)

    # ------------------------------------------------------------------
    # Conditions
    # ------------------------------------------------------------------

    def parse_cond_elem(self) -> CondElem:
        """
        cond_elem = noun verb [nouns_with_case]

        The case phrase is absent only when the next token is felx, mal or
        '.'; anything else, end of input included, must start one.
        """
        noun = self.parse_noun()
        verb = self.parse_verb()
        if self._check(*COND_ELEM_TERMINATORS):
            return CondElem(noun, verb, None)
        return CondElem(noun, verb, self.parse_nouns_with_case())

    def parse_cond(self) -> Cond:
        """cond = cond_elem ("mal" cond_elem)*"""
        elems = [self.parse_cond_elem()]
        while self._check(Reserved.MAL):
            self.next()
            elems.append(self.parse_cond_elem())
        return Cond(elems)

    # ------------------------------------------------------------------
    # Sentences
    # ------------------------------------------------------------------

    def parse_var_decl(self) -> VarDecl:
        """var_decl = noun "es" noun"""
        name = self.parse_noun()
        self.expect(Reserved.ES)
        return VarDecl(name, self.parse_noun())

    def parse_predicate_decl(self) -> PredicateDecl:
        """predicate_decl = noun_list "'st" verb "-o" ":" cond"""
        return self._parse_predicate_decl_tail(self.parse_noun_list())

    def _parse_predicate_decl_tail(self, nouns: List[Noun]) -> PredicateDecl:
        self.expect(Reserved.APOSTROPHE_ST)
        verb = self.parse_verb()
        self.expect(Reserved.HYPHEN_O)
        self.expect(Reserved.COLON)
        return PredicateDecl(nouns, verb, self.parse_cond())

    def parse_sentence(self) -> Sentence:
        """
        sentence = var_decl | predicate_decl

        Both start with a noun; 'es' right after it selects var_decl,
        otherwise the noun opens the predicate's noun list.
        """
        first = self.parse_noun()
        if self._check(Reserved.ES):
            self.next()
            return VarDecl(first, self.parse_noun())
        return self._parse_predicate_decl_tail(self._parse_noun_list_tail(first))

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def parse_module(self) -> str:
        """module = identifier"""
        return self._parse_identifier("module name").lexeme

    def parse_import(self) -> Import:
        """import = "lus" (module "'d")+ import_tail"""
        self.expect(Reserved.LUS)

        module_path = [self.parse_module()]
        self.expect(Reserved.APOSTROPHE_D, "'d after module name")
        while self._import_shape() is ImportShape.MODULE_SEGMENT:
            module_path.append(self.parse_module())
            self.next()

        return Import(module_path, self._parse_import_tail())

    def _import_shape(self) -> ImportShape:
        """
        Decide what follows inside an import from the next two tokens.

        An identifier followed by 'd is another module segment; followed by
        '.', 'ad' or 'adit' it opens the imported names. The parser commits
        to the shape found here.
        """
        description = "identifier"
        first = self.peek()
        if first is None:
            raise EndOfFileError(description, self._end_location())
        if not first.is_identifier:
            raise UnexpectedTokenError(description, first)

        description = "'d, '.', 'ad' or 'adit'"
        second = self.peek(1)
        if second is None:
            raise EndOfFileError(description, self._end_location())
        if second.is_reserved(Reserved.APOSTROPHE_D):
            return ImportShape.MODULE_SEGMENT
        if second.is_reserved(Reserved.PERIOD):
            return ImportShape.SINGLE
        if second.is_reserved(Reserved.AD):
            return ImportShape.PAIR
        if second.is_reserved(Reserved.ADIT):
            return ImportShape.LIST
        raise UnexpectedTokenError(description, second)

    def _parse_import_tail(self) -> List[str]:
        shape = self._import_shape()
        names = [self._parse_identifier("imported name").lexeme]

        if shape is ImportShape.SINGLE:
            self.expect(Reserved.PERIOD)
        elif shape is ImportShape.PAIR:
            self.expect(Reserved.AD)
            names.append(self._parse_identifier("imported name").lexeme)
        else:
            self.expect(Reserved.ADIT)
            names.append(self._parse_identifier("imported name").lexeme)
            self.expect(Reserved.COMMA, "',' in an 'adit' list")
            names.append(self._parse_identifier("imported name").lexeme)
            while self._check(Reserved.COMMA):
                self.next()
                names.append(self._parse_identifier("imported name").lexeme)
        return names

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_statement(self) -> Statement:
        """
        statement = (import | sentence) "."

        An import ending in `identifier "."` has already consumed its
        period and is not followed by another.
        """
        token = self.peek()
        if token is None:
            raise EndOfFileError("statement", self._end_location())

        if token.is_reserved(Reserved.LUS):
            statement: Statement = self.parse_import()
            previous = self._previous()
            if previous is not None and previous.is_reserved(Reserved.PERIOD):
                return statement
        else:
            statement = self.parse_sentence()

        self.expect(Reserved.PERIOD, "'.' at end of statement")
        return statement

    def parse(self) -> Program:
        """
        Parse statements until the tokens run out.

        Raises:
            ParseError: On the first syntax error
        """
        statements: List[Statement] = []
        while not self.is_at_end():
            statements.append(self.parse_statement())
            logger.debug("Parsed %s", statements[-1].node_type.value)

        logger.debug("Parsed %d statements from %s", len(statements), self.filename)
        return Program(statements, self.filename)


def parse_string(source: str, filename: str = "<string>") -> Program:
    """
    Convenience function to parse a source string.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    return Parser(tokens, filename).parse()


def parse_file(filepath: str) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
        IOError: If file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    return Parser(tokens, filepath).parse()
