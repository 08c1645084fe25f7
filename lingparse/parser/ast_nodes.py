"""
Abstract Syntax Tree node definitions for lingparse.

Nodes own all of their strings, so a tree outlives the text it was parsed
from. Equality is structural; the optional source location is carried for
diagnostics and ignored by comparisons.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation, Preposition


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    PROGRAM = "Program"
    VAR_DECL = "VarDecl"
    PREDICATE_DECL = "PredicateDecl"
    IMPORT = "Import"

    # Conditions
    COND = "Cond"
    COND_ELEM = "CondElem"

    # Noun phrases
    IDENTIFIER = "Identifier"
    STRING_LITERAL = "StringLiteral"
    NOUN = "Noun"
    CASE = "Case"
    NOUNS_WITH_CASE = "NounsWithCase"
    VERB = "Verb"


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form of this node, suitable for JSON."""
        pass

    def walk(self):
        """Yield this node and all of its descendants, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()


# ============================================================================
# Primary nouns
# ============================================================================

class PrimaryNoun(ASTNode):
    """An identifier or a string literal in noun position."""

    @property
    @abstractmethod
    def text(self) -> str:
        pass

    def children(self) -> List[ASTNode]:
        return []


@dataclass
class Identifier(PrimaryNoun):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IDENTIFIER
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type.value, "name": self.name}


@dataclass
class StringLiteral(PrimaryNoun):
    """A `<...>` literal; the payload keeps its delimiters."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.STRING_LITERAL
    literal: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        return self.literal

    @property
    def contents(self) -> str:
        """The literal without its `<` `>` delimiters."""
        return self.literal[1:-1]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type.value, "literal": self.literal}


# ============================================================================
# Noun phrases
# ============================================================================

@dataclass
class Noun(ASTNode):
    """
    Zero or more modifiers followed by exactly one head.

    Modifiers are the primary nouns that carried a `'d` marker, in surface
    order; the head is the final unmarked primary noun.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.NOUN
    modifier: List[PrimaryNoun]
    head: PrimaryNoun

    @classmethod
    def from_primaries(cls, primaries: List[PrimaryNoun]) -> 'Noun':
        """Build a noun whose head is the last of `primaries`."""
        if not primaries:
            raise ValueError("a noun needs at least one primary noun")
        modifier = list(primaries)
        head = modifier.pop()
        return cls(modifier=modifier, head=head)

    def children(self) -> List[ASTNode]:
        return list(self.modifier) + [self.head]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "modifier": [m.to_dict() for m in self.modifier],
            "head": self.head.to_dict(),
        }


@dataclass
class Case(ASTNode):
    """
    Case marker of a noun phrase: a fronting preposition, or the trailing
    `'c` when `preposition` is None.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.CASE
    preposition: Optional[Preposition] = None

    @classmethod
    def fronted(cls, preposition: Preposition) -> 'Case':
        return cls(preposition=preposition)

    @classmethod
    def trailing(cls) -> 'Case':
        return cls(preposition=None)

    @property
    def is_trailing(self) -> bool:
        return self.preposition is None

    def children(self) -> List[ASTNode]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        if self.is_trailing:
            return {"type": self.node_type.value, "marker": "'c"}
        return {"type": self.node_type.value, "preposition": self.preposition.name}


@dataclass
class NounsWithCase(ASTNode):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.NOUNS_WITH_CASE
    nouns: List[Noun]
    case: Case

    def children(self) -> List[ASTNode]:
        return list(self.nouns) + [self.case]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "nouns": [n.to_dict() for n in self.nouns],
            "case": self.case.to_dict(),
        }


@dataclass
class Verb(ASTNode):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.VERB
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    def children(self) -> List[ASTNode]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type.value, "name": self.name}


# ============================================================================
# Conditions
# ============================================================================

@dataclass
class CondElem(ASTNode):
    """One conjunct of a condition: noun, verb and an optional case phrase."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.COND_ELEM
    noun: Noun
    verb: Verb
    nouns_with_case: Optional[NounsWithCase] = None

    def children(self) -> List[ASTNode]:
        children: List[ASTNode] = [self.noun, self.verb]
        if self.nouns_with_case is not None:
            children.append(self.nouns_with_case)
        return children

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "noun": self.noun.to_dict(),
            "verb": self.verb.to_dict(),
            "nouns_with_case": self.nouns_with_case.to_dict() if self.nouns_with_case else None,
        }


@dataclass
class Cond(ASTNode):
    """Non-empty conjunction of CondElem, joined by `mal` in the source."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.COND
    elems: List[CondElem]

    def children(self) -> List[ASTNode]:
        return list(self.elems)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.node_type.value, "elems": [e.to_dict() for e in self.elems]}


# ============================================================================
# Statements
# ============================================================================

class Statement(ASTNode):
    """Base class for anything the outer loop can parse."""
    pass


class Sentence(Statement):
    """Base class for declarations."""
    pass


@dataclass
class VarDecl(Sentence):
    """`name es value`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.VAR_DECL
    name: Noun
    value: Noun

    def children(self) -> List[ASTNode]:
        return [self.name, self.value]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "name": self.name.to_dict(),
            "value": self.value.to_dict(),
        }


@dataclass
class PredicateDecl(Sentence):
    """`nouns 'st verb -o : cond`"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PREDICATE_DECL
    nouns: List[Noun]
    verb: Verb
    cond: Cond

    def children(self) -> List[ASTNode]:
        return list(self.nouns) + [self.verb, self.cond]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "nouns": [n.to_dict() for n in self.nouns],
            "verb": self.verb.to_dict(),
            "cond": self.cond.to_dict(),
        }


@dataclass
class Import(Statement):
    """`lus a'd b'd name.` - names brought in from the module path a.b"""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IMPORT
    module_path: List[str]
    names: List[str]

    @property
    def dotted_path(self) -> str:
        return ".".join(self.module_path)

    def children(self) -> List[ASTNode]:
        return []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "module_path": list(self.module_path),
            "names": list(self.names),
        }


@dataclass
class Program(ASTNode):
    """Root node: the statements of one source text, in order."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROGRAM
    statements: List[Statement]
    filename: str = field(default="<unknown>", compare=False)

    def children(self) -> List[ASTNode]:
        return list(self.statements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "filename": self.filename,
            "statements": [s.to_dict() for s in self.statements],
        }


# Alias for the main AST type
AST = Program
