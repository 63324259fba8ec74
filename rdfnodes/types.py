"""Node variants — the closed set of graph terms.

Node = Uri | BlankNode | Variable | Marker | Literal | TripleNode | GraphNode

Every variant is an immutable value. Kind-specific behaviour dispatches with
an exhaustive ``match`` over the union.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, assert_never

from .datatypes import Datatype
from .errors import require
from .literal_label import LiteralLabel


# ---------------------------------------------------------------------------
# NodeKind
# ---------------------------------------------------------------------------

class NodeKind(Enum):
    URI = "uri"
    BLANK = "blank"
    VARIABLE = "variable"
    MARKER = "marker"
    LITERAL = "literal"
    TRIPLE = "triple"
    GRAPH = "graph"


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Uri:
    """An absolute or relative URI reference. Syntax is not checked."""
    text: str

    def __repr__(self) -> str:
        return f"<{self.text}>"


@dataclass(frozen=True)
class BlankNode:
    """An unnamed resource, identified only by an opaque id."""
    id: str

    def __repr__(self) -> str:
        return f"_:{self.id}"


@dataclass(frozen=True)
class Variable:
    name: str

    def __repr__(self) -> str:
        return f"?{self.name}"


@dataclass(frozen=True)
class Marker:
    """An extension node carrying an arbitrary tag, for non-RDF uses."""
    name: str

    def __repr__(self) -> str:
        return f"Marker({self.name})"


@dataclass(frozen=True)
class Literal:
    """A literal node wrapping a LiteralLabel."""
    label: LiteralLabel

    @property
    def lexical_form(self) -> str:
        return self.label.lexical_form

    @property
    def language(self) -> str | None:
        return self.label.language

    @property
    def datatype(self) -> Datatype:
        return self.label.datatype

    @property
    def value(self) -> Any:
        return self.label.value

    def __repr__(self) -> str:
        return repr(self.label)


@dataclass(frozen=True)
class TripleNode:
    """An RDF-star quoted triple used as a term."""
    triple: Triple

    def __repr__(self) -> str:
        return f"<< {self.triple.subject!r} {self.triple.predicate!r} {self.triple.object!r} >>"


@dataclass(frozen=True)
class GraphNode:
    """An N3 formula: a whole graph used as a term (not a named graph).

    The graph is shared, not owned.
    """
    graph: Any

    def __repr__(self) -> str:
        return f"GraphNode({self.graph!r})"


Node = Uri | BlankNode | Variable | Marker | Literal | TripleNode | GraphNode


# ---------------------------------------------------------------------------
# Triple
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Triple:
    """A (subject, predicate, object) statement. No position may be None."""
    subject: Node
    predicate: Node
    object: Node

    def __post_init__(self) -> None:
        require(self.subject, "Triple", "subject")
        require(self.predicate, "Triple", "predicate")
        require(self.object, "Triple", "object")

    @classmethod
    def create(cls, subject: Node, predicate: Node, object: Node) -> Triple:
        return cls(subject, predicate, object)

    def __iter__(self):
        return iter((self.subject, self.predicate, self.object))

    def __repr__(self) -> str:
        return f"Triple({self.subject!r} {self.predicate!r} {self.object!r})"


# ---------------------------------------------------------------------------
# Dispatch over the union
# ---------------------------------------------------------------------------

def node_kind(node: Node) -> NodeKind:
    match node:
        case Uri():
            return NodeKind.URI
        case BlankNode():
            return NodeKind.BLANK
        case Variable():
            return NodeKind.VARIABLE
        case Marker():
            return NodeKind.MARKER
        case Literal():
            return NodeKind.LITERAL
        case TripleNode():
            return NodeKind.TRIPLE
        case GraphNode():
            return NodeKind.GRAPH
        case _:
            assert_never(node)


def is_concrete(node: Node) -> bool:
    """Whether node denotes a definite term rather than a placeholder.

    Variables and markers are not concrete; a quoted triple is concrete
    when all three of its positions are.
    """
    match node:
        case Uri() | BlankNode() | Literal() | GraphNode():
            return True
        case Variable() | Marker():
            return False
        case TripleNode(triple):
            return all(is_concrete(n) for n in triple)
        case _:
            assert_never(node)
