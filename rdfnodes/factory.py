"""Node Factory — validates inputs and builds exactly one node per call.

The only non-trivial operation is literal construction, which normalizes a
(lexical form, language, datatype) input into one of three literal shapes:

  PLAIN: no language, xsd:string
  LANG:  language tag, rdf:langString
  TYPED: no language, any datatype other than rdf:langString

The shape is read off a decision table keyed on
(has_lang, has_dtype, dtype_is_lang_string). Two entries of the table are
conflicts and raise DatatypeConflict. An empty language counts as no language.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Any

from .blank_ids import BlankNodeIdGenerator, default_generator
from .config import FactoryConfig
from .datatypes import (
    RDF_LANG_STRING,
    XSD_STRING,
    Datatype,
    DatatypeRegistry,
    default_registry,
)
from .errors import ConfigError, DatatypeConflict, require
from .literal_label import LiteralLabel, create_label_by_value
from .types import (
    BlankNode,
    GraphNode,
    Literal,
    Marker,
    Node,
    Triple,
    TripleNode,
    Uri,
    Variable,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Literal shape decision table
# ---------------------------------------------------------------------------

class LiteralShape(Enum):
    PLAIN = "plain"
    LANG = "lang"
    TYPED = "typed"
    LANG_WITH_FOREIGN_DATATYPE = "lang_with_foreign_datatype"
    LANG_STRING_WITHOUT_LANG = "lang_string_without_lang"


# (has_lang, has_dtype, dtype_is_lang_string) -> shape
_SHAPES: dict[tuple[bool, bool, bool], LiteralShape] = {
    (False, False, False): LiteralShape.PLAIN,
    (False, True, False): LiteralShape.TYPED,
    (False, True, True): LiteralShape.LANG_STRING_WITHOUT_LANG,
    (True, False, False): LiteralShape.LANG,
    (True, True, True): LiteralShape.LANG,
    (True, True, False): LiteralShape.LANG_WITH_FOREIGN_DATATYPE,
}

_CONFLICTS: dict[LiteralShape, str] = {
    LiteralShape.LANG_WITH_FOREIGN_DATATYPE:
        "Datatype is not rdf:langString but a language was given",
    LiteralShape.LANG_STRING_WITHOUT_LANG:
        "Datatype is rdf:langString but no language given",
}


def literal_shape(has_lang: bool, has_dtype: bool, dtype_is_lang_string: bool) -> LiteralShape:
    """Look up the literal shape for one combination of inputs."""
    if dtype_is_lang_string and not has_dtype:
        raise ValueError("dtype_is_lang_string requires has_dtype")
    return _SHAPES[(has_lang, has_dtype, dtype_is_lang_string)]


# Distinguishes create_blank_node() from create_blank_node(None)
_FRESH = object()


# ---------------------------------------------------------------------------
# NodeFactory
# ---------------------------------------------------------------------------

class NodeFactory:
    """Creates nodes of every kind.

    Holds no state of its own: the id generator and datatype registry are
    injected collaborators, shared with whoever else uses them.
    """

    def __init__(
        self,
        id_generator: BlankNodeIdGenerator | None = None,
        registry: DatatypeRegistry | None = None,
        config: FactoryConfig | None = None,
    ):
        self.config = config if config is not None else FactoryConfig()
        errors = self.config.check()
        if errors:
            raise ConfigError("; ".join(errors), {"errors": errors})
        if id_generator is None:
            if self.config.blank_node_ids == "uuid":
                id_generator = default_generator()
            else:
                id_generator = self.config.make_generator()
        self.id_generator = id_generator
        self.registry = registry if registry is not None else default_registry()

    # -----------------------------------------------------------------------
    # Datatypes
    # -----------------------------------------------------------------------

    def get_type(self, name: str | None) -> Datatype | None:
        """Resolve a datatype URI, falling back to an unknown datatype."""
        if name is None:
            return None
        return self.registry.get_safe_type_by_name(name)

    def _resolve(self, dtype: Datatype | str | None) -> Datatype | None:
        if dtype is None or isinstance(dtype, Datatype):
            return dtype
        return self.get_type(dtype)

    # -----------------------------------------------------------------------
    # Simple wrappers
    # -----------------------------------------------------------------------

    def create_blank_node(self, label: Any = _FRESH) -> BlankNode:
        """Make a blank node, with a fresh id unless a label is given.

        A given label is used verbatim; uniqueness is the caller's concern.
        """
        if label is _FRESH:
            return BlankNode(self.id_generator.next_id())
        require(label, "create_blank_node", "label")
        return BlankNode(label)

    def create_uri(self, text: str) -> Uri:
        require(text, "create_uri", "text")
        return Uri(text)

    def create_variable(self, name: str) -> Variable:
        require(name, "create_variable", "name")
        return Variable(name)

    def create_marker(self, name: str) -> Marker:
        require(name, "create_marker", "name")
        return Marker(name)

    # -----------------------------------------------------------------------
    # Literals
    # -----------------------------------------------------------------------

    def create_literal(
        self,
        text: str,
        lang: str | None = None,
        dtype: Datatype | str | None = None,
    ) -> Literal:
        """Make a literal from a lexical form, optional language and datatype.

        With only text the literal is an xsd:string. A non-empty language
        makes an rdf:langString literal and permits no other datatype. With
        no language, rdf:langString is rejected and any other datatype gives
        a typed literal.
        """
        require(text, "create_literal", "text")
        datatype = self._resolve(dtype)
        has_lang = bool(lang)
        has_dtype = datatype is not None
        shape = literal_shape(has_lang, has_dtype, has_dtype and datatype == RDF_LANG_STRING)

        if shape in _CONFLICTS:
            logger.debug("Rejected literal %r lang=%r dtype=%r: %s", text, lang, datatype, shape.value)
            raise DatatypeConflict(
                _CONFLICTS[shape],
                {"lexical_form": text, "language": lang, "datatype": datatype.uri},
            )
        if shape is LiteralShape.LANG:
            return self._make_literal(LiteralLabel(text, RDF_LANG_STRING, lang))
        if shape is LiteralShape.TYPED:
            return self.create_typed_literal(text, datatype)
        return self._make_literal(LiteralLabel(text, XSD_STRING))

    def create_typed_literal(self, text: str, dtype: Datatype | str | None = None) -> Literal:
        """Make a literal with no language; a missing datatype means xsd:string.

        The lexical form is not checked against the datatype unless the
        factory is configured for eager validation.
        """
        require(text, "create_typed_literal", "text")
        datatype = self._resolve(dtype) or XSD_STRING
        return self._make_literal(LiteralLabel(text, datatype))

    def create_literal_by_value(self, value: Any, dtype: Datatype | str | None = None) -> Literal:
        """Make a literal from a typed value; the lexical form is derived.

        Raises DatatypeMappingError when the value has no compatible datatype.
        """
        require(value, "create_literal_by_value", "value")
        return Literal(create_label_by_value(value, self._resolve(dtype), self.registry))

    def create_literal_from_label(self, label: LiteralLabel) -> Literal:
        require(label, "create_literal_from_label", "label")
        return Literal(label)

    def _make_literal(self, label: LiteralLabel) -> Literal:
        if self.config.eager_literal_validation:
            label.value  # raises DatatypeMappingError when ill-formed
        return Literal(label)

    # -----------------------------------------------------------------------
    # Embedded triples and graphs
    # -----------------------------------------------------------------------

    def create_triple_node(self, subject: Node, predicate: Node, object: Node) -> TripleNode:
        return self.create_triple_node_from(Triple.create(subject, predicate, object))

    def create_triple_node_from(self, triple: Triple) -> TripleNode:
        require(triple, "create_triple_node_from", "triple")
        return TripleNode(triple)

    def create_graph_node(self, graph: Any) -> GraphNode:
        require(graph, "create_graph_node", "graph")
        return GraphNode(graph)

    def __repr__(self) -> str:
        return f"NodeFactory({self.id_generator!r}, {self.registry!r})"


# ---------------------------------------------------------------------------
# Process-wide default factory
# ---------------------------------------------------------------------------

_default_factory: NodeFactory | None = None
_default_lock = threading.Lock()


def default_factory() -> NodeFactory:
    """Return the shared factory, configured from the environment on first use."""
    global _default_factory
    if _default_factory is None:
        with _default_lock:
            if _default_factory is None:
                config = FactoryConfig.from_env()
                logger.debug("Creating default node factory with %r", config)
                _default_factory = NodeFactory(config=config)
    return _default_factory


def create_blank_node(label: Any = _FRESH) -> BlankNode:
    return default_factory().create_blank_node(label)


def create_uri(text: str) -> Uri:
    return default_factory().create_uri(text)


def create_variable(name: str) -> Variable:
    return default_factory().create_variable(name)


def create_marker(name: str) -> Marker:
    return default_factory().create_marker(name)


def create_literal(text: str, lang: str | None = None, dtype: Datatype | str | None = None) -> Literal:
    return default_factory().create_literal(text, lang, dtype)


def create_typed_literal(text: str, dtype: Datatype | str | None = None) -> Literal:
    return default_factory().create_typed_literal(text, dtype)


def create_literal_by_value(value: Any, dtype: Datatype | str | None = None) -> Literal:
    return default_factory().create_literal_by_value(value, dtype)


def create_triple_node(subject: Node, predicate: Node, object: Node) -> TripleNode:
    return default_factory().create_triple_node(subject, predicate, object)


def create_graph_node(graph: Any) -> GraphNode:
    return default_factory().create_graph_node(graph)


def get_type(name: str | None) -> Datatype | None:
    return default_factory().get_type(name)
