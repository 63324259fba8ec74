"""Tests for the Node Factory — simple wrappers and the literal decision procedure."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import datetime
import threading

import pytest
from rdflib import Graph

from rdfnodes.blank_ids import CounterIdGenerator, SequenceIdGenerator
from rdfnodes.config import FactoryConfig
from rdfnodes.datatypes import (
    RDF_LANG_STRING,
    XSD_BOOLEAN,
    XSD_DATE,
    XSD_INTEGER,
    XSD_STRING,
    Datatype,
    DatatypeRegistry,
)
from rdfnodes.errors import (
    ConfigError,
    DatatypeConflict,
    DatatypeMappingError,
    IdGeneratorExhausted,
    NullArgument,
)
from rdfnodes.factory import LiteralShape, NodeFactory, literal_shape
from rdfnodes.literal_label import LiteralLabel
from rdfnodes.types import (
    BlankNode,
    GraphNode,
    Literal,
    Marker,
    Triple,
    TripleNode,
    Uri,
    Variable,
)

EX = "http://example.org/"


@pytest.fixture
def factory():
    return NodeFactory(id_generator=CounterIdGenerator(prefix="t"), registry=DatatypeRegistry())


# ---------------------------------------------------------------------------
# Simple wrappers
# ---------------------------------------------------------------------------

class TestSimpleNodes:
    def test_uri(self, factory):
        node = factory.create_uri(EX + "a")
        assert node == Uri(EX + "a")

    def test_relative_uri_not_checked(self, factory):
        assert factory.create_uri("not a uri").text == "not a uri"

    def test_variable(self, factory):
        assert factory.create_variable("x") == Variable("x")

    def test_marker(self, factory):
        assert factory.create_marker("ANY") == Marker("ANY")

    @pytest.mark.parametrize("method", ["create_uri", "create_variable", "create_marker"])
    def test_none_rejected(self, factory, method):
        with pytest.raises(NullArgument):
            getattr(factory, method)(None)

    def test_null_argument_names_operation(self, factory):
        with pytest.raises(NullArgument) as exc:
            factory.create_uri(None)
        assert exc.value.details["operation"] == "create_uri"
        assert exc.value.details["argument"] == "text"


class TestBlankNodes:
    def test_fresh_from_generator(self, factory):
        assert factory.create_blank_node() == BlankNode("t0")
        assert factory.create_blank_node() == BlankNode("t1")

    def test_label_used_verbatim(self, factory):
        assert factory.create_blank_node("abc") == BlankNode("abc")

    def test_label_not_checked_for_uniqueness(self, factory):
        assert factory.create_blank_node("same") == factory.create_blank_node("same")

    def test_explicit_none_rejected(self, factory):
        with pytest.raises(NullArgument):
            factory.create_blank_node(None)

    def test_deterministic_sequence(self):
        f = NodeFactory(id_generator=SequenceIdGenerator(["x", "y"]))
        assert [f.create_blank_node().id for _ in range(2)] == ["x", "y"]

    def test_generator_failure_propagates(self):
        f = NodeFactory(id_generator=SequenceIdGenerator([]))
        with pytest.raises(IdGeneratorExhausted):
            f.create_blank_node()

    def test_concurrent_fresh_ids_distinct(self):
        f = NodeFactory()
        results: list[BlankNode] = []
        lock = threading.Lock()

        def worker():
            made = [f.create_blank_node() for _ in range(200)]
            with lock:
                results.extend(made)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 1600
        assert len({n.id for n in results}) == 1600

    def test_counter_strategy_from_config(self):
        f = NodeFactory(config=FactoryConfig(blank_node_ids="counter", blank_node_prefix="n"))
        assert f.create_blank_node().id.startswith("n")

    def test_counter_factories_do_not_collide(self):
        config = FactoryConfig(blank_node_ids="counter", blank_node_prefix="shared")
        f1, f2 = NodeFactory(config=config), NodeFactory(config=config)
        ids = [f.create_blank_node().id for f in (f1, f2, f1, f2)]
        assert len(set(ids)) == 4


# ---------------------------------------------------------------------------
# Literal decision table
# ---------------------------------------------------------------------------

class TestLiteralShape:
    @pytest.mark.parametrize("key, shape", [
        ((False, False, False), LiteralShape.PLAIN),
        ((False, True, False), LiteralShape.TYPED),
        ((False, True, True), LiteralShape.LANG_STRING_WITHOUT_LANG),
        ((True, False, False), LiteralShape.LANG),
        ((True, True, True), LiteralShape.LANG),
        ((True, True, False), LiteralShape.LANG_WITH_FOREIGN_DATATYPE),
    ])
    def test_table(self, key, shape):
        assert literal_shape(*key) == shape

    def test_lang_string_without_datatype_is_impossible(self):
        with pytest.raises(ValueError):
            literal_shape(False, False, True)


class TestPlainLiterals:
    def test_text_only(self, factory):
        lit = factory.create_literal("hello")
        assert isinstance(lit, Literal)
        assert lit.lexical_form == "hello"
        assert lit.language is None
        assert lit.datatype == XSD_STRING

    def test_empty_lexical_form_allowed(self, factory):
        assert factory.create_literal("").lexical_form == ""

    def test_empty_lang_is_no_lang(self, factory):
        assert factory.create_literal("x", "") == factory.create_literal("x")

    def test_none_lang_is_no_lang(self, factory):
        assert factory.create_literal("x", None) == factory.create_literal("x")

    def test_empty_lang_none_dtype(self, factory):
        a = factory.create_literal("x", "", None)
        b = factory.create_literal("x", None, None)
        c = factory.create_literal("x")
        assert a == b == c


class TestLanguageLiterals:
    def test_lang_tagged(self, factory):
        lit = factory.create_literal("chat", "fr")
        assert lit.lexical_form == "chat"
        assert lit.language == "fr"
        assert lit.datatype == RDF_LANG_STRING

    def test_lang_kept_verbatim(self, factory):
        assert factory.create_literal("x", "en-GB").language == "en-GB"

    def test_explicit_lang_string_datatype(self, factory):
        assert factory.create_literal("x", "en", RDF_LANG_STRING) == factory.create_literal("x", "en")

    def test_lang_with_integer_conflicts(self, factory):
        with pytest.raises(DatatypeConflict):
            factory.create_literal("x", "en", XSD_INTEGER)

    def test_lang_with_string_conflicts(self, factory):
        with pytest.raises(DatatypeConflict):
            factory.create_literal("x", "en", XSD_STRING)

    def test_value_is_lexical_form(self, factory):
        assert factory.create_literal("chat", "fr").value == "chat"


class TestTypedLiterals:
    def test_lang_string_without_lang_conflicts(self, factory):
        with pytest.raises(DatatypeConflict):
            factory.create_literal("x", None, RDF_LANG_STRING)

    def test_lang_string_with_empty_lang_conflicts(self, factory):
        with pytest.raises(DatatypeConflict):
            factory.create_literal("x", "", RDF_LANG_STRING)

    def test_integer_datatype(self, factory):
        lit = factory.create_literal("42", None, XSD_INTEGER)
        assert lit.language is None
        assert lit.datatype == XSD_INTEGER
        assert lit.value == 42

    def test_ill_formed_lexical_form_is_constructed(self, factory):
        lit = factory.create_literal("x", None, XSD_INTEGER)
        assert lit.lexical_form == "x"
        assert lit.language is None
        assert lit.datatype == XSD_INTEGER
        assert not lit.label.is_well_formed()

    def test_ill_formed_error_comes_from_label(self, factory):
        lit = factory.create_literal("x", None, XSD_INTEGER)
        with pytest.raises(DatatypeMappingError):
            lit.label.value

    def test_datatype_by_uri(self, factory):
        lit = factory.create_literal("true", None, "http://www.w3.org/2001/XMLSchema#boolean")
        assert lit.datatype == XSD_BOOLEAN
        assert lit.value is True

    def test_unknown_datatype_uri(self, factory):
        lit = factory.create_literal("v", None, EX + "custom")
        assert lit.datatype == Datatype(EX + "custom")
        assert lit.label.is_well_formed()

    def test_typed_form_defaults_to_string(self, factory):
        assert factory.create_typed_literal("x") == factory.create_literal("x")

    def test_typed_form(self, factory):
        lit = factory.create_typed_literal("1.5", "http://www.w3.org/2001/XMLSchema#decimal")
        assert lit.language is None
        assert str(lit.value) == "1.5"

    def test_typed_form_rejects_lang_string(self, factory):
        with pytest.raises(DatatypeConflict):
            factory.create_typed_literal("x", RDF_LANG_STRING)

    @pytest.mark.parametrize("call", [
        lambda f: f.create_literal(None),
        lambda f: f.create_literal(None, "en"),
        lambda f: f.create_literal(None, None, XSD_INTEGER),
        lambda f: f.create_typed_literal(None, XSD_INTEGER),
        lambda f: f.create_literal_by_value(None),
        lambda f: f.create_literal_from_label(None),
    ])
    def test_none_rejected(self, factory, call):
        with pytest.raises(NullArgument):
            call(factory)


class TestEagerValidation:
    def test_ill_formed_rejected_at_creation(self):
        f = NodeFactory(config=FactoryConfig(eager_literal_validation=True))
        with pytest.raises(DatatypeMappingError):
            f.create_literal("x", None, XSD_INTEGER)

    def test_well_formed_accepted(self):
        f = NodeFactory(config=FactoryConfig(eager_literal_validation=True))
        assert f.create_literal("7", None, XSD_INTEGER).value == 7
        assert f.create_literal("x", "en").language == "en"
        assert f.create_literal("x").value == "x"


class TestLiteralsByValue:
    def test_integer(self, factory):
        lit = factory.create_literal_by_value(5)
        assert lit.lexical_form == "5"
        assert lit.datatype == XSD_INTEGER

    def test_boolean(self, factory):
        lit = factory.create_literal_by_value(True)
        assert lit.lexical_form == "true"
        assert lit.datatype == XSD_BOOLEAN

    def test_string_is_lexical_form(self, factory):
        assert factory.create_literal_by_value("abc") == factory.create_literal("abc")

    def test_explicit_datatype(self, factory):
        lit = factory.create_literal_by_value(7, XSD_INTEGER)
        assert lit.lexical_form == "7"

    def test_incompatible_datatype(self, factory):
        with pytest.raises(DatatypeMappingError):
            factory.create_literal_by_value(7, XSD_BOOLEAN)

    def test_unmappable_value(self, factory):
        with pytest.raises(DatatypeMappingError):
            factory.create_literal_by_value(object())

    def test_datetime_is_not_a_date(self, factory):
        with pytest.raises(DatatypeMappingError):
            factory.create_literal_by_value(datetime.datetime(2024, 1, 2, 3, 4), XSD_DATE)
        assert factory.create_literal_by_value(datetime.date(2024, 1, 2), XSD_DATE).lexical_form == "2024-01-02"

    def test_from_label(self, factory):
        label = LiteralLabel("x", XSD_STRING)
        assert factory.create_literal_from_label(label) == factory.create_literal("x")


# ---------------------------------------------------------------------------
# Triple and graph nodes
# ---------------------------------------------------------------------------

class TestTripleAndGraphNodes:
    def test_triple_node(self, factory):
        s = factory.create_uri(EX + "s")
        p = factory.create_uri(EX + "p")
        o = factory.create_literal("o")
        node = factory.create_triple_node(s, p, o)
        assert isinstance(node, TripleNode)
        assert node.triple == Triple(s, p, o)

    def test_triple_node_from_triple(self, factory):
        triple = Triple.create(Uri(EX + "s"), Uri(EX + "p"), Uri(EX + "o"))
        assert factory.create_triple_node_from(triple).triple is triple

    def test_nested_triple_node(self, factory):
        inner = factory.create_triple_node(Uri(EX + "s"), Uri(EX + "p"), Uri(EX + "o"))
        outer = factory.create_triple_node(inner, Uri(EX + "says"), factory.create_literal("yes"))
        assert outer.triple.subject == inner

    def test_triple_node_none_position(self, factory):
        with pytest.raises(NullArgument):
            factory.create_triple_node(Uri(EX + "s"), None, Uri(EX + "o"))

    def test_graph_node_wraps_reference(self, factory):
        g = Graph()
        node = factory.create_graph_node(g)
        assert isinstance(node, GraphNode)
        assert node.graph is g

    def test_graph_node_none(self, factory):
        with pytest.raises(NullArgument):
            factory.create_graph_node(None)


# ---------------------------------------------------------------------------
# Datatype lookup
# ---------------------------------------------------------------------------

class TestGetType:
    def test_none(self, factory):
        assert factory.get_type(None) is None

    def test_known(self, factory):
        assert factory.get_type("http://www.w3.org/2001/XMLSchema#integer") is XSD_INTEGER

    def test_unknown_is_fallback(self, factory):
        dt = factory.get_type(EX + "mystery")
        assert dt.uri == EX + "mystery"
        assert not dt.is_known


# ---------------------------------------------------------------------------
# Module-level functions
# ---------------------------------------------------------------------------

class TestDefaultFactory:
    def test_shared(self):
        from rdfnodes.factory import default_factory
        assert default_factory() is default_factory()

    def test_module_functions_delegate(self):
        from rdfnodes import factory as nf
        assert nf.create_uri(EX + "a") == Uri(EX + "a")
        assert nf.create_variable("v") == Variable("v")
        assert nf.create_marker("m") == Marker("m")
        assert nf.create_literal("x", "en") == nf.default_factory().create_literal("x", "en")
        assert nf.create_typed_literal("3", XSD_INTEGER).value == 3
        assert nf.create_literal_by_value(3).datatype == XSD_INTEGER
        assert nf.create_blank_node("q") == BlankNode("q")
        assert nf.create_blank_node() != nf.create_blank_node()
        assert nf.get_type(None) is None

    def test_module_triple_and_graph(self):
        from rdfnodes import factory as nf
        s, p, o = Uri(EX + "s"), Uri(EX + "p"), Uri(EX + "o")
        assert nf.create_triple_node(s, p, o).triple == Triple(s, p, o)
        g = Graph()
        assert nf.create_graph_node(g).graph is g


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_empty_registry_is_kept(self):
        registry = DatatypeRegistry(datatypes=())
        f = NodeFactory(registry=registry)
        assert f.registry is registry
        f.get_type(EX + "custom")
        assert EX + "custom" in registry

    def test_unvalidated_config_rejected(self):
        with pytest.raises(ConfigError):
            NodeFactory(config=FactoryConfig.model_construct(blank_node_ids="bogus"))

    def test_counter_without_prefix_rejected(self):
        config = FactoryConfig.model_construct(blank_node_ids="counter", blank_node_prefix="")
        with pytest.raises(ConfigError) as exc:
            NodeFactory(config=config)
        assert any("prefix" in e for e in exc.value.details["errors"])
