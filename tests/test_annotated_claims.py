"""End-to-end tests for the Annotated Claims case study."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from decimal import Decimal

import pytest
from rdflib import RDF

from rdfnodes.datatypes import RDF_LANG_STRING, XSD_DATE, XSD_DECIMAL
from rdfnodes.literal_audit import audit_literals
from rdfnodes.rdflib_bridge import to_rdflib_graph
from rdfnodes.types import NodeKind, Triple, TripleNode, node_kind

from case_studies.annotated_claims.domain import (
    EX,
    build_claims,
    build_factory,
)


@pytest.fixture
def factory():
    return build_factory()


@pytest.fixture
def triples(factory):
    return build_claims(factory)


class TestConstruction:
    def test_triple_count(self, triples):
        assert len(triples) == 9

    def test_language_labels(self, triples):
        langs = {t.object.language for t in triples
                 if node_kind(t.object) == NodeKind.LITERAL and t.object.datatype == RDF_LANG_STRING}
        assert langs == {"en", "es"}

    def test_confidences_are_decimal(self, triples):
        confidences = [t.object for t in triples if t.predicate.text == str(EX.confidence)]
        assert len(confidences) == 3
        assert all(c.datatype == XSD_DECIMAL for c in confidences)
        assert {c.value for c in confidences} == {Decimal("0.95"), Decimal("0.6"), Decimal("1")}

    def test_birth_date_typed(self, triples):
        born = next(t.subject for t in triples
                    if isinstance(t.subject, TripleNode) and t.subject.triple.predicate.text == str(EX.birthDate))
        assert born.triple.object.datatype == XSD_DATE
        assert born.triple.object.label.is_well_formed()

    def test_nested_quoting(self, triples):
        nested = [t.subject for t in triples
                  if isinstance(t.subject, TripleNode) and isinstance(t.subject.triple.object, TripleNode)]
        assert len(nested) == 1


class TestReification:
    def test_three_statements(self, triples):
        g = to_rdflib_graph(triples)
        assert len(set(g.subjects(RDF.type, RDF.Statement))) == 3


class TestLiteralAudit:
    def test_clean_directory_is_well_formed(self, triples):
        pytest.importorskip("pyshacl")
        audit = audit_literals(triples)
        assert audit.conforms, audit.summary()
        # three confidences, the quoted birth date and the plain company label
        assert audit.checked == 5

    def test_ill_formed_confidence_reported(self, factory, triples):
        pytest.importorskip("pyshacl")
        claim = factory.create_triple_node(
            factory.create_uri(str(EX.alice)),
            factory.create_uri(str(EX.height)),
            factory.create_literal_by_value(172),
        )
        bad = factory.create_literal("very high", None, XSD_DECIMAL)
        audit = audit_literals(triples + [Triple(claim, factory.create_uri(str(EX.confidence)), bad)])
        assert not audit.conforms
        assert [f.literal for f in audit.findings] == [bad]
