"""Annotated Claims — statements about statements.

A small people directory where every fact is a quoted triple annotated with
who stated it and how confident they are:

  << ex:alice ex:birthDate "1990-04-01"^^xsd:date >> ex:statedBy ex:civilRegistry ;
                                                     ex:confidence 0.95 .

Labels are language-tagged literals; confidences are built from Decimal
values; dates are typed literals.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from decimal import Decimal

from rdflib import Namespace
from rdflib.namespace import RDFS

from rdfnodes.blank_ids import CounterIdGenerator
from rdfnodes.datatypes import XSD_DATE
from rdfnodes.factory import NodeFactory
from rdfnodes.types import Triple, TripleNode

EX = Namespace("http://claims.example.org/")


def build_factory() -> NodeFactory:
    """A factory with deterministic blank node ids, so runs are repeatable."""
    return NodeFactory(id_generator=CounterIdGenerator(prefix="claim"))


def annotate(
    factory: NodeFactory,
    claim: TripleNode,
    source: str | None,
    confidence: Decimal | None,
) -> list[Triple]:
    """Attach source and confidence annotations to a quoted triple."""
    triples = []
    if source is not None:
        triples.append(Triple(claim, factory.create_uri(str(EX.statedBy)), factory.create_uri(str(EX[source]))))
    if confidence is not None:
        triples.append(Triple(claim, factory.create_uri(str(EX.confidence)), factory.create_literal_by_value(confidence)))
    return triples


def build_claims(factory: NodeFactory) -> list[Triple]:
    """The clean directory: two people, three annotated claims."""
    alice = factory.create_uri(str(EX.alice))
    acme = factory.create_uri(str(EX.acme))
    label = factory.create_uri(str(RDFS.label))

    triples = [
        Triple(alice, label, factory.create_literal("Alice", "en")),
        Triple(alice, label, factory.create_literal("Alicia", "es")),
        Triple(acme, label, factory.create_literal("ACME Corporation")),
    ]

    born = factory.create_triple_node(
        alice, factory.create_uri(str(EX.birthDate)), factory.create_literal("1990-04-01", None, XSD_DATE)
    )
    works = factory.create_triple_node(alice, factory.create_uri(str(EX.worksFor)), acme)
    # A claim about a claim: the registry confirms what the profile said
    confirms = factory.create_triple_node(
        factory.create_uri(str(EX.civilRegistry)), factory.create_uri(str(EX.confirms)), works
    )

    triples += annotate(factory, born, "civilRegistry", Decimal("0.95"))
    triples += annotate(factory, works, "profilePage", Decimal("0.6"))
    triples += annotate(factory, confirms, "auditLog", Decimal("1"))
    return triples
