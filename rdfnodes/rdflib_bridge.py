"""rdflib bridge — converts nodes to rdflib terms and triples to rdflib graphs.

This lets factory-built data be serialized and checked with the rdflib
ecosystem:

  1. Uri → URIRef, BlankNode → BNode, Variable → rdflib Variable
  2. Literal → rdflib Literal (language tag, or explicit datatype)
  3. GraphNode → rdflib Graph (passed through, or built from its triples)
  4. Triples → rdflib Graph; quoted triples become rdf:Statement
     reifications, since rdflib has no triple term

Marker nodes have no RDF counterpart and are rejected.
"""

from __future__ import annotations

from typing import Iterable

from rdflib import BNode, Graph, RDF, URIRef
from rdflib import term as rdf_term

from .factory import NodeFactory, default_factory
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


# ---------------------------------------------------------------------------
# Node → rdflib term
# ---------------------------------------------------------------------------

def to_rdflib(node: Node) -> rdf_term.Node:
    """Translate a single node into the equivalent rdflib term.

    Quoted triples are only representable inside a graph (see
    to_rdflib_graph) and raise ValueError here, as do markers.
    """
    match node:
        case Uri(text):
            return URIRef(text)
        case BlankNode(id):
            return BNode(id)
        case Variable(name):
            return rdf_term.Variable(name)
        case Literal(label):
            if label.language is not None:
                return rdf_term.Literal(label.lexical_form, lang=label.language)
            return rdf_term.Literal(label.lexical_form, datatype=URIRef(label.datatype.uri))
        case GraphNode(graph):
            if isinstance(graph, Graph):
                return graph
            return to_rdflib_graph(graph)
        case TripleNode():
            raise ValueError(f"Quoted triple {node!r} has no rdflib term outside a graph")
        case Marker():
            raise ValueError(f"Marker {node!r} has no rdflib term")
        case _:
            raise TypeError(f"Not a node: {node!r}")


def from_rdflib(term: rdf_term.Node, factory: NodeFactory | None = None) -> Node:
    """Translate an rdflib term into a node built by factory."""
    factory = factory or default_factory()
    if isinstance(term, Graph):
        return factory.create_graph_node(term)
    if isinstance(term, rdf_term.Literal):
        datatype = str(term.datatype) if term.datatype is not None else None
        return factory.create_literal(str(term), term.language, datatype)
    if isinstance(term, BNode):
        return factory.create_blank_node(str(term))
    if isinstance(term, rdf_term.Variable):
        return factory.create_variable(str(term))
    if isinstance(term, URIRef):
        return factory.create_uri(str(term))
    raise TypeError(f"Unsupported rdflib term: {term!r}")


# ---------------------------------------------------------------------------
# Triples → rdflib Graph
# ---------------------------------------------------------------------------

def to_rdflib_graph(triples: Iterable[Triple], graph: Graph | None = None) -> Graph:
    """Add triples to an rdflib graph (a new one unless given).

    Each distinct quoted triple becomes one rdf:Statement blank node carrying
    rdf:subject, rdf:predicate and rdf:object, and that node stands in for
    the quoted triple wherever it occurs.
    """
    g = Graph() if graph is None else graph
    statements: dict[TripleNode, BNode] = {}

    def convert(node: Node) -> rdf_term.Node:
        if not isinstance(node, TripleNode):
            return to_rdflib(node)
        stmt = statements.get(node)
        if stmt is None:
            stmt = statements[node] = BNode()
            g.add((stmt, RDF.type, RDF.Statement))
            g.add((stmt, RDF.subject, convert(node.triple.subject)))
            g.add((stmt, RDF.predicate, convert(node.triple.predicate)))
            g.add((stmt, RDF.object, convert(node.triple.object)))
        return stmt

    for triple in triples:
        g.add((convert(triple.subject), convert(triple.predicate), convert(triple.object)))
    return g
