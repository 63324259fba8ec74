"""Literal audit — checks lexical forms of factory-built literals with pySHACL.

Literals are built lazily: an ill-formed lexical form such as
"abc"^^xsd:integer is accepted at creation and only fails when its value is
read. The audit finds every such literal in a set of triples at once:

  1. Shapes: one sh:NodeShape per known datatype in the registry, targeting
     the datatype IRI as a class, with an sh:datatype constraint
  2. Data: one check node per typed literal (quoted triples included),
     typed with the literal's datatype and carrying the literal
  3. pySHACL reports each check node whose literal is not in the lexical
     space of its datatype

Requires the optional dependency pyshacl.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from rdflib import RDF, BNode, Graph, Namespace, URIRef
from rdflib import term as rdf_term
from rdflib.namespace import SH

from .datatypes import RDF_LANG_STRING, DatatypeRegistry, default_registry
from .rdflib_bridge import to_rdflib
from .types import Literal, Node, Triple, TripleNode

logger = logging.getLogger(__name__)

AUDIT = Namespace("urn:rdfnodes:audit#")


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

def datatype_shapes(registry: DatatypeRegistry | None = None) -> Graph:
    """Build a shapes graph with one well-formedness shape per known datatype.

    Fallback datatypes registered for unknown URIs have no lexical space to
    check and get no shape, nor does rdf:langString.
    """
    registry = registry if registry is not None else default_registry()
    g = Graph()
    g.bind("sh", SH)
    g.bind("audit", AUDIT)

    for datatype in registry:
        if not datatype.is_known or datatype == RDF_LANG_STRING:
            continue
        dt = URIRef(datatype.uri)
        shape = BNode()
        prop = BNode()
        g.add((shape, RDF.type, SH.NodeShape))
        g.add((shape, SH.targetClass, dt))
        g.add((shape, SH.property, prop))
        g.add((prop, SH.path, AUDIT.literal))
        g.add((prop, SH.datatype, dt))
        g.add((prop, SH.message, rdf_term.Literal(f"Lexical form is not valid for <{datatype.uri}>")))
    return g


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

def audit_graph(
    triples: Iterable[Triple],
    registry: DatatypeRegistry | None = None,
) -> tuple[Graph, dict[URIRef, tuple[Triple, Literal]]]:
    """Build the data graph for an audit.

    Returns the graph and a map from each check node to the triple and
    literal it stands for. Only literals whose datatype has a shape are
    checked. A literal inside a quoted triple is reported against the
    quoted triple, and each distinct quoted triple is visited once.
    """
    registry = registry if registry is not None else default_registry()
    g = Graph()
    g.bind("audit", AUDIT)
    checks: dict[URIRef, tuple[Triple, Literal]] = {}
    seen: set[TripleNode] = set()

    def visit(node: Node, triple: Triple) -> None:
        if isinstance(node, TripleNode):
            if node in seen:
                return
            seen.add(node)
            for inner in node.triple:
                visit(inner, node.triple)
            return
        if not isinstance(node, Literal) or node.language is not None:
            return
        datatype = registry.get_type_by_name(node.datatype.uri)
        if datatype is None or not datatype.is_known:
            return
        check = AUDIT[f"check{len(checks)}"]
        g.add((check, RDF.type, URIRef(datatype.uri)))
        g.add((check, AUDIT.literal, to_rdflib(node)))
        checks[check] = (triple, node)

    for triple in triples:
        for node in triple:
            visit(node, triple)
    return g, checks


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

def audit_literals(
    triples: Iterable[Triple],
    registry: DatatypeRegistry | None = None,
) -> LiteralAudit:
    """Check every typed literal in triples against its datatype's lexical space."""
    from pyshacl import validate as pyshacl_validate

    registry = registry if registry is not None else default_registry()
    data_graph, checks = audit_graph(triples, registry)

    conforms, results_graph, results_text = pyshacl_validate(
        data_graph,
        shacl_graph=datatype_shapes(registry),
        inference="none",
        abort_on_first=False,
    )

    findings = []
    for report in results_graph.subjects(RDF.type, SH.ValidationReport):
        for result in results_graph.objects(report, SH.result):
            focus = results_graph.value(result, SH.focusNode)
            if focus not in checks:
                continue
            triple, literal = checks[focus]
            message = results_graph.value(result, SH.resultMessage)
            findings.append(IllFormedLiteral(literal, triple, str(message) if message else ""))

    logger.debug("Audited %d literals, %d ill-formed", len(checks), len(findings))
    return LiteralAudit(
        conforms=conforms,
        findings=findings,
        checked=len(checks),
        results_text=results_text,
    )


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class IllFormedLiteral:
    """A literal whose lexical form is outside its datatype's lexical space."""
    literal: Literal
    triple: Triple
    message: str

    def __repr__(self) -> str:
        return f"IllFormedLiteral({self.literal!r} in {self.triple!r})"


@dataclass
class LiteralAudit:
    conforms: bool
    findings: list[IllFormedLiteral] = field(default_factory=list)
    checked: int = 0
    results_text: str = ""

    def summary(self) -> str:
        lines = []
        status = "WELL-FORMED" if self.conforms else "ILL-FORMED LITERALS FOUND"
        lines.append(f"Literal audit: {status} ({self.checked} checked)")
        lines.append("-" * 50)
        if self.findings:
            for f in self.findings:
                lines.append(f"  - {f.literal!r}: {f.message}")
        else:
            lines.append("  No ill-formed literals.")
        return "\n".join(lines)
