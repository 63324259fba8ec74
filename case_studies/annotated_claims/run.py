"""Annotated Claims — end-to-end rdfnodes demonstration.

Run with:  python -m case_studies.annotated_claims.run

  STEP 1 — Node construction
    Build a directory of quoted, annotated claims with the NodeFactory.
    Literal shapes (plain, language-tagged, typed) are decided by the factory.

  STEP 2 — Rejected inputs
    Inconsistent (lexical form, language, datatype) combinations are refused
    with DatatypeConflict; missing inputs with NullArgument; ill-formed
    lexical forms surface as DatatypeMappingError when their value is read.

  STEP 3 — rdflib + literal audit
    Quoted triples are reified into an rdflib graph, and every typed literal
    is audited with pySHACL, first clean, then with an ill-formed confidence.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from rdfnodes.datatypes import XSD_DECIMAL, XSD_INTEGER, XSD_STRING
from rdfnodes.errors import DatatypeConflict, DatatypeMappingError, NullArgument
from rdfnodes.literal_audit import audit_literals
from rdfnodes.rdflib_bridge import to_rdflib_graph
from rdfnodes.types import NodeKind, Triple, node_kind

from .domain import EX, build_claims, build_factory


def print_header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def run_construction_demo(factory) -> list:
    print_header("STEP 1: Node construction")
    triples = build_claims(factory)
    print(f"\n  Built {len(triples)} triples")
    for triple in triples:
        kinds = "/".join(node_kind(n).value for n in triple)
        print(f"    [{kinds}] {triple!r}")
    quoted = sum(1 for t in triples if node_kind(t.subject) == NodeKind.TRIPLE)
    print(f"\n  Annotations on quoted triples: {quoted}")
    return triples


def run_rejection_demo(factory) -> None:
    print_header("STEP 2: Rejected inputs")
    attempts = [
        ("language + xsd:string", lambda: factory.create_literal("Alice", "en", XSD_STRING)),
        ("rdf:langString, no language", lambda: factory.create_literal("Alice", None, "http://www.w3.org/1999/02/22-rdf-syntax-ns#langString")),
        ("missing lexical form", lambda: factory.create_literal(None)),
        ("missing URI", lambda: factory.create_uri(None)),
    ]
    for name, attempt in attempts:
        try:
            attempt()
            print(f"  {name}: accepted (unexpected)")
        except (DatatypeConflict, NullArgument) as e:
            print(f"  {name}: {type(e).__name__}: {e.message}")

    lit = factory.create_literal("forty-two", None, XSD_INTEGER)
    print(f"\n  Constructed {lit!r} (lexical form not checked at creation)")
    try:
        lit.value
    except DatatypeMappingError as e:
        print(f"  Reading its value: DatatypeMappingError: {e.message}")


def run_audit_demo(factory, triples: list) -> None:
    print_header("STEP 3: rdflib + literal audit")

    print("\n  Reified Turtle:")
    turtle = to_rdflib_graph(triples).serialize(format="turtle")
    for line in turtle.splitlines():
        print(f"    {line}")

    audit = audit_literals(triples)
    print("\n  Clean directory:")
    print("  " + audit.summary().replace("\n", "\n  "))

    claim = factory.create_triple_node(
        factory.create_uri(str(EX.alice)),
        factory.create_uri(str(EX.height)),
        factory.create_literal_by_value(172),
    )
    broken = triples + [
        Triple(claim, factory.create_uri(str(EX.confidence)), factory.create_literal("very high", None, XSD_DECIMAL)),
    ]
    audit = audit_literals(broken)
    print('\n  Claim with confidence "very high"^^xsd:decimal:')
    print("  " + audit.summary().replace("\n", "\n  "))


def main():
    factory = build_factory()
    triples = run_construction_demo(factory)
    run_rejection_demo(factory)
    run_audit_demo(factory, triples)

    print(f"\n{'=' * 60}")
    print("  Annotated Claims Complete")
    print(f"{'=' * 60}")


if __name__ == "__main__":
    main()
