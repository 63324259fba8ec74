"""rdfnodes — node construction and validation for an RDF-style graph model.

Nodes are immutable values drawn from a closed set of kinds:

- Uri, BlankNode, Variable, Marker: thin wrappers over a string
- Literal: lexical form + optional language tag + datatype
- TripleNode: an RDF-star quoted triple used as a term
- GraphNode: an N3 formula, a whole graph used as a term

The package is organized in layers:

  rdfnodes.datatypes      — datatype registry (lexical/value mapping via rdflib)
  rdfnodes.literal_label  — literal payloads and the well-formedness invariant
  rdfnodes.blank_ids      — injectable, thread-safe blank node id generators
  rdfnodes.factory        — NodeFactory: one validated node per call

  The literal decision procedure normalizes (lexical form, language, datatype)
  into PLAIN, LANG or TYPED, rejecting the two inconsistent combinations with
  DatatypeConflict.

The rdflib bridge (rdfnodes.rdflib_bridge) converts nodes and triples to
rdflib terms and graphs for serialization. The literal audit
(rdfnodes.literal_audit) uses pySHACL to find every ill-formed typed literal
in a set of triples. Requires the optional dependency pyshacl.
"""

from .datatypes import (
    RDF_LANG_STRING,
    XSD_BOOLEAN,
    XSD_DECIMAL,
    XSD_DOUBLE,
    XSD_INTEGER,
    XSD_STRING,
    Datatype,
    DatatypeRegistry,
)
from .errors import (
    ConfigError,
    DatatypeConflict,
    DatatypeMappingError,
    IdGeneratorExhausted,
    NodeError,
    NullArgument,
)
from .factory import NodeFactory, default_factory
from .literal_label import LiteralLabel
from .types import (
    BlankNode,
    GraphNode,
    Literal,
    Marker,
    Node,
    NodeKind,
    Triple,
    TripleNode,
    Uri,
    Variable,
    is_concrete,
    node_kind,
)
