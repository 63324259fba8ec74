"""Datatype registry — resolves datatype names to capability objects.

A Datatype knows its URI and the Python types in its value space. Mapping
between lexical and value space is delegated to rdflib's XSD conversions,
so the registry only adds the bookkeeping rdflib does not have: a total
lookup-by-name with an unknown-type fallback, and value compatibility checks.
"""

from __future__ import annotations

import datetime
import logging
import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterator

from rdflib import RDF, XSD, URIRef
from rdflib import term as rdf_term

from .errors import DatatypeMappingError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TypedValue — value of a literal whose datatype has no known value space
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypedValue:
    """Opaque value of a literal typed with an unknown datatype."""
    lexical_form: str
    datatype_uri: str

    def __repr__(self) -> str:
        return f'TypedValue("{self.lexical_form}"^^<{self.datatype_uri}>)'


# ---------------------------------------------------------------------------
# Datatype
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Datatype:
    """A registered datatype descriptor.

    Two datatypes are equal when their URIs are equal. An empty
    ``python_types`` marks a datatype whose value space is unknown: its
    lexical forms are never rejected and parse to a TypedValue.
    """
    uri: str
    python_types: tuple[type, ...] = field(default=(), compare=False)

    @property
    def is_known(self) -> bool:
        return bool(self.python_types)

    def accepts(self, value: Any) -> bool:
        """Check whether value belongs to this datatype's value space."""
        if not self.python_types:
            return False
        # bool is an int subclass but only xsd:boolean holds it
        if isinstance(value, bool) and bool not in self.python_types:
            return False
        # likewise datetime is a date subclass but belongs to xsd:dateTime
        if isinstance(value, datetime.datetime) and datetime.datetime not in self.python_types:
            return False
        return isinstance(value, self.python_types)

    def parse(self, lexical_form: str) -> Any:
        """Map a lexical form to its value."""
        if not self.is_known:
            return TypedValue(lexical_form, self.uri)
        parsed = rdf_term.Literal(lexical_form, datatype=URIRef(self.uri))
        if parsed.value is None or getattr(parsed, "ill_typed", False):
            raise DatatypeMappingError(
                f'Lexical form "{lexical_form}" is not valid for <{self.uri}>',
                {"lexical_form": lexical_form, "datatype": self.uri},
            )
        return parsed.value

    def unparse(self, value: Any) -> str:
        """Map a value to its lexical form.

        Strings are taken to be lexical forms already.
        """
        if isinstance(value, str):
            return value
        if not self.accepts(value):
            raise DatatypeMappingError(
                f"Value {value!r} of type {type(value).__name__} "
                f"cannot be represented as <{self.uri}>",
                {"value": value, "datatype": self.uri},
            )
        return str(rdf_term.Literal(value, datatype=URIRef(self.uri)))

    def __repr__(self) -> str:
        return f"Datatype(<{self.uri}>)"


# ---------------------------------------------------------------------------
# Standard datatypes
# ---------------------------------------------------------------------------

XSD_STRING = Datatype(str(XSD.string), (str,))
RDF_LANG_STRING = Datatype(str(RDF.langString), (str,))
XSD_BOOLEAN = Datatype(str(XSD.boolean), (bool,))
XSD_INTEGER = Datatype(str(XSD.integer), (int,))
XSD_INT = Datatype(str(XSD.int), (int,))
XSD_LONG = Datatype(str(XSD.long), (int,))
XSD_DECIMAL = Datatype(str(XSD.decimal), (Decimal, int))
XSD_DOUBLE = Datatype(str(XSD.double), (float, int))
XSD_FLOAT = Datatype(str(XSD.float), (float, int))
XSD_DATE_TIME = Datatype(str(XSD.dateTime), (datetime.datetime,))
XSD_DATE = Datatype(str(XSD.date), (datetime.date,))
XSD_TIME = Datatype(str(XSD.time), (datetime.time,))
XSD_ANY_URI = Datatype(str(XSD.anyURI), (str,))

STANDARD_DATATYPES = (
    XSD_STRING,
    RDF_LANG_STRING,
    XSD_BOOLEAN,
    XSD_INTEGER,
    XSD_INT,
    XSD_LONG,
    XSD_DECIMAL,
    XSD_DOUBLE,
    XSD_FLOAT,
    XSD_DATE_TIME,
    XSD_DATE,
    XSD_TIME,
    XSD_ANY_URI,
)


# ---------------------------------------------------------------------------
# DatatypeRegistry
# ---------------------------------------------------------------------------

class DatatypeRegistry:
    """Maps datatype URIs to Datatype objects.

    Lookups are plain dict reads. Registration, including the implicit
    registration of unknown-type fallbacks, happens under a lock.
    """

    def __init__(self, datatypes=STANDARD_DATATYPES):
        self._types: dict[str, Datatype] = {}
        self._lock = threading.Lock()
        for dt in datatypes:
            self.register(dt)

    def register(self, datatype: Datatype) -> Datatype:
        with self._lock:
            self._types[datatype.uri] = datatype
        return datatype

    def get_type_by_name(self, uri: str) -> Datatype | None:
        return self._types.get(str(uri))

    def get_safe_type_by_name(self, uri: str) -> Datatype:
        """Total lookup: unknown URIs get a registered fallback datatype."""
        uri = str(uri)
        existing = self._types.get(uri)
        if existing is not None:
            return existing
        with self._lock:
            existing = self._types.get(uri)
            if existing is None:
                logger.debug("Registering unknown datatype <%s>", uri)
                existing = self._types[uri] = Datatype(uri)
        return existing

    def get_type_by_value(self, value: Any) -> Datatype | None:
        """The datatype rdflib would give value, or None if it has none."""
        if isinstance(value, str):
            return XSD_STRING
        datatype = rdf_term.Literal(value).datatype
        if datatype is None:
            return None
        return self.get_safe_type_by_name(datatype)

    def __contains__(self, uri: object) -> bool:
        return str(uri) in self._types

    def __iter__(self) -> Iterator[Datatype]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"DatatypeRegistry({len(self)} datatypes)"


_default_registry: DatatypeRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> DatatypeRegistry:
    """Return the shared process-wide registry."""
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = DatatypeRegistry()
    return _default_registry
