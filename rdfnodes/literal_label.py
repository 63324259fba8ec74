"""Literal labels — the (lexical form, language, datatype) payload of a literal.

A label is built either from a lexical form or from a typed value. Lexical
validity against the datatype is checked lazily: an ill-formed label can be
constructed, and fails with DatatypeMappingError only when its value is read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .datatypes import (
    RDF_LANG_STRING,
    XSD_STRING,
    Datatype,
    DatatypeRegistry,
    default_registry,
)
from .errors import DatatypeConflict, DatatypeMappingError, require


@dataclass(frozen=True)
class LiteralLabel:
    """Lexical form, optional language tag and datatype of a literal.

    Invariant: ``language`` is set if and only if ``datatype`` is
    rdf:langString. An empty language is stored as None.
    """
    lexical_form: str
    datatype: Datatype = XSD_STRING
    language: str | None = None

    def __post_init__(self) -> None:
        if self.language == "":
            object.__setattr__(self, "language", None)
        if self.language is not None and self.datatype != RDF_LANG_STRING:
            raise DatatypeConflict(
                f"Language '{self.language}' given with datatype <{self.datatype.uri}>",
                {"language": self.language, "datatype": self.datatype.uri},
            )
        if self.language is None and self.datatype == RDF_LANG_STRING:
            raise DatatypeConflict(
                "Datatype is rdf:langString but no language given",
                {"datatype": self.datatype.uri},
            )

    @property
    def value(self) -> Any:
        """The value denoted by the lexical form under the datatype."""
        if self.language is not None:
            return self.lexical_form
        return self.datatype.parse(self.lexical_form)

    def is_well_formed(self) -> bool:
        try:
            self.value
        except DatatypeMappingError:
            return False
        return True

    def __repr__(self) -> str:
        if self.language is not None:
            return f'"{self.lexical_form}"@{self.language}'
        if self.datatype == XSD_STRING:
            return f'"{self.lexical_form}"'
        return f'"{self.lexical_form}"^^<{self.datatype.uri}>'


def create_label(
    lexical_form: str,
    language: str | None = None,
    datatype: Datatype | None = None,
) -> LiteralLabel:
    """Build a label from a lexical form.

    A missing datatype means rdf:langString when a language is given and
    xsd:string otherwise.
    """
    require(lexical_form, "create_label", "lexical_form")
    if datatype is None:
        datatype = RDF_LANG_STRING if language else XSD_STRING
    return LiteralLabel(lexical_form, datatype, language or None)


def create_label_by_value(
    value: Any,
    datatype: Datatype | None = None,
    registry: DatatypeRegistry | None = None,
) -> LiteralLabel:
    """Build a label from a typed value, deriving the lexical form.

    A string is taken to be a lexical form after all. Otherwise the datatype,
    when not given, is found from the value's Python type. Raises
    DatatypeMappingError when no compatible datatype exists.
    """
    require(value, "create_label_by_value", "value")
    if datatype is None:
        datatype = (registry if registry is not None else default_registry()).get_type_by_value(value)
        if datatype is None:
            raise DatatypeMappingError(
                f"No datatype for value {value!r} of type {type(value).__name__}",
                {"value": value},
            )
    return LiteralLabel(datatype.unparse(value), datatype)
