"""Error taxonomy for node construction.

Every error is terminal for the single construction call that raised it:
no partial node exists and nothing is retried.
"""

from __future__ import annotations

from typing import Any


class NodeError(Exception):
    """Base class for all rdfnodes errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NullArgument(NodeError):
    """A required input was None."""


class DatatypeConflict(NodeError):
    """Language tag and datatype are mutually inconsistent.

    A language-tagged literal must have datatype rdf:langString, and
    rdf:langString may only be used together with a language tag.
    """


class DatatypeMappingError(NodeError):
    """A value or lexical form cannot be represented under a datatype."""


class IdGeneratorExhausted(NodeError):
    """A finite blank-node id generator has no ids left."""


class ConfigError(NodeError):
    """An invalid configuration value."""


def require(value: Any, operation: str, argument: str) -> Any:
    """Return value, or raise NullArgument naming the operation and argument."""
    if value is None:
        raise NullArgument(
            f"Argument '{argument}' to {operation} is None",
            {"operation": operation, "argument": argument},
        )
    return value
