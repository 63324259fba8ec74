"""Factory configuration — environment-driven settings via pydantic-settings.

Every field can be set by keyword or from an RDFNODES_-prefixed variable:

  RDFNODES_EAGER_LITERAL_VALIDATION  parse every lexical-form literal at creation
  RDFNODES_BLANK_NODE_IDS            "uuid" or "counter"
  RDFNODES_BLANK_NODE_PREFIX         prefix for counter-generated ids
"""

from __future__ import annotations

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .blank_ids import BlankNodeIdGenerator, UUIDIdGenerator, shared_counter
from .errors import ConfigError

BLANK_NODE_ID_STRATEGIES = ("uuid", "counter")


def _strategy_error(strategy: str) -> str | None:
    if strategy not in BLANK_NODE_ID_STRATEGIES:
        return (
            f"blank_node_ids must be one of {', '.join(BLANK_NODE_ID_STRATEGIES)}, "
            f"got {strategy!r}"
        )
    return None


def _prefix_error(strategy: str, prefix: str) -> str | None:
    if strategy == "counter" and not prefix:
        return "counter blank node ids require a non-empty blank_node_prefix"
    return None


class FactoryConfig(BaseSettings):
    """Settings for a NodeFactory."""

    model_config = SettingsConfigDict(
        env_prefix="RDFNODES_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        env_ignore_empty=True,
    )

    eager_literal_validation: bool = False
    blank_node_ids: str = "uuid"
    blank_node_prefix: str = "b"

    @field_validator("blank_node_ids", mode="before")
    @classmethod
    def normalize_strategy(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip().lower()
            error = _strategy_error(v)
            if error:
                raise ValueError(error)
        return v

    @model_validator(mode="after")
    def check_prefix(self) -> FactoryConfig:
        error = _prefix_error(self.blank_node_ids, self.blank_node_prefix)
        if error:
            raise ValueError(error)
        return self

    @classmethod
    def from_env(cls, **overrides) -> FactoryConfig:
        """Load settings from the environment, raising ConfigError if invalid."""
        try:
            return cls(**overrides)
        except ValidationError as e:
            errors = [err["msg"] for err in e.errors()]
            raise ConfigError("; ".join(errors), {"errors": errors}) from e

    def check(self) -> list[str]:
        """Return error messages for this instance (empty if valid).

        Catches instances built without validation, e.g. via model_construct.
        """
        errors = [
            _strategy_error(self.blank_node_ids),
            _prefix_error(self.blank_node_ids, self.blank_node_prefix),
        ]
        return [e for e in errors if e]

    def make_generator(self) -> BlankNodeIdGenerator:
        if self.blank_node_ids == "counter":
            return shared_counter(self.blank_node_prefix)
        return UUIDIdGenerator()
