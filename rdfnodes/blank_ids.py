"""Blank-node id generators.

A generator is any object with a ``next_id() -> str`` method. Every generator
here is safe under concurrent calls: no id is handed to two callers.
"""

from __future__ import annotations

import itertools
import logging
import threading
import uuid
from typing import Iterable, Protocol

from .errors import IdGeneratorExhausted

logger = logging.getLogger(__name__)


class BlankNodeIdGenerator(Protocol):
    def next_id(self) -> str: ...


class UUIDIdGenerator:
    """Globally unique ids from random UUIDs."""

    def next_id(self) -> str:
        return uuid.uuid4().hex

    def __repr__(self) -> str:
        return "UUIDIdGenerator()"


class CounterIdGenerator:
    """Monotonic ids ``<prefix><n>`` from a locked counter.

    Unique within one generator instance only; deterministic, so suited to
    tests and to output that should be stable between runs.
    """

    def __init__(self, prefix: str = "b", start: int = 0):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}{n}"

    def __repr__(self) -> str:
        return f"CounterIdGenerator(prefix={self.prefix!r})"


class SequenceIdGenerator:
    """Replays a fixed sequence of ids, then fails."""

    def __init__(self, ids: Iterable[str]):
        self._ids = iter(ids)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            try:
                return next(self._ids)
            except StopIteration:
                raise IdGeneratorExhausted("No blank node ids left in sequence") from None


_default_generator: BlankNodeIdGenerator | None = None
_default_lock = threading.Lock()
_shared_counters: dict[str, CounterIdGenerator] = {}


def shared_counter(prefix: str = "b") -> CounterIdGenerator:
    """Return the process-wide counter for prefix.

    Every caller asking for the same prefix draws from one counter, so
    factories configured alike never hand out the same id.
    """
    with _default_lock:
        counter = _shared_counters.get(prefix)
        if counter is None:
            counter = _shared_counters[prefix] = CounterIdGenerator(prefix=prefix)
    return counter


def default_generator() -> BlankNodeIdGenerator:
    """Return the process-wide generator, a UUIDIdGenerator unless replaced."""
    global _default_generator
    if _default_generator is None:
        with _default_lock:
            if _default_generator is None:
                _default_generator = UUIDIdGenerator()
    return _default_generator


def set_default_generator(generator: BlankNodeIdGenerator) -> BlankNodeIdGenerator:
    """Replace the process-wide generator, returning the previous one."""
    global _default_generator
    with _default_lock:
        previous = _default_generator or UUIDIdGenerator()
        _default_generator = generator
    logger.debug("Default blank node id generator set to %r", generator)
    return previous
