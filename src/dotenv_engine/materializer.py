"""
Apply parsed entries to an environment under default or override precedence.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional, Protocol

from .parser import ParseResult

logger = logging.getLogger(__name__)


class EnvironmentHandle(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MappingEnvironment:
    """
    Exposes a mutable mapping through the narrow get/set handle.

    Wrap a plain dict in tests, or ``os.environ`` (see :func:`process_environment`)
    to write to the live process. Writes go straight to the mapping so they are
    visible to every reader immediately. Nothing here is locked: callers that
    apply from several threads must serialize those calls themselves.
    """

    def __init__(self, mapping: MutableMapping[str, str] | None = None):
        self.mapping: MutableMapping[str, str] = {} if mapping is None else mapping

    def get(self, key: str) -> Optional[str]:
        return self.mapping.get(key)

    def set(self, key: str, value: str) -> None:
        self.mapping[key] = value


def process_environment() -> MappingEnvironment:
    return MappingEnvironment(os.environ)


@dataclass
class MaterializeOutcome:
    """Keys written and keys left untouched, in parse order."""

    written: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.written)


class EnvMaterializer:
    """Writes a :class:`ParseResult` into an :class:`EnvironmentHandle`."""

    def materialize(
        self,
        parse_result: ParseResult,
        environment: EnvironmentHandle,
        override: bool = False,
    ) -> MaterializeOutcome:
        outcome = MaterializeOutcome()
        for entry in parse_result.entries:
            if not override and environment.get(entry.key) is not None:
                logger.debug("Keeping existing value for %s (line %d)", entry.key, entry.line)
                outcome.kept.append(entry.key)
                continue
            environment.set(entry.key, entry.value)
            logger.debug("Set %s from line %d", entry.key, entry.line)
            outcome.written.append(entry.key)
        return outcome

    def apply(self, parse_result: ParseResult, environment: EnvironmentHandle, override: bool = False) -> int:
        """Apply ``parse_result`` and return how many keys were actually written."""

        return self.materialize(parse_result, environment, override).count


__all__ = [
    "EnvMaterializer",
    "EnvironmentHandle",
    "MappingEnvironment",
    "MaterializeOutcome",
    "process_environment",
]
