"""
Parser for dotenv-style ``KEY=VALUE`` files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

AmbientLookup = Callable[[str], Optional[str]]

KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
REFERENCE_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
EXPORT_PREFIX = "export "
QUOTES = ("'", '"')
BOM = "\ufeff"


class DiagnosticKind(str, Enum):
    MALFORMED_LINE = "malformed_line"
    UNRESOLVED_REFERENCE = "unresolved_reference"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while parsing."""

    kind: DiagnosticKind
    line: int
    message: str
    key: str | None = None

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass(frozen=True)
class Entry:
    """One parsed assignment with its value fully interpolated."""

    key: str
    value: str
    line: int


@dataclass
class ParseResult:
    """Ordered entries plus the diagnostics collected along the way."""

    entries: List[Entry] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def as_dict(self) -> Dict[str, str]:
        return {entry.key: entry.value for entry in self.entries}

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]

    def get(self, key: str, default: str | None = None) -> str | None:
        for entry in self.entries:
            if entry.key == key:
                return entry.value
        return default

    def __contains__(self, key: object) -> bool:
        return any(entry.key == key for entry in self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _no_ambient(_key: str) -> Optional[str]:
    return None


class EnvFileParser:
    """
    Turns dotenv text into a :class:`ParseResult`.

    Only full-line ``#`` comments are recognised, so values may contain ``#``.
    ``${NAME}`` references resolve against keys defined on earlier lines first
    and ``ambient_lookup`` second; anything else becomes an empty string and an
    ``UNRESOLVED_REFERENCE`` diagnostic. Malformed lines are reported and
    skipped, so :meth:`parse` never raises for bad input.
    """

    def parse(self, source_text: str, ambient_lookup: AmbientLookup | None = None) -> ParseResult:
        lookup = ambient_lookup or _no_ambient
        values: Dict[str, Entry] = {}
        diagnostics: List[Diagnostic] = []

        if source_text.startswith(BOM):
            source_text = source_text[len(BOM):]

        # only \n ends a line; other unicode line breaks belong to the value
        for number, raw_line in enumerate(source_text.split("\n"), start=1):
            line = raw_line.rstrip()
            if not line or line.lstrip().startswith("#"):
                continue

            split = self._split_assignment(line)
            if split is None:
                diagnostics.append(
                    Diagnostic(DiagnosticKind.MALFORMED_LINE, number, f"expected KEY=VALUE, got {line.strip()!r}")
                )
                continue
            key, raw_value = split

            unquoted = self._unquote(raw_value)
            if unquoted is None:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.MALFORMED_LINE,
                        number,
                        f"unterminated quote in value of {key}",
                        key=key,
                    )
                )
                continue
            value, interpolate = unquoted

            if interpolate:
                value = self._interpolate(value, key, number, values, lookup, diagnostics)

            # dict assignment keeps the first position and takes the later value
            values[key] = Entry(key=key, value=value, line=number)

        return ParseResult(entries=list(values.values()), diagnostics=diagnostics)

    @staticmethod
    def _split_assignment(line: str) -> tuple[str, str] | None:
        stripped = line.lstrip()
        if stripped.startswith(EXPORT_PREFIX):
            stripped = stripped[len(EXPORT_PREFIX):]
        if "=" not in stripped:
            return None
        key, value = stripped.split("=", 1)
        key = key.strip()
        if not KEY_PATTERN.match(key):
            return None
        return key, value.lstrip()

    @staticmethod
    def _unquote(value: str) -> tuple[str, bool] | None:
        if not value or value[0] not in QUOTES:
            return value, True
        quote = value[0]
        if len(value) >= 2 and value[-1] == quote:
            return value[1:-1], quote == '"'
        if quote not in value[1:]:
            return None
        # quoted prefix followed by more text: not wrapped, keep it as written
        return value, True

    @staticmethod
    def _interpolate(
        value: str,
        key: str,
        number: int,
        known: Dict[str, Entry],
        lookup: AmbientLookup,
        diagnostics: List[Diagnostic],
    ) -> str:
        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in known:
                return known[name].value
            ambient = lookup(name)
            if ambient is not None:
                return ambient
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.UNRESOLVED_REFERENCE,
                    number,
                    f"${{{name}}} referenced by {key} is not defined",
                    key=key,
                )
            )
            return ""

        return REFERENCE_PATTERN.sub(replace, value)


def parse_env_text(source_text: str, ambient_lookup: AmbientLookup | None = None) -> ParseResult:
    """Parse ``source_text`` with a default :class:`EnvFileParser`."""

    return EnvFileParser().parse(source_text, ambient_lookup)


__all__ = [
    "AmbientLookup",
    "Diagnostic",
    "DiagnosticKind",
    "EnvFileParser",
    "Entry",
    "ParseResult",
    "parse_env_text",
]
