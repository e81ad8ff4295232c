"""
Entry points that read a dotenv source and apply it to an environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .materializer import EnvironmentHandle, EnvMaterializer, MaterializeOutcome, process_environment
from .parser import Diagnostic, EnvFileParser, ParseResult

logger = logging.getLogger(__name__)


class DotenvError(RuntimeError):
    """Base class for fatal loading errors."""


class SourceUnavailable(DotenvError):
    """Raised when the dotenv file is missing, unreadable or not valid text."""


class StrictModeError(DotenvError):
    """Raised in strict mode when the parse produced diagnostics."""

    def __init__(self, source: str, diagnostics: Sequence[Diagnostic]):
        self.source = source
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        details = "; ".join(str(diagnostic) for diagnostic in self.diagnostics)
        super().__init__(f"{source}: {len(self.diagnostics)} problem(s) in strict mode: {details}")


@dataclass
class LoadReport:
    """What a single load did: the parse and what was written."""

    source: str
    result: ParseResult
    outcome: MaterializeOutcome
    override: bool

    @property
    def written(self) -> int:
        return self.outcome.count


def read_source(path: str | Path, encoding: str = "utf-8") -> str:
    source_path = Path(path)
    try:
        return source_path.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"Env file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise SourceUnavailable(f"Env file is not valid {encoding}: {path}") from exc
    except LookupError as exc:
        raise SourceUnavailable(f"Unknown encoding {encoding!r} for env file: {path}") from exc
    except OSError as exc:
        raise SourceUnavailable(f"Env file could not be read: {path} ({exc})") from exc


def load_env_text(
    text: str,
    *,
    override: bool = False,
    strict: bool = False,
    environment: EnvironmentHandle | None = None,
    source: str = "<text>",
) -> LoadReport:
    """
    Parse ``text`` and apply it to ``environment`` (the process environment by default).

    Interpolation falls back to the target environment for names the text does
    not define. In strict mode any diagnostic aborts before a single key is written.
    """

    target = environment if environment is not None else process_environment()
    result = EnvFileParser().parse(text, target.get)

    for diagnostic in result.diagnostics:
        logger.warning("%s: %s", source, diagnostic)
    if strict and result.diagnostics:
        raise StrictModeError(source, result.diagnostics)

    outcome = EnvMaterializer().materialize(result, target, override=override)
    logger.debug(
        "Loaded %s: %d entries, %d written, %d kept (override=%s)",
        source,
        len(result),
        outcome.count,
        len(outcome.kept),
        override,
    )
    return LoadReport(source=source, result=result, outcome=outcome, override=override)


def load_env_file(
    dotenv_path: str | Path = ".env",
    *,
    override: bool = False,
    strict: bool = False,
    environment: EnvironmentHandle | None = None,
    encoding: str = "utf-8",
    required: bool = True,
) -> LoadReport | None:
    """
    Load ``dotenv_path`` into ``environment``.

    By default existing environment variables win, so shell exports or CI secrets
    are never overwritten by accidental entries in the file; pass ``override=True``
    to let the file win instead. A missing file raises :class:`SourceUnavailable`
    unless ``required`` is false, in which case nothing happens and ``None`` is
    returned.
    """

    path = Path(dotenv_path)
    if not required and not path.exists():
        logger.debug("Optional env file %s not present, skipping", path)
        return None
    text = read_source(path, encoding=encoding)
    return load_env_text(text, override=override, strict=strict, environment=environment, source=str(path))


__all__ = [
    "DotenvError",
    "LoadReport",
    "SourceUnavailable",
    "StrictModeError",
    "load_env_file",
    "load_env_text",
    "read_source",
]
