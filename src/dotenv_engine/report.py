"""
Tabular views of parse results and load reports.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from .loader import LoadReport
from .materializer import MaterializeOutcome
from .parser import ParseResult

ENTRY_COLUMNS = ["key", "value", "line", "status"]
DIAGNOSTIC_COLUMNS = ["line", "kind", "key", "message"]


def mask_value(value: str, visible: int = 2) -> str:
    """Hide all but the first ``visible`` characters of a value."""

    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


def entries_frame(
    result: ParseResult,
    outcome: MaterializeOutcome | None = None,
    show_values: bool = False,
) -> pd.DataFrame:
    written = set(outcome.written) if outcome is not None else set()
    rows = []
    for entry in result.entries:
        if outcome is None:
            status = "parsed"
        else:
            status = "written" if entry.key in written else "kept"
        rows.append(
            {
                "key": entry.key,
                "value": entry.value if show_values else mask_value(entry.value),
                "line": entry.line,
                "status": status,
            }
        )
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def diagnostics_frame(result: ParseResult) -> pd.DataFrame:
    rows = [
        {
            "line": diagnostic.line,
            "kind": diagnostic.kind.value,
            "key": diagnostic.key or "",
            "message": diagnostic.message,
        }
        for diagnostic in result.diagnostics
    ]
    return pd.DataFrame(rows, columns=DIAGNOSTIC_COLUMNS)


def summarize_reports(reports: Iterable[LoadReport], show_values: bool = False) -> pd.DataFrame:
    """Stack the entries of several loads, tagged with their source file."""

    frames = []
    for report in reports:
        frame = entries_frame(report.result, report.outcome, show_values=show_values)
        frame.insert(0, "source", report.source)
        frames.append(frame)
    if not frames:
        return pd.DataFrame(columns=["source", *ENTRY_COLUMNS])
    return pd.concat(frames, ignore_index=True)


__all__ = [
    "diagnostics_frame",
    "entries_frame",
    "mask_value",
    "summarize_reports",
]
