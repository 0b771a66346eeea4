from __future__ import annotations

"""
Translate selene's json2 output into LSP diagnostics.

selene prints one JSON record per line. Only records of type "Diagnostic"
with a severity LSP knows about are kept. A line that does not parse, or a
record without a usable primary span, is dropped without affecting the rest
of the batch. Lines and columns are already 0-based, so they map 1:1.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

from luatool_lsp.invoker import ToolResult

logger = logging.getLogger(__name__)

SOURCE = "selene"

LINT_ARGS = ["--display-style=json2", "--no-summary", "-"]

_SPAN_FIELDS = ("start_line", "start_column", "end_line", "end_column")


def _parse_line(line: str) -> Optional[Dict[str, Any]]:
    try:
        record = json.loads(line)
    except ValueError:
        logger.debug("dropping unparsable selene line: %r", line)
        return None
    return record if isinstance(record, dict) else None


def parse_records(output: str) -> List[Dict[str, Any]]:
    records = (_parse_line(line) for line in output.strip().split("\n") if line.strip())
    return [r for r in records if r is not None]


def _severity(label: Any) -> Optional[DiagnosticSeverity]:
    if not isinstance(label, str):
        return None
    return DiagnosticSeverity.__members__.get(label)


def _span(record: Dict[str, Any]) -> Optional[Dict[str, int]]:
    primary = record.get("primary_label")
    if not isinstance(primary, dict):
        return None
    span = primary.get("span")
    if not isinstance(span, dict):
        return None
    if not all(isinstance(span.get(f), int) for f in _SPAN_FIELDS):
        return None
    return span


def record_to_diagnostic(record: Dict[str, Any]) -> Optional[Diagnostic]:
    if record.get("type") != "Diagnostic":
        return None
    severity = _severity(record.get("severity"))
    if severity is None:
        return None
    span = _span(record)
    if span is None:
        return None

    message = record.get("message") or record["primary_label"].get("message") or ""
    code = record.get("code")
    return Diagnostic(
        range=Range(
            start=Position(line=span["start_line"], character=span["start_column"]),
            end=Position(line=span["end_line"], character=span["end_column"]),
        ),
        severity=severity,
        message=message,
        source=SOURCE,
        code=code if isinstance(code, (str, int)) else None,
    )


def records_to_diagnostics(records: Iterable[Dict[str, Any]]) -> List[Diagnostic]:
    diags = (record_to_diagnostic(r) for r in records)
    return [d for d in diags if d is not None]


def diagnostics_from_result(result: ToolResult) -> Optional[List[Diagnostic]]:
    """Map a lint run onto the diagnostics to publish.

    Returns an empty list to clear (clean exit, or output that could not be
    translated at all), or None when the run failed without output and the
    previous diagnostics should be left alone.
    """
    if result.exit_code == 0:
        return []
    if not result.stdout:
        return None
    try:
        return records_to_diagnostics(parse_records(result.stdout))
    except Exception:
        logger.exception("selene output could not be translated: %r", result.stdout)
        return []
