from __future__ import annotations

"""
Translate stylua output into LSP text edits.

In check mode stylua reports a list of mismatches, each with the original
and expected text and inclusive start/end line numbers. LSP ranges have an
exclusive end, so a mismatch over lines [s, e] replaces [(s, 0), (e + 1, 0)).

In text mode stylua prints the whole reformatted buffer; a range request is
then answered by slicing that buffer (see ``range_edit_from_formatted``).
"""

import json
from typing import Any, Dict, List, Optional

from lsprotocol.types import Position, Range, TextEdit

from luatool_lsp.errors import MalformedOutputError, ToolExecutionError
from luatool_lsp.invoker import ToolResult

_MISMATCH_LINE_FIELDS = ("original_start_line", "original_end_line", "expected_start_line")


def format_args(
    filepath: str,
    range_start: Optional[int] = None,
    range_end: Optional[int] = None,
    check: bool = True,
) -> List[str]:
    args = ["--search-parent-directories"]
    if check:
        args += ["--check", "--output-format=JSON"]
    args += ["--stdin-filepath", filepath]
    if range_start is not None and range_end is not None:
        args += ["--range-start", str(range_start), "--range-end", str(range_end)]
    args.append("-")
    return args


def mismatch_to_text_edit(mismatch: Dict[str, Any]) -> TextEdit:
    original = mismatch.get("original", "")
    expected = mismatch.get("expected", "")

    if original == "":
        at = Position(line=mismatch["expected_start_line"], character=0)
        return TextEdit(range=Range(start=at, end=at), new_text=expected)

    start = Position(line=mismatch["original_start_line"], character=0)
    # LSP range end is exclusive, original_end_line is inclusive
    end = Position(line=mismatch["original_end_line"] + 1, character=0)
    return TextEdit(range=Range(start=start, end=end), new_text=expected)


def _check_mismatch(mismatch: Any) -> Dict[str, Any]:
    if not isinstance(mismatch, dict):
        raise MalformedOutputError(f"mismatch is not an object: {mismatch!r}")
    for f in ("original", "expected"):
        if not isinstance(mismatch.get(f, ""), str):
            raise MalformedOutputError(f"mismatch field {f!r} is not a string")
    needed = _MISMATCH_LINE_FIELDS[2:] if mismatch.get("original", "") == "" else _MISMATCH_LINE_FIELDS[:2]
    for f in needed:
        if not isinstance(mismatch.get(f), int):
            raise MalformedOutputError(f"mismatch field {f!r} is missing or not an integer")
    return mismatch


def output_to_text_edits(output: str) -> List[TextEdit]:
    try:
        body = json.loads(output)
    except ValueError as e:
        raise MalformedOutputError(f"stylua output is not JSON: {e}") from e
    if not isinstance(body, dict) or not isinstance(body.get("mismatches"), list):
        raise MalformedOutputError("stylua output has no mismatches list")
    return [mismatch_to_text_edit(_check_mismatch(m)) for m in body["mismatches"]]


def edits_from_check_result(result: ToolResult) -> List[TextEdit]:
    if result.exit_code == 0:
        return []
    if result.exit_code == 1:
        return output_to_text_edits(result.stdout)
    raise ToolExecutionError(
        f"stylua exited with code {result.exit_code}",
        exit_code=result.exit_code,
        output=result.stdout,
    )


def formatted_slice(original: str, formatted: str, range_start: int, range_end: int) -> str:
    """Return the part of *formatted* standing in for ``original[range_start:range_end]``.

    The end offset is shifted by the whole-buffer length delta, which is only
    exact when every length change falls inside or before the range.
    """
    delta = len(formatted) - len(original)
    return formatted[range_start:range_end + delta]


def range_edit_from_formatted(
    original: str,
    formatted: str,
    range_start: int,
    range_end: int,
    rng: Range,
) -> TextEdit:
    return TextEdit(range=rng, new_text=formatted_slice(original, formatted, range_start, range_end))


def edits_from_text_result(
    result: ToolResult,
    original: str,
    range_start: int,
    range_end: int,
    rng: Range,
) -> List[TextEdit]:
    if result.exit_code != 0:
        raise ToolExecutionError(
            f"stylua exited with code {result.exit_code}",
            exit_code=result.exit_code,
            output=result.stdout,
        )
    if result.stdout == original:
        return []
    return [range_edit_from_formatted(original, result.stdout, range_start, range_end, rng)]
