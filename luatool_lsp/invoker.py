from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from luatool_lsp.errors import ToolExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    exit_code: int
    stdout: str


async def run_tool(
    executable: str,
    args: List[str],
    content: str,
    cwd: Optional[Union[str, Path]] = None,
) -> ToolResult:
    """Run *executable* once with *content* on stdin and collect stdout to completion.

    stderr is inherited so tool complaints land in the server's own stderr.
    """
    logger.debug("spawning %s %s (cwd=%s)", executable, " ".join(args), cwd)
    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd is not None else None,
        )
    except OSError as e:
        raise ToolExecutionError(f"Failed to spawn {executable}: {e}") from e

    stdout, _ = await process.communicate(content.encode("utf-8"))
    exit_code = process.returncode if process.returncode is not None else -1
    out = stdout.decode("utf-8", errors="replace")
    logger.debug("%s exited with code %d, %d bytes of output", executable, exit_code, len(stdout))
    return ToolResult(exit_code=exit_code, stdout=out)
