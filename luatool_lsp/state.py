from __future__ import annotations

"""
Process-wide session state for one tool bridge.

Two sources race to set the tool path:
- discovery, which searches PATH for the default binary and only fills an empty slot
- configuration, which always wins as long as the supplied path is executable

Until a path is resolved every invocation request is a no-op.
"""

import asyncio
import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def is_lua(uri: str, language_id: Optional[str] = None) -> bool:
    return language_id == 'lua' or uri.endswith('.lua')


@dataclass
class SessionState:
    tool_name: str
    working_directory: Path = field(default_factory=Path.cwd)
    tool_path: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.tool_path is not None

    def apply_discovered(self, path: Optional[str]) -> bool:
        """Record a discovered path unless one is already set."""
        if not path or self.tool_path is not None:
            return False
        self.tool_path = path
        logger.info("%s discovered at %s", self.tool_name, path)
        return True

    def apply_configured(self, path: Optional[str]) -> bool:
        """Record a configured path, overwriting any previous value, if it is executable."""
        if not path or not is_executable(path):
            logger.debug("ignoring %s path %r: not an executable file", self.tool_name, path)
            return False
        self.tool_path = path
        logger.info("%s configured at %s", self.tool_name, path)
        return True

    def set_working_directory(self, path: Optional[str]) -> None:
        if path:
            self.working_directory = Path(path)

    async def discover(self) -> Optional[str]:
        loop = asyncio.get_running_loop()
        found = await loop.run_in_executor(None, shutil.which, self.tool_name)
        if found is None:
            logger.info("%s not found on PATH", self.tool_name)
        self.apply_discovered(found)
        return found
