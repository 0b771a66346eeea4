from __future__ import annotations

"""
Shared pygls server plumbing for the tool bridges.

Each bridge owns one SessionState. The pygls workspace is the document
oracle: it tracks open buffers, their language ids and their text, and
converts positions to offsets.
"""

import asyncio
import logging
from typing import Any, Optional

from pygls.server import LanguageServer
from pygls.uris import to_fs_path
from lsprotocol.types import InitializeParams, MessageType, TextDocumentSyncKind

from luatool_lsp import __version__
from luatool_lsp import config
from luatool_lsp.state import SessionState

logger = logging.getLogger(__name__)


class ToolLanguageServer(LanguageServer):
    CMD_NAME = "luatool-ls"
    TOOL_NAME = ""

    def __init__(self):
        super().__init__(
            self.CMD_NAME,
            __version__,
            text_document_sync_kind=TextDocumentSyncKind.Incremental,
        )
        self.state = SessionState(tool_name=self.TOOL_NAME)
        self.state.apply_configured(config.get_tool_path_override(self.TOOL_NAME))
        self._discovery: Optional[asyncio.Future] = None

    def log_client(self, message: str, kind: MessageType = MessageType.Log) -> None:
        """Mirror *message* to the client's log window and the stdlib logger."""
        level = logging.ERROR if kind == MessageType.Error else logging.DEBUG
        logger.log(level, "%s: %s", self.TOOL_NAME, message)
        self.show_message_log(message, kind)

    def start_session(self, params: InitializeParams) -> None:
        folders = params.workspace_folders or []
        root_uri: Optional[str] = folders[0].uri if folders else params.root_uri
        if root_uri:
            self.state.set_working_directory(to_fs_path(root_uri))
        if self._discovery is None:
            self._discovery = asyncio.ensure_future(self.state.discover())

    def apply_settings(self, settings: Any) -> bool:
        path = config.tool_path_from_settings(settings, self.TOOL_NAME)
        if path is None:
            return False
        return self.state.apply_configured(path)

    def get_document(self, uri: str):
        """Return the open document for *uri*, or None if the client never opened it."""
        workspace = self.lsp.workspace
        if uri not in workspace.text_documents:
            return None
        return workspace.get_text_document(uri)
