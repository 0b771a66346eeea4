from __future__ import annotations

"""
A pygls-based Language Server that lints Lua buffers with selene.

Features:
- Initialize: working directory from the workspace, selene discovery on PATH
- Text synchronization through the pygls workspace
- Diagnostics: debounced selene run on open, change and save
- Configuration: `seleneBinFilePath` overrides the discovered binary

Note: An exit code of 0 publishes an empty list, which clears stale diagnostics.
"""

from typing import List, Optional

from lsprotocol.types import (
    Diagnostic,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DidSaveTextDocumentParams,
    InitializeParams,
    MessageType,
)

from luatool_lsp import config
from luatool_lsp.debounce import DebounceScheduler
from luatool_lsp.diagnostics import LINT_ARGS, diagnostics_from_result
from luatool_lsp.errors import ToolExecutionError
from luatool_lsp.invoker import run_tool
from luatool_lsp.server import ToolLanguageServer
from luatool_lsp.state import is_lua


class SeleneLanguageServer(ToolLanguageServer):
    CMD_NAME = "selene-ls"
    TOOL_NAME = "selene"

    def __init__(self):
        super().__init__()
        self.scheduler = DebounceScheduler(
            self.lint_and_publish,
            delay_ms=config.get_debounce_ms(),
            enabled=lambda: self.state.ready,
        )

    async def lint(self, uri: str, content: str) -> Optional[List[Diagnostic]]:
        """Run selene over *content*; None means leave the published diagnostics as they are."""
        tool_path = self.state.tool_path
        if tool_path is None:
            return None
        try:
            result = await run_tool(tool_path, LINT_ARGS, content, cwd=self.state.working_directory)
        except ToolExecutionError as e:
            self.log_client(f"selene error: {e}", MessageType.Error)
            return None

        diags = diagnostics_from_result(result)
        if diags is None:
            self.log_client(f"selene exited with code {result.exit_code} and no output", MessageType.Error)
        elif result.exit_code == 0:
            self.log_client(f"*** selene reset diagnostics {uri}")
        else:
            self.log_client(f"*** selene exited with code {result.exit_code}, {len(diags)} diagnostics")
        return diags

    async def lint_and_publish(self, uri: str, content: str) -> None:
        diags = await self.lint(uri, content)
        if diags is not None:
            self.publish_diagnostics(uri, diags)

    def schedule_lint(self, uri: str, event: str) -> bool:
        self.log_client(f"*** did {event} > {uri}")
        document = self.get_document(uri)
        if document is None or not is_lua(uri, document.language_id):
            return False
        return self.scheduler.schedule(uri, document.source)


ls = SeleneLanguageServer()


@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    ls.start_session(params)


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    ls.schedule_lint(params.text_document.uri, "open")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    ls.schedule_lint(params.text_document.uri, "change")


@ls.feature("textDocument/didSave")
def did_save(params: DidSaveTextDocumentParams):
    ls.schedule_lint(params.text_document.uri, "save")


# --- Configuration ---
@ls.feature("workspace/didChangeConfiguration")
def did_change_configuration(params: DidChangeConfigurationParams):
    ls.apply_settings(params.settings)


if __name__ == "__main__":
    ls.start_io()
