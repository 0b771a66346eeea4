from __future__ import annotations

"""
A pygls-based Language Server that formats Lua buffers with stylua.

Features:
- Initialize: working directory from the workspace, stylua discovery on PATH
- Document formatting: stylua --check mismatches as text edits
- Range formatting: same, restricted by character offsets, or (text mode)
  a slice of the fully reformatted buffer
- Configuration: `styluaBinFilePath` overrides the discovered binary

Note: Every failure answers None ("no edit") so the client keeps its buffer.
"""

from typing import List, Optional

from pygls.uris import to_fs_path
from lsprotocol.types import (
    DidChangeConfigurationParams,
    DocumentFormattingParams,
    DocumentRangeFormattingParams,
    InitializeParams,
    MessageType,
    Range,
    TextEdit,
)

from luatool_lsp import config
from luatool_lsp.edits import edits_from_check_result, edits_from_text_result, format_args
from luatool_lsp.errors import LuaToolError
from luatool_lsp.invoker import run_tool
from luatool_lsp.server import ToolLanguageServer
from luatool_lsp.state import is_lua


class StyluaLanguageServer(ToolLanguageServer):
    CMD_NAME = "stylua-ls"
    TOOL_NAME = "stylua"

    def __init__(self):
        super().__init__()
        self.range_format_mode = config.get_range_format_mode()

    async def format_document(self, uri: str, rng: Optional[Range] = None) -> Optional[List[TextEdit]]:
        tool_path = self.state.tool_path
        if tool_path is None:
            return None
        document = self.get_document(uri)
        if document is None or not is_lua(uri, document.language_id):
            return None

        original = document.source
        filepath = to_fs_path(uri) or uri
        cwd = self.state.working_directory
        try:
            if rng is None:
                result = await run_tool(tool_path, format_args(filepath), original, cwd=cwd)
                return edits_from_check_result(result)

            range_start = document.offset_at_position(rng.start)
            range_end = document.offset_at_position(rng.end)
            if self.range_format_mode == config.RANGE_FORMAT_TEXT:
                args = format_args(filepath, range_start, range_end, check=False)
                result = await run_tool(tool_path, args, original, cwd=cwd)
                return edits_from_text_result(result, original, range_start, range_end, rng)

            args = format_args(filepath, range_start, range_end)
            result = await run_tool(tool_path, args, original, cwd=cwd)
            return edits_from_check_result(result)
        except LuaToolError as e:
            self.log_client(f"stylua format error: {e}", MessageType.Error)
            return None


ls = StyluaLanguageServer()


@ls.feature("initialize")
def on_initialize(params: InitializeParams):
    ls.start_session(params)


# --- Formatting ---
@ls.feature("textDocument/formatting")
async def on_formatting(params: DocumentFormattingParams) -> Optional[List[TextEdit]]:
    return await ls.format_document(params.text_document.uri)


@ls.feature("textDocument/rangeFormatting")
async def on_range_formatting(params: DocumentRangeFormattingParams) -> Optional[List[TextEdit]]:
    return await ls.format_document(params.text_document.uri, params.range)


# --- Configuration ---
@ls.feature("workspace/didChangeConfiguration")
def did_change_configuration(params: DidChangeConfigurationParams):
    ls.apply_settings(params.settings)


if __name__ == "__main__":
    ls.start_io()
