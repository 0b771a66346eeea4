"""Lua tool Language Server bridges.

This package provides:
- A pygls-based Language Server that lints Lua buffers with selene.
- A pygls-based Language Server that formats Lua buffers with stylua.
- Translators from the tools' JSON output to LSP diagnostics and text edits.

Note: Neither server analyses Lua itself; all the work happens in the external tool.
"""

__version__ = "0.1.0"

__all__ = [
    "selene_server",
    "stylua_server",
    "diagnostics",
    "edits",
]
