from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from luatool_lsp import __version__
from luatool_lsp import config


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="luatool-lsp", description="Lua tool Language Server bridges (stdio).")
    p.add_argument("-v", "--version", action="store_true", help="print the version and exit")
    p.add_argument("tool", nargs="?", choices=["selene", "stylua"], help="which bridge to run")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.version:
        sys.stdout.write(__version__)
        return 0
    if args.tool is None:
        build_parser().print_usage(sys.stderr)
        return 2

    # stdout carries the protocol
    logging.basicConfig(
        level=config.get_log_level(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.tool == "selene":
        from luatool_lsp.selene_server import ls
    else:
        from luatool_lsp.stylua_server import ls
    ls.start_io()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
