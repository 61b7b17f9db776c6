"""Start the curage language server.

    python -m curage_lsp            # stdio (what editors normally spawn)
    python -m curage_lsp --tcp      # TCP, for debugging
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from curage import config
from curage.errors import CurageConfigError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="curage-ls", description="curage language server")
    parser.add_argument("--tcp", action="store_true", help="listen on TCP instead of stdio")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--log-file", default=None, help="log here instead of stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = config.get_log_level(args.log_level)
        host, port = config.get_server_address()
    except CurageConfigError as ex:
        parser.error(str(ex))

    # stdout carries the protocol in stdio mode, so logs never go there
    if args.log_file:
        logging.basicConfig(level=level, filename=args.log_file)
    else:
        logging.basicConfig(level=level, stream=sys.stderr)

    from curage_lsp.server import ls

    if args.tcp:
        ls.start_tcp(args.host or host, args.port or port)
    else:
        ls.start_io()
    return 0


if __name__ == "__main__":
    sys.exit(main())
