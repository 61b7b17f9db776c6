"""Command-line checker: report curage diagnostics for files.

    python -m curage program.cur [more.cur ...]

Prints ``path:line:col: warning: message`` (1-based line and column) for
each diagnostic. Exit status is 0 when clean, 1 when any diagnostic was
reported, 2 when a file could not be read.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from curage import config
from curage.analysis.model import analyze_source
from curage.errors import CurageConfigError

logger = logging.getLogger(__name__)


def check_file(path: Path, out: TextIO, block_scoping: bool = False) -> int:
    text = path.read_text(encoding="utf-8")
    model = analyze_source(text, block_scoping=block_scoping)
    diagnostics = sorted(model.all_diagnostics, key=lambda d: d.range.start)
    for d in diagnostics:
        start = d.range.start
        out.write(f"{path}:{start.line + 1}:{start.column + 1}: {d.severity.name.lower()}: {d.message}\n")
    return len(diagnostics)


def main(argv: Optional[List[str]] = None, out: TextIO = sys.stdout) -> int:
    parser = argparse.ArgumentParser(prog="curage-check", description=__doc__.splitlines()[0])
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument("--block-scoping", action="store_true", default=None,
                        help="keep if/while bindings local to their block")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(level=config.get_log_level(args.log_level), stream=sys.stderr)
        block_scoping = args.block_scoping if args.block_scoping is not None else config.get_block_scoping()
    except CurageConfigError as ex:
        parser.error(str(ex))

    status = 0
    for path in args.files:
        try:
            if check_file(path, out, block_scoping=block_scoping):
                status = max(status, 1)
        except OSError as ex:
            logger.error("cannot read %s: %s", path, ex)
            status = 2
    return status


if __name__ == "__main__":
    sys.exit(main())
