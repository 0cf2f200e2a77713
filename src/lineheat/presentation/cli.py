"""Command line: run a Python script under line monitoring and report.

    lineheat run [--json] [--top N] [--base-dir DIR] [--source-maps DIR] SCRIPT [ARGS...]
"""

from __future__ import annotations

import argparse
import logging
import runpy
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from lineheat.application.reporters.console import ConsoleReporter
from lineheat.application.reporters.json import JsonReporter
from lineheat.application.services.engine import HeatmapEngine
from lineheat.domain.exceptions import InvalidRequestError
from lineheat.domain.model.configuration import DEFAULT_TOP_N, EngineConfig
from lineheat.presentation.api import parse_top_n

if TYPE_CHECKING:
    from lineheat.domain.ports.reporter import ReporterProtocol


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lineheat", description="Execution heatmap profiler")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine activity")
    commands = parser.add_subparsers(dest="command", required=True)

    run = commands.add_parser("run", help="Run a Python script and report line counts")
    run.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    run.add_argument("--top", default=None, help=f"Hottest lines to show (default {DEFAULT_TOP_N})")
    run.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Only lines of files under this directory count (default: script directory)",
    )
    run.add_argument(
        "--source-maps",
        type=Path,
        default=None,
        help="Directory scanned for source maps",
    )
    run.add_argument("script", type=Path, help="Python script to run")
    run.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to the script")
    return parser


def _run_script(script: Path, args: list[str]) -> int:
    """Execute script as __main__. Returns its exit code."""
    saved_argv = sys.argv
    sys.argv = [str(script), *args]
    try:
        runpy.run_path(str(script), run_name="__main__")
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    finally:
        sys.argv = saved_argv
    return 0


def run_command(ns: argparse.Namespace) -> int:
    """Handle `lineheat run`."""
    script: Path = ns.script
    if not script.is_file():
        print(f"lineheat: script not found: {script}", file=sys.stderr)
        return 2

    try:
        top_n = parse_top_n(ns.top, DEFAULT_TOP_N)
    except InvalidRequestError as e:
        print(f"lineheat: {e}", file=sys.stderr)
        return 2

    config = EngineConfig(
        default_top_n=DEFAULT_TOP_N if top_n is None else top_n,
        source_map_root=ns.source_maps,
        auto_instrument=True,
        base_dir=ns.base_dir or script.resolve().parent,
    )

    with HeatmapEngine(config) as engine:
        exit_code = _run_script(script, ns.args)
        # Auto counts leave the merged view once the engine closes
        stats = engine.get_stats()

    reporter: ReporterProtocol = JsonReporter() if ns.json else ConsoleReporter()
    print(reporter.report(stats))
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = _build_parser()
    ns = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if ns.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ns.command == "run":
        return run_command(ns)

    parser.error(f"unknown command {ns.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
