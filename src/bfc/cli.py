#!/usr/bin/env python3
"""bfc command line front end.

    bfc [-y] [-O] -e ENGINE [-a ARG ...] INPUT [OUTPUT]
    bfc --list
    bfc --engine-help ENGINE
"""
from __future__ import annotations

import argparse
import logging
import sys

from pathlib import Path
from typing import Callable, List, Optional

from .api import CompileOptions, compile_file, configure_engine
from .errors import BFCError
from .registry import EngineDescription, EngineRegistry, default_registry


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bfc',
        description="Brainfuck to C99 / C# / DOS assembly (and plugin engines) translator.",
    )
    parser.add_argument("input", nargs="?", help="Source file")
    parser.add_argument(
        "output", nargs="?",
        help="Destination file. If not supplied uses the input file name with the engine's file extension",
    )
    parser.add_argument("-e", "--engine", help="Engine selection")
    parser.add_argument("-a", "--arg", action="append", default=[], dest="engine_args",
                        metavar="ARG", help="Supply argument to engine (repeatable, order is kept)")
    parser.add_argument("-l", "--list", action="store_true", help="List engines")
    parser.add_argument("--engine-help", metavar="ENGINE", help="Show engine specific help")
    parser.add_argument("-y", "--yes", action="store_true", help="Confirm prompts to overwrite the output")
    parser.add_argument("-O", "--optimize", action="store_true", help="Optimize BF code ([-] -> clear cell)")
    parser.add_argument("--plugin", action="append", default=[], metavar="MODULE",
                        help="Import an engine plugin module (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _engine_row(e: EngineDescription) -> str:
    return f"{e.name}\t{e.extension}\t{e.version:<15}\t{e.description}"


def list_engines(registry: EngineRegistry) -> None:
    header = f"{'Name'}\t{'Ext'}\t{'Version':<15}\t{'Description'}"
    print("Built-in engines:")
    print(header)
    for e in registry.builtin():
        print(_engine_row(e))

    external = registry.external()
    if external:
        print("External Engines:")
        print(header)
        for e in external:
            print(_engine_row(e))
    else:
        print("No external engines found")


def confirm_overwrite(path: Path, ask: Callable[[str], str] = input) -> bool:
    while True:
        try:
            answer = ask(f"Overwrite {path}? [Y/N] ").strip().lower()
        except EOFError:
            return False
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False


def main(argv: Optional[List[str]] = None, *, ask: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = default_registry(plugins=True)
    for module_name in args.plugin:
        registry.load_module(module_name)

    if args.list:
        list_engines(registry)
        return 0

    if args.engine_help:
        desc = registry.get(args.engine_help)
        if desc is None:
            print(f"No such engine: {args.engine_help}")
            return 1
        print(desc.create().help_text())
        return 0

    if not args.engine:
        parser.error("No engine name specified (use -e, or -l to list engines)")
    if not args.input:
        parser.error("No input file specified")

    desc = registry.get(args.engine)
    if desc is None:
        print(f"Error parsing arguments: No engine named '{args.engine}' found", file=sys.stderr)
        print("Use -l to list all available engines", file=sys.stderr)
        return 2

    engine = desc.create()
    try:
        configure_engine(engine, tuple(args.engine_args))
    except BFCError as e:
        print("Error setting Engine arguments.", file=sys.stderr)
        print(f"Arguments: {', '.join(args.engine_args)}", file=sys.stderr)
        print(f"Message: {e}", file=sys.stderr)
        return 2

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix('.' + desc.extension)

    if not args.yes and output_path.exists():
        if not confirm_overwrite(output_path, ask):
            return 1

    logger.debug("Compiling %s with %s (optimize=%s)", input_path, desc.name, args.optimize)
    # engine arguments were applied above already
    try:
        result = compile_file(input_path, engine, options=CompileOptions(optimize=args.optimize))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Unable to read {input_path}: {e}", file=sys.stderr)
        return 1
    if not result.ok:
        print("Unable to convert BF code.", file=sys.stderr)
        print(f"Type: {type(result.error).__name__} ({result.error_kind.value})", file=sys.stderr)
        print(f"Message: {result.error}", file=sys.stderr)
        return 1

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(result.code)
    print(f"Wrote {output_path} ({len(result.code)} chars)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
