"""Stdio host for the text pipeline.

Usage:
    python -m fix_augment validate prompt.txt
    python -m fix_augment chunk --max-size 4000 --mode preserveCode < prompt.txt
    python -m fix_augment format --format html reply.md
"""

import argparse
import asyncio
import dataclasses
import json
import logging
from pathlib import Path
import sys
from typing import Any

from .chunking.types import ChunkMode
from .config.api import resolve_config
from .constants import OUTPUT_FORMATS
from .exceptions import FixAugmentError, describe_error
from .host import NotificationKind, TextPipeline

# ruff: noqa: T201


class StdioHost:
    """Reads text from a file or stdin and sends notifications to stderr."""

    def __init__(self, source: str | None, config: Any):
        self.source = source
        self.config = config
        self._text: str | None = None

    def get_config(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def get_active_text(self) -> str:
        if self._text is None:
            if self.source and self.source != "-":
                self._text = Path(self.source).read_text(encoding="utf-8")
            else:
                self._text = sys.stdin.read()
        return self._text

    def notify(self, message: str, kind: NotificationKind) -> None:
        print(f"[{kind.value}] {message}", file=sys.stderr)


def _cmd_validate(pipeline: TextPipeline, args: argparse.Namespace) -> None:
    report = pipeline.validate(pipeline.host.get_active_text())
    if args.json:
        print(json.dumps(dataclasses.asdict(report), indent=2))
        return
    print("valid" if report.is_valid else "warnings:")
    for warning in report.warnings:
        print(f"  - {warning}")
    if report.suggestion:
        print()
        print(report.suggestion)


def _cmd_escape(pipeline: TextPipeline, args: argparse.Namespace) -> None:  # noqa: ARG001
    sys.stdout.write(pipeline.escape_quotes(pipeline.host.get_active_text()))


def _cmd_chunk(pipeline: TextPipeline, args: argparse.Namespace) -> None:
    chunks = pipeline.chunk(pipeline.host.get_active_text(), args.max_size, args.mode)
    if args.json:
        records = [
            {**dataclasses.asdict(c), "payload": c.payload} for c in chunks
        ]
        print(json.dumps(records, indent=2))
        return
    for c in chunks:
        print(f"--- chunk {c.index + 1}/{len(chunks)} ({len(c.content)} chars) ---")
        print(c.payload)


def _cmd_detect(pipeline: TextPipeline, args: argparse.Namespace) -> None:  # noqa: ARG001
    match = pipeline.detect_language(pipeline.host.get_active_text())
    print(f"{match.language or 'unknown'} {match.confidence:.2f}")


def _cmd_format(pipeline: TextPipeline, args: argparse.Namespace) -> None:
    text = pipeline.host.get_active_text()
    sys.stdout.write(asyncio.run(pipeline.format_output(text, args.format)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate, escape, chunk and format assistant text",
        prog="python -m fix_augment",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def _add(name: str, handler: Any, help_text: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file", nargs="?", help="Input file (default: stdin)")
        p.set_defaults(handler=handler)
        return p

    p = _add("validate", _cmd_validate, "Report size, quote and complexity warnings")
    p.add_argument("--json", action="store_true", help="Output as JSON")

    _add("escape", _cmd_escape, "Escape unescaped double quotes")

    p = _add("chunk", _cmd_chunk, "Split oversized text")
    p.add_argument("--max-size", type=int, help="Maximum chunk size in characters")
    p.add_argument("--mode", choices=[m.value for m in ChunkMode], help="Chunking strategy")
    p.add_argument("--json", action="store_true", help="Output as JSON")

    _add("detect", _cmd_detect, "Guess the programming language")

    p = _add("format", _cmd_format, "Format an assistant reply")
    p.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_config(profile=args.profile).to_frozen()
    except FixAugmentError as e:
        print(f"[error] {describe_error(e, 'configuration')}", file=sys.stderr)
        return 1
    host = StdioHost(args.file, config)
    pipeline = TextPipeline(host, config)

    def _run() -> bool:
        args.handler(pipeline, args)
        return True

    return 0 if pipeline.run_command(args.command, _run) else 1


if __name__ == "__main__":
    sys.exit(main())
