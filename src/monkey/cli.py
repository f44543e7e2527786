"""Command-line interface for the Monkey front end."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from monkey.debug import dump_ast
from monkey.lexer import Lexer
from monkey.parser import parse
from monkey.repl import MODES, PROMPT, start

logger = logging.getLogger(__name__)

CONFIG_NAME = "monkey.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    input_file: Path | None
    debug: bool
    prompt: str
    mode: str


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="monkey",
        description="Monkey lexer and parser",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    sub = p.add_subparsers(dest="command", required=True)

    tokens = sub.add_parser("tokens", help="Print the token stream of a source file")
    tokens.add_argument("input", help="Input source file")

    parse_cmd = sub.add_parser("parse", help="Parse a source file and print it back")
    parse_cmd.add_argument("input", help="Input source file")
    parse_cmd.add_argument("--debug", action="store_true", help="Dump AST to stderr")

    check = sub.add_parser("check", help="Report syntax errors in a source file")
    check.add_argument("input", help="Input source file")

    repl = sub.add_parser("repl", help="Start the interactive read loop")
    repl.add_argument("--mode", choices=MODES, default=None, help="What to echo per line")
    repl.add_argument("--prompt", default=None, help=f"Prompt text (default: {PROMPT!r})")
    return p


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    logger.debug("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    raw_input = getattr(args, "input", None)
    input_file = Path(raw_input) if raw_input else None

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, Path("."))

    prompt = PROMPT
    mode = "tokens"
    cfg_repl = config.get("repl")
    if isinstance(cfg_repl, dict):
        cfg_prompt = cfg_repl.get("prompt")
        if isinstance(cfg_prompt, str):
            prompt = cfg_prompt
        cfg_mode = cfg_repl.get("mode")
        if cfg_mode is not None:
            if cfg_mode not in MODES:
                raise argparse.ArgumentTypeError(
                    f"invalid repl mode in config (expected one of {', '.join(MODES)}): {cfg_mode}"
                )
            mode = cfg_mode

    if getattr(args, "prompt", None) is not None:
        prompt = args.prompt
    if getattr(args, "mode", None) is not None:
        mode = args.mode

    return CliOptions(
        command=args.command,
        input_file=input_file,
        debug=getattr(args, "debug", False),
        prompt=prompt,
        mode=mode,
    )


def _read_source(path: Path) -> tuple[bytes, str]:
    """Return the raw bytes to lex and a decoded copy for error display."""
    data = path.read_bytes()
    return data, data.decode("utf-8", errors="replace")


def run_tokens(options: CliOptions, out: TextIO | None = None) -> int:
    """Print one token per line, EOF included."""
    out = out or sys.stdout
    data, _ = _read_source(options.input_file)
    for tok in Lexer(data):
        pos = f"{tok.span.start.line}:{tok.span.start.column}" if tok.span else "?"
        out.write(f"{pos}\t{tok.kind.name}\t{tok.literal!r}\n")
    return 0


def run_parse(options: CliOptions, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Print the canonical rendering of the program; diagnostics go to err."""
    out = out or sys.stdout
    err = err or sys.stderr
    data, text = _read_source(options.input_file)
    program, diagnostics = parse(data)

    if options.debug:
        dump_ast(program, file=err)

    if diagnostics:
        for diag in diagnostics:
            print(diag.format(text, str(options.input_file)), file=err)
        return 1

    out.write(program.string() + "\n")
    return 0


def run_check(options: CliOptions, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Report every syntax error; exit code 1 if there were any."""
    out = out or sys.stdout
    err = err or sys.stderr
    data, text = _read_source(options.input_file)
    program, diagnostics = parse(data)

    for diag in diagnostics:
        print(diag.format(text, str(options.input_file)), file=err)

    if diagnostics:
        print(f"{options.input_file}: {len(diagnostics)} error(s)", file=err)
        return 1

    out.write(f"{options.input_file}: ok ({len(program.statements)} statements)\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s"
        )

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.command == "repl":
        try:
            start(prompt=options.prompt, mode=options.mode)
        except KeyboardInterrupt:
            pass
        return 0

    try:
        if options.command == "tokens":
            return run_tokens(options)
        if options.command == "parse":
            return run_parse(options)
        return run_check(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

