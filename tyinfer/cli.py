"""tyinfer command-line interface."""

from __future__ import annotations

import argparse
import ast
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence, TextIO

from tyinfer.core import InferenceError, format_type, infer_type
from tyinfer.syntax.ast import format_expr
from tyinfer.syntax.grammar import ParseError, parse_expression
from tyinfer.telemetry.logger import get_logger, set_level
from tyinfer.utils.config import resolve_config_path

from .settings import DEFAULT_CONFIG_PATH, Settings, load_settings

LOGGER = get_logger("tyinfer.cli")

PROMPT = "tyinfer> "
QUIT_COMMANDS = (":quit", ":q")
NESTING_ERROR = "expression too deeply nested"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tyinfer", description="Hindley-Milner type inference for the lambda calculus"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "YAML configuration file (prelude, display). Defaults to $TYINFER_CONFIG, "
            "then configs/default.yaml."
        ),
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="Override configuration values using dot notation (e.g. prelude.two=Int).",
    )
    parser.add_argument(
        "--log-level",
        help="Level for the tyinfer loggers (DEBUG traces constraints and bindings).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_infer_parser(subparsers)
    _add_repl_parser(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        if args.log_level:
            set_level(args.log_level)
        overrides = _parse_overrides(args.overrides)
        config_path = resolve_config_path(args.config, DEFAULT_CONFIG_PATH)
        if config_path is None:
            LOGGER.warning(
                "no configuration file at %s; running with an empty prelude", DEFAULT_CONFIG_PATH
            )
        settings = load_settings(config_path, overrides=overrides)
        if args.command == "infer":
            return _cmd_infer(args, settings)
        if args.command == "repl":
            return run_repl(settings)
    except (ParseError, InferenceError, ValueError, OSError) as exc:
        LOGGER.debug("command failed", exc_info=True)
        print(f"[tyinfer] error: {exc}", file=sys.stderr)
        return 1
    except RecursionError:
        print(f"[tyinfer] error: {NESTING_ERROR}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


# ---------------------------------------------------------------------------
# Sub-command wiring


def _add_infer_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("infer", help="Infer the type of a single expression")
    parser.add_argument("expression", nargs="?", help="Expression text (omit to use --file)")
    parser.add_argument("--file", type=Path, help="Read the expression from a file")
    parser.add_argument(
        "--show-constraints",
        action="store_true",
        default=None,
        help="Print the generated constraints and the final substitution table.",
    )
    parser.add_argument("--show-ast", action="store_true", help="Print the parsed expression tree.")
    parser.add_argument(
        "--raw", action="store_true", help="Print variables as t<id> instead of 'a, 'b, ..."
    )


def _add_repl_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    subparsers.add_parser("repl", help="Interactive read-infer-print loop")


def _cmd_infer(args: argparse.Namespace, settings: Settings) -> int:
    if args.file is not None:
        source = args.file.read_text(encoding="utf-8")
        filename = str(args.file)
    elif args.expression is not None:
        source = args.expression
        filename = "<expr>"
    else:
        raise ValueError("provide an expression or --file")

    show_constraints = (
        settings.display.show_constraints if args.show_constraints is None else True
    )
    normalise = settings.display.normalise and not args.raw

    expr = parse_expression(source, filename=filename)
    if args.show_ast:
        print(format_expr(expr))
    result = infer_type(expr, settings.prelude)
    if show_constraints:
        print("constraints:")
        for constraint in result.constraints:
            print(f"  {constraint}")
        print("substitution:")
        for index, slot in enumerate(result.substitutions):
            print(f"  t{index} := {format_type(slot)}")
    print(f"{expr} : {format_type(result.resolved, normalise=normalise)}")
    return 0


# ---------------------------------------------------------------------------
# Interactive loop


def run_repl(
    settings: Settings,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Read expressions line by line and print their types.

    Every line gets a fresh engine, so a failed inference never leaks state into
    the next one.  ``:env`` lists the prelude, ``:quit`` (or EOF) ends the loop.
    """

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    interactive = stdin.isatty()

    while True:
        if interactive:
            stdout.write(PROMPT)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        text = line.strip()
        if not text:
            continue
        if text in QUIT_COMMANDS:
            break
        if text == ":env":
            for name, typ in sorted(settings.prelude.items()):
                stdout.write(f"{name} : {format_type(typ)}\n")
            continue
        try:
            expr = parse_expression(text, filename="<repl>")
            result = infer_type(expr, settings.prelude)
            rendered = format_type(result.resolved, normalise=settings.display.normalise)
        except (ParseError, InferenceError) as exc:
            stdout.write(f"error: {exc}\n")
            continue
        except RecursionError:
            stdout.write(f"error: {NESTING_ERROR}\n")
            continue
        stdout.write(f"{rendered}\n")
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _parse_overrides(raw: Sequence[str] | None) -> dict[str, Any]:
    """Turn ``--set a.b=value`` items into a nested mapping."""

    overrides: dict[str, Any] = {}
    for item in raw or ():
        key, sep, value_text = item.partition("=")
        path = [part for part in key.strip().split(".") if part]
        if not sep or not path:
            raise ValueError(f"override '{item}' must look like KEY=VALUE")
        *parents, leaf = path
        target = overrides
        for part in parents:
            target = target.setdefault(part, {})
            if not isinstance(target, dict):
                raise ValueError(f"override '{key}' conflicts with an existing value")
        target[leaf] = _coerce_literal(value_text.strip())
    return overrides


def _coerce_literal(value: str) -> Any:
    try:
        return ast.literal_eval(value)
    except (ValueError, SyntaxError):
        return value


if __name__ == "__main__":  # pragma: no cover - manual entry point
    raise SystemExit(main())
