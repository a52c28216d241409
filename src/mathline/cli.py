from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from mathline import __version__
from mathline.config import EvaluatorConfig, MathlineConfig, load_config, validate_precision
from mathline.diagnostics import format_error_with_hint, render_error, result_payload
from mathline.errors import MathlineConfigError
from mathline.evaluator import Evaluator
from mathline.functions import FUNCTIONS
from mathline.tokens import CONSTANTS

EXIT_OK = 0
EXIT_EVALUATION_ERROR = 1
EXIT_USAGE_OR_CONFIG = 2


def _add_config_flag(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mathline.toml (defaults to searching upward from cwd).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathline",
        description="Evaluate arithmetic expressions with caret-annotated errors.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    eval_p = subparsers.add_parser(
        "eval",
        help="Evaluate an expression.",
        description=(
            "Quote the expression in the shell, e.g. mathline eval '2^-1/3'. "
            "Put `--` before an expression that starts with `-`."
        ),
    )
    eval_p.add_argument("expression", help="The expression to evaluate.")
    _add_config_flag(eval_p)
    eval_p.add_argument(
        "-p",
        "--precision",
        type=int,
        default=None,
        help="Decimal digits printed (0..20, default 3).",
    )
    eval_p.add_argument(
        "--unary-minus",
        choices=["highest", "lowest"],
        default=None,
        help="Precedence of unary minus: `highest` makes -3^2 == 9, `lowest` makes it -9.",
    )
    eval_p.add_argument(
        "--no-catch-fp",
        action="store_true",
        help="Pass nan/inf results through instead of failing.",
    )
    eval_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit a single JSON document on stdout.",
    )

    subparsers.add_parser("selftest", help="Run the built-in self-test.")
    subparsers.add_parser("functions", help="List supported functions and constants.")

    mcp_p = subparsers.add_parser("mcp", help="Model Context Protocol server.")
    mcp_sub = mcp_p.add_subparsers(dest="mcp_command", required=True)
    serve_p = mcp_sub.add_parser("serve", help="Serve the evaluator over stdio.")
    _add_config_flag(serve_p)

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _load_config(args: argparse.Namespace) -> MathlineConfig:
    config_path = Path(args.config).resolve() if getattr(args, "config", None) else None
    return load_config(config_path=config_path)


def _evaluator_config(args: argparse.Namespace, base: EvaluatorConfig) -> EvaluatorConfig:
    cfg = base
    if args.unary_minus is not None:
        cfg = replace(cfg, unary_minus_highest_precedence=args.unary_minus == "highest")
    if args.no_catch_fp:
        cfg = replace(cfg, catch_fp_exceptions=False)
    return cfg


def cmd_eval(args: argparse.Namespace) -> int:
    try:
        cfg = _load_config(args)
        precision = cfg.output.precision
        if args.precision is not None:
            precision = validate_precision(args.precision)
        evaluator = Evaluator(_evaluator_config(args, cfg.evaluator))
    except MathlineConfigError as e:
        if args.json_output:
            print(json.dumps({"command": "eval", "ok": False, "error": str(e)}))
        else:
            _eprint(format_error_with_hint(e))
        return EXIT_USAGE_OR_CONFIG

    result = evaluator.evaluate(args.expression)

    if args.json_output:
        print(json.dumps(result_payload(result, precision=precision)))
        return EXIT_OK if result.ok else EXIT_EVALUATION_ERROR

    if result.error is not None:
        sys.stderr.write(render_error(result.error))
        return EXIT_EVALUATION_ERROR

    print(f"{result.value:.{precision}f}")
    return EXIT_OK


def cmd_selftest(args: argparse.Namespace) -> int:
    from mathline.selftest import run_selftest

    failures = run_selftest()
    if not failures:
        print("All tests passed")
        return EXIT_OK

    first = failures[0]
    print(f"{len(failures)} test(s) failed\n")
    print(first.describe())
    if first.result.error is not None:
        print("Error:")
        print(render_error(first.result.error))
    return EXIT_EVALUATION_ERROR


def cmd_functions(args: argparse.Namespace) -> int:
    print("functions:")
    for spec in FUNCTIONS.values():
        print(f"  {spec.usage:<42} {spec.description}")
    print("constants:")
    for name, value in CONSTANTS.items():
        print(f"  {name:<42} {value!r}")
    return EXIT_OK


def cmd_mcp(args: argparse.Namespace) -> int:
    try:
        cfg = _load_config(args)
        from mathline.mcp_server import run_server

        run_server(config=cfg)
    except MathlineConfigError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_USAGE_OR_CONFIG
    except ImportError as e:
        _eprint(f"error: fastmcp is required for `mathline mcp serve`: {e}")
        return EXIT_USAGE_OR_CONFIG
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_USAGE_OR_CONFIG

    if args.command == "eval":
        return cmd_eval(args)
    if args.command == "selftest":
        return cmd_selftest(args)
    if args.command == "functions":
        return cmd_functions(args)
    if args.command == "mcp":
        return cmd_mcp(args)

    return EXIT_USAGE_OR_CONFIG


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
