"""MCP server for Mathline: exposes expression evaluation as MCP tools.

The server uses FastMCP for the transport layer. Core tool functions are plain
Python and can be tested without starting a server.
"""

from __future__ import annotations

import json
from dataclasses import replace

from mathline.config import MathlineConfig, validate_precision
from mathline.diagnostics import result_payload
from mathline.errors import MathlineConfigError
from mathline.evaluator import Evaluator
from mathline.functions import FUNCTIONS
from mathline.tokens import CONSTANTS

# ---------------------------------------------------------------------------
# Core tool functions (no FastMCP dependency)
# ---------------------------------------------------------------------------


def tool_evaluate(
    expression: str,
    *,
    config: MathlineConfig | None = None,
    precision: int | None = None,
    unary_minus_highest_precedence: bool | None = None,
    catch_fp_exceptions: bool | None = None,
) -> str:
    """Evaluate one expression and return the same JSON as `mathline eval --json`."""
    cfg = config if config is not None else MathlineConfig()
    evaluator_cfg = cfg.evaluator
    if unary_minus_highest_precedence is not None:
        evaluator_cfg = replace(
            evaluator_cfg, unary_minus_highest_precedence=unary_minus_highest_precedence
        )
    if catch_fp_exceptions is not None:
        evaluator_cfg = replace(evaluator_cfg, catch_fp_exceptions=catch_fp_exceptions)

    try:
        digits = validate_precision(precision) if precision is not None else cfg.output.precision
    except MathlineConfigError as e:
        return json.dumps({"command": "eval", "ok": False, "error": str(e)})

    result = Evaluator(evaluator_cfg).evaluate(expression)
    return json.dumps(result_payload(result, precision=digits))


def tool_functions() -> str:
    """Return the supported functions and constants as JSON."""
    return json.dumps(
        {
            "command": "functions",
            "ok": True,
            "functions": [
                {
                    "name": spec.name,
                    "usage": spec.usage,
                    "description": spec.description,
                    "min_args": spec.min_args,
                    "max_args": spec.max_args,
                }
                for spec in FUNCTIONS.values()
            ],
            "constants": dict(CONSTANTS),
        },
        indent=2,
    )


# ---------------------------------------------------------------------------
# FastMCP server factory
# ---------------------------------------------------------------------------


def create_mcp_server(config: MathlineConfig | None = None):
    """Create and return a FastMCP server with mathline tools registered."""
    from fastmcp import FastMCP

    cfg = config if config is not None else MathlineConfig()
    mcp = FastMCP("mathline", instructions="Arithmetic expression evaluator")

    @mcp.tool()
    def mathline_evaluate(
        expression: str,
        precision: int | None = None,
        unary_minus_highest_precedence: bool | None = None,
        catch_fp_exceptions: bool | None = None,
    ) -> str:
        """Evaluate an arithmetic expression.

        Supports + - * / ^ !, round brackets, the constants pi and e, and the
        functions listed by mathline_functions. Returns JSON with the result,
        or an error with its kind, message and character offset.
        """
        return tool_evaluate(
            expression,
            config=cfg,
            precision=precision,
            unary_minus_highest_precedence=unary_minus_highest_precedence,
            catch_fp_exceptions=catch_fp_exceptions,
        )

    @mcp.tool()
    def mathline_functions() -> str:
        """List the supported functions and constants."""
        return tool_functions()

    return mcp


def run_server(*, config: MathlineConfig | None = None) -> None:
    """Entry point: create and run the MCP server (stdio transport)."""
    mcp = create_mcp_server(config)
    mcp.run()
