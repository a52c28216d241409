"""Evaluator and project configuration for Mathline.

`EvaluatorConfig` is the immutable construction parameter of an `Evaluator`.
Projects can persist their choices in a `mathline.toml` file; this module only
reads that file and performs light validation.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mathline.errors import MathlineConfigError

logger = logging.getLogger("mathline.config")

CONFIG_FILENAME = "mathline.toml"
MAX_PRECISION = 20


@dataclass(frozen=True)
class EvaluatorConfig:
    # Turn NaN and infinite results into evaluation errors.
    catch_fp_exceptions: bool = True
    # True: `-3^2 == 9` (sign binds to the operand). False: `-3^2 == -9`.
    unary_minus_highest_precedence: bool = True
    # Bound on parenthesis groups, function calls and exponent chains.
    max_nesting: int = 100


@dataclass(frozen=True)
class OutputConfig:
    precision: int = 3


@dataclass(frozen=True)
class MathlineConfig:
    version: int = 1
    evaluator: EvaluatorConfig = field(default_factory=EvaluatorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config_file(start: Path) -> Path | None:
    """Walk upward from `start` (file or directory) looking for `mathline.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MathlineConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_bool(value: Any, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise MathlineConfigError(f"Expected {name} to be a boolean.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise MathlineConfigError(f"Expected {name} to be an integer.")
    return value


def validate_precision(precision: int) -> int:
    if precision < 0 or precision > MAX_PRECISION:
        raise MathlineConfigError(
            f"Invalid config: precision must be between 0 and {MAX_PRECISION} (included)."
        )
    return precision


def parse_config(data: dict[str, Any]) -> MathlineConfig:
    """Validate an already-decoded TOML document."""

    version = data.get("version", None)
    if version is None:
        raise MathlineConfigError("Missing required `version = 1` in mathline.toml.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise MathlineConfigError(f"Unsupported config version: {version_i} (expected 1).")

    evaluator_tbl = _as_table(data.get("evaluator"), name="evaluator")
    output_tbl = _as_table(data.get("output"), name="output")
    defaults = EvaluatorConfig()

    if "catch_fp_exceptions" in evaluator_tbl:
        catch_fp = _as_bool(
            evaluator_tbl["catch_fp_exceptions"], name="evaluator.catch_fp_exceptions"
        )
    else:
        catch_fp = defaults.catch_fp_exceptions

    if "unary_minus_highest_precedence" in evaluator_tbl:
        unary_highest = _as_bool(
            evaluator_tbl["unary_minus_highest_precedence"],
            name="evaluator.unary_minus_highest_precedence",
        )
    else:
        unary_highest = defaults.unary_minus_highest_precedence

    if "max_nesting" in evaluator_tbl:
        max_nesting = _as_int(evaluator_tbl["max_nesting"], name="evaluator.max_nesting")
    else:
        max_nesting = defaults.max_nesting

    if "precision" in output_tbl:
        precision = _as_int(output_tbl["precision"], name="output.precision")
    else:
        precision = OutputConfig().precision

    # Validation
    if max_nesting < 1:
        raise MathlineConfigError("Invalid config: evaluator.max_nesting must be >= 1.")
    validate_precision(precision)

    return MathlineConfig(
        version=version_i,
        evaluator=EvaluatorConfig(
            catch_fp_exceptions=catch_fp,
            unary_minus_highest_precedence=unary_highest,
            max_nesting=max_nesting,
        ),
        output=OutputConfig(precision=precision),
    )


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> MathlineConfig:
    """Load and validate `mathline.toml`.

    An explicit `config_path` must exist. Otherwise the file is searched for
    upward from `root` (default: the current working directory), and defaults
    are returned when none is found.
    """

    if config_path is None:
        config_path = find_config_file(root if root is not None else Path.cwd())
        if config_path is None:
            logger.debug("No %s found; using defaults", CONFIG_FILENAME)
            return MathlineConfig()

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise MathlineConfigError(f"Missing mathline.toml at: {config_path}") from e
    except OSError as e:
        raise MathlineConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MathlineConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise MathlineConfigError(f"Invalid TOML in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return parse_config(data)
