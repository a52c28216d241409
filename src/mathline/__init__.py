from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from mathline.config import EvaluatorConfig
from mathline.errors import ErrorKind, EvaluationError, MathlineConfigError, MathlineError
from mathline.evaluator import EvaluationResult, Evaluator, evaluate


def _package_version() -> str:
    try:
        return version("mathline")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "__version__",
    "ErrorKind",
    "EvaluationError",
    "EvaluationResult",
    "Evaluator",
    "EvaluatorConfig",
    "MathlineConfigError",
    "MathlineError",
    "evaluate",
]
