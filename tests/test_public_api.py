from __future__ import annotations

import mathline


def test_public_exports() -> None:
    for name in mathline.__all__:
        assert hasattr(mathline, name)


def test_evaluate_shortcut() -> None:
    result = mathline.evaluate("1+(2*(3+(4+5+6))-1)+6")
    assert isinstance(result, mathline.EvaluationResult)
    assert result.ok
    assert result.value == 42


def test_evaluator_with_config() -> None:
    evaluator = mathline.Evaluator(mathline.EvaluatorConfig(unary_minus_highest_precedence=False))
    assert evaluator.evaluate("-3^2").value == -9


def test_error_is_part_of_the_result() -> None:
    result = mathline.evaluate("2++2")
    assert not result.ok
    assert result.value == 0
    assert isinstance(result.error, mathline.EvaluationError)
    assert result.error.kind is mathline.ErrorKind.CONSECUTIVE_UNARY_PLUS_NOT_ALLOWED


def test_version_is_a_string() -> None:
    assert isinstance(mathline.__version__, str)
    assert mathline.__version__
