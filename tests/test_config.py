from __future__ import annotations

from pathlib import Path

import pytest

from mathline.config import (
    EvaluatorConfig,
    MathlineConfig,
    find_config_file,
    load_config,
    parse_config,
)
from mathline.errors import MathlineConfigError


def test_load_minimal_config_defaults_apply(tmp_path: Path) -> None:
    (tmp_path / "mathline.toml").write_text("version = 1\n", encoding="utf-8")
    cfg = load_config(root=tmp_path)

    assert cfg.version == 1
    assert cfg.evaluator.catch_fp_exceptions is True
    assert cfg.evaluator.unary_minus_highest_precedence is True
    assert cfg.evaluator.max_nesting == 100
    assert cfg.output.precision == 3


def test_load_config_overrides_work(tmp_path: Path) -> None:
    (tmp_path / "mathline.toml").write_text(
        "\n".join(
            [
                "version = 1",
                "",
                "[evaluator]",
                "catch_fp_exceptions = false",
                "unary_minus_highest_precedence = false",
                "max_nesting = 40",
                "",
                "[output]",
                "precision = 8",
                "",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(root=tmp_path)
    assert cfg.evaluator == EvaluatorConfig(
        catch_fp_exceptions=False,
        unary_minus_highest_precedence=False,
        max_nesting=40,
    )
    assert cfg.output.precision == 8


def test_missing_file_means_defaults(tmp_path: Path) -> None:
    assert load_config(root=tmp_path) == MathlineConfig()


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(MathlineConfigError, match="Missing mathline.toml"):
        load_config(config_path=tmp_path / "nope.toml")


def test_find_config_file_walks_upward(tmp_path: Path) -> None:
    (tmp_path / "mathline.toml").write_text("version = 1\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == (tmp_path / "mathline.toml").resolve()


def test_find_config_file_from_a_file(tmp_path: Path) -> None:
    (tmp_path / "mathline.toml").write_text("version = 1\n", encoding="utf-8")
    f = tmp_path / "notes.txt"
    f.write_text("", encoding="utf-8")
    assert find_config_file(f) == (tmp_path / "mathline.toml").resolve()


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "mathline.toml"
    path.write_text("version = = 1\n", encoding="utf-8")
    with pytest.raises(MathlineConfigError, match="Invalid TOML"):
        load_config(config_path=path)


@pytest.mark.parametrize(
    ("data", "match"),
    [
        ({}, "Missing required `version = 1`"),
        ({"version": 2}, "Unsupported config version"),
        ({"version": "1"}, "Expected version to be an integer"),
        ({"version": 1, "evaluator": []}, r"Expected \[evaluator\] to be a table"),
        (
            {"version": 1, "evaluator": {"catch_fp_exceptions": "yes"}},
            "evaluator.catch_fp_exceptions to be a boolean",
        ),
        (
            {"version": 1, "evaluator": {"max_nesting": True}},
            "evaluator.max_nesting to be an integer",
        ),
        ({"version": 1, "evaluator": {"max_nesting": 0}}, "max_nesting must be >= 1"),
        ({"version": 1, "output": {"precision": 21}}, "precision must be between 0 and 20"),
        ({"version": 1, "output": {"precision": -1}}, "precision must be between 0 and 20"),
    ],
)
def test_validation_errors(data: dict, match: str) -> None:
    with pytest.raises(MathlineConfigError, match=match):
        parse_config(data)
