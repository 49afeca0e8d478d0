from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from vocab_quiz.core import config_templates
from vocab_quiz.core.config_templates import (
    ConfigTemplate,
    ConfigTemplateError,
)


def test_vocab_quiz_template_round_trips(tmp_path: Path) -> None:
    template = config_templates.get_template("vocab_quiz")
    assert isinstance(template, ConfigTemplate)

    contents = template.read_text()
    parsed = tomllib.loads(contents)
    assert set(parsed) == {"paths", "quiz", "speech", "logging"}
    assert parsed["speech"]["rate"] == 0.8

    target = tmp_path / "vocab_quiz.toml"
    assert template.write(target) == target
    assert target.read_text(encoding="utf-8") == contents

    with pytest.raises(ConfigTemplateError):
        template.write(target)
    assert template.write(target, overwrite=True) == target


def test_template_write_creates_parents_and_restricts_mode(
    tmp_path: Path,
) -> None:
    target = tmp_path / "nested" / "deeper" / "vocab_quiz.toml"

    config_templates.get_template("vocab_quiz").write(target)

    assert target.is_file()
    assert target.stat().st_mode & 0o777 == 0o600


def test_template_write_failure_raises_template_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ConfigTemplateError, match="Cannot write template"):
        config_templates.get_template("vocab_quiz").write(
            blocker / "vocab_quiz.toml"
        )


def test_iter_templates_lists_registered_names() -> None:
    names = {template.name for template in config_templates.iter_templates()}
    assert names == {"vocab_quiz"}


@pytest.mark.parametrize("unknown", ["missing", "", "convert_markdown"])
def test_get_template_unknown_raises(unknown: str) -> None:
    with pytest.raises(ConfigTemplateError):
        config_templates.get_template(unknown)


def test_missing_template_resource_raises() -> None:
    broken = ConfigTemplate(
        name="broken",
        filename="nope.toml",
        description="",
        package="vocab_quiz.settings",
    )

    with pytest.raises(ConfigTemplateError):
        broken.read_text()
