"""Packaged configuration templates for vocab-quiz."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Iterable

__all__ = [
    "ConfigTemplate",
    "ConfigTemplateError",
    "get_template",
    "iter_templates",
]


class ConfigTemplateError(RuntimeError):
    """Raised when a requested configuration template is not available."""


@dataclass(frozen=True)
class ConfigTemplate:
    """A TOML template shipped as package data."""

    name: str
    filename: str
    description: str
    package: str

    def read_text(self) -> str:
        try:
            resource = resources.files(self.package).joinpath(self.filename)
            return resource.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigTemplateError(
                f"Template '{self.name}' resource not found."
            ) from exc
        except ModuleNotFoundError as exc:
            raise ConfigTemplateError(
                f"Package '{self.package}' not found for template "
                f"'{self.name}'."
            ) from exc

    def write(
        self, path: Path, *, overwrite: bool = False, mode: int = 0o600
    ) -> Path:
        """Copy the template to ``path``, owner-readable only."""

        if path.exists() and not overwrite:
            raise ConfigTemplateError(f"Config already exists: {path}")
        contents = self.read_text()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
            path.chmod(mode)
        except OSError as exc:
            raise ConfigTemplateError(
                f"Cannot write template '{self.name}' to {path}: {exc}"
            ) from exc
        return path


_TEMPLATES: dict[str, ConfigTemplate] = {
    "vocab_quiz": ConfigTemplate(
        name="vocab_quiz",
        filename="vocab_quiz.toml",
        description="Defaults for topics, quiz sessions, speech and logging.",
        package="vocab_quiz.settings",
    ),
}


def get_template(name: str) -> ConfigTemplate:
    try:
        return _TEMPLATES[name]
    except KeyError as exc:
        raise ConfigTemplateError(f"Unknown config template '{name}'.") from exc


def iter_templates() -> Iterable[ConfigTemplate]:
    return tuple(_TEMPLATES.values())
