"""Vocabulary flashcards and fill-in-the-blank quizzes in the terminal."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("vocab-quiz")
except metadata.PackageNotFoundError:  # pragma: no cover - source checkout
    __version__ = "0.0.0"

__all__ = ["__version__"]
