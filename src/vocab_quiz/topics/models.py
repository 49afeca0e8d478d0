"""Topic and word records loaded from the static topic files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


class TopicFormatError(RuntimeError):
    """Raised when a topic or index document is malformed."""


def _require_str(data: Mapping[str, Any], key: str, *, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise TopicFormatError(f"{where}: '{key}' must be a string.")
    return value


def _optional_str(data: Mapping[str, Any], key: str, *, where: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TopicFormatError(f"{where}: '{key}' must be a string.")
    return value


@dataclass(frozen=True)
class Word:
    """A vocabulary entry. Only ``word`` matters to the quiz engine."""

    word: str
    meaning: str = ""
    pos: str = ""
    example: str = ""
    pronunciation: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, where: str = "word") -> "Word":
        if not isinstance(data, Mapping):
            raise TopicFormatError(f"{where}: expected an object.")
        word = _require_str(data, "word", where=where)
        if not word:
            raise TopicFormatError(f"{where}: 'word' must not be empty.")
        return cls(
            word=word,
            meaning=_optional_str(data, "meaning", where=where),
            pos=_optional_str(data, "pos", where=where),
            example=_optional_str(data, "example", where=where),
            pronunciation=_optional_str(data, "pronunciation", where=where),
        )


@dataclass(frozen=True)
class Topic:
    id: str
    name: str
    level: str
    icon: str
    description: str
    words: tuple[Word, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, where: str = "topic") -> "Topic":
        if not isinstance(data, Mapping):
            raise TopicFormatError(f"{where}: expected an object.")
        raw_words = data.get("words")
        if not isinstance(raw_words, list):
            raise TopicFormatError(f"{where}: 'words' must be a list.")
        words = tuple(
            Word.from_dict(item, where=f"{where} words[{idx}]")
            for idx, item in enumerate(raw_words)
        )
        return cls(
            id=_require_str(data, "id", where=where),
            name=_require_str(data, "name", where=where),
            level=_require_str(data, "level", where=where),
            icon=_optional_str(data, "icon", where=where),
            description=_optional_str(data, "description", where=where),
            words=words,
        )


@dataclass(frozen=True)
class TopicIndexEntry:
    """One row of ``index.json`` pointing at a topic file."""

    id: str
    name: str
    level: str
    icon: str
    word_count: int
    file: str

    @property
    def relative_path(self) -> str:
        return self.file or f"{self.level}/{self.id}.json"

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], *, where: str = "index entry"
    ) -> "TopicIndexEntry":
        if not isinstance(data, Mapping):
            raise TopicFormatError(f"{where}: expected an object.")
        count = data.get("wordCount", 0)
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise TopicFormatError(
                f"{where}: 'wordCount' must be a non-negative integer."
            )
        return cls(
            id=_require_str(data, "id", where=where),
            name=_optional_str(data, "name", where=where),
            level=_require_str(data, "level", where=where),
            icon=_optional_str(data, "icon", where=where),
            word_count=count,
            file=_optional_str(data, "file", where=where),
        )
