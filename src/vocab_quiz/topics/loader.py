"""Load topics from a directory laid out like the static site.

``<root>/index.json`` lists the topics; each topic lives at
``<root>/<level>/<id>.json``. Roots may be plain paths or package
resources, so both are handled through the ``Traversable`` protocol.
"""

from __future__ import annotations

import json
import logging
from collections import OrderedDict
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from .models import Topic, TopicFormatError, TopicIndexEntry

TopicRoot = Union[Path, Traversable]

INDEX_FILENAME = "index.json"

LEVEL_LABELS: "OrderedDict[str, str]" = OrderedDict(
    [
        ("beginner", "Beginner"),
        ("elementary", "Elementary"),
        ("pre-intermediate", "Pre-intermediate"),
    ]
)

logger = logging.getLogger(__name__)


class TopicNotFoundError(LookupError):
    """Raised when a requested topic id is not present."""


def bundled_topics_dir() -> Traversable:
    """Return the sample topics shipped with the package."""

    return resources.files("vocab_quiz.topics").joinpath("data")


def has_index(root: TopicRoot) -> bool:
    return root.joinpath(INDEX_FILENAME).is_file()


def _read_json(resource: Traversable, *, where: str) -> object:
    try:
        text = resource.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TopicFormatError(f"{where}: file not found.") from exc
    except OSError as exc:
        raise TopicFormatError(f"{where}: cannot be read ({exc}).") from exc
    except UnicodeDecodeError as exc:
        raise TopicFormatError(f"{where}: not valid UTF-8 ({exc}).") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise TopicFormatError(f"{where}: invalid JSON ({exc}).") from exc


def load_index(root: TopicRoot) -> list[TopicIndexEntry]:
    data = _read_json(root.joinpath(INDEX_FILENAME), where=INDEX_FILENAME)
    if not isinstance(data, dict) or not isinstance(data.get("topics"), list):
        raise TopicFormatError(f"{INDEX_FILENAME}: 'topics' must be a list.")
    return [
        TopicIndexEntry.from_dict(item, where=f"{INDEX_FILENAME}[{idx}]")
        for idx, item in enumerate(data["topics"])
    ]


def load_topic(root: TopicRoot, entry: TopicIndexEntry) -> Topic:
    resource: Traversable = root
    for part in entry.relative_path.split("/"):
        resource = resource.joinpath(part)
    data = _read_json(resource, where=entry.relative_path)
    return Topic.from_dict(data, where=entry.relative_path)


def load_topics(
    root: TopicRoot, *, log: Optional[logging.Logger] = None
) -> list[Topic]:
    """Load every topic listed in the index, in index order.

    A broken topic file is logged and skipped so one bad file does not hide
    the rest of the catalogue. A broken index raises ``TopicFormatError``.
    """

    log = log or logger
    topics: list[Topic] = []
    for entry in load_index(root):
        try:
            topics.append(load_topic(root, entry))
        except TopicFormatError as exc:
            log.error(
                "Skipping topic %s: %s",
                entry.id,
                exc,
                extra={"event": "topic_skipped", "topic_id": entry.id},
            )
    log.debug(
        "Loaded %d topic(s)",
        len(topics),
        extra={"event": "topics_loaded", "count": len(topics)},
    )
    return topics


def find_topic(topics: Iterable[Topic], topic_id: str) -> Topic:
    wanted = topic_id.strip().lower()
    for topic in topics:
        if topic.id.lower() == wanted:
            return topic
    raise TopicNotFoundError(f"Unknown topic '{topic_id}'.")


def level_label(level: str) -> str:
    return LEVEL_LABELS.get(level, level.replace("-", " ").capitalize())


def group_by_level(topics: Sequence[Topic]) -> "OrderedDict[str, list[Topic]]":
    """Group topics by level: known levels first, then others as seen."""

    grouped: "OrderedDict[str, list[Topic]]" = OrderedDict()
    for level in LEVEL_LABELS:
        members = [topic for topic in topics if topic.level == level]
        if members:
            grouped[level] = members
    for topic in topics:
        if topic.level not in LEVEL_LABELS:
            grouped.setdefault(topic.level, []).append(topic)
    return grouped
