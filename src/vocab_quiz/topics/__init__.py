"""Topic catalogue: word records and the JSON topic loader."""

from __future__ import annotations

from .loader import (
    INDEX_FILENAME,
    LEVEL_LABELS,
    TopicNotFoundError,
    TopicRoot,
    bundled_topics_dir,
    find_topic,
    group_by_level,
    has_index,
    level_label,
    load_index,
    load_topic,
    load_topics,
)
from .models import Topic, TopicFormatError, TopicIndexEntry, Word

__all__ = [
    "INDEX_FILENAME",
    "LEVEL_LABELS",
    "Topic",
    "TopicFormatError",
    "TopicIndexEntry",
    "TopicNotFoundError",
    "TopicRoot",
    "Word",
    "bundled_topics_dir",
    "find_topic",
    "group_by_level",
    "has_index",
    "level_label",
    "load_index",
    "load_topic",
    "load_topics",
]
