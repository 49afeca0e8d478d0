"""Write topic trees laid out like the bundled sample data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Sequence

SAMPLE_TOPICS: Sequence[Mapping[str, Any]] = (
    {
        "id": "animals",
        "name": "Animals",
        "level": "beginner",
        "icon": "A",
        "description": "Common animals",
        "words": [
            {
                "word": "cat",
                "meaning": "con meo",
                "pos": "noun",
                "example": "The cat is sleeping.",
                "pronunciation": "/kaet/",
            },
            {"word": "dog", "meaning": "con cho", "pos": "noun"},
        ],
    },
    {
        "id": "questions",
        "name": "Questions",
        "level": "pre-intermediate",
        "icon": "Q",
        "description": "Short questions",
        "words": [
            {"word": "a cat?", "meaning": "mot con meo?", "pos": "phrase"},
        ],
    },
    {
        "id": "travel",
        "name": "Travel",
        "level": "elementary",
        "icon": "T",
        "description": "",
        "words": [
            {"word": "ticket", "meaning": "ve", "pos": "noun"},
        ],
    },
)


def write_topics(
    root: Path,
    topics: Sequence[Mapping[str, Any]] = SAMPLE_TOPICS,
    *,
    extra_index: Sequence[Mapping[str, Any]] = (),
) -> Path:
    """Write ``index.json`` plus ``<level>/<id>.json`` for each topic.

    ``extra_index`` entries are appended to the index without a topic file,
    which is how tests simulate a missing or broken topic.
    """

    root.mkdir(parents=True, exist_ok=True)
    index = []
    for topic in topics:
        path = root / topic["level"] / f"{topic['id']}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(topic), encoding="utf-8")
        index.append(
            {
                "id": topic["id"],
                "name": topic["name"],
                "level": topic["level"],
                "icon": topic.get("icon", ""),
                "wordCount": len(topic["words"]),
            }
        )
    index.extend(extra_index)
    (root / "index.json").write_text(
        json.dumps({"topics": index}), encoding="utf-8"
    )
    return root
