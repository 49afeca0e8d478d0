"""CLI entry points for shared workspace management."""

from __future__ import annotations

import argparse
import shutil
import sys
from importlib import resources
from pathlib import Path
from typing import Mapping, Sequence

from vocab_quiz.core import workspace as workspace_mod
from vocab_quiz.topics import INDEX_FILENAME, bundled_topics_dir, has_index


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocab init",
        description=(
            "Bootstrap the vocab-quiz workspace and ensure required "
            "subdirectories exist."
        ),
    )
    parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Override the workspace root (defaults to VOCAB_QUIZ_DATA_HOME "
            "or ~/.vocab-quiz-data)."
        ),
    )
    parser.add_argument(
        "--sample-topics",
        action="store_true",
        help=(
            "Copy the bundled sample topics into the workspace topics "
            "directory so they can be edited."
        ),
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress informational output on success.",
    )
    return parser


def _format_created(created: Mapping[str, bool], key: str) -> str:
    return "created" if created.get(key, False) else "exists"


def copy_sample_topics(destination: Path) -> bool:
    """Copy the bundled topics into ``destination``.

    Returns ``False`` without touching anything when ``destination`` already
    has an index, so hand-edited topics are never overwritten.
    """

    if has_index(destination):
        return False
    with resources.as_file(bundled_topics_dir()) as source:
        shutil.copytree(
            source,
            destination,
            dirs_exist_ok=True,
            ignore=shutil.ignore_patterns("__pycache__", "*.py"),
        )
    return True


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        layout = workspace_mod.ensure_workspace(path=args.path)
    except workspace_mod.WorkspaceError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    copied = None
    if args.sample_topics:
        try:
            copied = copy_sample_topics(layout.path_for("topics"))
        except OSError as exc:
            sys.stderr.write(f"Error: failed to copy sample topics: {exc}\n")
            return 1

    if args.quiet:
        return 0

    created = layout.created
    home_status = _format_created(created, "home")
    lines = [f"Workspace ready at {layout.home} ({home_status})"]

    if layout.directories:
        lines.append("Subdirectories:")
        width = max(len(name) for name in layout.directories)
        for name, directory in layout.items():
            status = _format_created(created, name)
            lines.append(f"  {name.ljust(width)}  {directory} ({status})")

    if copied is True:
        lines.append(f"Copied sample topics to {layout.path_for('topics')}")
    elif copied is False:
        lines.append(
            f"Kept existing topics ({INDEX_FILENAME} already present)."
        )

    sys.stdout.write("\n".join(lines) + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
