"""``vocab topics``: list the available topics grouped by level."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from vocab_quiz.core.workspace import WorkspaceError
from vocab_quiz.runtime import add_common_arguments, prepare_session
from vocab_quiz.settings import VocabConfigError

from .loader import group_by_level, level_label
from .models import Topic, TopicFormatError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocab topics",
        description="List vocabulary topics grouped by level.",
    )
    add_common_arguments(parser)
    return parser


def build_topics_table(topics: Sequence[Topic]) -> Table:
    table = Table(title="Topics", box=box.SIMPLE, expand=False)
    table.add_column("Level")
    table.add_column("Id", style="cyan")
    table.add_column("Topic")
    table.add_column("Words", justify="right")
    for level, members in group_by_level(topics).items():
        label = level_label(level)
        for topic in members:
            name = f"{topic.icon} {topic.name}".strip()
            table.add_row(label, topic.id, name, str(len(topic.words)))
            label = ""
    return table


def main(
    argv: Sequence[str] | None = None, *, console: Console | None = None
) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    console = console or Console()

    try:
        context = prepare_session(args, logger_name="vocab_quiz.topics")
    except (VocabConfigError, WorkspaceError, TopicFormatError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    if not context.topics:
        console.print("[yellow]No topics found.[/]")
        return 1
    console.print(build_topics_table(context.topics))
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
