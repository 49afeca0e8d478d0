"""``vocab learn``: browse a topic as flashcards, then optionally quiz."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from rich.console import Console

from vocab_quiz.core.workspace import WorkspaceError
from vocab_quiz.quizzer._main import start_quiz
from vocab_quiz.runtime import (
    add_common_arguments,
    console_prompt,
    overrides_from_args,
    prepare_session,
)
from vocab_quiz.settings import VocabConfigError
from vocab_quiz.topics import TopicFormatError, TopicNotFoundError

from .session import InputProvider, run_learning_session


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vocab learn",
        description="Read through a topic's words as flashcards.",
    )
    p.add_argument("topic", help="Topic id, e.g. 'greetings'.")
    p.add_argument(
        "--no-speech",
        dest="speech",
        action="store_false",
        default=None,
        help="Disable pronunciation playback.",
    )
    add_common_arguments(p)
    return p


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    console = console or Console()
    provider = input_provider or console_prompt(console)

    overrides = overrides_from_args(args, speech_enabled=args.speech)
    try:
        context = prepare_session(
            args, logger_name="vocab_quiz.learning", overrides=overrides
        )
        topic = context.topic(args.topic)
    except TopicNotFoundError as exc:
        sys.stderr.write(f"Error: {exc.args[0]}\n")
        sys.stderr.write("Run `vocab topics` to see what is available.\n")
        return 1
    except (VocabConfigError, WorkspaceError, TopicFormatError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    result = run_learning_session(
        topic.words,
        console,
        provider,
        topic_name=topic.name,
        speaker=context.speaker(),
        log=context.logger,
    )
    if result.exit_action == "empty":
        return 1
    if result.exit_action == "quiz":
        return start_quiz(
            context, topic, console=console, input_provider=provider
        )
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
