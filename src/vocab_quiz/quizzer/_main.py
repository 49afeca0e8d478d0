"""``vocab quiz``: fill-in-the-blank practice for one topic."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Optional, Sequence

from rich.console import Console

from vocab_quiz.core.workspace import WorkspaceError
from vocab_quiz.runtime import (
    SessionContext,
    add_common_arguments,
    console_prompt,
    overrides_from_args,
    prepare_session,
)
from vocab_quiz.settings import Interface, VocabConfigError
from vocab_quiz.topics import Topic, TopicFormatError, TopicNotFoundError

from .session import InputProvider, run_quiz_session, shuffle_words
from .view.quiz import QuizApp


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vocab quiz",
        description="Type the missing letters of each word in a topic.",
    )
    p.add_argument("topic", help="Topic id, e.g. 'greetings'.")
    ui = p.add_mutually_exclusive_group()
    ui.add_argument(
        "--tui",
        dest="interface",
        action="store_const",
        const=Interface.TUI,
        help="Use the full-screen Textual interface.",
    )
    ui.add_argument(
        "--console",
        dest="interface",
        action="store_const",
        const=Interface.CONSOLE,
        help="Use the line-based Rich console interface.",
    )
    p.add_argument(
        "--shuffle",
        dest="shuffle",
        action="store_true",
        default=None,
        help="Shuffle the words before starting.",
    )
    p.add_argument(
        "--no-shuffle",
        dest="shuffle",
        action="store_false",
        help="Keep the topic's word order.",
    )
    p.add_argument(
        "--seed",
        type=int,
        help="Seed for the shuffle, for a repeatable order.",
    )
    p.add_argument(
        "--no-speech",
        dest="speech",
        action="store_false",
        default=None,
        help="Disable pronunciation playback.",
    )
    add_common_arguments(p)
    return p


def start_quiz(
    context: SessionContext,
    topic: Topic,
    *,
    console: Console,
    input_provider: Optional[InputProvider] = None,
    seed: Optional[int] = None,
) -> int:
    """Run the configured interface over ``topic`` and return an exit code."""

    words = list(topic.words)
    if context.config.shuffle:
        words = shuffle_words(words, random.Random(seed))
    speaker = context.speaker()
    context.logger.info(
        "Starting quiz",
        extra={
            "event": "quiz_open",
            "topic": topic.id,
            "interface": context.config.interface.value,
            "shuffle": context.config.shuffle,
        },
    )

    if context.config.interface is Interface.TUI:
        app = QuizApp(words, topic_name=topic.name, speaker=speaker)
        app.run()
        return 0

    result = run_quiz_session(
        words,
        console,
        input_provider or console_prompt(console),
        topic_name=topic.name,
        speaker=speaker,
        log=context.logger,
    )
    return 1 if result.exit_action == "empty" else 0


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
    input_provider: Optional[InputProvider] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    console = console or Console()

    overrides = overrides_from_args(
        args,
        shuffle=args.shuffle,
        interface=args.interface,
        speech_enabled=args.speech,
    )
    try:
        context = prepare_session(
            args, logger_name="vocab_quiz.quizzer", overrides=overrides
        )
        topic = context.topic(args.topic)
    except TopicNotFoundError as exc:
        sys.stderr.write(f"Error: {exc.args[0]}\n")
        sys.stderr.write("Run `vocab topics` to see what is available.\n")
        return 1
    except (VocabConfigError, WorkspaceError, TopicFormatError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1

    return start_quiz(
        context,
        topic,
        console=console,
        input_provider=input_provider,
        seed=args.seed,
    )


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    raise SystemExit(main())
