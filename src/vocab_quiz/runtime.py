"""Shared start-up for the commands that open a topic.

``vocab topics``, ``vocab learn`` and ``vocab quiz`` all resolve settings,
configure logging and load the topic catalogue the same way.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console

from vocab_quiz.core.logging import configure_logger
from vocab_quiz.core.workspace import WorkspaceLayout
from vocab_quiz.settings import ConfigOverrides, VocabConfig, load_config
from vocab_quiz.speech import Speaker, build_speaker
from vocab_quiz.topics import (
    Topic,
    TopicRoot,
    bundled_topics_dir,
    find_topic,
    has_index,
    load_topics,
)


@dataclass(frozen=True)
class SessionContext:
    config: VocabConfig
    layout: WorkspaceLayout
    logger: logging.Logger
    log_path: Path
    topics_root: TopicRoot
    topics: list[Topic]

    def topic(self, topic_id: str) -> Topic:
        return find_topic(self.topics, topic_id)

    def speaker(self) -> Speaker:
        return build_speaker(self.config.speech, log=self.logger)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a vocab_quiz.toml file (defaults to the workspace).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root (defaults to VOCAB_QUIZ_DATA_HOME).",
    )
    parser.add_argument(
        "--topics-dir",
        type=Path,
        help="Directory containing index.json and the topic files.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for the session log file (defaults to INFO).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log output to stderr.",
    )


def topics_root_for(
    config: VocabConfig, layout: WorkspaceLayout
) -> TopicRoot:
    """Configured dir, else the workspace topics dir, else bundled samples."""

    if config.topics_dir is not None:
        return config.topics_dir
    workspace_topics = layout.path_for("topics")
    if has_index(workspace_topics):
        return workspace_topics
    return bundled_topics_dir()


def overrides_from_args(
    args: argparse.Namespace, **extra: object
) -> ConfigOverrides:
    """Build overrides from the common flags plus command-specific ones."""

    return ConfigOverrides(
        topics_dir=args.topics_dir,
        log_level=args.log_level,
        **extra,  # type: ignore[arg-type]
    )


def prepare_session(
    args: argparse.Namespace,
    *,
    logger_name: str,
    overrides: Optional[ConfigOverrides] = None,
) -> SessionContext:
    """Resolve config, logging and topics for a command invocation.

    Raises the settings, workspace and topic errors unchanged so each
    command can report them.
    """

    result = load_config(
        config_path=args.config,
        overrides=overrides or overrides_from_args(args),
        workspace_path=args.workspace,
    )
    logger, log_path = configure_logger(
        logger_name,
        log_dir=result.layout.path_for("logs"),
        level=result.config.log_level,
        verbose=bool(getattr(args, "verbose", False)),
    )
    root = topics_root_for(result.config, result.layout)
    logger.debug(
        "Loading topics from %s",
        root,
        extra={"event": "topics_root", "root": str(root)},
    )
    topics = load_topics(root, log=logger)
    return SessionContext(
        config=result.config,
        layout=result.layout,
        logger=logger,
        log_path=log_path,
        topics_root=root,
        topics=topics,
    )


def console_prompt(console: Console) -> Callable[[], str]:
    """Default line reader for the console sessions."""

    return lambda: console.input("[bold cyan]>[/] ")
