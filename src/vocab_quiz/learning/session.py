"""Flashcard walk-through of a topic, one word per card."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vocab_quiz.speech import NullSpeaker, Speaker
from vocab_quiz.topics.models import Word

InputProvider = Callable[[], str]
ExitAction = Literal["quit", "quiz", "empty"]
LearningCommand = Literal["next", "prev", "speak", "quiz", "quit"]

logger = logging.getLogger(__name__)

_COMMANDS: dict[str, LearningCommand] = {
    "": "next",
    "n": "next",
    "next": "next",
    "p": "prev",
    "prev": "prev",
    "previous": "prev",
    "s": "speak",
    "say": "speak",
    "quiz": "quiz",
    "q": "quit",
    "quit": "quit",
    "exit": "quit",
}

_HINT = "Enter/n next | p previous | s say | quiz start the quiz | q quit"


@dataclass
class LearningSessionState:
    words: list[Word]
    index: int = 0

    @property
    def total_words(self) -> int:
        return len(self.words)

    @property
    def current(self) -> Word:
        return self.words[self.index]

    def go_to(self, index: int) -> bool:
        if not 0 <= index < self.total_words:
            return False
        self.index = index
        return True

    def next(self) -> bool:
        return self.go_to(self.index + 1)

    def previous(self) -> bool:
        return self.go_to(self.index - 1)


@dataclass(frozen=True)
class LearningSessionResult:
    exit_action: ExitAction
    index: int


def parse_learning_command(raw: Optional[str]) -> Optional[LearningCommand]:
    """Map a line of input to a command; a blank line moves on."""

    if raw is None:
        return None
    text = raw.strip().lower().lstrip("/")
    return _COMMANDS.get(text)


def build_card(word: Word) -> Panel:
    """Rich panel showing everything the topic file knows about ``word``."""

    body = Table.grid(padding=(0, 2))
    body.add_column(style="bold")
    body.add_column()
    if word.pronunciation:
        body.add_row("Pronunciation", word.pronunciation)
    if word.pos:
        body.add_row("Part of speech", word.pos)
    if word.meaning:
        body.add_row("Meaning", word.meaning)
    if word.example:
        body.add_row("Example", Text(word.example, style="italic"))
    return Panel(
        body,
        title=Text(word.word, style="bold cyan"),
        title_align="left",
        expand=False,
    )


def run_learning_session(
    words: Sequence[Word],
    console: Console,
    input_provider: InputProvider,
    *,
    topic_name: Optional[str] = None,
    speaker: Optional[Speaker] = None,
    log: Optional[logging.Logger] = None,
) -> LearningSessionResult:
    """Show ``words`` in topic order until the learner quits or asks to quiz."""

    log = log or logger
    speaker = speaker or NullSpeaker()
    state = LearningSessionState(list(words))

    if not state.words:
        console.print("[yellow]This topic has no words.[/]")
        return LearningSessionResult("empty", 0)

    log.info(
        "Learning session started",
        extra={
            "event": "learning_start",
            "topic": topic_name,
            "words": state.total_words,
        },
    )
    exit_action: ExitAction = "quit"
    while True:
        _render_card(console, state, topic_name)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            break
        command = parse_learning_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command == "quit":
            console.print("[bold yellow]Ending learning session.[/]")
            break
        if command == "quiz":
            exit_action = "quiz"
            break
        if command == "next" and not state.next():
            console.print("[dim]Already at the last word.[/]")
        elif command == "prev" and not state.previous():
            console.print("[dim]Already at the first word.[/]")
        elif command == "speak":
            speaker.speak(state.current.word)

    log.info(
        "Learning session finished",
        extra={
            "event": "learning_end",
            "exit_action": exit_action,
            "index": state.index,
        },
    )
    return LearningSessionResult(exit_action, state.index)


def _render_card(
    console: Console, state: LearningSessionState, topic_name: Optional[str]
) -> None:
    header = Text.assemble(
        (f"{topic_name} | " if topic_name else "", "bold magenta"),
        (f"Card {state.index + 1}", "bold cyan"),
        (f" / {state.total_words}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(build_card(state.current))
    console.print(Text(_HINT, style="dim"))
