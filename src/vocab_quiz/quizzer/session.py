"""Rich-powered quiz session and the word navigation it shares with the TUI.

:class:`QuizSessionState` owns the word list, the active index and one
:class:`~vocab_quiz.quizzer.engine.AnswerEngine`. Moving to another word
rebuilds the engine, so nothing from the previous word carries over.

:func:`run_quiz_session` is a synchronous line-based loop: each line the
input provider returns is parsed into a :class:`SessionCommand` and applied
in order. Plain text is typed letter by letter at the focus; a blank line is
Enter, which checks the answer.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable, Literal, Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from vocab_quiz.speech import NullSpeaker, Speaker
from vocab_quiz.topics.models import Word

from .engine import AnswerEngine, AnswerSnapshot, AnswerState, is_locked

InputProvider = Callable[[], str]
ExitAction = Literal["quit", "empty"]
CommandType = Literal[
    "type",
    "key",
    "reveal",
    "next",
    "prev",
    "focus",
    "speak",
    "quit",
]

logger = logging.getLogger(__name__)

_COMMAND_ALIASES: dict[str, tuple[CommandType, Optional[str]]] = {
    "n": ("next", None),
    "next": ("next", None),
    "p": ("prev", None),
    "prev": ("prev", None),
    "previous": ("prev", None),
    "r": ("reveal", None),
    "reveal": ("reveal", None),
    "s": ("speak", None),
    "say": ("speak", None),
    "q": ("quit", None),
    "quit": ("quit", None),
    "exit": ("quit", None),
    "b": ("key", "backspace"),
    "back": ("key", "backspace"),
    "left": ("key", "left"),
    "right": ("key", "right"),
    "check": ("key", "enter"),
}

_HINT = (
    "Type the missing letters, Enter to check | "
    "/back /left /right /focus N /reveal /say /next /prev /quit"
)


def shuffle_words(
    words: Sequence[Word], rng: Optional[random.Random] = None
) -> list[Word]:
    shuffled = list(words)
    (rng or random.Random()).shuffle(shuffled)
    return shuffled


@dataclass
class QuizSessionState:
    """Active word plus its answer engine."""

    words: list[Word]
    index: int = 0
    engine: Optional[AnswerEngine] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.words:
            self.index = min(max(self.index, 0), len(self.words) - 1)
            self.engine = AnswerEngine(self.words[self.index])
        else:
            self.index = 0

    @property
    def total_words(self) -> int:
        return len(self.words)

    @property
    def current(self) -> Word:
        return self.words[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index >= self.total_words - 1

    def snapshot(self) -> Optional[AnswerSnapshot]:
        return self.engine.snapshot() if self.engine else None

    def go_to(self, index: int) -> bool:
        """Activate word ``index`` with a fresh engine.

        Indices outside ``[0, total - 1]`` leave everything untouched.
        """

        if not 0 <= index < self.total_words:
            return False
        self.index = index
        self.engine = AnswerEngine(self.words[index])
        return True

    def next(self) -> bool:
        return self.go_to(self.index + 1)

    def previous(self) -> bool:
        return self.go_to(self.index - 1)


@dataclass(frozen=True)
class SessionCommand:
    type: CommandType
    value: Optional[str] = None


@dataclass(frozen=True)
class QuizSessionResult:
    """Return value from ``run_quiz_session``."""

    exit_action: ExitAction
    index: int
    state: Optional[AnswerState]


def parse_session_command(raw: Optional[str]) -> Optional[SessionCommand]:
    """Parse one line of console input.

    Returns ``None`` for unknown slash commands. ``None`` input (no line at
    all) is also ``None``; an empty line means Enter.
    """

    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return SessionCommand("key", "enter")
    if not text.startswith("/"):
        return SessionCommand("type", text)
    name, _, argument = text[1:].partition(" ")
    name = name.lower()
    if name in {"f", "focus"}:
        argument = argument.strip()
        if argument.isdigit() and int(argument) > 0:
            return SessionCommand("focus", argument)
        return None
    alias = _COMMAND_ALIASES.get(name)
    if alias is None:
        return None
    return SessionCommand(alias[0], alias[1])


def run_quiz_session(
    words: Sequence[Word],
    console: Console,
    input_provider: InputProvider,
    *,
    topic_name: Optional[str] = None,
    speaker: Optional[Speaker] = None,
    log: Optional[logging.Logger] = None,
) -> QuizSessionResult:
    """Run a fill-in-the-blank quiz over ``words`` until the learner quits."""

    log = log or logger
    speaker = speaker or NullSpeaker()
    state = QuizSessionState(list(words))

    if not state.words:
        console.print("[yellow]This topic has no words.[/]")
        return QuizSessionResult("empty", 0, None)

    log.info(
        "Quiz session started",
        extra={
            "event": "quiz_start",
            "topic": topic_name,
            "words": state.total_words,
        },
    )
    while True:
        _render_word(console, state, topic_name)
        try:
            raw = input_provider()
        except (EOFError, KeyboardInterrupt, StopIteration):
            console.print("\n[bold yellow]Session interrupted.[/]")
            break
        command = parse_session_command(raw)
        if command is None:
            console.print("[red]Unrecognized command. Try again.[/]")
            continue
        if command.type == "quit":
            console.print("[bold yellow]Ending quiz session.[/]")
            break
        _apply_command(command, state, console, speaker, log)

    snapshot = state.snapshot()
    return QuizSessionResult(
        "quit", state.index, snapshot.state if snapshot else None
    )


def _apply_command(
    command: SessionCommand,
    state: QuizSessionState,
    console: Console,
    speaker: Speaker,
    log: logging.Logger,
) -> None:
    engine = state.engine
    if engine is None:
        return
    before = engine.state

    if command.type == "type" and command.value:
        if engine.answered:
            console.print("[dim]Word already answered. Use /next.[/]")
        for char in command.value:
            engine.handle_key(char)
    elif command.type == "key" and command.value:
        engine.handle_key(command.value)
    elif command.type == "reveal":
        engine.reveal()
    elif command.type == "focus" and command.value:
        if not engine.set_focus(int(command.value) - 1):
            console.print(
                f"[red]Position {command.value} cannot be edited.[/]"
            )
    elif command.type == "next":
        if not state.next():
            console.print("[dim]Already at the last word.[/]")
    elif command.type == "prev":
        if not state.previous():
            console.print("[dim]Already at the first word.[/]")
    elif command.type == "speak":
        if engine.answered:
            speaker.speak(engine.target)
        else:
            console.print("[dim]Answer the word first.[/]")

    current = state.engine
    if current is engine and before is not engine.state:
        log.info(
            "Word %s",
            engine.state.value,
            extra={
                "event": "word_answered",
                "state": engine.state.value,
                "index": state.index,
            },
        )


def feedback_markup(snapshot: AnswerSnapshot) -> Optional[str]:
    """Rich markup for the three terminal states, ``None`` otherwise."""

    word = escape(snapshot.correct_word or "")
    if snapshot.state is AnswerState.SOLVED:
        return "[bold green]Correct![/]"
    if snapshot.state is AnswerState.REVEALED_WRONG:
        return f"[bold red]Incorrect. The answer is: {word}[/]"
    if snapshot.state is AnswerState.REVEALED_EXPLICIT:
        return f"[bold yellow]Answer: {word}[/]"
    return None


def render_cells(word: str, snapshot: AnswerSnapshot) -> Text:
    """One slot per character: blanks as ``_``, letters upper-cased."""

    text = Text()
    for index, cell in enumerate(snapshot.cells):
        if word[index] == " ":
            text.append("   ")
            continue
        glyph = cell.upper() if cell else "_"
        if is_locked(word, index):
            style = "dim"
        elif index == snapshot.focus and not snapshot.answered:
            style = "bold reverse cyan"
        elif snapshot.state is AnswerState.SOLVED:
            style = "bold green"
        elif snapshot.revealed:
            style = "bold red"
        else:
            style = "bold"
        text.append(f" {glyph} ", style=style)
    return text


def _render_word(
    console: Console, state: QuizSessionState, topic_name: Optional[str]
) -> None:
    snapshot = state.snapshot()
    if snapshot is None:
        return
    word = state.current

    header = Text.assemble(
        (f"{topic_name} | " if topic_name else "", "bold magenta"),
        (f"Word {state.index + 1}", "bold cyan"),
        (f" / {state.total_words}", "dim"),
    )
    console.print()
    console.rule(header)
    console.print(Text(word.meaning or "(no meaning)", style="bold"))
    if word.pos:
        console.print(Text(f"({word.pos})", style="italic"))
    console.print(render_cells(word.word, snapshot))

    feedback = feedback_markup(snapshot)
    if feedback:
        console.print(feedback)
    if snapshot.answered:
        if word.example:
            console.print(Text.assemble(("Example: ", "bold"), word.example))
        if word.pronunciation:
            console.print(
                Text.assemble(("Pronunciation: ", "bold"), word.pronunciation)
            )
    console.print(Text(_HINT, style="dim"))
