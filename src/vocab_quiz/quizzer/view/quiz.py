"""Textual front end for the fill-in-the-blank quiz."""

from __future__ import annotations

from typing import Optional, Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Footer, Static

from vocab_quiz.speech import NullSpeaker, Speaker
from vocab_quiz.topics.models import Word

from ..engine import AnswerEngine, AnswerSnapshot, AnswerState, is_locked
from ..session import QuizSessionState

_FORWARDED_KEYS = {"backspace", "left", "right", "enter"}

_FEEDBACK_CLASSES = {
    AnswerState.SOLVED: "correct",
    AnswerState.REVEALED_WRONG: "wrong",
    AnswerState.REVEALED_EXPLICIT: "revealed",
}


class QuizApp(App):
    CSS = """
#cells { height: 3; }
.cell { width: 5; content-align: center middle; }
.cell.locked { color: $text-muted; }
.cell.space { width: 2; }
.cell.focus { background: $accent; color: black; }
#feedback.correct { color: $success; }
#feedback.wrong { color: $error; }
#feedback.revealed { color: $warning; }
"""
    BINDINGS = [
        ("pagedown", "next", "Next word"),
        ("pageup", "prev", "Previous word"),
        ("ctrl+r", "reveal", "Show answer"),
        ("ctrl+s", "speak", "Pronounce"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(
        self,
        words: Sequence[Word],
        *,
        topic_name: Optional[str] = None,
        speaker: Optional[Speaker] = None,
    ) -> None:
        super().__init__()
        self._state = QuizSessionState(list(words))
        self._topic_name = topic_name
        self._speaker = speaker or NullSpeaker()

    def compose(self) -> ComposeResult:
        if not self._state.words:
            yield Static("This topic has no words.", id="empty")
            return
        yield Static(self.progress_text(), id="progress")
        with Container(id="stage"):
            yield self._word_view()
        yield Footer()

    def _word_view(self) -> "WordView":
        return WordView(
            self._state.current,
            self.snapshot(),
            feedback=self.feedback_text(),
            details=self.details_text(),
        )

    # Pure helpers (testable without running the App)

    @property
    def state(self) -> QuizSessionState:
        return self._state

    def snapshot(self) -> AnswerSnapshot:
        return self._active_engine().snapshot()

    def _active_engine(self) -> AnswerEngine:
        engine = self._state.engine
        if engine is None:
            raise RuntimeError("This quiz has no words.")
        return engine

    def progress_text(self) -> str:
        prefix = f"{self._topic_name} | " if self._topic_name else ""
        return (
            f"{prefix}Word {self._state.index + 1} / {self._state.total_words}"
        )

    def cells_text(self) -> list[str]:
        return [cell.upper() if cell else "_" for cell in self.snapshot().cells]

    def feedback_text(self) -> str:
        snapshot = self.snapshot()
        if snapshot.state is AnswerState.SOLVED:
            return "Correct!"
        if snapshot.state is AnswerState.REVEALED_WRONG:
            return f"Incorrect. The answer is: {snapshot.correct_word}"
        if snapshot.state is AnswerState.REVEALED_EXPLICIT:
            return f"Answer: {snapshot.correct_word}"
        return ""

    def details_text(self) -> str:
        if not self.snapshot().answered:
            return ""
        word = self._state.current
        lines = []
        if word.example:
            lines.append(f"Example: {word.example}")
        if word.pronunciation:
            lines.append(f"Pronunciation: {word.pronunciation}")
        return "\n".join(lines)

    def press_key(
        self, key: str, index: Optional[int] = None
    ) -> AnswerSnapshot:
        snapshot = self._active_engine().handle_key(key, index)
        self._update_stage()
        return snapshot

    def focus_cell(self, index: int) -> bool:
        moved = self._active_engine().set_focus(index)
        if moved:
            self._update_stage()
        return moved

    def check_answer(self) -> AnswerSnapshot:
        return self.press_key("enter")

    def reveal_answer(self) -> AnswerSnapshot:
        return self.press_key("reveal")

    def next_word(self) -> int:
        if self._state.next():
            self._update_stage()
        return self._state.index

    def prev_word(self) -> int:
        if self._state.previous():
            self._update_stage()
        return self._state.index

    def speak_word(self) -> bool:
        if not self._state.words or not self.snapshot().answered:
            return False
        return self._speaker.speak(self._state.current.word)

    def _update_stage(self) -> None:
        if not self.is_running:
            return
        try:
            stage = self.query_one("#stage", Container)
            progress = self.query_one("#progress", Static)
        except NoMatches:
            return
        progress.update(self.progress_text())
        stage.remove_children()
        stage.mount(self._word_view())

    # Textual event handlers

    def on_key(self, event: events.Key) -> None:
        if not self._state.words:
            return
        if event.key in _FORWARDED_KEYS:
            key = event.key
        elif event.is_printable and event.character:
            key = event.character
        else:
            return
        event.stop()
        event.prevent_default()
        self.press_key(key)

    def action_next(self) -> None:
        if self._state.words:
            self.next_word()

    def action_prev(self) -> None:
        if self._state.words:
            self.prev_word()

    def action_reveal(self) -> None:
        if self._state.words:
            self.reveal_answer()

    def action_speak(self) -> None:
        self.speak_word()


class Cell(Static):
    """One character slot; clicking it moves the focus there."""

    def __init__(self, glyph: str, *, index: int, classes: str = "") -> None:
        super().__init__(glyph, classes=classes)
        self.index = index

    def on_click(self, event: events.Click) -> None:
        event.stop()
        app = self.app
        if isinstance(app, QuizApp):
            app.focus_cell(self.index)


class WordView(Widget):
    """Meaning, answer cells and feedback for the active word."""

    DEFAULT_CSS = "WordView { height: auto; }"

    def __init__(
        self,
        word: Word,
        snapshot: AnswerSnapshot,
        *,
        feedback: str = "",
        details: str = "",
    ) -> None:
        super().__init__()
        self.word = word
        self.snapshot = snapshot
        self.feedback = feedback
        self.details = details

    def cell_classes(self, index: int) -> str:
        target = self.word.word
        if target[index] == " ":
            return "cell space"
        if is_locked(target, index):
            return "cell locked"
        if index == self.snapshot.focus and not self.snapshot.answered:
            return "cell focus"
        return "cell"

    def compose(self) -> ComposeResult:
        yield Static(self.word.meaning, id="meaning")
        yield Static(f"({self.word.pos})" if self.word.pos else "", id="pos")
        with Horizontal(id="cells"):
            for index, cell in enumerate(self.snapshot.cells):
                glyph = cell.upper() if cell.strip() else "_"
                if self.word.word[index] == " ":
                    glyph = " "
                yield Cell(glyph, index=index, classes=self.cell_classes(index))
        yield Static(
            self.feedback,
            id="feedback",
            classes=_FEEDBACK_CLASSES.get(self.snapshot.state, ""),
        )
        yield Static(self.details, id="details")
