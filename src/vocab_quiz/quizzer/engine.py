"""Letter-by-letter answer entry for the fill-in-the-blank quiz.

An :class:`AnswerEngine` owns the answer buffer for a single word. The
buffer holds one cell per character of the target. Some cells are *locked*:
the first character, every space, and a trailing question mark. They are
pre-filled and never change through user input. Every other cell is
*editable* and starts blank.

Views feed key events in and render the :class:`AnswerSnapshot` that comes
back. Focus is plain data here; moving the real input focus is the view's
job. Once the word is answered (solved, failed or revealed) the engine
ignores every further edit until :meth:`AnswerEngine.reset` is called for
another word.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from vocab_quiz.topics.models import Word

__all__ = [
    "AnswerEngine",
    "AnswerSnapshot",
    "AnswerState",
    "KeyEvent",
    "KeyKind",
    "Verdict",
    "first_editable",
    "is_answer_character",
    "is_editable",
    "is_locked",
    "next_editable",
    "previous_editable",
]

BLANK = ""
_ANSWER_CHARACTERS = frozenset(string.ascii_letters + "'")


class Verdict(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


class AnswerState(Enum):
    """Where the current word is in its lifecycle."""

    ENTERING = "entering"
    SOLVED = "solved"
    REVEALED_WRONG = "revealed-wrong"
    REVEALED_EXPLICIT = "revealed-explicit"

    @property
    def is_terminal(self) -> bool:
        return self is not AnswerState.ENTERING


class KeyKind(Enum):
    CHARACTER = "character"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    REVEAL = "reveal"
    SUBMIT = "submit"
    OTHER = "other"


_KEY_ALIASES = {
    "backspace": KeyKind.BACKSPACE,
    "left": KeyKind.LEFT,
    "arrowleft": KeyKind.LEFT,
    "right": KeyKind.RIGHT,
    "arrowright": KeyKind.RIGHT,
    "enter": KeyKind.ENTER,
    "return": KeyKind.ENTER,
    "reveal": KeyKind.REVEAL,
    "submit": KeyKind.SUBMIT,
}


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: Optional[str] = None

    @classmethod
    def from_key(cls, key: str) -> "KeyEvent":
        """Normalise a view-layer key name.

        Single characters are kept verbatim (``"A"`` stays ``"A"``); named
        keys are matched case-insensitively. Anything unknown maps to
        :attr:`KeyKind.OTHER`.
        """

        if len(key) == 1:
            return cls(KeyKind.CHARACTER, key)
        kind = _KEY_ALIASES.get(key.strip().lower().replace("_", ""))
        if kind is None:
            return cls(KeyKind.OTHER)
        return cls(kind)


def is_locked(word: str, index: int) -> bool:
    """True for the first character, spaces, and a trailing ``?``."""

    if index == 0:
        return True
    char = word[index]
    if char == " ":
        return True
    return char == "?" and index == len(word) - 1


def is_editable(word: str, index: int) -> bool:
    return 0 <= index < len(word) and not is_locked(word, index)


def next_editable(word: str, index: int) -> Optional[int]:
    """Lowest editable index strictly greater than ``index``."""

    for candidate in range(max(index + 1, 0), len(word)):
        if not is_locked(word, candidate):
            return candidate
    return None


def previous_editable(word: str, index: int) -> Optional[int]:
    """Highest editable index strictly less than ``index``."""

    for candidate in range(min(index, len(word)) - 1, -1, -1):
        if not is_locked(word, candidate):
            return candidate
    return None


def first_editable(word: str) -> Optional[int]:
    return next_editable(word, 0)


def is_answer_character(char: str) -> bool:
    return len(char) == 1 and char in _ANSWER_CHARACTERS


def _initial_cell(word: str, index: int) -> str:
    if not is_locked(word, index):
        return BLANK
    return word[index].lower()


@dataclass(frozen=True)
class AnswerSnapshot:
    """Immutable view of the engine state for rendering."""

    cells: tuple[str, ...]
    focus: Optional[int]
    state: AnswerState
    verdict: Optional[Verdict]
    correct_word: Optional[str]

    @property
    def answered(self) -> bool:
        return self.state.is_terminal

    @property
    def revealed(self) -> bool:
        return self.state in (
            AnswerState.REVEALED_WRONG,
            AnswerState.REVEALED_EXPLICIT,
        )

    @property
    def text(self) -> str:
        return "".join(self.cells)

    def render(self, blank: str = "_") -> str:
        return "".join(cell if cell else blank for cell in self.cells)


class AnswerEngine:
    """Answer buffer, focus and verdict for one word at a time."""

    def __init__(self, word: Word) -> None:
        self._word = word
        self._cells: list[str] = []
        self._focus: Optional[int] = None
        self._state = AnswerState.ENTERING
        self._verdict: Optional[Verdict] = None
        self.reset(word)

    # -- state accessors -------------------------------------------------

    @property
    def word(self) -> Word:
        return self._word

    @property
    def target(self) -> str:
        return self._word.word

    @property
    def cells(self) -> tuple[str, ...]:
        return tuple(self._cells)

    @property
    def focus(self) -> Optional[int]:
        return self._focus

    @property
    def state(self) -> AnswerState:
        return self._state

    @property
    def verdict(self) -> Optional[Verdict]:
        return self._verdict

    @property
    def answered(self) -> bool:
        return self._state.is_terminal

    @property
    def revealed(self) -> bool:
        return self.snapshot().revealed

    def is_locked(self, index: int) -> bool:
        return 0 <= index < len(self.target) and is_locked(self.target, index)

    def is_editable(self, index: int) -> bool:
        return is_editable(self.target, index)

    def snapshot(self) -> AnswerSnapshot:
        return AnswerSnapshot(
            cells=tuple(self._cells),
            focus=self._focus,
            state=self._state,
            verdict=self._verdict,
            correct_word=self.target if self.answered else None,
        )

    # -- lifecycle -------------------------------------------------------

    def reset(self, word: Optional[Word] = None) -> AnswerSnapshot:
        """Start over, optionally with a different word."""

        if word is not None:
            self._word = word
        target = self.target
        self._cells = [_initial_cell(target, i) for i in range(len(target))]
        self._focus = first_editable(target)
        self._verdict = None
        if target:
            self._state = AnswerState.ENTERING
        else:
            # Nothing to type: an empty word is already solved.
            self._state = AnswerState.SOLVED
            self._verdict = Verdict.CORRECT
        return self.snapshot()

    # -- input -----------------------------------------------------------

    def handle_key(
        self, key: Union[str, KeyEvent], index: Optional[int] = None
    ) -> AnswerSnapshot:
        """Apply one key press at ``index`` (the focus when omitted)."""

        event = key if isinstance(key, KeyEvent) else KeyEvent.from_key(key)
        if event.kind in (KeyKind.ENTER, KeyKind.SUBMIT):
            self.submit()
        elif event.kind is KeyKind.REVEAL:
            self.reveal()
        elif event.kind is KeyKind.CHARACTER and event.char is not None:
            self.type_character(event.char, index)
        elif event.kind is KeyKind.BACKSPACE:
            self.backspace(index)
        elif event.kind is KeyKind.LEFT:
            self.move_left(index)
        elif event.kind is KeyKind.RIGHT:
            self.move_right(index)
        return self.snapshot()

    def _target_index(self, index: Optional[int]) -> Optional[int]:
        if self.answered:
            return None
        position = self._focus if index is None else index
        if position is None or not self.is_editable(position):
            return None
        return position

    def type_character(self, char: str, index: Optional[int] = None) -> bool:
        position = self._target_index(index)
        if position is None or not is_answer_character(char):
            return False
        self._cells[position] = char.lower()
        following = next_editable(self.target, position)
        self._focus = position if following is None else following
        return True

    def backspace(self, index: Optional[int] = None) -> bool:
        position = self._target_index(index)
        if position is None:
            return False
        self._cells[position] = BLANK
        preceding = previous_editable(self.target, position)
        if preceding is not None:
            self._focus = preceding
        return True

    def move_left(self, index: Optional[int] = None) -> bool:
        position = self._target_index(index)
        if position is None:
            return False
        preceding = previous_editable(self.target, position)
        if preceding is None:
            return False
        self._focus = preceding
        return True

    def move_right(self, index: Optional[int] = None) -> bool:
        position = self._target_index(index)
        if position is None:
            return False
        following = next_editable(self.target, position)
        if following is None:
            return False
        self._focus = following
        return True

    def set_focus(self, index: int) -> bool:
        """Move focus to ``index`` if it is an editable cell."""

        if self.answered or not self.is_editable(index):
            return False
        self._focus = index
        return True

    # -- outcomes --------------------------------------------------------

    def submit(self) -> Optional[Verdict]:
        """Check the buffer against the target.

        A wrong answer reveals the target in the buffer. Submitting again
        after the word is answered changes nothing and returns the existing
        verdict (``None`` after an explicit reveal).
        """

        if self.answered:
            return self._verdict
        if "".join(self._cells).lower() == self.target.lower():
            self._state = AnswerState.SOLVED
            self._verdict = Verdict.CORRECT
        else:
            self._fill_answer()
            self._state = AnswerState.REVEALED_WRONG
            self._verdict = Verdict.INCORRECT
        return self._verdict

    def reveal(self) -> bool:
        """Give up on the word and show the answer without a verdict."""

        if self.answered:
            return False
        self._fill_answer()
        self._state = AnswerState.REVEALED_EXPLICIT
        self._verdict = None
        return True

    def _fill_answer(self) -> None:
        self._cells = [char.lower() for char in self.target]
