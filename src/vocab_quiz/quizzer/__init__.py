from ._main import build_arg_parser
from .engine import (
    AnswerEngine,
    AnswerSnapshot,
    AnswerState,
    KeyEvent,
    KeyKind,
    Verdict,
    first_editable,
    is_answer_character,
    is_editable,
    is_locked,
    next_editable,
    previous_editable,
)
from .session import (
    QuizSessionResult,
    QuizSessionState,
    SessionCommand,
    parse_session_command,
    run_quiz_session,
    shuffle_words,
)
from .view.quiz import QuizApp, WordView

__all__ = [
    "build_arg_parser",
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
    "QuizSessionResult",
    "QuizSessionState",
    "SessionCommand",
    "parse_session_command",
    "run_quiz_session",
    "shuffle_words",
    "QuizApp",
    "WordView",
]
