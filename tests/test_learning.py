from __future__ import annotations

import pytest
from rich.console import Console

from vocab_quiz.learning import (
    LearningSessionResult,
    LearningSessionState,
    build_card,
    parse_learning_command,
    run_learning_session,
)
from vocab_quiz.topics.models import Word

WORDS = [
    Word(
        word="hello",
        meaning="xin chao",
        pos="interjection",
        example="Hello, how are you?",
        pronunciation="/he'loo/",
    ),
    Word(word="goodbye", meaning="tam biet"),
]


def make_provider(commands: list[str]):
    iterator = iter(commands)

    def _provider() -> str:
        return next(iterator)

    return _provider


class RecordingSpeaker:
    def __init__(self) -> None:
        self.spoken: list[str] = []

    def speak(self, text: str) -> bool:
        self.spoken.append(text)
        return True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", "next"),
        ("n", "next"),
        (" Next ", "next"),
        ("p", "prev"),
        ("/prev", "prev"),
        ("s", "speak"),
        ("say", "speak"),
        ("quiz", "quiz"),
        ("q", "quit"),
        ("exit", "quit"),
        ("bogus", None),
        (None, None),
    ],
)
def test_parse_learning_command(raw, expected) -> None:
    assert parse_learning_command(raw) == expected


def test_learning_state_clamps_navigation() -> None:
    state = LearningSessionState(list(WORDS))

    assert state.previous() is False
    assert state.next() is True
    assert state.current.word == "goodbye"
    assert state.next() is False
    assert state.go_to(0) is True
    assert state.go_to(-1) is False
    assert state.index == 0


def test_build_card_shows_all_fields() -> None:
    console = Console(record=True, width=100)

    console.print(build_card(WORDS[0]))

    rendered = console.export_text()
    for text in ("hello", "xin chao", "interjection", "Hello, how are you?"):
        assert text in rendered


def test_run_learning_session_walks_cards_and_speaks() -> None:
    console = Console(record=True, width=100, force_terminal=True)
    speaker = RecordingSpeaker()
    provider = make_provider(["s", "p", "", "n", "p", "q"])

    result = run_learning_session(
        WORDS, console, provider, topic_name="Greetings", speaker=speaker
    )

    assert result == LearningSessionResult("quit", 0)
    assert speaker.spoken == ["hello"]
    rendered = console.export_text()
    assert "Greetings | Card 1 / 2" in rendered
    assert "Card 2 / 2" in rendered
    assert "Already at the first word." in rendered
    assert "Already at the last word." in rendered
    assert "Ending learning session." in rendered


def test_run_learning_session_hands_off_to_quiz() -> None:
    console = Console(record=True, width=100)

    result = run_learning_session(WORDS, console, make_provider(["n", "quiz"]))

    assert result == LearningSessionResult("quiz", 1)


def test_run_learning_session_handles_bad_input_and_interrupt() -> None:
    console = Console(record=True, width=100)

    result = run_learning_session(WORDS, console, make_provider(["???"]))

    assert result.exit_action == "quit"
    rendered = console.export_text()
    assert "Unrecognized command. Try again." in rendered
    assert "Session interrupted." in rendered


def test_run_learning_session_empty_topic() -> None:
    console = Console(record=True, width=100)

    result = run_learning_session([], console, make_provider([]))

    assert result == LearningSessionResult("empty", 0)
    assert "This topic has no words." in console.export_text()
