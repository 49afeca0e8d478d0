from __future__ import annotations

import logging

import pytest

from vocab_quiz import speech
from vocab_quiz.speech import (
    CommandSpeaker,
    NullSpeaker,
    SpeechConfig,
    build_speaker,
    detect_command,
)


class FakeProcess:
    def __init__(self) -> None:
        self.polls = 0

    def poll(self):
        self.polls += 1
        return 0


class RecordingLauncher:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[list[str]] = []
        self.processes: list[FakeProcess] = []
        self.error = error

    def __call__(self, argv):
        self.calls.append(list(argv))
        if self.error is not None:
            raise self.error
        process = FakeProcess()
        self.processes.append(process)
        return process


def test_espeak_arguments_follow_voice_and_rate() -> None:
    launcher = RecordingLauncher()
    speaker = CommandSpeaker("espeak", launcher=launcher)

    assert speaker.speak("  thank you ") is True

    assert launcher.calls == [["espeak", "-v", "en-us", "-s", "140", "thank you"]]


def test_previous_speech_process_is_polled_before_next_launch() -> None:
    launcher = RecordingLauncher()
    speaker = CommandSpeaker("espeak", launcher=launcher)

    speaker.speak("cat")
    assert launcher.processes[0].polls == 0

    speaker.speak("dog")
    speaker.speak("bird")

    assert [process.polls for process in launcher.processes] == [1, 1, 0]


def test_spd_say_uses_relative_rate_and_language() -> None:
    speaker = CommandSpeaker("spd-say", rate=0.8)

    assert speaker.argv_for("hi") == ["spd-say", "-l", "en", "-r", "-20", "hi"]


def test_say_arguments() -> None:
    speaker = CommandSpeaker("say", rate=1.0)

    assert speaker.argv_for("hi") == ["say", "-r", "175", "hi"]


def test_custom_command_template() -> None:
    speaker = CommandSpeaker("flite -voice {voice} -t {text}", voice="en-GB")

    assert speaker.argv_for("a cat?") == [
        "flite",
        "-voice",
        "en-GB",
        "-t",
        "a cat?",
    ]


def test_blank_text_is_not_spoken() -> None:
    launcher = RecordingLauncher()

    assert CommandSpeaker("espeak", launcher=launcher).speak("   ") is False
    assert launcher.calls == []


@pytest.mark.parametrize(
    ("command", "error"),
    [
        ("espeak", FileNotFoundError("espeak")),
        ("espeak", PermissionError("denied")),
        ("tts {missing}", None),
        ("tts 'unterminated", None),
    ],
)
def test_speak_failures_are_logged_not_raised(
    command: str, error, caplog: pytest.LogCaptureFixture
) -> None:
    log = logging.getLogger("vocab_quiz.tests.speech")
    speaker = CommandSpeaker(
        command, launcher=RecordingLauncher(error), log=log
    )

    with caplog.at_level(logging.WARNING, logger=log.name):
        assert speaker.speak("hello") is False

    events = [getattr(record, "event", None) for record in caplog.records]
    assert events == ["speech_failed"]


def test_null_speaker_is_silent() -> None:
    assert NullSpeaker().speak("hello") is False


def test_detect_command_prefers_first_available() -> None:
    available = {"say", "spd-say"}

    assert detect_command(lambda name: name if name in available else None) == (
        "spd-say"
    )
    assert detect_command(lambda name: None) is None


def test_build_speaker_variants() -> None:
    def which(name):
        return "/usr/bin/espeak" if name == "espeak" else None

    disabled = build_speaker(SpeechConfig(enabled=False), which=which)
    assert isinstance(disabled, NullSpeaker)

    missing = build_speaker(SpeechConfig(), which=lambda name: None)
    assert isinstance(missing, NullSpeaker)

    detected = build_speaker(SpeechConfig(rate=1.5), which=which)
    assert isinstance(detected, CommandSpeaker)
    assert detected.command == "espeak"
    assert detected.rate == 1.5

    explicit = build_speaker(
        SpeechConfig(command="say", voice="en-GB"), which=which
    )
    assert isinstance(explicit, CommandSpeaker)
    assert explicit.command == "say"
    assert explicit.voice == "en-GB"


def test_defaults_match_learner_friendly_speed() -> None:
    assert speech.DEFAULT_RATE == 0.8
    assert speech.DEFAULT_VOICE == "en-US"
