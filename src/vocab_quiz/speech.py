"""Pronunciation playback through a local text-to-speech command.

Speech is optional: sessions call :meth:`Speaker.speak` and move on. A
speaker never raises into the caller; launch failures are logged and the
session carries on silently.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

DEFAULT_VOICE = "en-US"
DEFAULT_RATE = 0.8

# Words per minute the common engines use at rate 1.0.
_BASE_WPM = 175


class SpeechProcess(Protocol):
    def poll(self) -> Optional[int]:
        ...


Launcher = Callable[[Sequence[str]], SpeechProcess]


class Speaker(Protocol):
    def speak(self, text: str) -> bool:
        ...


@dataclass(frozen=True)
class SpeechConfig:
    enabled: bool = True
    command: Optional[str] = None
    voice: str = DEFAULT_VOICE
    rate: float = DEFAULT_RATE


class NullSpeaker:
    """Used when speech is disabled or no engine is installed."""

    def speak(self, text: str) -> bool:
        return False


def _popen(argv: Sequence[str]) -> SpeechProcess:
    return subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


def _espeak_argv(text: str, voice: str, rate: float) -> list[str]:
    return [
        "espeak",
        "-v",
        voice.lower(),
        "-s",
        str(round(_BASE_WPM * rate)),
        text,
    ]


def _spd_say_argv(text: str, voice: str, rate: float) -> list[str]:
    # spd-say takes a relative rate in [-100, 100] and a bare language code.
    relative = max(-100, min(100, round((rate - 1.0) * 100)))
    return ["spd-say", "-l", voice.split("-")[0], "-r", str(relative), text]


def _say_argv(text: str, voice: str, rate: float) -> list[str]:
    return ["say", "-r", str(round(_BASE_WPM * rate)), text]


_ENGINES: tuple[tuple[str, Callable[[str, str, float], list[str]]], ...] = (
    ("espeak", _espeak_argv),
    ("spd-say", _spd_say_argv),
    ("say", _say_argv),
)


class CommandSpeaker:
    """Speak by launching a command without waiting for it.

    ``command`` is either a known engine name (``espeak``, ``spd-say``,
    ``say``) or a template whose ``{text}``, ``{voice}`` and ``{rate}``
    placeholders are filled per call, e.g. ``"flite -t {text}"``.
    """

    def __init__(
        self,
        command: str,
        *,
        voice: str = DEFAULT_VOICE,
        rate: float = DEFAULT_RATE,
        launcher: Optional[Launcher] = None,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self.command = command
        self.voice = voice
        self.rate = rate
        self._launch = launcher or _popen
        self._log = log or logger
        self._process: Optional[SpeechProcess] = None

    def argv_for(self, text: str) -> list[str]:
        for name, builder in _ENGINES:
            if self.command == name:
                return builder(text, self.voice, self.rate)
        return [
            part.format(text=text, voice=self.voice, rate=self.rate)
            for part in shlex.split(self.command)
        ]

    def speak(self, text: str) -> bool:
        text = text.strip()
        if not text:
            return False
        try:
            argv = self.argv_for(text)
            self._reap()
            self._process = self._launch(argv)
        except (OSError, ValueError, KeyError, IndexError) as exc:
            self._log.warning(
                "Speech command failed: %s",
                exc,
                extra={"event": "speech_failed", "command": self.command},
            )
            return False
        self._log.debug(
            "Speaking %r",
            text,
            extra={"event": "speech", "command": argv[0]},
        )
        return True

    def _reap(self) -> None:
        # Waits on the previous utterance only if it has already exited.
        if self._process is not None:
            self._process.poll()
            self._process = None


def detect_command(
    which: Callable[[str], Optional[str]] = shutil.which,
) -> Optional[str]:
    for name, _builder in _ENGINES:
        if which(name):
            return name
    return None


def build_speaker(
    config: SpeechConfig,
    *,
    which: Callable[[str], Optional[str]] = shutil.which,
    launcher: Optional[Launcher] = None,
    log: Optional[logging.Logger] = None,
) -> Speaker:
    """Return the speaker described by ``config``."""

    log = log or logger
    if not config.enabled:
        return NullSpeaker()
    command = config.command or detect_command(which)
    if command is None:
        log.info(
            "No text-to-speech command found; pronunciation disabled.",
            extra={"event": "speech_unavailable"},
        )
        return NullSpeaker()
    return CommandSpeaker(
        command,
        voice=config.voice,
        rate=config.rate,
        launcher=launcher,
        log=log,
    )
