"""Configuration loader for learning and quiz sessions."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

from vocab_quiz.core import workspace as workspace_mod
from vocab_quiz.speech import DEFAULT_RATE, DEFAULT_VOICE, SpeechConfig

CONFIG_FILENAME = "vocab_quiz.toml"
CONFIG_ENV = "VOCAB_QUIZ_CONFIG"
ENV_PREFIX = "VOCAB_QUIZ_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class VocabConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


class Interface(Enum):
    CONSOLE = "console"
    TUI = "tui"

    @classmethod
    def from_value(cls, value: str) -> "Interface":
        normalized = value.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        expected = ", ".join(member.value for member in cls)
        raise VocabConfigError(
            f"Unknown interface '{value}'. Expected one of: {expected}."
        )


@dataclass(frozen=True)
class VocabConfig:
    """Fully resolved settings for a session."""

    topics_dir: Optional[Path]
    shuffle: bool
    interface: Interface
    speech: SpeechConfig
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """Command-line values layered over env and file settings."""

    topics_dir: Optional[Path] = None
    shuffle: Optional[bool] = None
    interface: Optional[Interface] = None
    speech_enabled: Optional[bool] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: VocabConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load settings applying precedence CLI > env > TOML > defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    layout = workspace_mod.ensure_workspace(env=env_map, path=workspace_path)
    requested = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    table = _default_table()
    loaded_path: Optional[Path] = None
    if requested.exists():
        loaded_path = requested
        _apply_file_settings(
            table, _read_config_file(requested), source=requested
        )
    elif config_path is not None or _env_string(env_map, "CONFIG"):
        raise VocabConfigError(f"Config file not found: {requested}")

    topics_dir = _resolve_topics_dir(
        _pick_first(
            overrides.topics_dir,
            _env_path(env_map, "TOPICS_DIR"),
            _coerce_optional_path(table["paths"]["topics_dir"]),
        ),
        layout=layout,
    )
    shuffle = _require_bool(
        _pick_first(
            overrides.shuffle,
            _env_bool(env_map, "SHUFFLE"),
            table["quiz"]["shuffle"],
        ),
        field="quiz.shuffle",
    )
    interface = _resolve_interface(
        _pick_first(
            overrides.interface,
            _env_string(env_map, "INTERFACE"),
            table["quiz"]["interface"],
        )
    )
    speech = _build_speech(
        table["speech"],
        enabled=_pick_first(
            overrides.speech_enabled,
            _env_bool(env_map, "SPEECH"),
            table["speech"]["enabled"],
        ),
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            table["logging"]["level"],
        )
    )

    config = VocabConfig(
        topics_dir=topics_dir,
        shuffle=shuffle,
        interface=interface,
        speech=speech,
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, Any]]:
    return {
        "paths": {"topics_dir": None},
        "quiz": {"shuffle": True, "interface": Interface.CONSOLE.value},
        "speech": {
            "enabled": True,
            "command": None,
            "voice": DEFAULT_VOICE,
            "rate": DEFAULT_RATE,
        },
        "logging": {"level": "INFO"},
    }


def _read_config_file(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise VocabConfigError(f"Cannot read config {path}: {exc}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise VocabConfigError(f"{path}: invalid TOML ({exc}).") from exc


def _apply_file_settings(
    table: MutableMapping[str, Any],
    settings: Mapping[str, Any],
    *,
    source: Path,
    prefix: str = "",
) -> None:
    """Layer ``settings`` from ``source`` over the defaults in ``table``.

    Keys missing from the defaults, or a value where a table is expected,
    raise :class:`VocabConfigError` naming the dotted key.
    """

    for key, value in settings.items():
        dotted = f"{prefix}{key}"
        if key not in table:
            expected = ", ".join(f"{prefix}{name}" for name in table)
            raise VocabConfigError(
                f"{source}: unknown setting '{dotted}' "
                f"(expected one of: {expected})."
            )
        current = table[key]
        if isinstance(current, MutableMapping):
            if not isinstance(value, Mapping):
                raise VocabConfigError(
                    f"{source}: '{dotted}' must be a table, "
                    f"found {type(value).__name__}."
                )
            _apply_file_settings(
                current, value, source=source, prefix=f"{dotted}."
            )
            continue
        table[key] = value


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = _env_string(env_map, "CONFIG")
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _resolve_topics_dir(
    candidate: object, *, layout: workspace_mod.WorkspaceLayout
) -> Optional[Path]:
    if candidate is None:
        return None
    path = Path(candidate).expanduser()  # type: ignore[arg-type]
    if not path.is_absolute():
        path = layout.home / path
    return path.resolve()


def _build_speech(
    section: Mapping[str, Any], *, enabled: object
) -> SpeechConfig:
    command = section.get("command")
    if command is not None and (
        not isinstance(command, str) or not command.strip()
    ):
        raise VocabConfigError(
            "speech.command must be a non-empty string when set."
        )
    voice = section.get("voice")
    if not isinstance(voice, str) or not voice.strip():
        raise VocabConfigError("speech.voice must be a non-empty string.")
    rate = section.get("rate")
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        raise VocabConfigError("speech.rate must be a number.")
    if not 0.1 <= float(rate) <= 10.0:
        raise VocabConfigError("speech.rate must be between 0.1 and 10.0.")
    return SpeechConfig(
        enabled=_require_bool(enabled, field="speech.enabled"),
        command=command.strip() if command else None,
        voice=voice.strip(),
        rate=float(rate),
    )


def _resolve_interface(value: object) -> Interface:
    if isinstance(value, Interface):
        return value
    if isinstance(value, str):
        return Interface.from_value(value)
    raise VocabConfigError("quiz.interface must be 'console' or 'tui'.")


def _resolve_log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise VocabConfigError("logging.level must be a non-empty string.")
    return value.strip().upper()


def _require_bool(value: object, *, field: str) -> bool:
    if not isinstance(value, bool):
        raise VocabConfigError(f"'{field}' must be a boolean.")
    return value


def _coerce_optional_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, str):
        raw = value.strip()
        return Path(raw) if raw else None
    raise VocabConfigError("paths.topics_dir must be a string when provided.")


def _env_string(env_map: Mapping[str, str], key: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{key}")
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _env_path(env_map: Mapping[str, str], key: str) -> Optional[Path]:
    raw = _env_string(env_map, key)
    return Path(raw).expanduser() if raw is not None else None


def _env_bool(env_map: Mapping[str, str], key: str) -> Optional[bool]:
    raw = _env_string(env_map, key)
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise VocabConfigError(
        f"{ENV_PREFIX}{key} must be a boolean (true/false), got '{raw}'."
    )


def _pick_first(*candidates: object) -> object:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
