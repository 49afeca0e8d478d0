from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from fixtures import write_topics  # noqa: E402

# Ensure src/ is importable when the package is not installed
SRC_DIR = TESTS_DIR.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

_ENV_KEYS = (
    "VOCAB_QUIZ_CONFIG",
    "VOCAB_QUIZ_TOPICS_DIR",
    "VOCAB_QUIZ_SHUFFLE",
    "VOCAB_QUIZ_INTERFACE",
    "VOCAB_QUIZ_SPEECH",
    "VOCAB_QUIZ_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[Path]:
    """Point the workspace at tmp and clear any user overrides."""

    home = tmp_path / "vocab-home"
    monkeypatch.setenv("VOCAB_QUIZ_DATA_HOME", str(home))
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield home
    for name in list(logging.root.manager.loggerDict):
        if not name.startswith("vocab_quiz"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def topics_dir(tmp_path: Path) -> Path:
    """A topics tree with three small topics across three levels."""

    return write_topics(tmp_path / "topics")
