from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from vocab_quiz.core import logging as core_logging


def _close(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def _console_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        handler
        for handler in logger.handlers
        if getattr(handler, "_vocab_quiz_console", False)
    ]


def test_configure_logger_writes_json_lines(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "vocab_quiz.test_json",
        log_dir=tmp_path / "logs",
        filename="quiz.log",
    )

    logger.info("word solved", extra={"event": "word_answered", "index": 2})
    logger.debug("hidden at INFO")
    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception(
            "failed",
            extra={"path": Path("/tmp/x"), "items": (1, {"k": object})},
        )
    for handler in logger.handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["message"] == "word solved"
    assert first["level"] == "INFO"
    assert first["logger"] == "vocab_quiz.test_json"
    assert first["extra"] == {"event": "word_answered", "index": 2}

    second = json.loads(lines[1])
    assert "ValueError: boom" in second["exception"]
    assert second["extra"]["path"] == "/tmp/x"
    assert second["extra"]["items"][0] == 1
    assert second["extra"]["items"][1]["k"].startswith("<class")

    _close(logger)


def test_configure_logger_default_filename_and_level(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "vocab_quiz.quizzer_test",
        log_dir=tmp_path / "logs",
        level="warning",
    )

    assert log_path.name == "quizzer_test.log"
    logger.info("skipped")
    logger.warning("kept")
    for handler in logger.handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["kept"]

    _close(logger)


def test_configure_logger_reuses_file_handler(tmp_path):
    name = "vocab_quiz.test_reuse"
    logger, first = core_logging.configure_logger(
        name, log_dir=tmp_path / "a", filename="reuse.log"
    )
    again, second = core_logging.configure_logger(
        name, log_dir=tmp_path / "b", filename="reuse.log"
    )

    assert again is logger
    assert len(logger.handlers) == 1
    assert second == tmp_path / "b" / "reuse.log"
    logger.info("moved")
    logger.handlers[0].flush()
    assert "moved" in second.read_text(encoding="utf-8")
    assert first.read_text(encoding="utf-8") == ""

    _close(logger)


def test_console_handler_toggle(tmp_path):
    name = "vocab_quiz.test_toggle"
    log_dir = tmp_path / "logs"

    logger, _ = core_logging.configure_logger(
        name, log_dir=log_dir, verbose=True
    )
    assert len(_console_handlers(logger)) == 1

    core_logging.configure_logger(name, log_dir=log_dir, verbose=True)
    assert len(_console_handlers(logger)) == 1

    core_logging.configure_logger(name, log_dir=log_dir, verbose=False)
    assert not _console_handlers(logger)

    _close(logger)


def test_configure_logger_falls_back_when_dir_blocked(tmp_path, monkeypatch):
    target = tmp_path / "blocked"
    fallback = tmp_path / "fallback"
    original_mkdir = Path.mkdir

    def fake_mkdir(self, *args, **kwargs):  # noqa: ANN001
        if self == target:
            raise PermissionError("denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", fake_mkdir)
    monkeypatch.setattr(core_logging, "_fallback_log_dir", lambda: fallback)

    logger, log_path = core_logging.configure_logger(
        "vocab_quiz.test_blocked", log_dir=target, filename="blocked.log"
    )

    assert log_path == fallback / "blocked.log"
    assert log_path.exists()

    _close(logger)


def test_configure_logger_falls_back_when_handler_fails(tmp_path, monkeypatch):
    calls = {"count": 0}
    fallback = tmp_path / "rotate-fallback"
    original_handler = core_logging.RotatingFileHandler

    def fake_handler(path, *args, **kwargs):  # noqa: ANN001
        calls["count"] += 1
        if calls["count"] == 1:
            raise PermissionError("denied")
        return original_handler(path, *args, **kwargs)

    monkeypatch.setattr(core_logging, "RotatingFileHandler", fake_handler)
    monkeypatch.setattr(core_logging, "_fallback_log_dir", lambda: fallback)

    logger, log_path = core_logging.configure_logger(
        "vocab_quiz.test_rotate", log_dir=tmp_path / "primary"
    )

    assert log_path.parent == fallback
    assert calls["count"] == 2

    _close(logger)


def test_fallback_log_dir_uses_tempdir(tmp_path, monkeypatch):
    monkeypatch.setattr(tempfile, "gettempdir", lambda: str(tmp_path))

    assert core_logging._fallback_log_dir() == tmp_path / "vocab-quiz-logs"


def test_coerce_level_defaults_to_info():
    assert core_logging._coerce_level("bogus") == logging.INFO
    assert core_logging._coerce_level(" debug ") == logging.DEBUG
