"""Unified CLI entry point for vocab-quiz."""

from __future__ import annotations

import inspect
import sys
from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Callable, Iterable, Mapping, Optional, Sequence


@dataclass(frozen=True)
class CommandSpec:
    """Represents a vocab subcommand."""

    name: str
    summary: str
    module: str
    is_tui: bool = False

    def run(self, argv: Sequence[str]) -> int:
        return _run_module_command(
            self.module, "main", f"vocab {self.name}", argv
        )


_COMMAND_SPECS: Sequence[CommandSpec] = (
    CommandSpec(
        name="init",
        summary="Bootstrap the vocab-quiz workspace.",
        module="vocab_quiz.workspace.cli",
    ),
    CommandSpec(
        name="config",
        summary="Write the default vocab_quiz.toml template.",
        module="vocab_quiz.settings.cli",
    ),
    CommandSpec(
        name="topics",
        summary="List vocabulary topics grouped by level.",
        module="vocab_quiz.topics.cli",
    ),
    CommandSpec(
        name="learn",
        summary="Browse a topic's words as flashcards.",
        module="vocab_quiz.learning._main",
    ),
    CommandSpec(
        name="quiz",
        summary="Fill in the missing letters of each word in a topic.",
        module="vocab_quiz.quizzer._main",
        is_tui=True,
    ),
)

COMMANDS: Mapping[str, CommandSpec] = {
    spec.name: spec for spec in _COMMAND_SPECS
}


def _sorted_specs() -> Iterable[CommandSpec]:
    return _COMMAND_SPECS


def _command_name_width() -> int:
    return max(len(spec.name) for spec in _sorted_specs()) if COMMANDS else 0


def format_command_table() -> str:
    """Return a formatted command table for help output."""

    width = _command_name_width()
    lines = ["Available commands:"]
    for spec in _sorted_specs():
        name = spec.name.ljust(width)
        suffix = " (TUI)" if spec.is_tui else ""
        lines.append(f"  {name}  {spec.summary}{suffix}")
    return "\n".join(lines)


def format_usage() -> str:
    """Build the top-level usage banner with command listings."""

    parts = [
        "Usage: vocab <command> [args...]",
        "Run `vocab list` for commands or `vocab help <name>` for details.",
        "",
        format_command_table(),
    ]
    return "\n".join(parts)


def _print(
    text: str, *, stream: Optional[Callable[[str], None]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _handle_version() -> int:
    try:
        version = metadata.version("vocab-quiz")
    except metadata.PackageNotFoundError:
        version = "unknown"
    _print(version)
    return 0


def _handle_help(argv: Sequence[str]) -> int:
    if not argv:
        _print(format_usage())
        return 0

    spec = COMMANDS.get(argv[0])
    if not spec:
        _unknown_command(argv[0])
        return 2

    _print(f"{spec.name}: {spec.summary}")
    _print(f"Run `vocab {spec.name} --help` for CLI-specific options.")
    return 0


def _unknown_command(name: str) -> None:
    _print(f"Unknown command '{name}'.", stream=sys.stderr.write)
    _print(format_command_table(), stream=sys.stderr.write)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    if not args:
        _print(format_usage())
        return 2

    head, *tail = args

    if head in ("-h", "--help"):
        _print(format_usage())
        return 0

    if head in ("-V", "--version", "version"):
        return _handle_version()

    if head == "list":
        _print(format_command_table())
        return 0

    if head == "help":
        return _handle_help(tail)

    spec = COMMANDS.get(head)
    if spec is None:
        _unknown_command(head)
        return 2
    return spec.run(tail)


def _run_module_command(
    module_name: str,
    func_name: str,
    prog_name: str,
    argv: Sequence[str],
) -> int:
    module = import_module(module_name)
    target = getattr(module, func_name)
    return _invoke_main(target, prog_name, argv)


def _invoke_main(
    func: Callable[..., object], prog_name: str, argv: Sequence[str]
) -> int:
    takes_argv = _accepts_argv(func)
    args = list(argv)
    old_argv = sys.argv
    sys.argv = [prog_name, *args]
    try:
        result = func(args) if takes_argv else func()
    except SystemExit as exc:
        return _normalize_system_exit(exc)
    finally:
        sys.argv = old_argv

    return _normalize_return(result)


def _accepts_argv(func: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    for param in signature.parameters.values():
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            return True
    return False


def _normalize_return(result: object) -> int:
    if result is None:
        return 0
    if isinstance(result, int):
        return result
    return 0


def _normalize_system_exit(exc: SystemExit) -> int:
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    if isinstance(code, str):
        _print(code, stream=sys.stderr.write)
        return 1
    return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    raise SystemExit(main())
