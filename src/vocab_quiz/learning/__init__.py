from .session import (
    LearningSessionResult,
    LearningSessionState,
    build_card,
    parse_learning_command,
    run_learning_session,
)

__all__ = [
    "LearningSessionResult",
    "LearningSessionState",
    "build_card",
    "parse_learning_command",
    "run_learning_session",
]
