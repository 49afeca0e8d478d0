"""Settings for vocab-quiz sessions and the ``vocab config`` command."""

from __future__ import annotations

from .loader import (
    CONFIG_ENV,
    CONFIG_FILENAME,
    ConfigOverrides,
    Interface,
    LoadResult,
    VocabConfig,
    VocabConfigError,
    load_config,
)

__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILENAME",
    "ConfigOverrides",
    "Interface",
    "LoadResult",
    "VocabConfig",
    "VocabConfigError",
    "load_config",
]
