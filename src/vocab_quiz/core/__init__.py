"""Core shared helpers for vocab-quiz commands."""

from __future__ import annotations

from .config_templates import (
    ConfigTemplate,
    ConfigTemplateError,
    get_template,
    iter_templates,
)
from .logging import JsonLogFormatter, configure_logger
from .workspace import (
    WORKSPACE_ENV,
    WorkspaceError,
    WorkspaceLayout,
    describe_layout,
    ensure_workspace,
)

__all__ = [
    "ConfigTemplate",
    "ConfigTemplateError",
    "get_template",
    "iter_templates",
    "configure_logger",
    "JsonLogFormatter",
    "ensure_workspace",
    "describe_layout",
    "WorkspaceLayout",
    "WorkspaceError",
    "WORKSPACE_ENV",
]
