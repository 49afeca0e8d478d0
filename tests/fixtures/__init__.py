"""Shared testing fixtures for the vocab_quiz test suite."""

from .topics import SAMPLE_TOPICS, write_topics  # noqa: F401

__all__ = ["SAMPLE_TOPICS", "write_topics"]
