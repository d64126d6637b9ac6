"""Shared test fixtures for the substackify test suite."""

from __future__ import annotations

import pytest

from substackify.config import SubstackifyConfig
from substackify.converter.md_to_doc import MarkdownToDocConverter


@pytest.fixture
def config() -> SubstackifyConfig:
    """Default test configuration."""
    return SubstackifyConfig()


@pytest.fixture
def converter(config: SubstackifyConfig) -> MarkdownToDocConverter:
    """Markdown-to-document converter using the default test config."""
    return MarkdownToDocConverter(config)
