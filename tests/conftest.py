"""
Pytest configuration and shared fixtures for configtree tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from configtree.files import set_default_loader
from configtree.logging import get_global_logger, set_global_logger


class RecordingLogger:
    """Logger that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str, str]] = []

    def verbose(self, prefix: str, message: str) -> None:
        self.messages.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.messages.append(("debug", prefix, message))

    def warning(self, prefix: str, message: str) -> None:
        self.messages.append(("warning", prefix, message))

    def of_level(self, level: str) -> list[str]:
        return [message for lvl, _, message in self.messages if lvl == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that records messages instead of printing them."""
    return RecordingLogger()


@pytest.fixture(autouse=True)
def isolate_globals():
    """Restore the global logger and default loader after each test."""
    logger = get_global_logger()
    yield
    set_global_logger(logger)
    set_default_loader(None)


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """
    Provide nested configuration data.

    Mixes mappings, lists, empty composites and falsy scalars.
    """
    return {
        "app": {
            "name": "Demo",
            "debug": False,
            "workers": 4,
        },
        "db": {
            "hosts": ["db1.example.com", "db2.example.com"],
            "options": {"timeout": 0, "ssl": None},
        },
        "plugins": [
            {"name": "cache", "enabled": True},
            {"name": "mail", "settings": {}},
        ],
        "tags": [],
        "extras": {},
        "motd": "",
    }


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("conf.db.yaml", {"config": {"host": "x"}})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
