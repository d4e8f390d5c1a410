"""
Tests for configtree.files.loader module.

Tests config file loading including:
- Include path resolution
- The ``config`` binding and load statuses
- Layering over a base configuration
- Error handling
- Environment-driven include path
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from configtree.exceptions import ConfigError
from configtree.files import (
    ConfigFileLoader,
    deep_merge,
    get_default_loader,
    include_path_from_env,
    set_default_loader,
)
from configtree.files.loader import INCLUDE_PATH_ENV


class TestResolve:
    """Tests for finding config files on the include path."""

    def test_resolve_existing_file(self, tmp_path, create_yaml_file):
        """Test that a file in a search directory is found."""
        path = create_yaml_file("conf.db.yaml", {"config": {}})
        loader = ConfigFileLoader([tmp_path])

        assert loader.resolve("db") == path.resolve()

    def test_resolve_missing_returns_none(self, tmp_path):
        """Test that an unknown identifier resolves to None."""
        assert ConfigFileLoader([tmp_path]).resolve("nope") is None

    def test_first_directory_wins(self, tmp_path, create_yaml_file):
        """Test that search directories are tried in order."""
        create_yaml_file("first/conf.app.yaml", {"config": {"from": "first"}})
        create_yaml_file("second/conf.app.yaml", {"config": {"from": "second"}})
        loader = ConfigFileLoader([tmp_path / "first", tmp_path / "second"])

        assert loader.load("app").config == {"from": "first"}

    def test_later_directory_used_when_earlier_lacks_file(
        self, tmp_path, create_yaml_file
    ):
        """Test falling through to a later search directory."""
        (tmp_path / "empty").mkdir()
        create_yaml_file("second/conf.app.yaml", {"config": {"from": "second"}})
        loader = ConfigFileLoader([str(tmp_path / "empty"), str(tmp_path / "second")])

        assert loader.load("app").config == {"from": "second"}

    def test_custom_pattern(self, tmp_path, create_yaml_file):
        """Test a custom file name pattern."""
        create_yaml_file("db.yml", {"config": {"host": "x"}})
        loader = ConfigFileLoader([tmp_path], pattern="{identifier}.yml")

        assert loader.load("db").config == {"host": "x"}


class TestLoad:
    """Tests for reading the config binding."""

    def test_load_returns_config_binding(self, tmp_path, create_yaml_file):
        """Test a successful load."""
        path = create_yaml_file(
            "conf.db.yaml", {"config": {"db": {"host": "localhost", "port": 5432}}}
        )

        result = ConfigFileLoader([tmp_path]).load("db")

        assert result.status == "loaded"
        assert result.identifier == "db"
        assert result.path == path.resolve()
        assert result.config == {"db": {"host": "localhost", "port": 5432}}

    def test_missing_file(self, tmp_path):
        """Test that a missing file yields no config."""
        result = ConfigFileLoader([tmp_path]).load("nope")

        assert result.status == "missing"
        assert result.path is None
        assert result.config is None

    def test_missing_config_key(self, tmp_path, create_yaml_file):
        """Test that a file without a config key yields no config."""
        create_yaml_file("conf.db.yaml", {"other": 1})

        result = ConfigFileLoader([tmp_path]).load("db")

        assert result.status == "empty"
        assert result.config is None

    def test_empty_file(self, tmp_path):
        """Test that an empty YAML file yields no config."""
        (tmp_path / "conf.db.yaml").write_text("", encoding="utf-8")

        result = ConfigFileLoader([tmp_path]).load("db")

        assert result.status == "empty"
        assert result.config is None

    def test_scalar_config_passed_through(self, tmp_path, create_yaml_file):
        """Test that a scalar binding is supplied as-is."""
        create_yaml_file("conf.db.yaml", {"config": 5})

        result = ConfigFileLoader([tmp_path]).load("db", base={"a": 1})

        assert result.status == "loaded"
        assert result.config == 5

    def test_second_load_skipped(self, tmp_path, create_yaml_file):
        """Test that a file is only loaded once by default."""
        create_yaml_file("conf.db.yaml", {"config": {"a": 1}})
        loader = ConfigFileLoader([tmp_path])

        assert loader.load("db").status == "loaded"
        second = loader.load("db")
        assert second.status == "skipped"
        assert second.config is None

    def test_reload_when_once_disabled(self, tmp_path, create_yaml_file):
        """Test that once=False reads the file every time."""
        create_yaml_file("conf.db.yaml", {"config": {"a": 1}})
        loader = ConfigFileLoader([tmp_path], once=False)

        loader.load("db")
        assert loader.load("db").config == {"a": 1}

    def test_invalid_yaml_raises(self, tmp_path):
        """Test that a parse error raises ConfigError."""
        (tmp_path / "conf.bad.yaml").write_text("config: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            ConfigFileLoader([tmp_path]).load("bad")

    def test_invalid_utf8_raises(self, tmp_path):
        """Test that a file that is not UTF-8 raises ConfigError."""
        (tmp_path / "conf.bad.yaml").write_bytes(b"config:\n  a: \xff\xfe\n")

        with pytest.raises(ConfigError, match="UTF-8"):
            ConfigFileLoader([tmp_path]).load("bad")

    def test_unreadable_file_raises(self, tmp_path, create_yaml_file, monkeypatch):
        """Test that an OS error while reading raises ConfigError."""
        create_yaml_file("conf.locked.yaml", {"config": {"a": 1}})

        def _deny(*args, **kwargs):
            raise PermissionError("permission denied")

        monkeypatch.setattr(Path, "open", _deny)

        with pytest.raises(ConfigError, match="Error reading"):
            ConfigFileLoader([tmp_path]).load("locked")

    def test_non_mapping_document_raises(self, tmp_path, create_yaml_file):
        """Test that a top-level list raises ConfigError."""
        create_yaml_file("conf.list.yaml", [1, 2, 3])

        with pytest.raises(ConfigError, match="must be a mapping"):
            ConfigFileLoader([tmp_path]).load("list")

    def test_verbose_logging(self, tmp_path, create_yaml_file, recording_logger):
        """Test that loads are reported through the logger."""
        create_yaml_file("conf.db.yaml", {"config": {"a": 1}})
        loader = ConfigFileLoader([tmp_path], logger=recording_logger)

        loader.load("db")

        assert any("Loading:" in m for m in recording_logger.of_level("verbose"))
        assert any("a: 1" in m for m in recording_logger.of_level("debug"))


class TestLayering:
    """Tests for deep-merging a file over a base configuration."""

    def test_deep_merge_dicts(self):
        """Test that nested dicts are merged."""
        base = {"db": {"host": "a", "port": 1}, "debug": False}
        overlay = {"db": {"host": "b"}, "extra": 1}

        assert deep_merge(base, overlay) == {
            "db": {"host": "b", "port": 1},
            "debug": False,
            "extra": 1,
        }

    def test_deep_merge_replaces_lists(self):
        """Test that lists are replaced, not concatenated."""
        assert deep_merge({"hosts": ["a", "b"]}, {"hosts": ["c"]}) == {"hosts": ["c"]}

    def test_deep_merge_does_not_mutate(self):
        """Test that inputs are left untouched."""
        base = {"db": {"host": "a"}}
        overlay = {"db": {"port": 1}}

        deep_merge(base, overlay)

        assert base == {"db": {"host": "a"}}
        assert overlay == {"db": {"port": 1}}

    def test_load_layers_over_base(self, tmp_path, create_yaml_file):
        """Test that load() merges the binding over base."""
        create_yaml_file("conf.db.yaml", {"config": {"db": {"port": 5432}}})

        result = ConfigFileLoader([tmp_path]).load(
            "db", base={"app": "x", "db": {"host": "h"}}
        )

        assert result.config == {"app": "x", "db": {"host": "h", "port": 5432}}

    def test_non_mapping_base_ignored(self, tmp_path, create_yaml_file):
        """Test that a list base is not merged into."""
        create_yaml_file("conf.db.yaml", {"config": {"a": 1}})

        result = ConfigFileLoader([tmp_path]).load("db", base=[1, 2])

        assert result.config == {"a": 1}


class TestIncludePathFromEnv:
    """Tests for the environment-driven include path."""

    def test_env_paths_then_cwd(self, tmp_path, monkeypatch):
        """Test that env directories come first and the cwd last."""
        first = tmp_path / "a"
        second = tmp_path / "b"
        monkeypatch.setenv(INCLUDE_PATH_ENV, os.pathsep.join([str(first), str(second)]))
        monkeypatch.chdir(tmp_path)

        assert include_path_from_env() == [first, second, tmp_path]

    def test_unset_env_uses_cwd(self, tmp_path, monkeypatch):
        """Test that only the cwd is searched without the variable."""
        monkeypatch.delenv(INCLUDE_PATH_ENV, raising=False)
        monkeypatch.chdir(tmp_path)

        assert include_path_from_env() == [tmp_path]

    def test_loader_defaults_to_env(self, tmp_path, monkeypatch, create_yaml_file):
        """Test that a loader without search paths reads the environment."""
        create_yaml_file("etc/conf.db.yaml", {"config": {"a": 1}})
        monkeypatch.setenv(INCLUDE_PATH_ENV, str(tmp_path / "etc"))

        assert ConfigFileLoader().load("db").config == {"a": 1}


class TestDefaultLoader:
    """Tests for the process-wide loader."""

    def test_default_loader_is_cached(self):
        """Test that the same default loader is returned every time."""
        assert get_default_loader() is get_default_loader()

    def test_set_default_loader(self, tmp_path):
        """Test replacing the default loader."""
        loader = ConfigFileLoader([tmp_path])
        set_default_loader(loader)

        assert get_default_loader() is loader
