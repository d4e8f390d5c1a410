# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Config file discovery and loading for ConfigTree.load().

A config file is a YAML document named after an identifier (by default
``conf.<identifier>.yaml``) found on an ordered include path. Its top-level
``config`` key is the binding handed to the tree:

    ```yaml
    config:
      db:
        host: localhost
        port: 5432
    ```

Include Path:
    Directories are searched in order; the first existing file wins. When no
    search paths are given, they are read from the CONFIGTREE_INCLUDE_PATH
    environment variable (os.pathsep separated, a .env file is honored)
    followed by the current working directory.

Layering:
    When the caller passes its current content as ``base``, the file's
    ``config`` mapping is deep-merged over it with "file wins" semantics:

    - **Dicts**: Recursively merged (keys from the file override base)
    - **Lists**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten

Load Once:
    With ``once=True`` (the default) a file that was already loaded by this
    loader is skipped on later requests, and the result carries no config.

Error Handling:
    - ConfigError: YAML parse errors, files that are not UTF-8 or cannot be
      read, and documents that are not a mapping
    - Missing files and missing ``config`` keys are not errors; the result's
      status says what happened and its config is None
    - All errors are chained with "from err" for better debugging

Example:
    ```python
    from configtree import ConfigTree
    from configtree.files import ConfigFileLoader

    loader = ConfigFileLoader(["config", "/etc/myapp"])
    cfg = ConfigTree({"debug": False})
    cfg.load("db", loader)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
import yaml

from configtree.exceptions import ConfigError
from configtree.logging import Logger, get_global_logger
from configtree.results import EMPTY, LOADED, MISSING, SKIPPED, LoadResult

INCLUDE_PATH_ENV = "CONFIGTREE_INCLUDE_PATH"
DEFAULT_PATTERN = "conf.{identifier}.yaml"

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> dict[str, Any]:
    """Loads a config YAML file and returns its top-level mapping.

    An empty document counts as an empty mapping.

    Raises:
        ConfigError: On invalid YAML, undecodable or unreadable files, or a
            non-mapping document.
    """
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    except UnicodeDecodeError as err:
        raise ConfigError(f"Error decoding {p} as UTF-8: {err}") from err
    except OSError as err:
        raise ConfigError(f"Error reading {p}: {err}") from err
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {p}")
    return data


def _log_yaml_content(logger: Logger, data: Any, indent: int = 2) -> None:
    """Dump data as YAML through logger.debug()."""
    yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", " " * indent + line)


# -------------------------------
# Merge logic
# -------------------------------


def deep_merge(base: Mapping[Any, Any], overlay: Mapping[Any, Any]) -> dict[Any, Any]:
    """Deep-merges two mappings with "overlay wins" semantics.

    - mapping + mapping -> deep merge
    - list + list -> overlay REPLACES base (not concatenated)
    - everything else -> overlay overwrites base

    Inputs are not mutated; a new dict is returned.
    """
    result: dict[Any, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], Mapping) and isinstance(v, Mapping):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Include path
# -------------------------------


def include_path_from_env() -> list[Path]:
    """Return directories listed in CONFIGTREE_INCLUDE_PATH, then the cwd."""
    load_dotenv()
    raw = os.getenv(INCLUDE_PATH_ENV, "")
    paths = [Path(part) for part in raw.split(os.pathsep) if part.strip()]
    paths.append(Path.cwd())
    return paths


class ConfigFileLoader:
    """Supplies ``config`` bindings from YAML files on an include path.

    Attributes:
        search_paths: Directories searched in order.
        pattern: File name template with an ``{identifier}`` placeholder.
        once: Skip files this loader has already loaded.
    """

    def __init__(
        self,
        search_paths: Iterable[str | Path] | None = None,
        *,
        pattern: str = DEFAULT_PATTERN,
        once: bool = True,
        logger: Logger | None = None,
    ) -> None:
        if search_paths is None:
            self.search_paths = include_path_from_env()
        else:
            self.search_paths = [Path(p) for p in search_paths]
        self.pattern = pattern
        self.once = once
        self._logger = logger
        self._loaded: set[Path] = set()

    @property
    def logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    def resolve(self, identifier: str) -> Path | None:
        """Return the first config file for identifier on the include path."""
        filename = self.pattern.format(identifier=identifier)
        for directory in self.search_paths:
            candidate = directory / filename
            if candidate.is_file():
                return candidate.resolve()
        return None

    def load(self, identifier: str, base: Any = None) -> LoadResult:
        """Read the ``config`` binding for identifier.

        Args:
            identifier: Config identifier, e.g. "db" for conf.db.yaml.
            base: Current configuration. When both base and the file's
                binding are mappings, the binding is deep-merged over base.

        Returns:
            A LoadResult; its config is None unless status is "loaded".

        Raises:
            ConfigError: On YAML parse errors, undecodable or unreadable files,
                or a non-mapping document.
        """
        logger = self.logger
        path = self.resolve(identifier)
        if path is None:
            logger.verbose(
                "CONFIG",
                f"No {self.pattern.format(identifier=identifier)} on include path",
            )
            return LoadResult(identifier, None, None, MISSING)

        if self.once and path in self._loaded:
            logger.verbose("CONFIG", f"Already loaded, skipping: {path}")
            return LoadResult(identifier, path, None, SKIPPED)

        logger.verbose("CONFIG", f"Loading: {path}")
        document = _load_yaml_file(path)
        self._loaded.add(path)

        if "config" not in document:
            logger.verbose("CONFIG", f"No 'config' key in {path.name}")
            return LoadResult(identifier, path, None, EMPTY)

        config = document["config"]
        logger.debug("CONFIG", f"--- Content from {path.name} ---")
        _log_yaml_content(logger, config)

        if isinstance(base, Mapping) and isinstance(config, Mapping):
            config = deep_merge(base, config)

        return LoadResult(identifier, path, config, LOADED)


# Process-wide loader used by ConfigTree.load() (created on first use)
_default_loader: ConfigFileLoader | None = None


def get_default_loader() -> ConfigFileLoader:
    """Return the process-wide loader, building it from the environment."""
    global _default_loader
    if _default_loader is None:
        _default_loader = ConfigFileLoader()
    return _default_loader


def set_default_loader(loader: ConfigFileLoader | None) -> None:
    """Replace the process-wide loader; None rebuilds it on next use."""
    global _default_loader
    _default_loader = loader
