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

"""Exception hierarchy for configtree.

The tree itself never raises for absent keys or malformed load sources. The
exceptions below come from the config-file loader and surface only when the
loader is used directly:

- ConfigError: A config file could not be parsed or has the wrong shape

All exceptions inherit from ConfigTreeError.

Example:
    Using the loader directly:
        ```python
        from configtree.exceptions import ConfigError
        from configtree.files import ConfigFileLoader

        try:
            result = ConfigFileLoader(["config"]).load("db")
        except ConfigError as e:
            print(f"Config error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "ConfigTreeError",
    "ConfigError",
]


class ConfigTreeError(Exception):
    """Base exception for all configtree errors."""

    pass


class ConfigError(ConfigTreeError):
    """Raised when a config file cannot be turned into a config binding.

    This covers:

    - YAML syntax errors
    - Files that are not valid UTF-8 or cannot be read
    - Documents whose top level is not a mapping

    ConfigTree.load() catches this, logs a warning and leaves the tree as it
    was.
    """

    pass
