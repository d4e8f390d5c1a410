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

"""Public API return types for configtree.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Example:
    Inspecting what a loader supplied:
        ```python
        from configtree.files import ConfigFileLoader

        result = ConfigFileLoader(["config"]).load("db")
        if result.status == "loaded":
            print(result.path, result.config)
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

LOADED = "loaded"
MISSING = "missing"
SKIPPED = "skipped"
EMPTY = "empty"


@dataclass(frozen=True)
class LoadResult:
    """Result from asking the loader for a config binding.

    Attributes:
        identifier: Identifier the caller asked for (e.g., "db").
        path: Resolved config file, or None when no file was found.
        config: The supplied ``config`` binding. Anything that is not a
            mapping means "nothing to load".
        status: One of "loaded", "missing" (no file on the include path),
            "skipped" (file already loaded once) or "empty" (file has no
            ``config`` key).
    """

    identifier: str
    path: Path | None
    config: Any
    status: str
