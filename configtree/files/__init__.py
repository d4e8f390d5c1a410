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

"""Config file loading for configtree.

This package finds ``conf.<identifier>.yaml`` files on an include path and
supplies their ``config`` mapping to ConfigTree.load().

Public API:

- ConfigFileLoader: Include-path based YAML loader
- get_default_loader / set_default_loader: Process-wide loader
- deep_merge: "Overlay wins" merge of nested mappings

Example:
    ```python
    from configtree.files import ConfigFileLoader, set_default_loader

    set_default_loader(ConfigFileLoader(["config"]))
    ```
"""

from .loader import (
    ConfigFileLoader,
    deep_merge,
    get_default_loader,
    include_path_from_env,
    set_default_loader,
)

__all__ = [
    "ConfigFileLoader",
    "deep_merge",
    "get_default_loader",
    "include_path_from_env",
    "set_default_loader",
]
