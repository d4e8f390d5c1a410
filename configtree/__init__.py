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

"""configtree - recursive, array-like configuration container.

configtree provides:

- ConfigTree: ordered key/value tree where every nested mapping or list is
  itself a ConfigTree
- Keyed access, single-cursor iteration and cached size queries at every depth
- Export to plain dicts/lists and independent deep clones
- Loading ``conf.<identifier>.yaml`` files from an include path

Quick Start:

    from configtree import ConfigTree
    from configtree.files import ConfigFileLoader

    cfg = ConfigTree({"app": {"name": "demo"}})
    cfg.load("db", ConfigFileLoader(["config"]))
    print(cfg["db"]["host"])

Package Structure:

- tree: ConfigTree and the convert() normalization function
- protocols: Capability contracts (keyed access, iteration, size)
- files: Include-path YAML loader feeding ConfigTree.load()
- logging: Logger protocol and global logger
- exceptions: Exception hierarchy
- results: Return types of the loader

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Recursive array-like configuration container"

# Re-export commonly used names for convenience
from configtree.exceptions import ConfigError, ConfigTreeError
from configtree.files import ConfigFileLoader
from configtree.results import LoadResult
from configtree.tree import ConfigTree, convert

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConfigTree",
    "convert",
    "ConfigFileLoader",
    "LoadResult",
    "ConfigError",
    "ConfigTreeError",
]
