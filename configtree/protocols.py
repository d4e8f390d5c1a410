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

"""Capability contracts implemented by ConfigTree.

A ConfigTree is a mapping, a cursor-driven iterator and a sized container at
once. Each capability is declared as its own Protocol so code can depend on
just the part it uses:

- KeyedAccess: set/get/has/delete by key
- SequentialIteration: reset/current_key/current_value/advance/is_valid
- SizeQuery: count

ConfigSource describes the collaborator that feeds ConfigTree.load().

Example:
    ```python
    from configtree.protocols import SizeQuery

    def is_blank(node: SizeQuery) -> bool:
        return node.count() == 0
    ```
"""

from __future__ import annotations

from typing import Any, Hashable, Protocol, runtime_checkable

from configtree.results import LoadResult


@runtime_checkable
class KeyedAccess(Protocol):
    """Keyed read/write access that never raises for absent keys."""

    def set(self, key: Hashable | None, value: Any) -> None:
        """Store value at key, or append it when key is None."""
        ...

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value at key, or default when absent."""
        ...

    def has(self, key: Hashable) -> bool:
        """Return whether key is present."""
        ...

    def delete(self, key: Hashable) -> None:
        """Remove key if present."""
        ...


@runtime_checkable
class SequentialIteration(Protocol):
    """Single-cursor forward traversal over direct entries."""

    def reset(self) -> None: ...

    def current_key(self) -> Hashable | None: ...

    def current_value(self) -> Any: ...

    def advance(self) -> None: ...

    def is_valid(self) -> bool: ...


@runtime_checkable
class SizeQuery(Protocol):
    """Number of direct entries."""

    def count(self) -> int: ...


class ConfigSource(Protocol):
    """Supplier of ``config`` bindings for ConfigTree.load().

    ConfigFileLoader is the stock implementation.
    """

    def load(self, identifier: str, base: Any = None) -> LoadResult:
        """Return the binding for identifier, optionally layered over base."""
        ...
