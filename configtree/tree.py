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

"""Recursive configuration container.

ConfigTree holds configuration values as an ordered key/value tree. Every
nested mapping, list or tuple written into a tree is wrapped as another
ConfigTree, so the same access, iteration and size semantics apply at every
depth.

Capabilities:

- Keyed access: set/get/has/delete, also exposed as ``tree[key]``,
  ``key in tree`` and ``del tree[key]``. Reads never raise.
- Iteration: one explicit cursor per instance (reset, current_key,
  current_value, advance, is_valid). ``for key in tree`` and ``items()``
  drive the same cursor.
- Size: count() with a cached size that every mutation invalidates.
- Export: to_plain() returns plain dicts and lists; clone() deep-copies
  nested trees.

Conversion Rules:
    convert() is the single normalization step used by construction, load()
    and set():

    - Scalars (including str and bytes) pass through unchanged
    - A ConfigTree is stored as a clone, so no node has two parents
    - Mappings, lists and tuples become a ConfigTree, recursively
    - Empty composites become an empty ConfigTree

Example:
    Basic usage:
        ```python
        from configtree import ConfigTree

        cfg = ConfigTree({"db": {"host": "localhost", "ports": [5432]}})
        cfg["db"]["host"]           # "localhost"
        cfg["db"]["ports"].count()  # 1
        cfg.set(None, "appended")   # stored under key 0
        cfg.to_plain()
        ```

    Cursor iteration:
        ```python
        cfg.reset()
        while cfg.is_valid():
            print(cfg.current_key(), cfg.current_value())
            cfg.advance()
        ```

Note:
    Nested iteration over the same instance shares its single cursor and
    corrupts the outer traversal. Iterate over clone() when that is needed.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Hashable

from configtree.exceptions import ConfigError
from configtree.logging import Logger, get_global_logger
from configtree.protocols import ConfigSource

__all__ = ["ConfigTree", "convert", "is_composite"]

# Cursor state past the last entry
_EXHAUSTED = object()


def is_composite(value: Any) -> bool:
    """Return True for raw nested structures that get wrapped as a ConfigTree.

    Strings and bytes are scalars. A ConfigTree is not a raw composite.
    """
    return isinstance(value, (Mapping, list, tuple))


def convert(value: Any) -> Any:
    """Normalize a value for storage in a ConfigTree.

    Args:
        value: Any scalar, ConfigTree, mapping, list or tuple.

    Returns:
        The value itself for scalars, a clone for a ConfigTree, otherwise a
        new ConfigTree built from the composite (empty composites included).
    """
    if isinstance(value, ConfigTree):
        return value.clone()
    if not is_composite(value):
        return value
    return ConfigTree(value)


def _convert_entries(data: Mapping[Hashable, Any] | list | tuple) -> dict[Hashable, Any]:
    """Build an entries dict from a composite, wrapping nested composites."""
    items = data.items() if isinstance(data, Mapping) else enumerate(data)
    return {key: convert(value) for key, value in items}


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0


def _next_index_for(entries: Mapping[Hashable, Any]) -> int:
    indexes = [key for key in entries if _is_index(key)]
    return max(indexes) + 1 if indexes else 0


class ConfigTree:
    """Ordered, recursive configuration container.

    Attributes are private; use the capability methods. The instance keeps
    its entries, a single iteration cursor with a logical position counter,
    a lazily recomputed size, and the next integer key used for appends.

    Example:
        ```python
        tree = ConfigTree({"a": 1, "b": {"c": 2}})
        tree.count()                # 2
        tree["b"].to_plain()        # {"c": 2}
        str(tree)                   # "Array"
        ```
    """

    def __init__(self, bootstrap: Any = None) -> None:
        """Build a tree from bootstrap data.

        Args:
            bootstrap: Mapping, list or tuple to convert. Anything else,
                including None, yields an empty tree.
        """
        if not is_composite(bootstrap):
            bootstrap = {}

        self._sequence = not isinstance(bootstrap, Mapping)
        self._entries: dict[Hashable, Any] = (
            _convert_entries(bootstrap) if bootstrap else {}
        )
        self._next_index = _next_index_for(self._entries)
        self._order: tuple[list[Hashable], dict[Hashable, int]] | None = None
        self._cursor: Any = _EXHAUSTED
        self._position = 0
        self.reset()

        self._size = 0
        self._size_dirty = True
        self.count()

    # -------------------------------
    # Display and copying
    # -------------------------------

    def __str__(self) -> str:
        return "Array"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_plain()!r})"

    def __copy__(self) -> ConfigTree:
        return self.clone()

    def __deepcopy__(self, memo: dict[int, Any]) -> ConfigTree:
        return self.clone()

    def clone(self) -> ConfigTree:
        """Return an independent copy of this tree.

        Nested trees are cloned recursively; scalar values are shared. The
        copy starts with the same cursor position as the original and
        recomputes its own size.
        """
        twin = type(self).__new__(type(self))
        twin.__dict__.update(self.__dict__)
        twin._entries = {
            key: value.clone() if isinstance(value, ConfigTree) else value
            for key, value in self._entries.items()
        }
        twin._order = None
        twin._size_dirty = True
        twin.count()
        return twin

    def to_plain(self) -> dict[Hashable, Any] | list[Any]:
        """Export the tree as plain dicts and lists.

        A tree built from a list or tuple exports as a list while its keys are
        still exactly 0..n-1 in order; every other tree exports as a dict.

        Returns:
            A new nested structure with no ConfigTree instances in it.
        """
        data = {
            key: value.to_plain() if isinstance(value, ConfigTree) else value
            for key, value in self._entries.items()
        }
        if self._sequence and list(data) == list(range(len(data))):
            return list(data.values())
        return data

    # -------------------------------
    # Bulk replace
    # -------------------------------

    def load(
        self,
        identifier: str,
        loader: ConfigSource | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Replace the tree's content with the config supplied for identifier.

        The loader (by default the process-wide ConfigFileLoader) supplies the
        ``config`` binding for identifier, layered over the current content.
        When that binding is not a mapping, or the loader fails, the tree is
        left exactly as it was.

        Args:
            identifier: Config identifier, e.g. "db" for conf.db.yaml.
            loader: ConfigSource whose ``load(identifier, base=...)``
                returns a LoadResult. Defaults to get_default_loader().
            logger: Logger for load diagnostics. Defaults to the global logger.
        """
        if logger is None:
            logger = get_global_logger()
        if loader is None:
            from configtree.files import get_default_loader

            loader = get_default_loader()

        try:
            result = loader.load(identifier, base=self.to_plain())
        except ConfigError as err:
            logger.warning("CONFIG", f"Could not load '{identifier}': {err}")
            return

        config = result.config
        if not isinstance(config, Mapping):
            logger.verbose(
                "CONFIG",
                f"No config mapping for '{identifier}' ({result.status}), "
                "keeping current values",
            )
            return

        self._entries = _convert_entries(config) if config else {}
        self._sequence = False
        self._next_index = _next_index_for(self._entries)
        self._order = None
        self._cursor = next(iter(self._entries), _EXHAUSTED)
        self._size_dirty = True
        logger.verbose(
            "CONFIG", f"Loaded '{identifier}' with {len(self._entries)} top-level keys"
        )

    # -------------------------------
    # Keyed access
    # -------------------------------

    def set(self, key: Hashable | None, value: Any) -> None:
        """Store value at key; a key of None appends under the next integer key.

        Overwriting an existing key keeps its position. Composite values are
        converted to ConfigTree instances first; a ConfigTree value is stored
        as a clone, so a tree can be written into itself safely.
        """
        value = convert(value)
        if key is None:
            key = self._next_index

        if key not in self._entries:
            self._order = None
        self._entries[key] = value
        if _is_index(key) and key >= self._next_index:
            self._next_index = key + 1

        self._size_dirty = True

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def has(self, key: Hashable) -> bool:
        return key in self._entries

    def delete(self, key: Hashable) -> None:
        """Remove key if present.

        When the cursor sits on the removed entry it moves on to the entry
        that followed it.
        """
        if key in self._entries:
            if self._cursor is not _EXHAUSTED and self._cursor == key:
                self._cursor = self._following(key)
            del self._entries[key]
            self._order = None

        self._size_dirty = True

    def __getitem__(self, key: Hashable) -> Any:
        return self.get(key)

    def __setitem__(self, key: Hashable | None, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Hashable) -> None:
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    # -------------------------------
    # Iteration
    # -------------------------------

    def _ordering(self) -> tuple[list[Hashable], dict[Hashable, int]]:
        if self._order is None:
            keys = list(self._entries)
            self._order = (keys, {key: i for i, key in enumerate(keys)})
        return self._order

    def _following(self, key: Hashable) -> Any:
        keys, positions = self._ordering()
        index = positions[key] + 1
        return keys[index] if index < len(keys) else _EXHAUSTED

    def reset(self) -> None:
        """Move the cursor to the first entry and zero the position counter."""
        self._cursor = next(iter(self._entries), _EXHAUSTED)
        self._position = 0

    def current_value(self) -> Any:
        if self._cursor is _EXHAUSTED:
            return None
        return self._entries[self._cursor]

    def current_key(self) -> Hashable | None:
        if self._cursor is _EXHAUSTED:
            return None
        return self._cursor

    def advance(self) -> None:
        """Move the cursor forward and count the step, even past the end."""
        if self._cursor is not _EXHAUSTED:
            self._cursor = self._following(self._cursor)
        self._position += 1

    def is_valid(self) -> bool:
        """Report whether iteration may continue.

        The cursor counts as exhausted only once it has run past the last
        entry and the position counter has passed count(). This matches the
        legacy behaviour of tolerating a "no current value" signal while
        fewer advances than entries have happened.
        """
        if self._cursor is not _EXHAUSTED:
            return True
        return self._position + 1 <= self.count()

    def __iter__(self) -> Iterator[Hashable | None]:
        """Yield keys by driving the instance cursor from the start."""
        self.reset()
        while self.is_valid():
            yield self.current_key()
            self.advance()

    def items(self) -> Iterator[tuple[Hashable | None, Any]]:
        """Yield (key, value) pairs by driving the instance cursor."""
        self.reset()
        while self.is_valid():
            yield self.current_key(), self.current_value()
            self.advance()

    # -------------------------------
    # Size
    # -------------------------------

    def count(self) -> int:
        """Return the number of direct entries, recomputing a stale cache."""
        if self._size_dirty:
            self._size = len(self._entries)
            self._size_dirty = False
        return self._size

    def __len__(self) -> int:
        return self.count()
