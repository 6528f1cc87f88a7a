"""Lookup providers the engine consumes from its surroundings.

- AttributeCatalog: valid attribute keys and the selectable values per key
- BranchDirectory: valid scope keys for per-branch threshold lists

Both ship with static defaults matching the stock form; a production
deployment injects its own instances built from whatever backs them.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping


DEFAULT_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "color": ("Red", "Blue", "Green", "Black", "White"),
    "size": ("XS", "S", "M", "L", "XL"),
    "material": ("Cotton", "Polyester", "Wool", "Leather"),
}


class AttributeCatalog:
    """Static lookup of attribute keys and their selectable values."""

    def __init__(self, options: Mapping[str, Iterable[str]]):
        self._options: dict[str, tuple[str, ...]] = {
            key: tuple(values) for key, values in options.items()
        }

    @classmethod
    def default(cls) -> "AttributeCatalog":
        return cls(DEFAULT_ATTRIBUTES)

    def keys(self) -> list[str]:
        return list(self._options)

    def values_for(self, key: str) -> list[str]:
        return list(self._options.get(key, ()))

    def is_valid_key(self, key: str) -> bool:
        return key in self._options

    def is_valid_value(self, key: str, value: str) -> bool:
        return value in self._options.get(key, ())


@dataclass(frozen=True)
class Branch:
    id: str
    name: str


DEFAULT_BRANCHES = (
    Branch(id="branch-1", name="Main Branch"),
    Branch(id="branch-2", name="Branch 2"),
    Branch(id="branch-3", name="Branch 3"),
)


class BranchDirectory:
    """Known branches, used as scope keys."""

    def __init__(self, branches: Iterable[Branch]):
        self._branches: dict[str, Branch] = {b.id: b for b in branches}

    @classmethod
    def default(cls) -> "BranchDirectory":
        return cls(DEFAULT_BRANCHES)

    def list_branches(self) -> list[Branch]:
        return list(self._branches.values())

    def is_valid(self, branch_id: str) -> bool:
        return branch_id in self._branches
