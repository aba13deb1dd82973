"""A minimal entity-component store.

Entities are integer IDs handed out by `ComponentStore.make()`. Each entity
carries at most one component of each kind, keyed by the component's class.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, TypeVar

from warrens.types import EntityID

C = TypeVar("C")


class ComponentStore:
    """Owns entity IDs and their components."""

    def __init__(self) -> None:
        self._next_id = 1
        self._live: dict[EntityID, None] = {}  # Insertion-ordered set
        self._components: dict[type, dict[EntityID, Any]] = {}

    def make(self) -> EntityID:
        """Create a new entity with no components."""
        e = EntityID(self._next_id)
        self._next_id += 1
        self._live[e] = None
        return e

    def is_alive(self, e: EntityID) -> bool:
        return e in self._live

    def __contains__(self, e: object) -> bool:
        return e in self._live

    def __iter__(self) -> Iterator[EntityID]:
        """Live entities in creation order."""
        return iter(list(self._live))

    def __len__(self) -> int:
        return len(self._live)

    def insert(self, e: EntityID, component: object) -> None:
        """Attach ``component`` to ``e``, replacing one of the same kind.

        Raises:
            KeyError: If ``e`` is not a live entity.
        """
        if e not in self._live:
            raise KeyError(f"Entity {e} does not exist")
        self._components.setdefault(type(component), {})[e] = component

    def get(self, kind: type[C], e: EntityID) -> C | None:
        return self._components.get(kind, {}).get(e)

    def get_mut(self, kind: type[C], e: EntityID) -> C:
        """The stored component itself, for in-place modification.

        Raises:
            KeyError: If ``e`` has no component of this kind.
        """
        return self._components[kind][e]

    def contains(self, kind: type, e: EntityID) -> bool:
        return e in self._components.get(kind, {})

    def remove(self, kind: type[C], e: EntityID) -> C | None:
        """Detach and return the component of this kind, if any."""
        return self._components.get(kind, {}).pop(e, None)

    def destroy(self, e: EntityID) -> None:
        """Remove the entity and every component it has. Unknown IDs are ignored."""
        if e not in self._live:
            return
        del self._live[e]
        for table in self._components.values():
            table.pop(e, None)

    def entities_with(self, kind: type) -> list[EntityID]:
        """Live entities carrying a component of this kind, in creation order."""
        table = self._components.get(kind, {})
        return [e for e in self._live if e in table]
