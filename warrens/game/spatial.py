"""
Placement of entities in the world.

Every placed entity is either standing at a map location (`At`) or held in
a slot of another entity (`In`), such as an item carried in a backpack or a
sword in someone's hand. Containment can nest: a coin inside a pouch inside
a bag resolves to the location of whoever carries the bag.

`Spatial` keeps reverse indexes so lookups in either direction are O(1):
- location -> entities standing there
- parent -> {slot: entity} for the entities it holds
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol, TypeAlias

from warrens.environment.location import Location
from warrens.types import EntityID


class Slot(Enum):
    """Where a contained entity sits inside its parent."""

    HEAD = auto()
    BODY = auto()
    MAIN_HAND = auto()
    OFF_HAND = auto()
    RANGED = auto()
    AMULET = auto()
    RING_1 = auto()
    RING_2 = auto()
    BAG_0 = auto()
    BAG_1 = auto()
    BAG_2 = auto()
    BAG_3 = auto()
    BAG_4 = auto()
    BAG_5 = auto()
    BAG_6 = auto()
    BAG_7 = auto()
    BAG_8 = auto()
    BAG_9 = auto()

    @property
    def is_equipment(self) -> bool:
        return not self.name.startswith("BAG_")


@dataclass(frozen=True, slots=True)
class At:
    location: Location


@dataclass(frozen=True, slots=True)
class In:
    parent: EntityID
    slot: Slot


Place: TypeAlias = At | In


class ContainmentCycleError(ValueError):
    """An entity would end up (transitively) containing itself."""


class SlotOccupiedError(ValueError):
    """The target slot already holds a different entity."""


class SpatialQuery(Protocol):
    """Read-only view of entity placement."""

    def entities_at(self, loc: Location) -> list[EntityID]: ...

    def entities_in(self, parent: EntityID) -> list[EntityID]: ...

    def location(self, e: EntityID) -> Location | None: ...


class Spatial:
    """Placement index for all entities."""

    def __init__(self) -> None:
        self._places: dict[EntityID, Place] = {}
        self._at: defaultdict[Location, set[EntityID]] = defaultdict(set)
        self._in: defaultdict[EntityID, dict[Slot, EntityID]] = defaultdict(dict)

    def __contains__(self, e: object) -> bool:
        return e in self._places

    def __len__(self) -> int:
        return len(self._places)

    def get(self, e: EntityID) -> Place | None:
        return self._places.get(e)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert_at(self, e: EntityID, loc: Location) -> None:
        """Place ``e`` on the map, replacing any previous placement."""
        self._unlink(e)
        self._places[e] = At(loc)
        self._at[loc].add(e)

    def equip(self, e: EntityID, parent: EntityID, slot: Slot) -> None:
        """Put ``e`` in ``slot`` of ``parent``, replacing its previous placement.

        Raises:
            ContainmentCycleError: If ``e`` is ``parent`` or already contains it.
            SlotOccupiedError: If another entity is in the slot.
        """
        if e == parent or self.contains(e, parent):
            raise ContainmentCycleError(f"Entity {e} can't be placed inside {parent}")
        holder = self._in.get(parent, {}).get(slot)
        if holder is not None and holder != e:
            raise SlotOccupiedError(
                f"Slot {slot.name} of entity {parent} is held by entity {holder}"
            )
        self._unlink(e)
        self._places[e] = In(parent, slot)
        self._in[parent][slot] = e

    def remove(self, e: EntityID) -> None:
        """Forget the placement of ``e``.

        Anything ``e`` contains keeps its placement inside ``e``.
        """
        self._unlink(e)
        self._places.pop(e, None)

    def clear(self) -> None:
        self._places.clear()
        self._at.clear()
        self._in.clear()

    def _unlink(self, e: EntityID) -> None:
        """Drop ``e`` from the reverse indexes."""
        match self._places.get(e):
            case At(location=loc):
                occupants = self._at[loc]
                occupants.discard(e)
                if not occupants:
                    del self._at[loc]
            case In(parent=parent, slot=slot):
                slots = self._in[parent]
                del slots[slot]
                if not slots:
                    del self._in[parent]
            case None:
                pass

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def entities_at(self, loc: Location) -> list[EntityID]:
        """Entities standing at ``loc``, by ID."""
        occupants = self._at.get(loc)
        return sorted(occupants) if occupants else []

    def entities_in(self, parent: EntityID) -> list[EntityID]:
        """Entities held directly by ``parent``, in slot order."""
        slots = self._in.get(parent)
        if not slots:
            return []
        return [e for _, e in sorted(slots.items(), key=lambda item: item[0].value)]

    def entity_equipped(self, parent: EntityID, slot: Slot) -> EntityID | None:
        return self._in.get(parent, {}).get(slot)

    def contains(self, parent: EntityID, child: EntityID) -> bool:
        """Whether ``child`` is inside ``parent``, at any depth."""
        place = self._places.get(child)
        while isinstance(place, In):
            if place.parent == parent:
                return True
            place = self._places.get(place.parent)
        return False

    def location(self, e: EntityID) -> Location | None:
        """Map location of ``e``, following containers up to the map.

        None if ``e`` or one of its containers is unplaced.
        """
        place = self._places.get(e)
        while isinstance(place, In):
            place = self._places.get(place.parent)
        if isinstance(place, At):
            return place.location
        return None
