"""
Component kinds attached to entities in the `ComponentStore`.

Entities are bare IDs. What an entity can do depends on which components it
carries:

    Desc: Display name and icon
    MapMemory: What the entity sees now and what it has mapped before
    Mob: A creature that occupies its cell (opens doors, blocks movement)

Components are stored and looked up by their class.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from warrens.environment.location import Location


@dataclass
class Desc:
    name: str
    icon: int = 0


@dataclass
class MapMemory:
    """Field-of-view state for a sighted entity.

    ``seen`` is replaced on every FOV update. ``remembered`` only grows.
    """

    seen: set[Location] = field(default_factory=set)
    remembered: set[Location] = field(default_factory=set)

    def is_seen(self, loc: Location) -> bool:
        return loc in self.seen

    def is_remembered(self, loc: Location) -> bool:
        return loc in self.remembered


@dataclass
class Mob:
    # Large creatures hide what is behind them.
    blocks_sight: bool = False
