"""
Terrain type system for the hex world using the flyweight pattern.

This module defines:
- `Terrain`: The closed enumeration of terrain types. Values are small integers
  so that chunk templates can store whole grids of them in NumPy arrays.
- `TerrainData`: The intrinsic properties of a *type* of terrain (solid ground,
  wall piece, blocks walking, blocks sight, level exit). These are the flyweight
  objects, registered once per `Terrain` member.
- `TerrainCell`: The three stacked terrain layers (base, feature, decoration)
  that every map cell stores.
- Helper functions to get maps of specific properties from arrays of terrain
  IDs. The chunk validator uses these to find open cells in a whole template
  at once.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

import numpy as np


class Terrain(IntEnum):
    """Every terrain type a map layer can hold."""

    EMPTY = 0
    FLOOR = 1
    GRASS = 2
    SHALLOWS = 3
    WATER = 4
    MAGMA = 5
    WALL = 6
    ROCK = 7
    DOOR = 8
    OPEN_DOOR = 9
    WINDOW = 10
    BARS = 11
    FENCE = 12
    TREE = 13
    DEAD_TREE = 14
    TALL_GRASS = 15
    STONE = 16
    MENHIR = 17
    GRAVE = 18
    BARREL = 19
    TABLE = 20
    ALTAR = 21
    STALAGMITE = 22
    DOWNSTAIRS = 23

    @property
    def is_solid(self) -> bool:
        """Ground that can be stood on when used as a base layer."""
        return bool(_terrain_properties_solid[self])

    @property
    def is_wall(self) -> bool:
        """A structural wall piece (walls, doors, windows, bars, fences)."""
        return bool(_terrain_properties_wall[self])

    @property
    def blocks_walk(self) -> bool:
        return bool(_terrain_properties_blocks_walk[self])

    @property
    def blocks_sight(self) -> bool:
        return bool(_terrain_properties_blocks_sight[self])

    @property
    def is_exit(self) -> bool:
        return bool(_terrain_properties_exit[self])


# Defines the intrinsic data for a *type* of terrain (flyweight).
TerrainData = np.dtype(
    [
        ("solid", bool),  # Can stand on it (base layer)
        ("wall", bool),  # Structural wall piece
        ("blocks_walk", bool),
        ("blocks_sight", bool),  # FOV opacity
        ("exit", bool),  # Leads to another level
    ]
)

# --- Terrain Type Registration ---

# The index of a terrain type in this list is its Terrain value.
_registered_terrain_data_list: list[np.ndarray] = []


def register_terrain(terrain: Terrain, terrain_data_instance: np.ndarray) -> None:
    """
    Registers the flyweight data for a terrain type.

    Terrain types must be registered in enum order so that the list index
    matches the enum value.

    Raises:
        ValueError: If the terrain is registered out of order or twice.
    """
    expected = len(_registered_terrain_data_list)
    if terrain != expected:
        raise ValueError(
            f"Terrain {terrain.name} registered out of order "
            f"(value {int(terrain)}, expected {expected})."
        )
    _registered_terrain_data_list.append(terrain_data_instance)


def make_terrain_data(
    *,  # Forces keyword arguments - prevents bugs from wrong parameter order
    solid: bool = False,
    wall: bool = False,
    blocks_walk: bool = False,
    blocks_sight: bool = False,
    exit: bool = False,
) -> np.ndarray:  # Returns an instance of TerrainData
    """Helper function to create a TerrainData instance."""
    return np.array(
        (solid, wall, blocks_walk, blocks_sight, exit),
        dtype=TerrainData,
    )


# --- Define and Register Terrain Types ---

register_terrain(Terrain.EMPTY, make_terrain_data())

# Base layers
register_terrain(Terrain.FLOOR, make_terrain_data(solid=True))
register_terrain(Terrain.GRASS, make_terrain_data(solid=True))
register_terrain(Terrain.SHALLOWS, make_terrain_data(solid=True))
register_terrain(Terrain.WATER, make_terrain_data(blocks_walk=True))
register_terrain(Terrain.MAGMA, make_terrain_data(blocks_walk=True))

# Wall pieces
register_terrain(
    Terrain.WALL, make_terrain_data(wall=True, blocks_walk=True, blocks_sight=True)
)
register_terrain(
    Terrain.ROCK, make_terrain_data(wall=True, blocks_walk=True, blocks_sight=True)
)
register_terrain(Terrain.DOOR, make_terrain_data(wall=True, blocks_sight=True))
register_terrain(Terrain.OPEN_DOOR, make_terrain_data(wall=True))
register_terrain(Terrain.WINDOW, make_terrain_data(wall=True, blocks_walk=True))
register_terrain(Terrain.BARS, make_terrain_data(wall=True, blocks_walk=True))
register_terrain(Terrain.FENCE, make_terrain_data(wall=True, blocks_walk=True))

# Vegetation
register_terrain(Terrain.TREE, make_terrain_data(blocks_walk=True, blocks_sight=True))
register_terrain(Terrain.DEAD_TREE, make_terrain_data(blocks_walk=True))
register_terrain(Terrain.TALL_GRASS, make_terrain_data(blocks_sight=True))

# Props
for _prop in (
    Terrain.STONE,
    Terrain.MENHIR,
    Terrain.GRAVE,
    Terrain.BARREL,
    Terrain.TABLE,
    Terrain.ALTAR,
    Terrain.STALAGMITE,
):
    register_terrain(_prop, make_terrain_data(blocks_walk=True))

register_terrain(Terrain.DOWNSTAIRS, make_terrain_data(exit=True))


# --- Pre-calculated Property Arrays for Efficient Lookups ---
# Built after every terrain type has been registered. Indexing one of these
# with an array of Terrain values yields the property for each cell.

_terrain_properties_solid = np.array(
    [t["solid"] for t in _registered_terrain_data_list], dtype=bool
)
_terrain_properties_wall = np.array(
    [t["wall"] for t in _registered_terrain_data_list], dtype=bool
)
_terrain_properties_blocks_walk = np.array(
    [t["blocks_walk"] for t in _registered_terrain_data_list], dtype=bool
)
_terrain_properties_blocks_sight = np.array(
    [t["blocks_sight"] for t in _registered_terrain_data_list], dtype=bool
)
_terrain_properties_exit = np.array(
    [t["exit"] for t in _registered_terrain_data_list], dtype=bool
)


# --- Public Helper Functions for Accessing Terrain Properties ---


def get_solid_map(terrain_ids: np.ndarray) -> np.ndarray:
    """Boolean map: True where the terrain is standable ground."""
    return _terrain_properties_solid[terrain_ids]


def get_blocks_walk_map(terrain_ids: np.ndarray) -> np.ndarray:
    return _terrain_properties_blocks_walk[terrain_ids]


def get_exit_map(terrain_ids: np.ndarray) -> np.ndarray:
    return _terrain_properties_exit[terrain_ids]


class TerrainCell(NamedTuple):
    """The three stacked terrain layers of one map cell.

    The base is the ground, the feature is whatever stands on it, and the
    decoration is the cosmetic upper part (the wall above a door frame).
    Only base and feature affect movement and sight.
    """

    base: Terrain
    feature: Terrain = Terrain.EMPTY
    decoration: Terrain = Terrain.EMPTY

    @property
    def blocks_walk(self) -> bool:
        return not self.base.is_solid or self.feature.blocks_walk

    @property
    def blocks_sight(self) -> bool:
        return self.feature.blocks_sight

    @property
    def is_wall(self) -> bool:
        return self.feature.is_wall

    @property
    def is_exit(self) -> bool:
        return self.feature.is_exit

    @classmethod
    def from_ids(cls, ids: np.ndarray) -> TerrainCell:
        """Build a cell from a length-3 array of terrain values."""
        return cls(Terrain(int(ids[0])), Terrain(int(ids[1])), Terrain(int(ids[2])))

