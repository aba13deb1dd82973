"""Shared helpers for building small, fully controlled maps in tests."""

from __future__ import annotations

from collections.abc import Iterable

from warrens.environment.location import Location
from warrens.environment.registry import ChunkRegistry
from warrens.environment.terrain import Terrain, TerrainCell
from warrens.game.game_world import GameWorld
from warrens.util.hex_directions import hex_ring

WALL = TerrainCell(Terrain.FLOOR, Terrain.WALL, Terrain.WALL)
FLOOR = TerrainCell(Terrain.FLOOR)
DOOR = TerrainCell(Terrain.FLOOR, Terrain.DOOR, Terrain.WALL)


def make_world(registry: ChunkRegistry, seed: int | str = "test") -> GameWorld:
    return GameWorld(seed, registry=registry)


def wall_in(world: GameWorld, center: Location, radius: int) -> None:
    """Overwrite every cell within ``radius`` of ``center`` with wall."""
    for r in range(radius + 1):
        for offset in hex_ring(r):
            world.set_terrain(center + offset, WALL)


def carve(
    world: GameWorld, cells: Iterable[Location], cell: TerrainCell = FLOOR
) -> None:
    for loc in cells:
        world.set_terrain(loc, cell)


def corridor(y: int, x_range: range, z: int) -> list[Location]:
    """A straight run of cells along the SE-NW axis."""
    return [Location(x, y, z) for x in x_range]
