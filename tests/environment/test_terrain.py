import numpy as np
import pytest

from warrens.environment import terrain
from warrens.environment.terrain import Terrain, TerrainCell

SOLID = {Terrain.FLOOR, Terrain.GRASS, Terrain.SHALLOWS}
WALLS = {
    Terrain.WALL,
    Terrain.ROCK,
    Terrain.DOOR,
    Terrain.OPEN_DOOR,
    Terrain.WINDOW,
    Terrain.BARS,
    Terrain.FENCE,
}
OPAQUE = {Terrain.WALL, Terrain.ROCK, Terrain.DOOR, Terrain.TREE, Terrain.TALL_GRASS}
WALKABLE_FEATURES = {
    Terrain.EMPTY,
    Terrain.FLOOR,
    Terrain.GRASS,
    Terrain.SHALLOWS,
    Terrain.DOOR,
    Terrain.OPEN_DOOR,
    Terrain.TALL_GRASS,
    Terrain.DOWNSTAIRS,
}


@pytest.mark.parametrize("t", list(Terrain))
def test_classification_table(t: Terrain) -> None:
    assert t.is_solid == (t in SOLID)
    assert t.is_wall == (t in WALLS)
    assert t.blocks_sight == (t in OPAQUE)
    assert t.blocks_walk == (t not in WALKABLE_FEATURES)
    assert t.is_exit == (t is Terrain.DOWNSTAIRS)


def test_property_maps_index_whole_arrays() -> None:
    ids = np.array([[Terrain.WALL, Terrain.FLOOR], [Terrain.WATER, Terrain.DOWNSTAIRS]])
    assert terrain.get_solid_map(ids).tolist() == [[False, True], [False, False]]
    assert terrain.get_blocks_walk_map(ids).tolist() == [[True, False], [True, False]]
    assert terrain.get_exit_map(ids).tolist() == [[False, False], [False, True]]


def test_terrain_data_holds_only_behavior_flags() -> None:
    """One flyweight record per terrain; names come from the enum itself."""
    assert terrain.TerrainData.names == (
        "solid",
        "wall",
        "blocks_walk",
        "blocks_sight",
        "exit",
    )
    assert len(terrain._registered_terrain_data_list) == len(Terrain)


def test_registration_must_follow_enum_order() -> None:
    with pytest.raises(ValueError):
        terrain.register_terrain(Terrain.FLOOR, terrain.make_terrain_data())


def test_cell_walkability_needs_solid_base() -> None:
    assert not TerrainCell(Terrain.FLOOR).blocks_walk
    assert TerrainCell(Terrain.WATER).blocks_walk
    assert TerrainCell(Terrain.FLOOR, Terrain.TABLE).blocks_walk
    assert not TerrainCell(Terrain.FLOOR, Terrain.DOOR, Terrain.WALL).blocks_walk
    assert TerrainCell(Terrain.EMPTY).blocks_walk


def test_cell_sight_ignores_decoration() -> None:
    assert not TerrainCell(Terrain.FLOOR, Terrain.WINDOW, Terrain.WALL).blocks_sight
    assert TerrainCell(Terrain.FLOOR, Terrain.DOOR, Terrain.WALL).blocks_sight
    assert TerrainCell(Terrain.GRASS, Terrain.TALL_GRASS).blocks_sight


def test_cell_from_ids() -> None:
    cell = TerrainCell.from_ids(np.array([1, 8, 6], dtype=np.uint8))
    assert cell == TerrainCell(Terrain.FLOOR, Terrain.DOOR, Terrain.WALL)
    assert cell.is_wall
