from __future__ import annotations

import pytest

from warrens import config
from warrens.environment.chunks import AreaSpec, Biome, Chunk
from warrens.environment.generators import herringbone_map, herringbone_unmap
from warrens.environment.location import Location
from warrens.environment.map import WorldTerrain, area_spec_for_layer
from warrens.environment.registry import ChunkRegistry
from warrens.environment.terrain import Terrain, TerrainCell
from warrens.util.rng import RNGProvider

CHUNK_CELLS = config.CHUNK_WIDTH * config.CHUNK_HEIGHT


def _world(registry: ChunkRegistry, seed: str | int = "warren1") -> WorldTerrain:
    return WorldTerrain(registry, RNGProvider(seed))


def test_layer_area_specs() -> None:
    assert area_spec_for_layer(0) == AreaSpec(Biome.OVERLAND, 0)
    assert area_spec_for_layer(-4) == AreaSpec(Biome.DUNGEON, 4)


def test_terrain_assembles_one_chunk_on_demand(registry: ChunkRegistry) -> None:
    world = _world(registry)
    loc = Location(5, 5)
    assert len(world) == 0
    assert not world.is_assembled(loc)

    world.terrain(loc)

    assert world.is_assembled(loc)
    assert len(world) == CHUNK_CELLS


def test_assembled_chunk_matches_a_template_for_its_layer(
    registry: ChunkRegistry,
) -> None:
    world = _world(registry)
    world.terrain(Location(0, 0, -1))
    chunk_pos, _ = herringbone_unmap((0, 0))

    def matches(chunk: Chunk) -> bool:
        return all(
            world.terrain(Location(*herringbone_map(chunk_pos, (x, y)), -1))
            == chunk.cell((x, y))
            for x in range(config.CHUNK_WIDTH)
            for y in range(config.CHUNK_HEIGHT)
        )

    assert any(matches(c) for c in registry.matching(AreaSpec(Biome.DUNGEON, 1)))


def test_query_order_does_not_change_the_world(registry: ChunkRegistry) -> None:
    locations = [
        Location(x, y, z) for x in (-30, 0, 45) for y in (-12, 7) for z in (0, -2)
    ]
    forward = _world(registry)
    backward = _world(registry)

    a = [forward.terrain(loc) for loc in locations]
    b = [backward.terrain(loc) for loc in reversed(locations)]

    assert a == list(reversed(b))


def test_same_seed_same_world(registry: ChunkRegistry) -> None:
    a, b = _world(registry, 99), _world(registry, 99)
    a.generate_area(0, radius=1)
    b.generate_area(0, radius=1)
    assert a._cells == b._cells


def test_different_seeds_differ(registry: ChunkRegistry) -> None:
    a, b = _world(registry, 1), _world(registry, 2)
    a.generate_area(-1, radius=2)
    b.generate_area(-1, radius=2)
    assert a._cells != b._cells


def test_generate_area_assembles_the_window(registry: ChunkRegistry) -> None:
    world = _world(registry)
    world.generate_area(0, radius=1)
    assert len(world) == 9 * CHUNK_CELLS

    # Already-assembled chunks are left alone.
    revision = world.structural_revision
    world.generate_area(0, radius=1)
    assert world.structural_revision == revision


def test_set_terrain_survives_lazy_assembly(registry: ChunkRegistry) -> None:
    world = _world(registry)
    loc = Location(3, 4, -2)
    lava = TerrainCell(Terrain.MAGMA)

    world.set_terrain(loc, lava)
    # Neighbors in the same chunk are already assembled and don't overwrite.
    world.terrain(loc + (1, 0))

    assert world.terrain(loc) == lava


@pytest.mark.parametrize("z", [0, -1, -5])
def test_every_layer_has_open_ground(registry: ChunkRegistry, z: int) -> None:
    world = _world(registry)
    world.generate_area(z, radius=0)
    assert any(not cell.blocks_walk for cell in world._cells.values())
