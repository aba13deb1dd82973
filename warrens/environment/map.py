"""Lazily assembled world terrain.

The world is unbounded: terrain is only built when something first asks
about a location. The whole herringbone chunk covering that location is
chosen and written at once, using a random stream dedicated to that chunk,
so the resulting map is the same whatever order locations are visited in.
"""

from __future__ import annotations

import logging

from warrens import config
from warrens.environment.chunks import AreaSpec, Biome
from warrens.environment.generators import (
    HerringboneAssembler,
    chunk_window,
    herringbone_unmap,
)
from warrens.environment.location import Location
from warrens.environment.registry import ChunkRegistry
from warrens.environment.terrain import TerrainCell
from warrens.types import ChunkPos, SectorLayer
from warrens.util import rng
from warrens.util.rng import RNGProvider

logger = logging.getLogger(__name__)


def area_spec_for_layer(z: SectorLayer) -> AreaSpec:
    """Overland at the surface, dungeon ``-z`` levels deep below it."""
    if z == config.OVERWORLD_Z:
        return AreaSpec(Biome.OVERLAND, 0)
    return AreaSpec(Biome.DUNGEON, -z)


class WorldTerrain:
    """Terrain storage for every sector layer, assembled on demand."""

    def __init__(self, registry: ChunkRegistry, rng_provider: RNGProvider) -> None:
        self.registry = registry
        self.rng_provider = rng_provider
        self.assembler = HerringboneAssembler(registry)
        self._cells: dict[Location, TerrainCell] = {}
        self._assembled_chunks: set[tuple[SectorLayer, ChunkPos]] = set()
        # Bumped whenever stored terrain changes.
        self.structural_revision: int = 0

    def __len__(self) -> int:
        return len(self._cells)

    def is_assembled(self, loc: Location) -> bool:
        return loc in self._cells

    def terrain(self, loc: Location) -> TerrainCell:
        cell = self._cells.get(loc)
        if cell is None:
            chunk_pos, _ = herringbone_unmap((loc.x, loc.y))
            self._assemble_chunk(chunk_pos, loc.z)
            cell = self._cells[loc]
        return cell

    def set_terrain(self, loc: Location, cell: TerrainCell) -> None:
        """Overwrite a single cell.

        The covering chunk is assembled first so a later lazy assembly can't
        clobber the edit.
        """
        if loc not in self._cells:
            chunk_pos, _ = herringbone_unmap((loc.x, loc.y))
            self._assemble_chunk(chunk_pos, loc.z)
        self._cells[loc] = cell
        self.structural_revision += 1

    def generate_area(
        self, z: SectorLayer, radius: int = config.OVERWORLD_GEN_RADIUS
    ) -> None:
        """Eagerly assemble the chunk window ``-radius..radius`` on layer ``z``."""
        for chunk_pos in chunk_window(radius):
            self._assemble_chunk(chunk_pos, z)

    def _assemble_chunk(self, chunk_pos: ChunkPos, z: SectorLayer) -> None:
        key = (z, chunk_pos)
        if key in self._assembled_chunks:
            return
        self._assembled_chunks.add(key)

        cx, cy = chunk_pos
        chunk_rng = self.rng_provider.get(rng.domain("map.chunks", z, cx, cy))
        chunk = self.registry.choose(chunk_rng, area_spec_for_layer(z))
        self.assembler.place(self._cells, chunk_pos, chunk, z)
        self.structural_revision += 1
        logger.debug(
            "Assembled chunk %s on layer %d from template %d",
            chunk_pos,
            z,
            self.registry.index(chunk),
        )
