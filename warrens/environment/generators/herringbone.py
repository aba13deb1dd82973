"""Herringbone chunk layout.

Chunks are W x 2W rectangles (W = CHUNK_WIDTH). Even chunk columns are placed
upright and odd columns transposed, which interlocks them in a herringbone
pattern that tiles the plane with no gaps or overlaps. Measured in W x W unit
squares, every chunk covers two squares and the chunk lattice is spanned by
(1, -3) and (1, 1). A unit square's role is fixed by ``(uy - ux) mod 4``:

    0: upper half of an upright chunk
    1: lower half of an upright chunk
    3: left half of a transposed chunk
    2: right half of a transposed chunk

The connector cells validated in `chunks` line up across every shared edge,
so a map built from valid chunks is connected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import TypeAlias

from warrens import config
from warrens.environment.chunks import AreaSpec, Chunk
from warrens.environment.location import Location
from warrens.environment.registry import ChunkRegistry
from warrens.environment.terrain import TerrainCell
from warrens.types import AbsolutePos, ChunkPos, InChunkPos, SectorLayer
from warrens.util.rng import RNG

logger = logging.getLogger(__name__)

TerrainStore: TypeAlias = MutableMapping[Location, TerrainCell]

# (uy - ux) mod 4 -> (unit square offset from the chunk's lattice point, transposed)
_UNIT_ROLES: dict[int, tuple[tuple[int, int], int]] = {
    0: ((0, 0), 0),
    1: ((0, 1), 0),
    3: ((0, -1), 1),
    2: ((1, -1), 1),
}


def _chunk_origin(chunk_pos: ChunkPos) -> tuple[int, int, int]:
    """Absolute origin of a chunk plus its transpose flag."""
    w = config.CHUNK_WIDTH
    cx, cy = chunk_pos
    div, m = divmod(cx, 2)
    origin_x = div * w + cy * w
    origin_y = cy * w - m * w - 3 * div * w
    return origin_x, origin_y, m


def herringbone_map(chunk_pos: ChunkPos, in_chunk_pos: InChunkPos) -> AbsolutePos:
    """Map a cell inside a chunk to its absolute position.

    Examples:
        >>> herringbone_map((0, 0), (3, 5))
        (3, 5)
        >>> herringbone_map((1, 0), (0, 0))
        (0, -11)
    """
    origin_x, origin_y, m = _chunk_origin(chunk_pos)
    x, y = in_chunk_pos
    if m == 0:
        return (origin_x + x, origin_y + y)
    return (origin_x + y, origin_y + x)


def herringbone_unmap(abs_pos: AbsolutePos) -> tuple[ChunkPos, InChunkPos]:
    """Find the chunk covering an absolute position and the cell inside it.

    The exact inverse of `herringbone_map`.
    """
    w = config.CHUNK_WIDTH
    ax, ay = abs_pos
    ux, uy = ax // w, ay // w
    (ex, ey), m = _UNIT_ROLES[(uy - ux) % 4]
    lx, ly = ux - ex, uy - ey

    # Lattice point = div * (1, -3) + cy * (1, 1)
    div = (lx - ly) // 4
    cy = lx - div
    chunk_pos = (2 * div + m, cy)

    origin_x, origin_y, _ = _chunk_origin(chunk_pos)
    if m == 0:
        return chunk_pos, (ax - origin_x, ay - origin_y)
    return chunk_pos, (ay - origin_y, ax - origin_x)


class HerringboneAssembler:
    """Writes chunks into a terrain store at their herringbone positions."""

    def __init__(self, registry: ChunkRegistry) -> None:
        self.registry = registry

    def place(
        self,
        store: TerrainStore,
        chunk_pos: ChunkPos,
        chunk: Chunk,
        z: SectorLayer,
    ) -> None:
        """Write every cell of ``chunk`` into ``store``, overwriting."""
        for x in range(config.CHUNK_WIDTH):
            for y in range(config.CHUNK_HEIGHT):
                ax, ay = herringbone_map(chunk_pos, (x, y))
                store[Location(ax, ay, z)] = chunk.cell((x, y))

    def generate(
        self,
        store: TerrainStore,
        rng: RNG,
        chunk_positions: Iterable[ChunkPos],
        spec: AreaSpec,
        z: SectorLayer,
    ) -> dict[ChunkPos, Chunk]:
        """Choose and place a chunk at each position, in iteration order.

        Returns:
            The chunk chosen for each position.
        """
        chosen: dict[ChunkPos, Chunk] = {}
        for chunk_pos in chunk_positions:
            chunk = self.registry.choose(rng, spec)
            self.place(store, chunk_pos, chunk, z)
            chosen[chunk_pos] = chunk
        logger.debug("Placed %d chunks on layer %d", len(chosen), z)
        return chosen


def chunk_window(radius: int) -> list[ChunkPos]:
    """Chunk positions with both coordinates in ``-radius..radius``."""
    return [
        (cx, cy)
        for cx in range(-radius, radius + 1)
        for cy in range(-radius, radius + 1)
    ]
