"""Map generation for warrens.

Maps are stitched together from validated chunk templates laid out in a
herringbone pattern:
- HerringboneAssembler: Places chosen chunks into a terrain store
- herringbone_map / herringbone_unmap: Chunk-local <-> absolute positions
"""

from .herringbone import (
    HerringboneAssembler,
    TerrainStore,
    chunk_window,
    herringbone_map,
    herringbone_unmap,
)

__all__ = [
    "HerringboneAssembler",
    "TerrainStore",
    "chunk_window",
    "herringbone_map",
    "herringbone_unmap",
]
