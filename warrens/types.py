from __future__ import annotations

from typing import NewType, TypeAlias

# =============================================================================
# HEX GRID COORDINATE SYSTEMS (Always integers)
# =============================================================================

# Offset hex coordinates. Neighbors of (x, y) are the six offsets listed in
# warrens.util.hex_directions; (1, -1) and (-1, 1) are NOT adjacent.
HexCoord = int

# A relative offset on the (x, y) plane, e.g. (1, 1) = one step South.
HexVector = tuple[HexCoord, HexCoord]

# Sector layer. 0 is the overworld, negative values are dungeon levels.
SectorLayer = int

# =============================================================================
# CHUNK COORDINATE SYSTEMS
# =============================================================================

# Position of a chunk in the herringbone chunk grid. Example: (0, 0), (1, -2)
ChunkPos = tuple[int, int]

# Cell position inside an 11x22 chunk template. Example: (7, 0)
InChunkPos = tuple[int, int]

# Absolute (x, y) position produced by the herringbone transform.
AbsolutePos = tuple[int, int]

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Unique identifier handed out by the component store.
EntityID = NewType("EntityID", int)

# Random seed for deterministic generation (map generation, etc.)
# Can be an int for numeric seeds or a descriptive string like "warren1".
RandomSeed: TypeAlias = int | str | None
