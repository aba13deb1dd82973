"""
Configuration constants.

Centralizes all magic numbers and configuration values used throughout the codebase.
Organized by functional area for easy maintenance.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "warren1"

# =============================================================================
# CHUNK TEMPLATES
# =============================================================================

# Every authored chunk is an 11x22 block of glyphs.
CHUNK_WIDTH = 11
CHUNK_HEIGHT = 2 * CHUNK_WIDTH

# Boundary connector positions along the chunk edges. Openings that share a
# span must stay at equal distances from their corners so that neighboring
# chunks line up in the herringbone tiling.
CHUNK_SPAN_1 = 3
CHUNK_SPAN_2 = 7
CHUNK_SPAN_3 = 5

# =============================================================================
# WORLD LAYOUT
# =============================================================================

# Sectors are the coarse partition used to scope map memory.
SECTOR_WIDTH = 40
SECTOR_HEIGHT = 20

# Sector layer of the surface world. Dungeon levels go down from here.
OVERWORLD_Z = 0

# Chunk-grid radius covered by eager level generation (-3..3 in both axes).
OVERWORLD_GEN_RADIUS = 3

# =============================================================================
# FIELD OF VIEW
# =============================================================================

DEFAULT_FOV_RANGE = 7  # Sight radius underground
OVERLAND_FOV_RANGE = SECTOR_WIDTH  # Long-range sight while in the overworld
