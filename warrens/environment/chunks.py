"""
Chunk templates: parsing and connectivity validation.

A chunk is an 11x22 block of terrain authored as ASCII text. Before a template
can be used by the herringbone assembler it must pass a topology check: the
open cells must form exactly one region touching all six edge connectors, or
exactly two regions, one touching the three top connectors and the other the
three bottom connectors. Every placement of such a chunk keeps the assembled
map connected.

Template errors are data errors in the shipped library and are raised as
`ChunkError` subclasses while the registry loads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

import numpy as np

from warrens import config
from warrens.environment.terrain import (
    Terrain,
    TerrainCell,
    get_blocks_walk_map,
    get_exit_map,
    get_solid_map,
)
from warrens.types import InChunkPos
from warrens.util.hex_directions import HEX_NEIGHBOR_OFFSETS

# Layer indices into the last axis of a chunk's cell array.
BASE, FEATURE, DECORATION = 0, 1, 2

# glyph -> (base, feature, decoration)
GLYPH_LEGEND: dict[str, tuple[Terrain, Terrain, Terrain]] = {
    ".": (Terrain.FLOOR, Terrain.EMPTY, Terrain.EMPTY),
    "#": (Terrain.FLOOR, Terrain.WALL, Terrain.WALL),
    "~": (Terrain.SHALLOWS, Terrain.EMPTY, Terrain.EMPTY),
    "=": (Terrain.WATER, Terrain.EMPTY, Terrain.EMPTY),
    ",": (Terrain.GRASS, Terrain.EMPTY, Terrain.EMPTY),
    "+": (Terrain.FLOOR, Terrain.DOOR, Terrain.WALL),
    "*": (Terrain.FLOOR, Terrain.ROCK, Terrain.ROCK),
    "X": (Terrain.MAGMA, Terrain.EMPTY, Terrain.EMPTY),
    "|": (Terrain.FLOOR, Terrain.WINDOW, Terrain.WINDOW),
    "%": (Terrain.GRASS, Terrain.TREE, Terrain.EMPTY),
    "/": (Terrain.FLOOR, Terrain.DEAD_TREE, Terrain.EMPTY),
    "x": (Terrain.GRASS, Terrain.FENCE, Terrain.EMPTY),
    "o": (Terrain.FLOOR, Terrain.STONE, Terrain.EMPTY),
    "A": (Terrain.FLOOR, Terrain.MENHIR, Terrain.EMPTY),
    "g": (Terrain.FLOOR, Terrain.GRAVE, Terrain.EMPTY),
    "b": (Terrain.FLOOR, Terrain.BARREL, Terrain.EMPTY),
    "T": (Terrain.FLOOR, Terrain.TABLE, Terrain.EMPTY),
    "a": (Terrain.FLOOR, Terrain.ALTAR, Terrain.EMPTY),
    "I": (Terrain.FLOOR, Terrain.BARS, Terrain.BARS),
    "!": (Terrain.FLOOR, Terrain.STALAGMITE, Terrain.EMPTY),
    ";": (Terrain.GRASS, Terrain.TALL_GRASS, Terrain.EMPTY),
    ">": (Terrain.FLOOR, Terrain.DOWNSTAIRS, Terrain.EMPTY),
    "_": (Terrain.EMPTY, Terrain.EMPTY, Terrain.EMPTY),
}

# Edge cells shared with neighboring chunks in the herringbone layout.
TOP_CONNECTORS: tuple[InChunkPos, ...] = (
    (0, config.CHUNK_SPAN_1),
    (config.CHUNK_SPAN_2, 0),
    (config.CHUNK_WIDTH - 1, config.CHUNK_SPAN_2),
)
BOTTOM_CONNECTORS: tuple[InChunkPos, ...] = (
    (0, config.CHUNK_HEIGHT - 1 - config.CHUNK_SPAN_3),
    (config.CHUNK_SPAN_3, config.CHUNK_HEIGHT - 1),
    (config.CHUNK_WIDTH - 1, config.CHUNK_HEIGHT - 1 - config.CHUNK_SPAN_2),
)
# Identifies which of two regions is the top one.
TOP_ANCHOR: InChunkPos = TOP_CONNECTORS[0]


# =============================================================================
# ERRORS
# =============================================================================


class ChunkError(Exception):
    """A chunk template is malformed. Carries the offending template text."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class ChunkSizeError(ChunkError):
    """Template rows are missing, extra, or the wrong width."""


class UnknownGlyphError(ChunkError):
    """Template uses a glyph that is not in the legend."""

    def __init__(self, glyph: str, pos: InChunkPos, text: str = "") -> None:
        super().__init__(f"Unknown glyph {glyph!r} at {pos}", text)
        self.glyph = glyph
        self.pos = pos


class ChunkTopologyError(ChunkError):
    """Template regions do not satisfy the connector rules."""

    def __init__(
        self,
        message: str,
        text: str = "",
        *,
        region_count: int | None = None,
        missing: InChunkPos | None = None,
        region: str | None = None,
    ) -> None:
        super().__init__(message, text)
        self.region_count = region_count
        self.missing = missing
        self.region = region


# =============================================================================
# AREA SPECS
# =============================================================================


class Biome(IntFlag):
    OVERLAND = 1
    DUNGEON = 2
    ANYWHERE = 0xFF


@dataclass(frozen=True, slots=True)
class AreaSpec:
    """Where a chunk may appear: a biome set and a minimum depth."""

    biome: Biome
    depth: int

    def can_hatch(self, environment: AreaSpec) -> bool:
        """Whether content with this spec can appear in ``environment``."""
        return (
            self.depth >= 0
            and self.depth <= environment.depth
            and bool(self.biome & environment.biome)
        )


# =============================================================================
# PARSING
# =============================================================================


def parse_cells(text: str) -> np.ndarray:
    """Parse template text into an (11, 22, 3) array of terrain values.

    One leading newline and any trailing whitespace are ignored, so templates
    can be written as indented triple-quoted strings closing on their own line.

    Raises:
        ChunkSizeError: Wrong number of rows or a row of the wrong width.
        UnknownGlyphError: A glyph missing from `GLYPH_LEGEND`.
    """
    body = text[1:] if text.startswith("\n") else text
    rows = body.rstrip().split("\n")
    if len(rows) != config.CHUNK_HEIGHT:
        raise ChunkSizeError(
            f"Expected {config.CHUNK_HEIGHT} rows, got {len(rows)}", text
        )

    cells = np.zeros(
        (config.CHUNK_WIDTH, config.CHUNK_HEIGHT, 3), dtype=np.uint8
    )
    for y, row in enumerate(rows):
        if len(row) != config.CHUNK_WIDTH:
            raise ChunkSizeError(
                f"Row {y} is {len(row)} glyphs wide, expected {config.CHUNK_WIDTH}",
                text,
            )
        for x, glyph in enumerate(row):
            layers = GLYPH_LEGEND.get(glyph)
            if layers is None:
                raise UnknownGlyphError(glyph, (x, y), text)
            cells[x, y] = layers

    cells.flags.writeable = False
    return cells


# =============================================================================
# TOPOLOGY
# =============================================================================


def open_mask(cells: np.ndarray) -> np.ndarray:
    """Boolean (11, 22) map of walkable cells."""
    return get_solid_map(cells[:, :, BASE]) & ~get_blocks_walk_map(
        cells[:, :, FEATURE]
    )


def split_connected(points: set[InChunkPos]) -> tuple[set[InChunkPos], set[InChunkPos]]:
    """Split off the region connected to an arbitrary point of ``points``.

    Returns:
        (region, rest) where ``region`` is a maximal 6-connected subset and
        ``rest`` is everything else. Both are empty if ``points`` is.
    """
    rest = set(points)
    if not rest:
        return set(), rest

    seed = rest.pop()
    region = {seed}
    frontier = [seed]
    while frontier:
        x, y = frontier.pop()
        for dx, dy in HEX_NEIGHBOR_OFFSETS:
            neighbor = (x + dx, y + dy)
            if neighbor in rest:
                rest.remove(neighbor)
                region.add(neighbor)
                frontier.append(neighbor)
    return region, rest


def make_topology(cells: np.ndarray) -> list[set[InChunkPos]]:
    """The maximal connected regions of open cells in a chunk."""
    xs, ys = np.nonzero(open_mask(cells))
    remaining = {(int(x), int(y)) for x, y in zip(xs, ys, strict=True)}

    regions: list[set[InChunkPos]] = []
    while remaining:
        region, remaining = split_connected(remaining)
        regions.append(region)
    return regions


def _require(
    points: tuple[InChunkPos, ...], region: set[InChunkPos], name: str, text: str
) -> None:
    for point in points:
        if point not in region:
            raise ChunkTopologyError(
                f"Connector {point} is not in the {name} region",
                text,
                missing=point,
                region=name,
            )


def verify_topology(regions: list[set[InChunkPos]], *, text: str = "") -> None:
    """Check that regions satisfy the connector rules.

    Raises:
        ChunkTopologyError: On a region count other than 1 or 2, or a
            connector missing from its region.
    """
    if len(regions) not in (1, 2):
        raise ChunkTopologyError(
            f"Chunk has {len(regions)} regions, expected 1 or 2",
            text,
            region_count=len(regions),
        )

    if len(regions) == 1:
        _require(TOP_CONNECTORS, regions[0], "top", text)
        _require(BOTTOM_CONNECTORS, regions[0], "bottom", text)
        return

    if TOP_ANCHOR in regions[0]:
        top, bottom = regions
    elif TOP_ANCHOR in regions[1]:
        bottom, top = regions
    else:
        raise ChunkTopologyError(
            f"Connector {TOP_ANCHOR} is not in any region",
            text,
            region_count=2,
            missing=TOP_ANCHOR,
            region="top",
        )
    _require(TOP_CONNECTORS, top, "top", text)
    _require(BOTTOM_CONNECTORS, bottom, "bottom", text)


# =============================================================================
# CHUNK
# =============================================================================


@dataclass(frozen=True, eq=False)
class Chunk:
    """A validated, immutable chunk template."""

    cells: np.ndarray  # (CHUNK_WIDTH, CHUNK_HEIGHT, 3) terrain values, read-only
    connected: bool  # One region rather than separate top and bottom halves
    exit: bool  # Contains a level exit
    spec: AreaSpec
    text: str

    @classmethod
    def from_text(cls, spec: AreaSpec, text: str) -> Chunk:
        """Parse and validate a template.

        Raises:
            ChunkError: If the template is malformed.
        """
        cells = parse_cells(text)
        regions = make_topology(cells)
        verify_topology(regions, text=text)
        return cls(
            cells=cells,
            connected=len(regions) == 1,
            exit=bool(get_exit_map(cells[:, :, FEATURE]).any()),
            spec=spec,
            text=text,
        )

    def cell(self, pos: InChunkPos) -> TerrainCell:
        x, y = pos
        return TerrainCell.from_ids(self.cells[x, y])

    def __repr__(self) -> str:
        return (
            f"Chunk(spec={self.spec}, connected={self.connected}, exit={self.exit})"
        )
