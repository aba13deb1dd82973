"""Absolute positions in the world and the coarse sectors they belong to."""

from __future__ import annotations

from dataclasses import dataclass

from warrens import config
from warrens.types import HexCoord, HexVector, SectorLayer
from warrens.util.hex_directions import HEX_NEIGHBOR_OFFSETS, HexDir, hex_dist


@dataclass(frozen=True, slots=True)
class Sector:
    """A fixed-size block of locations on one sector layer.

    Map memory only spreads within the viewer's current sector.
    """

    x: int
    y: int
    z: SectorLayer


@dataclass(frozen=True, slots=True, order=True)
class Location:
    """A hex cell on a sector layer. Used as a hash key everywhere."""

    x: HexCoord
    y: HexCoord
    z: SectorLayer = 0

    def __add__(self, offset: HexVector) -> Location:
        dx, dy = offset
        return Location(self.x + dx, self.y + dy, self.z)

    def __sub__(self, other: Location) -> HexVector:
        """Offset from ``other`` to this location. Layers are ignored."""
        return (self.x - other.x, self.y - other.y)

    def step(self, direction: HexDir) -> Location:
        return self + direction.to_vector()

    def neighbors(self) -> list[Location]:
        """The six adjacent cells in canonical direction order."""
        return [self + offset for offset in HEX_NEIGHBOR_OFFSETS]

    def hex_dist(self, other: Location) -> int:
        return hex_dist(other - self)

    def sector(self) -> Sector:
        # Floor division keeps negative coordinates in the right sector.
        return Sector(
            self.x // config.SECTOR_WIDTH,
            self.y // config.SECTOR_HEIGHT,
            self.z,
        )

    def is_overworld(self) -> bool:
        return self.z == config.OVERWORLD_Z
