"""Six-direction vector model for the hex grid.

The grid uses offset coordinates where each cell (x, y) has exactly six
neighbors. Projected isometrically, North is straight up the screen and
the two "missing" square-grid diagonals (1, -1) and (-1, 1) point straight
left and right; they are two steps away, not neighbors.

Direction vectors and the hexadecants (00 to 15) around the origin::

       N         NE
         \\ 14 15 | 00 01
        13 \\     |      02
             \\   |
       12      \\ |        03
    NW ----------O-X------- SE
       11        Y \\      04
                 |   \\
         10      |     \\05
           09 08 | 07 06 \\
                 SW       S

Vectors falling between two direction vectors snap to the nearer one. The
hexadecant table is fixed; do not re-derive it from trigonometry, shifting
a boundary by one hexadecant changes which way movement snaps.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from enum import IntEnum

from warrens.types import HexVector


class HexDir(IntEnum):
    """Hex grid directions in canonical clockwise order."""

    NORTH = 0
    NORTH_EAST = 1
    SOUTH_EAST = 2
    SOUTH = 3
    SOUTH_WEST = 4
    NORTH_WEST = 5

    @classmethod
    def from_int(cls, i: int) -> HexDir:
        """Convert any integer to a direction using floor modulo (-1 -> NORTH_WEST)."""
        return _DIRS[i % 6]

    @classmethod
    def from_vector(cls, v: HexVector) -> HexDir:
        """Convert a vector into the closest hex direction."""
        vx, vy = v
        radian = math.atan2(vx, -vy)
        if radian < 0.0:
            radian += 2.0 * math.pi
        # A tiny negative angle rounds up to a full turn.
        hexadecant = math.floor(radian / (math.pi / 8.0)) % 16
        return _HEXADECANT_TO_DIR[hexadecant]

    @classmethod
    def iter(cls) -> Iterator[HexDir]:
        """Iterate through the six directions in the standard order."""
        return iter(_DIRS)

    def to_vector(self) -> HexVector:
        """Unit offset vector for this direction."""
        return _DIR_TO_VECTOR[self]

    def opposite(self) -> HexDir:
        return HexDir.from_int(self + 3)

    def rotate(self, steps: int) -> HexDir:
        """Rotate clockwise by ``steps`` sixths of a turn (negative = counter)."""
        return HexDir.from_int(self + steps)


_DIRS: tuple[HexDir, ...] = (
    HexDir.NORTH,
    HexDir.NORTH_EAST,
    HexDir.SOUTH_EAST,
    HexDir.SOUTH,
    HexDir.SOUTH_WEST,
    HexDir.NORTH_WEST,
)

_DIR_TO_VECTOR: dict[HexDir, HexVector] = {
    HexDir.NORTH: (-1, -1),
    HexDir.NORTH_EAST: (0, -1),
    HexDir.SOUTH_EAST: (1, 0),
    HexDir.SOUTH: (1, 1),
    HexDir.SOUTH_WEST: (0, 1),
    HexDir.NORTH_WEST: (-1, 0),
}

_HEXADECANT_TO_DIR: dict[int, HexDir] = {
    13: HexDir.NORTH,
    14: HexDir.NORTH,
    15: HexDir.NORTH_EAST,
    0: HexDir.NORTH_EAST,
    1: HexDir.NORTH_EAST,
    2: HexDir.SOUTH_EAST,
    3: HexDir.SOUTH_EAST,
    4: HexDir.SOUTH_EAST,
    5: HexDir.SOUTH,
    6: HexDir.SOUTH,
    7: HexDir.SOUTH_WEST,
    8: HexDir.SOUTH_WEST,
    9: HexDir.SOUTH_WEST,
    10: HexDir.NORTH_WEST,
    11: HexDir.NORTH_WEST,
    12: HexDir.NORTH_WEST,
}

# All six unit offsets in canonical order, for tight neighbor loops.
HEX_NEIGHBOR_OFFSETS: tuple[HexVector, ...] = tuple(d.to_vector() for d in _DIRS)


def hex_dist(v: HexVector) -> int:
    """Number of steps needed to travel along vector ``v``.

    Along the N-S axis both components move together, so same-sign vectors
    cost ``max(|x|, |y|)`` steps and mixed-sign vectors cost ``|x| + |y|``.
    """
    x, y = v
    if (x >= 0) == (y >= 0):
        return max(abs(x), abs(y))
    return abs(x) + abs(y)


def hex_ring(radius: int) -> Iterator[HexVector]:
    """Yield the offsets at exactly ``radius`` steps, clockwise from North.

    The ring starts at ``radius * NORTH`` and walks ``radius`` steps along
    each of the six sides; side k heads in direction k + 2. Radius 0 yields
    only the origin.
    """
    if radius == 0:
        yield (0, 0)
        return
    nx, ny = HexDir.NORTH.to_vector()
    x, y = nx * radius, ny * radius
    for side in range(6):
        dx, dy = HexDir.from_int(side + 2).to_vector()
        for _ in range(radius):
            yield (x, y)
            x += dx
            y += dy
