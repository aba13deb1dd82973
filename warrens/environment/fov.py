"""Field-of-view computation by shadowcasting on the hex grid.

The viewer scans outward ring by ring. Each ring of radius r holds 6r cells
and every cell owns an equal slice of the full turn around the viewer: cell i
covers the arc ``[(i - 1/2) / 6r, (i + 1/2) / 6r)``, measured clockwise from
North in fractions of a turn. Opaque cells cast their arc as a shadow onto
every farther ring.

Key properties:
- **Exactness**: Arcs are ``fractions.Fraction`` bounds, so shadows from
  neighboring walls meet exactly and a closed ring of walls hides everything
  behind it.
- **Light walls**: An opaque cell is revealed if any part of its arc is still
  lit. A floor cell is revealed only if its center is lit.
- **Corners**: The sweep can't see the wall cell in the crook of two visible
  walls, where the walls meet at an acute angle next to the viewer's side.
  `add_acute_corners` fills those in as a second pass.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections.abc import Callable, Iterable
from fractions import Fraction
from typing import TypeAlias

from warrens import config
from warrens.environment.location import Location
from warrens.types import HexVector
from warrens.util.hex_directions import HexDir, hex_ring

BlocksSight: TypeAlias = Callable[[Location], bool]

# Closed interval of a turn, 0 <= start <= end <= 1.
Arc: TypeAlias = tuple[Fraction, Fraction]

_ZERO = Fraction(0)
_ONE = Fraction(1)
_FULL_TURN: list[Arc] = [(_ZERO, _ONE)]

# Non-adjacent lateral offset -> the two neighbors that flank it.
_ACUTE_CORNERS: tuple[tuple[HexVector, HexVector, HexVector], ...] = (
    ((1, -1), HexDir.NORTH_EAST.to_vector(), HexDir.SOUTH_EAST.to_vector()),
    ((-1, 1), HexDir.NORTH_WEST.to_vector(), HexDir.SOUTH_WEST.to_vector()),
)


def sight_range(origin: Location) -> int:
    """Overland views reach across a whole sector, underground views don't."""
    if origin.z == config.OVERWORLD_Z:
        return config.OVERLAND_FOV_RANGE
    return config.DEFAULT_FOV_RANGE


def field_of_view(
    origin: Location, radius: int, blocks_sight: BlocksSight
) -> set[Location]:
    """Every location visible from ``origin`` within ``radius`` steps."""
    visible = hex_fov(origin, radius, blocks_sight)
    add_acute_corners(visible, blocks_sight)
    return visible


def hex_fov(origin: Location, radius: int, blocks_sight: BlocksSight) -> set[Location]:
    """Shadowcasting sweep from ``origin``. The origin is always visible.

    Args:
        origin: Viewer position. Its own opacity is ignored.
        radius: Maximum number of steps from the origin.
        blocks_sight: Opacity predicate for a location.

    Returns:
        The set of visible locations, including the origin.
    """
    visible = {origin}
    shadows: list[Arc] = []

    for r in range(1, radius + 1):
        cells_in_ring = 6 * r
        cast: list[Arc] = []

        for i, offset in enumerate(hex_ring(r)):
            loc = origin + offset
            start = Fraction(2 * i - 1, 2 * cells_in_ring)
            end = Fraction(2 * i + 1, 2 * cells_in_ring)
            # Only the first cell's arc straddles North.
            pieces = [(start + 1, _ONE), (_ZERO, end)] if start < 0 else [(start, end)]

            if blocks_sight(loc):
                if not all(_arc_covered(piece, shadows) for piece in pieces):
                    visible.add(loc)
                cast.extend(pieces)
            elif not _point_shadowed(Fraction(i, cells_in_ring), shadows):
                visible.add(loc)

        # A ring doesn't shadow itself.
        if cast:
            shadows = _merge(shadows + cast)
        if shadows == _FULL_TURN:
            break

    return visible


def add_acute_corners(
    visible: set[Location], blocks_sight: BlocksSight
) -> set[Location]:
    """Reveal opaque cells wedged between two visible opaque neighbors.

    Modifies ``visible`` in place.

    Returns:
        The corner locations that were added.
    """
    added: set[Location] = set()
    for loc in list(visible):
        if blocks_sight(loc):
            continue
        for corner_offset, flank_a, flank_b in _ACUTE_CORNERS:
            corner = loc + corner_offset
            if corner in visible or not blocks_sight(corner):
                continue
            if _visible_wall(loc + flank_a, visible, blocks_sight) and _visible_wall(
                loc + flank_b, visible, blocks_sight
            ):
                added.add(corner)
    visible |= added
    return added


# =============================================================================
# Shadow arithmetic
# =============================================================================


def _visible_wall(
    loc: Location, visible: set[Location], blocks_sight: BlocksSight
) -> bool:
    return loc in visible and blocks_sight(loc)


def _merge(arcs: Iterable[Arc]) -> list[Arc]:
    """Sort arcs and join any that overlap or touch."""
    merged: list[Arc] = []
    for start, end in sorted(arcs):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def _arc_covered(arc: Arc, shadows: list[Arc]) -> bool:
    start, end = arc
    # Last shadow starting at or before the arc.
    i = bisect_right(shadows, start, key=_arc_start) - 1
    return i >= 0 and end <= shadows[i][1]


def _point_shadowed(point: Fraction, shadows: list[Arc]) -> bool:
    """Whether ``point`` lies strictly inside the shadow.

    Points on a shadow's edge stay lit, so a single wall hides the same cells
    on both sides. North (0) is shared by both ends of the turn and is in
    shadow only when shadows reach it from both sides.
    """
    if not shadows:
        return False
    if point == 0:
        return shadows[0][0] == 0 and shadows[-1][1] == 1
    # Last shadow starting strictly before the point.
    i = bisect_left(shadows, point, key=_arc_start) - 1
    return i >= 0 and point < shadows[i][1]


def _arc_start(arc: Arc) -> Fraction:
    return arc[0]
