"""Tests for the hex shadowcasting FOV implementation."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from warrens import config
from warrens.environment.fov import (
    add_acute_corners,
    field_of_view,
    hex_fov,
    sight_range,
)
from warrens.environment.location import Location
from warrens.util.hex_directions import HexDir, hex_dist, hex_ring

ORIGIN = Location(0, 0, -1)


def _walls(offsets: Iterable[tuple[int, int]]) -> Callable[[Location], bool]:
    """Opacity predicate with walls at the given offsets from ORIGIN."""
    walls = {ORIGIN + offset for offset in offsets}
    return lambda loc: loc in walls


def _ring_cells(radius: int) -> set[Location]:
    return {ORIGIN + offset for offset in hex_ring(radius)}


# ── 1. Open field ──────────────────────────────────────────────────────────


def test_open_field_everything_within_radius_visible() -> None:
    """With nothing in the way every cell within radius is visible."""
    radius = 5
    visible = hex_fov(ORIGIN, radius, _walls([]))

    expected = set().union(*(_ring_cells(r) for r in range(radius + 1)))
    assert visible == expected
    assert len(visible) == 1 + 3 * radius * (radius + 1)


def test_origin_always_visible() -> None:
    assert ORIGIN in hex_fov(ORIGIN, 3, lambda loc: True)
    assert hex_fov(ORIGIN, 0, _walls([])) == {ORIGIN}


def test_nothing_beyond_radius() -> None:
    visible = field_of_view(ORIGIN, 4, _walls([(0, -2), (2, 2)]))
    assert all(hex_dist(loc - ORIGIN) <= 4 for loc in visible)


# ── 2. Single wall blocks cells behind it ──────────────────────────────────


def test_single_wall_blocks_behind() -> None:
    """A wall NE of the viewer hides the cells straight behind it."""
    visible = hex_fov(ORIGIN, 6, _walls([(0, -1)]))

    assert ORIGIN + (0, -1) in visible, "Wall should be visible"
    assert ORIGIN + (0, -2) not in visible
    assert ORIGIN + (0, -3) not in visible


def test_single_wall_shadow_is_symmetric() -> None:
    """Cells whose centers sit on the shadow's edges stay visible."""
    visible = hex_fov(ORIGIN, 6, _walls([(0, -1)]))
    assert ORIGIN + (-1, -2) in visible
    assert ORIGIN + (1, -1) in visible


@pytest.mark.parametrize("wall", list(hex_ring(2)))
def test_shadows_only_fall_behind_walls(wall: tuple[int, int]) -> None:
    visible = hex_fov(ORIGIN, 6, _walls([wall]))
    hidden = set().union(*(_ring_cells(r) for r in range(7))) - visible
    assert hidden
    assert all(hex_dist(loc - ORIGIN) > 2 for loc in hidden)


# ── 3. Enclosures ──────────────────────────────────────────────────────────


def test_closed_ring_hides_everything_beyond() -> None:
    visible = hex_fov(ORIGIN, 8, _walls(hex_ring(2)))
    assert _ring_cells(2) <= visible
    assert all(hex_dist(loc - ORIGIN) <= 2 for loc in visible)


def test_enclosed_viewer_sees_only_the_walls() -> None:
    visible = field_of_view(ORIGIN, 10, _walls(hex_ring(1)))
    assert visible == {ORIGIN} | _ring_cells(1)


def test_gap_in_ring_lets_a_narrow_beam_through() -> None:
    """A one-cell gap due North shows the cells straight through it."""
    ring = list(hex_ring(2))
    visible = hex_fov(ORIGIN, 5, _walls(ring[1:]))

    for r in (3, 4, 5):
        assert ORIGIN + (-r, -r) in visible
    assert ORIGIN + (-2, -3) not in visible
    assert ORIGIN + (3, 3) not in visible


# ── 4. Acute corners ───────────────────────────────────────────────────────


def test_acute_corner_hidden_by_sweep() -> None:
    walls = _walls([(0, -1), (1, 0), (1, -1)])
    assert ORIGIN + (1, -1) not in hex_fov(ORIGIN, 4, walls)


def test_acute_corner_revealed_by_corner_pass() -> None:
    walls = _walls([(0, -1), (1, 0), (1, -1)])
    visible = hex_fov(ORIGIN, 4, walls)

    added = add_acute_corners(visible, walls)

    assert ORIGIN + (1, -1) in added
    assert ORIGIN + (1, -1) in visible


def test_mirrored_acute_corner() -> None:
    walls = _walls([(-1, 0), (0, 1), (-1, 1)])
    assert ORIGIN + (-1, 1) in field_of_view(ORIGIN, 4, walls)


def test_open_corner_cell_stays_hidden() -> None:
    """Only opaque corner cells are filled in."""
    walls = _walls([(0, -1), (1, 0)])
    assert ORIGIN + (1, -1) not in field_of_view(ORIGIN, 4, walls)


def test_corner_pass_needs_both_flanks() -> None:
    walls = _walls([HexDir.NORTH_EAST.to_vector(), (1, -1)])
    visible = {ORIGIN, ORIGIN + HexDir.NORTH_EAST.to_vector()}
    assert add_acute_corners(visible, walls) == set()


# ── 5. Range policy ────────────────────────────────────────────────────────


def test_sight_range() -> None:
    assert sight_range(Location(3, 3, 0)) == config.OVERLAND_FOV_RANGE
    assert sight_range(Location(3, 3, -2)) == config.DEFAULT_FOV_RANGE
    assert config.OVERLAND_FOV_RANGE == config.SECTOR_WIDTH
