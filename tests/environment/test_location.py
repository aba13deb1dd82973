from __future__ import annotations

import pytest

from warrens import config
from warrens.environment.location import Location, Sector
from warrens.util.hex_directions import HexDir


def test_vector_arithmetic_keeps_layer() -> None:
    loc = Location(3, 4, -2)
    assert loc + (1, -1) == Location(4, 3, -2)
    assert Location(5, 1, -2) - loc == (2, -3)
    assert loc.step(HexDir.SOUTH) == Location(4, 5, -2)


def test_locations_are_hashable_values() -> None:
    seen = {Location(1, 2), Location(1, 2, 0), Location(1, 2, -1)}
    assert len(seen) == 2


def test_neighbors_are_one_step_away() -> None:
    loc = Location(0, 0)
    neighbors = loc.neighbors()
    assert len(neighbors) == 6
    assert neighbors[0] == Location(-1, -1)
    assert all(loc.hex_dist(n) == 1 for n in neighbors)


@pytest.mark.parametrize(
    ("loc", "sector"),
    [
        (Location(0, 0), Sector(0, 0, 0)),
        (Location(39, 19), Sector(0, 0, 0)),
        (Location(40, 20), Sector(1, 1, 0)),
        (Location(-1, -1, -3), Sector(-1, -1, -3)),
        (Location(-40, -21, 0), Sector(-1, -2, 0)),
    ],
)
def test_sector_uses_floor_division(loc: Location, sector: Sector) -> None:
    assert loc.sector() == sector


def test_sector_follows_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "SECTOR_WIDTH", 10)
    assert Location(25, 0).sector() == Sector(2, 0, 0)


def test_is_overworld() -> None:
    assert Location(5, 5).is_overworld()
    assert not Location(5, 5, -1).is_overworld()
