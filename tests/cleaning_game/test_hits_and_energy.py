"""Tests for hit resolution and the energy meter."""

import pytest

from models import Point2D
from games.CleaningGame.dirt import Dirt, DirtCategory
from games.CleaningGame.energy import charge, clamp_energy, is_full, percent
from games.CleaningGame.hits import is_hit, resolve_hits, total_points
from games.CleaningGame.tools import Tool


@pytest.fixture
def big_dirt():
    return Dirt.create(1, 100.0, 100.0, 60.0, DirtCategory.MUD)


class TestHits:
    """Tests for the reach check."""

    def test_pointer_near_center(self, big_dirt):
        """A tap 11px away with gloves cleans a 60px dirt."""
        assert is_hit(big_dirt, Point2D(x=110, y=105), Tool.HAND)

    def test_reach_boundary_is_exclusive(self, big_dirt):
        """Distance equal to radius + reach is a miss."""
        assert not is_hit(big_dirt, Point2D(x=170, y=100), Tool.HAND)
        assert is_hit(big_dirt, Point2D(x=169.9, y=100), Tool.HAND)

    def test_bigger_tool_reaches_further(self, big_dirt):
        """The laser hits at a distance gloves cannot."""
        point = Point2D(x=225, y=100)

        assert not is_hit(big_dirt, point, Tool.HAND)
        assert is_hit(big_dirt, point, Tool.LASER)

    def test_resolve_splits_in_order(self, big_dirt):
        """Every dirt in reach is hit; the rest keep their order."""
        near = Dirt.create(2, 130.0, 100.0, 40.0, DirtCategory.DUST)
        far_a = Dirt.create(3, 300.0, 300.0, 40.0, DirtCategory.DUST)
        far_b = Dirt.create(4, 10.0, 400.0, 40.0, DirtCategory.STAIN)

        hit, remaining = resolve_hits([far_a, big_dirt, far_b, near],
                                      Point2D(x=110, y=100), Tool.HAND)

        assert hit == [big_dirt, near]
        assert remaining == [far_a, far_b]

    def test_resolve_miss(self, big_dirt):
        """A miss leaves every dirt in place."""
        hit, remaining = resolve_hits([big_dirt], Point2D(x=400, y=400), Tool.HAND)

        assert hit == []
        assert remaining == [big_dirt]

    def test_total_points(self, big_dirt):
        """Points add up per dirt."""
        small = Dirt.create(2, 0.0, 0.0, 40.0, DirtCategory.DUST)
        assert total_points([big_dirt, small]) == 40
        assert total_points([]) == 0


class TestEnergy:
    """Tests for the power-up meter."""

    def test_charge_per_hit(self):
        """Each cleaned dirt adds 5."""
        assert charge(0, 1) == 5
        assert charge(40, 3) == 55

    def test_charge_is_capped(self):
        """Energy never exceeds 100."""
        assert charge(98, 1) == 100
        assert charge(95, 3) == 100

    def test_is_full(self):
        """The burst needs a full meter."""
        assert is_full(100)
        assert not is_full(99)

    def test_clamp_and_percent(self):
        """Out-of-range values clamp; percent is a 0..1 fraction."""
        assert clamp_energy(-5) == 0
        assert clamp_energy(250) == 100
        assert percent(50) == pytest.approx(0.5)
        assert percent(120) == pytest.approx(1.0)
