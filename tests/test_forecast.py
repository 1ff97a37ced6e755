"""Tests for engine/forecast.py — compounding-growth forecast.

Covers:
  - Length and month-0 anchor
  - Compounding formula
  - Totals match the per-service projection
  - Rounding is display-only
  - Decline and the zero floor
"""

from __future__ import annotations

import pytest

from cost_estimator.config import EstimatorState, ServiceCatalog
from cost_estimator.engine.forecast import forecast_for_state, simulate
from cost_estimator.engine.projection import summarize


# ═══════════════════════════════════════════════════════════════════════════
# Shape
# ═══════════════════════════════════════════════════════════════════════════

class TestShape:

    @pytest.mark.parametrize("months", [1, 12, 36])
    def test_months_plus_one_points(self, default_catalog: ServiceCatalog, months: int):
        result = simulate(default_catalog, 50_000, 10, months, "light")
        assert len(result.points) == months + 1
        assert [p.month_index for p in result.points] == list(range(months + 1))

    def test_labels(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 100, 5, 3, "medium")
        assert [p.label for p in result.points] == ["M0", "M1", "M2", "M3"]

    def test_month_zero_is_today(self, default_catalog: ServiceCatalog):
        result = simulate(default_catalog, 50_000, 10, 12, "medium")
        p0 = result.points[0]
        assert p0.users == 50_000
        assert p0.factor == 1.0
        # factor 1 → every service at baseline
        assert p0.total == pytest.approx(default_catalog.baseline_total())


# ═══════════════════════════════════════════════════════════════════════════
# Compounding
# ═══════════════════════════════════════════════════════════════════════════

class TestCompounding:

    @pytest.mark.parametrize("growth", [10.0, 2.5, -5.0, 0.0])
    def test_users_compound(self, small_catalog: ServiceCatalog, growth: float):
        result = simulate(small_catalog, 1_000, growth, 24, "light")
        for p in result.points:
            expected = 1_000 * (1 + growth / 100) ** p.month_index
            assert p.users == pytest.approx(expected, rel=1e-9)
            assert p.factor == pytest.approx(expected / 1_000, rel=1e-9)

    def test_month_total_matches_summary(self, default_catalog: ServiceCatalog):
        """Month 1 at +100% equals the point projection at double the users."""
        result = simulate(default_catalog, 50_000, 100, 1, "heavy")
        st = EstimatorState(current_users=50_000, future_users=100_000, usage_weight="heavy")
        assert result.points[1].total == pytest.approx(summarize(default_catalog, st).projected_total)

    def test_month_total_by_hand(self, default_catalog: ServiceCatalog):
        result = simulate(default_catalog, 50_000, 10, 6, "heavy")
        m2 = result.points[2]
        hand = 0.0
        for s in default_catalog.services:
            boost = 1.4 if s.is_traffic_sensitive else 1.0
            hand += s.baseline * (1 - s.elasticity) + s.baseline * s.elasticity * m2.factor * boost
        assert m2.total == pytest.approx(hand)

    def test_zero_growth_is_flat(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 500, 0, 5, "light")
        assert len({round(p.total, 9) for p in result.points}) == 1

    def test_growth_increases_total(self, default_catalog: ServiceCatalog):
        result = simulate(default_catalog, 50_000, 10, 12, "light")
        totals = [p.total for p in result.points]
        assert totals == sorted(totals)
        assert result.end_total > result.start_total
        assert result.peak_total == result.end_total

    def test_summary_fields(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 100, 10, 3, "light")
        totals = [p.total for p in result.points]
        assert result.start_total == totals[0]
        assert result.end_total == totals[-1]
        assert result.total_spend == pytest.approx(sum(totals))
        assert result.months == 3


# ═══════════════════════════════════════════════════════════════════════════
# Display rounding
# ═══════════════════════════════════════════════════════════════════════════

class TestRounding:

    def test_rounding_is_display_only(self, small_catalog: ServiceCatalog):
        raw = simulate(small_catalog, 1_000, 3.3, 6, "light", round_users=False)
        rounded = simulate(small_catalog, 1_000, 3.3, 6, "light", round_users=True)
        for a, b in zip(raw.points, rounded.points):
            assert a.users == b.users
            assert a.factor == b.factor
            assert a.total == b.total
            assert b.display_users == float(round(b.users))
            assert a.display_users == a.users

    def test_state_wrapper_uses_round_users(self, small_catalog: ServiceCatalog):
        st = EstimatorState(current_users=1_000, monthly_growth_pct=3.3, months=4, round_users=True)
        result = forecast_for_state(small_catalog, st)
        assert len(result.points) == 5
        assert result.points[1].display_users == 1033.0
        assert result.points[1].users == pytest.approx(1033.0)


# ═══════════════════════════════════════════════════════════════════════════
# Decline and degenerate inputs
# ═══════════════════════════════════════════════════════════════════════════

class TestDecline:

    def test_decline_monotonic(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 1_000, -20, 10, "light")
        users = [p.users for p in result.points]
        assert users == sorted(users, reverse=True)
        assert all(u > 0 for u in users)

    def test_full_decline_hits_zero_then_factor_one(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 1_000, -100, 3, "light")
        assert result.points[1].users == 0
        assert result.points[1].factor == 1.0

    def test_users_never_negative(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 1_000, -150, 5, "light")
        assert all(p.users >= 0 for p in result.points)

    def test_zero_current_users(self, small_catalog: ServiceCatalog):
        result = simulate(small_catalog, 0, 10, 3, "light")
        assert all(p.factor == 1.0 for p in result.points)
        assert all(p.total == pytest.approx(150.0) for p in result.points)

    def test_empty_catalog(self):
        result = simulate(ServiceCatalog(services=[]), 100, 10, 2, "light")
        assert [p.total for p in result.points] == [0.0, 0.0, 0.0]
