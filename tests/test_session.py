"""Tests for session.py — host-layer state ownership and actions."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cost_estimator.config import EstimatorConfig, EstimatorState, ServiceCatalog
from cost_estimator.session import EstimatorSession


class TestStateEdits:

    def test_starts_at_defaults(self, session: EstimatorSession):
        assert session.state == EstimatorState()
        assert session.catalog == ServiceCatalog.default()
        assert session.selected_keys == []

    def test_update_state_replaces(self, session: EstimatorSession):
        before = session.state
        session.update_state(future_users=150_000, usage_weight="heavy")
        assert session.state.future_users == 150_000
        assert session.state.usage_weight == "heavy"
        assert before.future_users == 100_000

    def test_update_state_validates(self, session: EstimatorSession):
        with pytest.raises(ValidationError):
            session.update_state(months=0)
        assert session.state.months == 12

    def test_set_scale(self, session: EstimatorSession):
        session.set_scale(3)
        assert session.state.future_users == 150_000

    def test_from_config(self):
        cfg = EstimatorConfig(state=EstimatorState(current_users=10))
        assert EstimatorSession(cfg).state.current_users == 10


class TestServiceEdits:

    def test_edit_service(self, session: EstimatorSession):
        session.edit_service("rds", baseline=1000.0, elasticity=0.4)
        assert session.catalog.get("rds").baseline == 1000.0
        assert session.catalog.get("rds").elasticity == 0.4

    @pytest.mark.parametrize("raw,clamped", [(1.7, 1.0), (-0.3, 0.0)])
    def test_elasticity_clamped(self, session: EstimatorSession, raw, clamped):
        session.edit_service("ec2", elasticity=raw)
        assert session.catalog.get("ec2").elasticity == clamped

    def test_negative_baseline_clamped(self, session: EstimatorSession):
        session.edit_service("ec2", baseline=-5)
        assert session.catalog.get("ec2").baseline == 0.0

    def test_unknown_service(self, session: EstimatorSession):
        with pytest.raises(KeyError):
            session.edit_service("nope", baseline=1)

    def test_edit_changes_summary(self, session: EstimatorSession):
        before = session.summary().projected_total
        session.edit_service("rds", elasticity=1.0)
        assert session.summary().projected_total > before


class TestFilter:

    def test_toggle_on_and_off(self, session: EstimatorSession):
        session.toggle_service("rds")
        session.toggle_service("ec2")
        assert session.selected_keys == ["rds", "ec2"]
        assert [r.key for r in session.summary().rows] == ["rds", "ec2"]
        session.toggle_service("rds")
        assert session.selected_keys == ["ec2"]

    def test_toggle_unknown(self, session: EstimatorSession):
        with pytest.raises(KeyError):
            session.toggle_service("nope")

    def test_clear(self, session: EstimatorSession):
        session.toggle_service("rds")
        session.clear_filter()
        assert len(session.summary().rows) == 17


class TestScenario:

    def test_derive_does_not_touch_state(self, session: EstimatorSession):
        derived = session.derive()
        assert derived.derived_mau == 1620
        assert session.state.future_users == 100_000

    def test_apply(self, session: EstimatorSession):
        session.apply_scenario()
        assert session.state.future_users == 1620
        assert session.state.usage_weight == "medium"

    def test_set_scenario_then_apply(self, session: EstimatorSession):
        session.set_scenario(photos_per_listing=20, dealers=20)
        session.apply_scenario()
        assert session.state.usage_weight == "heavy"
        assert session.state.future_users == 3240


class TestReset:

    def test_reset_restores_defaults(self, session: EstimatorSession):
        session.update_state(currency="INR", fx_rate=90, months=24, round_users=False)
        session.edit_service("rds", baseline=1.0)
        session.toggle_service("ec2")
        session.set_scenario(dealers=99)
        session.reset()
        assert session.state == EstimatorState()
        assert session.catalog == ServiceCatalog.default()
        assert session.selected_keys == []
        # scenario inputs survive a reset
        assert session.scenario.dealers == 99

    def test_reset_idempotent(self, session: EstimatorSession):
        session.update_state(future_users=5)
        session.reset()
        once = (session.state, session.catalog, list(session.selected_keys), session.scenario)
        session.reset()
        twice = (session.state, session.catalog, list(session.selected_keys), session.scenario)
        assert once == twice


class TestOutputs:

    def test_forecast_uses_state(self, session: EstimatorSession):
        session.update_state(months=6)
        result = session.forecast()
        assert len(result.points) == 7
        assert result.points[0].display_users == 50_000

    def test_export_default_currency(self, session: EstimatorSession):
        filename, text = session.export_csv()
        assert filename == "aws-cost-projection-usd.csv"
        assert text.startswith("Service,BaselineUSD,")
        assert len(text.split("\n")) == 21

    def test_export_inr(self, session: EstimatorSession):
        session.update_state(currency="INR", fx_rate=80)
        filename, text = session.export_csv()
        assert filename == "aws-cost-projection-inr.csv"
        assert text.split("\n")[1] == "Amazon RDS,70328.00,0.60,112524.80"

    def test_export_follows_filter(self, session: EstimatorSession):
        session.toggle_service("s3")
        _, text = session.export_csv("USD")
        lines = text.split("\n")
        assert len(lines) == 5
        assert lines[1].startswith("Amazon S3,4.72,0.50,")
        assert lines[-2] == "Baseline Total,, ,2598.92"

    def test_export_zero_fx_rate_uses_default(self, session: EstimatorSession):
        session.update_state(currency="INR", fx_rate=0)
        _, text = session.export_csv()
        assert text.split("\n")[1] == "Amazon RDS,74723.50,0.60,119557.60"

    def test_export_forecast(self, session: EstimatorSession):
        session.update_state(months=3)
        filename, text = session.export_forecast_csv("INR")
        assert filename == "aws-cost-forecast-inr.csv"
        lines = text.split("\n")
        assert lines[0] == "Month,Users,TotalINR"
        assert len(lines) == 5
        assert lines[1].startswith("M0,50000,")


class TestFreeTextEntry:

    def test_enter_state_parses_text(self, session: EstimatorSession):
        session.enter_state(current_users="1,200", future_users="2400.7", monthly_growth_pct=" 5.5 ")
        assert session.state.current_users == 1200
        assert session.state.future_users == 2400
        assert session.state.monthly_growth_pct == 5.5

    def test_enter_state_recovers_bad_entries(self, session: EstimatorSession):
        session.enter_state(fx_rate="", months="0", monthly_growth_pct="-250", current_users="abc")
        assert session.state.fx_rate == 0
        assert session.state.months == 1
        assert session.state.monthly_growth_pct == -100
        assert session.state.current_users == 0

    def test_enter_state_empty_months_is_one(self, session: EstimatorSession):
        session.enter_state(months="")
        assert session.state.months == 1

    def test_enter_scenario(self, session: EstimatorSession):
        session.enter_scenario(dealers="abc", photos_per_listing="-3", seats_per_dealer="15")
        assert session.scenario.dealers == 0
        assert session.scenario.photos_per_listing == 0
        assert session.scenario.seats_per_dealer == 15
        assert session.scenario.inventory_per_dealer == 150
