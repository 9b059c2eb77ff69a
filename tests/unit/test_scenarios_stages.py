"""Unit tests for demo scenarios and the stage registry."""

import pytest
from pydantic import ValidationError

from pathway.demo.scenarios import (
    DEFAULT_SCENARIOS,
    Scenario,
    build_initial_record,
    default_record,
    get_scenario,
    merge_state,
)
from pathway.engines.progression.stages import DEFAULT_STAGES, StageRegistry
from pathway.kernel.models.learner import Level, Phase


class TestScenarios:

    def test_default_record(self):
        record = default_record()
        assert record.level == Level.APPRENTICE
        assert record.phase == Phase.ONBOARDING
        assert record.xp == 0
        assert record.center.occupancy == 12
        assert [n.id for n in record.notifications] == ["welcome"]

    def test_default_record_seed(self):
        assert default_record("OTHER").seed == "OTHER"

    def test_scenario_ids_unique(self):
        ids = [s.id for s in DEFAULT_SCENARIOS]
        assert len(ids) == len(set(ids))

    def test_every_scenario_builds(self):
        for scenario in DEFAULT_SCENARIOS:
            build_initial_record(scenario)

    def test_discovery_scenario(self, discovery_record):
        assert discovery_record.phase == Phase.DISCOVERY
        assert discovery_record.xp == 320
        assert discovery_record.completed_units == {"ML-01"}
        # Nested merge keeps defaults that were not overridden
        assert discovery_record.onboarding.city == "eskisehir"
        assert discovery_record.onboarding.primary_path == "data-analysis"

    def test_invalid_scenario_raises(self):
        bad = Scenario(id="bad", name="Bad", initial_state={"xp": -10})
        with pytest.raises(ValidationError):
            build_initial_record(bad)

    def test_get_scenario(self):
        assert get_scenario("fresh-start") is not None
        assert get_scenario("missing") is None

    def test_merge_state(self):
        merged = merge_state({"a": {"b": 1, "c": 2}, "d": [1]}, {"a": {"b": 9}, "d": [2]})
        assert merged == {"a": {"b": 9, "c": 2}, "d": [2]}


class TestStageRegistry:

    def test_default_keys(self):
        registry = StageRegistry()
        assert registry.keys() == list(DEFAULT_STAGES)
        assert "graduation" in registry
        assert "nowhere" not in registry

    def test_apply_returns_new_record(self, record):
        registry = StageRegistry()
        staged = registry.apply(record, "graduation")
        assert staged.level == Level.GRADUATE
        assert staged.portfolio.certificate_id == "CERT-DEMO-2026"
        assert record.level == Level.APPRENTICE

    def test_apply_unknown(self, record):
        assert StageRegistry().apply(record, "nowhere") is None

    def test_invalid_stage_rejected_up_front(self):
        with pytest.raises(ValueError):
            StageRegistry({"broken": {"level": "wizard"}})

    def test_get_returns_copy(self):
        registry = StageRegistry()
        entry = registry.get("onboarding")
        entry["xp"] = 999
        assert registry.get("onboarding")["xp"] == 0
