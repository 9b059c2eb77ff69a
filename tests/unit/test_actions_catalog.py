"""Unit tests for action parsing and the content catalog."""

import pytest
from pydantic import ValidationError

from pathway.kernel.events.event_types import (
    CompleteUnit,
    JumpToStage,
    ManualLevelUp,
    SubmitTask,
    action_schema,
    parse_action,
    try_parse_action,
)
from pathway.kernel.models.learner import Level
from pathway.pedagogy.catalog import DEFAULT_CATALOG, EVIDENCE_UNIT, TASK_XP, StepType


class TestActionParsing:

    def test_parse_by_type_tag(self):
        action = parse_action({"type": "complete-unit", "id": "ML-01", "xp": 100})
        assert action == CompleteUnit(id="ML-01", xp=100)

    def test_extra_fields_ignored(self):
        action = parse_action({"type": "submit-task", "id": "T-01", "xp": 50, "note": "hi"})
        assert isinstance(action, SubmitTask)

    def test_unknown_type_raises(self):
        with pytest.raises(ValidationError):
            parse_action({"type": "teleport"})

    def test_try_parse_returns_none(self):
        assert try_parse_action({"type": "complete-unit", "id": "", "xp": 10}) is None

    def test_enum_coercion(self):
        action = parse_action({"type": "manual-level-up", "level": "master"})
        assert action.level == Level.MASTER

    def test_debug_flag(self):
        assert ManualLevelUp.debug is True
        assert JumpToStage.debug is True
        assert CompleteUnit.debug is False

    def test_actions_are_frozen(self):
        action = CompleteUnit(id="ML-01", xp=100)
        with pytest.raises(ValidationError):
            action.xp = 5

    def test_schema_lists_every_type(self):
        schema = action_schema()
        assert "complete-unit" in str(schema)
        assert "jump-to-stage" in str(schema)


class TestCatalog:

    def test_lookup(self):
        assert DEFAULT_CATALOG.get_unit("ML-01") is EVIDENCE_UNIT
        assert DEFAULT_CATALOG.get_task("T-02").xp == TASK_XP["med"]
        assert DEFAULT_CATALOG.get_event("EV-HACKATHON").xp == 300
        assert DEFAULT_CATALOG.get_task("nope") is None

    def test_path_filters(self):
        assert [t.id for t in DEFAULT_CATALOG.tasks_for_path("software")] == ["T-03"]
        assert {u.id for u in DEFAULT_CATALOG.units_for_path("data-analysis")} == {"ML-01", "ML-02"}

    def test_evidence_unit_shape(self):
        types = [s.type for s in EVIDENCE_UNIT.steps]
        assert types == [
            StepType.READ,
            StepType.QUIZ,
            StepType.CHECKLIST,
            StepType.REFLECTION,
            StepType.UPLOAD,
        ]
        assert EVIDENCE_UNIT.xp == 100
