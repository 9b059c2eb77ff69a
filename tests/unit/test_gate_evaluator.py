"""Unit tests for the level gate evaluator."""

from pathway.engines.gates.gate_evaluator import (
    DEFAULT_GATE_REQUIREMENTS,
    Requirement,
    RequirementKind,
    evaluate_gate,
    next_level,
)
from pathway.kernel.models.learner import LearnerRecord, Level


def _record(xp=0, tasks=0, units=0, level=Level.APPRENTICE) -> LearnerRecord:
    return LearnerRecord(
        xp=xp,
        level=level,
        completed_tasks={f"T-{i}" for i in range(tasks)},
        completed_units={f"U-{i}" for i in range(units)},
    )


def _status(evaluation, req_id):
    return next(r for r in evaluation.requirements if r.id == req_id)


class TestRequirementStatus:

    def test_xp_below_target(self):
        evaluation = evaluate_gate(_record(xp=320), Level.APPRENTICE)
        xp = _status(evaluation, "xp")
        assert xp.current == 320
        assert xp.target == 800
        assert xp.fulfilled is False

    def test_xp_above_target(self):
        evaluation = evaluate_gate(_record(xp=900), Level.APPRENTICE)
        assert _status(evaluation, "xp").fulfilled is True

    def test_counts_read_from_sets(self):
        evaluation = evaluate_gate(_record(tasks=10, units=4), Level.APPRENTICE)
        assert _status(evaluation, "tasks").fulfilled is True
        assert _status(evaluation, "units").current == 4
        assert _status(evaluation, "units").fulfilled is False

    def test_meeting_counter_is_external(self):
        record = _record(xp=900, tasks=10, units=5)
        assert _status(evaluate_gate(record, Level.APPRENTICE), "meeting").fulfilled is False
        evaluation = evaluate_gate(record, Level.APPRENTICE, meetings_attended=1)
        assert _status(evaluation, "meeting").fulfilled is True

    def test_missing(self):
        evaluation = evaluate_gate(_record(xp=900, tasks=10, units=5), Level.APPRENTICE)
        assert [r.id for r in evaluation.missing] == ["meeting"]


class TestCanAdvance:

    def test_all_fulfilled_at_current_level(self):
        evaluation = evaluate_gate(
            _record(xp=900, tasks=10, units=5), Level.APPRENTICE, meetings_attended=1
        )
        assert evaluation.all_fulfilled is True
        assert evaluation.can_advance is True
        assert evaluation.next_level == Level.JOURNEYMAN

    def test_level_mismatch_blocks_advance(self):
        record = _record(xp=900, tasks=10, units=5, level=Level.JOURNEYMAN)
        evaluation = evaluate_gate(record, Level.APPRENTICE, meetings_attended=1)
        assert evaluation.all_fulfilled is True
        assert evaluation.can_advance is False

    def test_graduate_has_no_gate(self):
        evaluation = evaluate_gate(_record(level=Level.GRADUATE), Level.GRADUATE)
        assert evaluation.requirements == []
        assert evaluation.all_fulfilled is True
        assert evaluation.next_level is None
        assert evaluation.can_advance is False

    def test_master_gate_has_capstone_and_demo(self):
        ids = [r.id for r in DEFAULT_GATE_REQUIREMENTS[Level.MASTER]]
        assert ids == ["xp", "tasks", "units", "capstone", "demo"]

    def test_custom_requirement_table(self):
        table = {
            Level.APPRENTICE: [
                Requirement(id="xp", label="Earn 10 XP", kind=RequirementKind.XP, target=10),
            ]
        }
        evaluation = evaluate_gate(_record(xp=10), Level.APPRENTICE, requirements=table)
        assert evaluation.can_advance is True

    def test_evaluation_does_not_touch_record(self):
        record = _record(xp=320)
        before = record.model_copy(deep=True)
        evaluate_gate(record, Level.APPRENTICE, meetings_attended=3)
        assert record == before


def test_next_level():
    assert next_level(Level.APPRENTICE) == Level.JOURNEYMAN
    assert next_level(Level.MASTER) == Level.GRADUATE
    assert next_level(Level.GRADUATE) is None
