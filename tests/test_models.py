"""Tests für die Datenmodelle."""

import json
from datetime import date, time
from pathlib import Path

import pytest
from pydantic import ValidationError

from models import (
    Assignment,
    AssignmentSnapshot,
    AssignmentStatus,
    Conflict,
    ConflictType,
    Course,
    Severity,
    Teacher,
    TimeRange,
    TimeSlot,
    Weekday,
    WeightProfile,
)


def _course(cid: int = 1) -> Course:
    return Course(
        id=cid, topic="Mathematics", lessons_count=10, lesson_duration=45,
        start_date=date(2025, 9, 1), end_date=date(2025, 12, 19),
    )


class TestTeacher:
    def test_weekly_capacity(self):
        t = Teacher(
            id=1, name="Dr. Alice Smith", qualifications=["Mathematics"],
            working_times={
                Weekday.MONDAY: TimeRange(start=time(8, 0), end=time(12, 0)),
                Weekday.THURSDAY: TimeRange(start=time(13, 0), end=time(14, 30)),
            },
        )
        assert t.weekly_capacity_minutes == 240 + 90
        assert t.has_working_times

    def test_time_range_end_after_start(self):
        with pytest.raises(ValidationError):
            TimeRange(start=time(12, 0), end=time(8, 0))

    def test_weekday_from_index(self):
        assert Weekday.from_index(date(2025, 9, 1).weekday()) == Weekday.MONDAY


class TestCourseAndAssignment:
    def test_total_minutes(self):
        assert _course().total_minutes == 450

    def test_negative_lessons_rejected(self):
        with pytest.raises(ValidationError):
            Course(id=1, topic="X", lessons_count=-1, lesson_duration=45,
                   start_date=date(2025, 9, 1), end_date=date(2025, 9, 2))

    def test_participating_statuses(self):
        def status(s):
            return Assignment(id=1, teacher_id=1, course_id=1, status=s).is_participating
        assert status(AssignmentStatus.ACTIVE)
        assert status(AssignmentStatus.PENDING)
        assert not status(AssignmentStatus.INACTIVE)
        assert not status(AssignmentStatus.CANCELLED)

    def test_scheduled_minutes(self):
        slot = TimeSlot(date=date(2025, 9, 1), start_time=time(9, 0),
                        end_time=time(9, 45), duration_minutes=45)
        a = Assignment(id=1, teacher_id=1, course_id=1, scheduled_slots=[slot, slot])
        assert a.scheduled_minutes == 90
        assert str(slot) == "2025-09-01 09:00–09:45"


class TestConflictModel:
    def test_severity_from_type(self):
        assert Conflict.of(ConflictType.OVERLOAD, "x").severity == Severity.MEDIUM
        assert Conflict.of(ConflictType.COVERAGE_GAP, "x").severity == Severity.LOW

    def test_hashable_and_key_ignores_description(self):
        a = Conflict.of(ConflictType.TIME_OVERLAP, "eins", assignment_ids=frozenset({1, 2}))
        b = Conflict.of(ConflictType.TIME_OVERLAP, "zwei", assignment_ids=frozenset({2, 1}))
        assert a.key == b.key
        assert len({a, a}) == 1

    def test_aggregate_key_ignores_assignment_ids(self):
        """Überlastung und Doppelzuweisung werden über die Entität identifiziert."""
        a = Conflict.of(ConflictType.OVERLOAD, "x", assignment_ids=frozenset({1, 2}),
                        teacher_id=1, period="2025-W36")
        b = Conflict.of(ConflictType.OVERLOAD, "x", assignment_ids=frozenset({1, 2, 3}),
                        teacher_id=1, period="2025-W36")
        assert a.key == b.key
        d1 = Conflict.of(ConflictType.DUPLICATE_ASSIGNMENT, "x",
                         assignment_ids=frozenset({1, 2}), teacher_id=1, course_id=4)
        d2 = Conflict.of(ConflictType.DUPLICATE_ASSIGNMENT, "x",
                         assignment_ids=frozenset({1, 5}), teacher_id=1, course_id=4)
        assert d1.key == d2.key

    def test_overlap_key_keeps_assignment_ids(self):
        a = Conflict.of(ConflictType.TIME_OVERLAP, "x", assignment_ids=frozenset({1, 2}), teacher_id=1)
        b = Conflict.of(ConflictType.TIME_OVERLAP, "x", assignment_ids=frozenset({1, 3}), teacher_id=1)
        assert a.key != b.key


class TestSnapshot:
    def _snapshot(self) -> AssignmentSnapshot:
        return AssignmentSnapshot(
            teachers=[Teacher(id=1, name="Alice", qualifications=["Mathematics"])],
            courses=[_course()],
            assignments=[
                Assignment(id=1, teacher_id=1, course_id=1),
                Assignment(id=2, teacher_id=1, course_id=1, status=AssignmentStatus.CANCELLED),
            ],
            weights=WeightProfile(name="Balanced", equality=33, continuity=33, loyalty=34),
        )

    def test_lookups(self):
        snap = self._snapshot()
        assert snap.find_teacher(1).name == "Alice"
        assert snap.find_teacher(2) is None
        assert snap.find_course(1).topic == "Mathematics"
        assert [a.id for a in snap.participating_assignments()] == [1]

    def test_with_assignment_replaces_same_id(self):
        snap = self._snapshot()
        changed = snap.with_assignment(
            Assignment(id=1, teacher_id=1, course_id=1, status=AssignmentStatus.PENDING)
        )
        assert len(changed.assignments) == 2
        assert {a.id: a.status for a in changed.assignments}[1] == AssignmentStatus.PENDING
        assert snap.assignments[0].status == AssignmentStatus.ACTIVE

    def test_with_assignment_adds_new_id(self):
        snap = self._snapshot().with_assignment(Assignment(id=3, teacher_id=1, course_id=1))
        assert [a.id for a in snap.assignments] == [1, 2, 3]

    def test_summary(self):
        text = self._snapshot().summary()
        assert "Lehrkräfte: 1" in text
        assert "Balanced (33/33/34)" in text

    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "snapshot.json"
        snap = self._snapshot()
        path.write_text(snap.model_dump_json(), encoding="utf-8")
        assert AssignmentSnapshot.load_json(path) == snap

    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            AssignmentSnapshot.load_json(tmp_path / "fehlt.json")

    def test_load_json_working_times(self, tmp_path: Path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({
            "teachers": [{
                "id": 1, "name": "Alice", "qualifications": ["Mathematics"],
                "working_times": {"monday": {"start": "08:00", "end": "12:00"}},
            }],
        }), encoding="utf-8")
        snap = AssignmentSnapshot.load_json(path)
        assert snap.teachers[0].weekly_capacity_minutes == 240
