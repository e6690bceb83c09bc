"""Konflikterkennung über einen vollständigen Zuweisungs-Snapshot.

Jede Regel erzeugt Konflikte mit der minimalen Menge verursachender
Zuweisungen. Das Ergebnis hängt nicht von der Reihenfolge der Eingabe ab;
die Ausgabe wird nach Schweregrad sortiert, Aufrufer sollten trotzdem als
Menge vergleichen.
"""

import logging
from collections import defaultdict

from engine.errors import UnknownEntityReference
from engine.qualification import EXACT_MATCH, QualificationPolicy
from engine.slots import (
    iso_week,
    slots_overlap,
    validate_assignment_slots,
    within_working_time,
)
from models.assignment import Assignment
from models.conflict import Conflict, ConflictType
from models.course import Course
from models.teacher import Teacher
from models.timeslot import TimeSlot

logger = logging.getLogger(__name__)


class ConflictDetector:
    """Prüft Zuweisungen auf harte und weiche Planungskonflikte."""

    def __init__(self, policy: QualificationPolicy = EXACT_MATCH):
        self.policy = policy

    def detect_all(
        self,
        assignments: list[Assignment],
        teachers: list[Teacher],
        courses: list[Course],
    ) -> list[Conflict]:
        """Führt alle Prüfungen durch.

        Nur active/pending Zuweisungen nehmen teil. Referenzen und Termine
        werden für alle Zuweisungen geprüft.

        Raises:
            UnknownEntityReference: Lehrkraft oder Kurs fehlt im Snapshot.
            MalformedTimeSlot: inkonsistenter Termin.
        """
        teacher_map = {t.id: t for t in teachers}
        course_map = {c.id: c for c in courses}
        for a in assignments:
            if a.teacher_id not in teacher_map:
                raise UnknownEntityReference("teacher", a.teacher_id, a.id)
            if a.course_id not in course_map:
                raise UnknownEntityReference("course", a.course_id, a.id)
        validate_assignment_slots(assignments)

        participating = sorted(
            (a for a in assignments if a.is_participating), key=lambda a: a.id
        )

        conflicts: list[Conflict] = []
        conflicts.extend(self._check_qualifications(participating, teacher_map, course_map))
        conflicts.extend(self._check_duplicates(participating, teacher_map, course_map))
        conflicts.extend(self._check_time_overlaps(participating, teacher_map))
        conflicts.extend(self._check_overload(participating, teacher_map))
        conflicts.extend(self._check_availability(participating, teacher_map))
        conflicts.extend(self._check_coverage(participating, course_map))

        logger.debug(
            f"Konfliktprüfung: {len(participating)}/{len(assignments)} Zuweisungen, "
            f"{len(conflicts)} Konflikte"
        )
        return sorted(conflicts, key=lambda c: c.sort_key)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_qualifications(
        self,
        assignments: list[Assignment],
        teacher_map: dict[int, Teacher],
        course_map: dict[int, Course],
    ) -> list[Conflict]:
        """Das Kursthema muss in den Qualifikationen der Lehrkraft enthalten sein."""
        conflicts: list[Conflict] = []
        for a in assignments:
            teacher = teacher_map[a.teacher_id]
            course = course_map[a.course_id]
            if not self.policy.is_qualified(teacher, course):
                conflicts.append(Conflict.of(
                    ConflictType.QUALIFICATION_MISMATCH,
                    f"{teacher.name} besitzt keine Qualifikation für '{course.topic}' "
                    f"(vorhanden: {', '.join(teacher.qualifications) or '–'}).",
                    assignment_ids=frozenset({a.id}),
                    teacher_id=teacher.id,
                    course_id=course.id,
                ))
        return conflicts

    def _check_duplicates(
        self,
        assignments: list[Assignment],
        teacher_map: dict[int, Teacher],
        course_map: dict[int, Course],
    ) -> list[Conflict]:
        """Pro (Lehrkraft, Kurs) darf es höchstens eine Zuweisung geben."""
        by_pair: dict[tuple[int, int], list[int]] = defaultdict(list)
        for a in assignments:
            by_pair[a.pair].append(a.id)

        conflicts: list[Conflict] = []
        for (teacher_id, course_id), ids in sorted(by_pair.items()):
            if len(ids) > 1:
                conflicts.append(Conflict.of(
                    ConflictType.DUPLICATE_ASSIGNMENT,
                    f"{teacher_map[teacher_id].name} ist {len(ids)}× dem Kurs "
                    f"'{course_map[course_id].topic}' zugewiesen "
                    f"(Zuweisungen {', '.join(str(i) for i in sorted(ids))}).",
                    assignment_ids=frozenset(ids),
                    teacher_id=teacher_id,
                    course_id=course_id,
                ))
        return conflicts

    def _check_time_overlaps(
        self, assignments: list[Assignment], teacher_map: dict[int, Teacher]
    ) -> list[Conflict]:
        """Keine Lehrkraft darf zur selben Zeit in zwei Zuweisungen eingeplant sein.

        Pro Lehrkraft werden alle Termine nach Datum/Beginn sortiert und in
        einem Durchlauf gegen die noch "offenen" Termine geprüft. Ein
        Konflikt je Paar von Zuweisungen.
        """
        by_teacher: dict[int, list[tuple[TimeSlot, int]]] = defaultdict(list)
        for a in assignments:
            for slot in a.scheduled_slots:
                by_teacher[a.teacher_id].append((slot, a.id))

        conflicts: list[Conflict] = []
        for teacher_id in sorted(by_teacher):
            entries = sorted(by_teacher[teacher_id], key=lambda e: (e[0].sort_key, e[1]))
            first_hit: dict[tuple[int, int], tuple[TimeSlot, TimeSlot]] = {}
            open_slots: list[tuple[TimeSlot, int]] = []

            for slot, assignment_id in entries:
                open_slots = [(s, i) for s, i in open_slots if slots_overlap(s, slot)]
                for other_slot, other_id in open_slots:
                    if other_id == assignment_id:
                        continue
                    pair = (min(other_id, assignment_id), max(other_id, assignment_id))
                    first_hit.setdefault(pair, (other_slot, slot))
                open_slots.append((slot, assignment_id))

            name = teacher_map[teacher_id].name
            for (id_a, id_b), (slot_a, slot_b) in sorted(first_hit.items()):
                conflicts.append(Conflict.of(
                    ConflictType.TIME_OVERLAP,
                    f"{name}: Zuweisungen {id_a} und {id_b} überschneiden sich "
                    f"({slot_a} / {slot_b}).",
                    assignment_ids=frozenset({id_a, id_b}),
                    teacher_id=teacher_id,
                ))
        return conflicts

    def _check_overload(
        self, assignments: list[Assignment], teacher_map: dict[int, Teacher]
    ) -> list[Conflict]:
        """Geplante Minuten pro Woche ≤ Summe der deklarierten Arbeitszeitfenster.

        Lehrkräfte ohne deklarierte Fenster werden nicht geprüft.
        """
        minutes: dict[tuple[int, str], int] = defaultdict(int)
        involved: dict[tuple[int, str], set[int]] = defaultdict(set)
        for a in assignments:
            for slot in a.scheduled_slots:
                key = (a.teacher_id, iso_week(slot.date))
                minutes[key] += slot.duration_minutes
                involved[key].add(a.id)

        conflicts: list[Conflict] = []
        for (teacher_id, week), total in sorted(minutes.items()):
            teacher = teacher_map[teacher_id]
            if not teacher.has_working_times:
                continue
            capacity = teacher.weekly_capacity_minutes
            if total > capacity:
                conflicts.append(Conflict.of(
                    ConflictType.OVERLOAD,
                    f"{teacher.name}: {total} min geplant in {week}, "
                    f"Arbeitszeit nur {capacity} min (+{total - capacity} min).",
                    assignment_ids=frozenset(involved[(teacher_id, week)]),
                    teacher_id=teacher_id,
                    period=week,
                ))
        return conflicts

    def _check_availability(
        self, assignments: list[Assignment], teacher_map: dict[int, Teacher]
    ) -> list[Conflict]:
        """Termine müssen im Arbeitszeitfenster des jeweiligen Wochentags liegen."""
        conflicts: list[Conflict] = []
        for a in assignments:
            teacher = teacher_map[a.teacher_id]
            outside = [s for s in a.scheduled_slots if not within_working_time(teacher, s)]
            if outside:
                first = min(outside, key=lambda s: s.sort_key)
                conflicts.append(Conflict.of(
                    ConflictType.AVAILABILITY_VIOLATION,
                    f"{teacher.name}: {len(outside)} Termin(e) von Zuweisung {a.id} "
                    f"außerhalb der Arbeitszeit (erster: {first}).",
                    assignment_ids=frozenset({a.id}),
                    teacher_id=teacher.id,
                    course_id=a.course_id,
                ))
        return conflicts

    def _check_coverage(
        self, assignments: list[Assignment], course_map: dict[int, Course]
    ) -> list[Conflict]:
        """Jeder Kurs mit Unterrichtseinheiten braucht mindestens eine aktive Zuweisung."""
        covered = {a.course_id for a in assignments}
        conflicts: list[Conflict] = []
        for course_id in sorted(course_map):
            course = course_map[course_id]
            if course.lessons_count > 0 and course_id not in covered:
                conflicts.append(Conflict.of(
                    ConflictType.COVERAGE_GAP,
                    f"Kurs '{course.topic}' ({course.lessons_count} Einheiten) "
                    f"hat keine aktive Zuweisung.",
                    course_id=course_id,
                ))
        return conflicts
