"""Bewertung einer Kandidaten-Zuweisung nach drei gewichteten Faktoren.

Gleichmäßigkeit (equality), Kontinuität (continuity) und Lehrertreue
(loyalty) liefern je einen Teilwert in [0, 1]; das Ergebnis ist
    equality * w_e/100 + continuity * w_c/100 + loyalty * w_l/100.
Die Bewertung ist eine reine Funktion ihrer Eingaben.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from analysis.workload import scheduled_minutes_by_teacher
from engine.errors import UnknownEntityReference
from engine.qualification import EXACT_MATCH, QualificationPolicy
from engine.slots import are_adjacent, sorted_slots, validate_assignment_slots
from engine.weights import WeightProfileValidator
from models.assignment import Assignment, AssignmentStatus
from models.course import Course
from models.teacher import Teacher
from models.weight_profile import WeightProfile

logger = logging.getLogger(__name__)

# Neutralwert, wenn keine Ungleichheit messbar ist
NEUTRAL = 1.0


class ScoreBreakdown(BaseModel):
    """Teilwerte und Gesamtwert einer Bewertung."""

    equality: float
    continuity: float
    loyalty: float
    final: float
    profile_name: str


class ScoringEngine:
    """Berechnet den normierten Qualitätswert einer Zuweisung.

    Args:
        policy: Abgleichsregel für Themen (für den Lehrertreue-Faktor).
        validator: Prüft das Gewichtungsprofil vor jeder Bewertung.
        adjacency_tolerance_minutes: Maximale Lücke, die noch als
            "direkt anschließend" zählt.
        unscheduled_continuity: Kontinuitätswert für Kandidaten ohne Termine.
    """

    def __init__(
        self,
        policy: QualificationPolicy = EXACT_MATCH,
        validator: Optional[WeightProfileValidator] = None,
        adjacency_tolerance_minutes: int = 0,
        unscheduled_continuity: float = 0.5,
    ):
        self.policy = policy
        self.validator = validator or WeightProfileValidator()
        self.adjacency_tolerance_minutes = adjacency_tolerance_minutes
        self.unscheduled_continuity = unscheduled_continuity

    def score(
        self,
        candidate: Assignment,
        teacher: Teacher,
        course: Course,
        other_assignments: list[Assignment],
        all_teachers: list[Teacher],
        weights: WeightProfile,
        courses: Optional[list[Course]] = None,
    ) -> float:
        """Gesamtwert in [0, 1]."""
        return self.breakdown(
            candidate, teacher, course, other_assignments, all_teachers, weights, courses
        ).final

    def breakdown(
        self,
        candidate: Assignment,
        teacher: Teacher,
        course: Course,
        other_assignments: list[Assignment],
        all_teachers: list[Teacher],
        weights: WeightProfile,
        courses: Optional[list[Course]] = None,
    ) -> ScoreBreakdown:
        """Bewertet den Kandidaten und liefert alle Teilwerte.

        courses wird nur für den Lehrertreue-Faktor gebraucht: Ist es gesetzt,
        werden frühere Zuweisungen über das Kursthema verglichen (unbekannte
        Kurs-IDs sind ein Fehler). Fehlt es, zählt nur derselbe Kurs als
        Präzedenzfall.

        Raises:
            InvalidWeightSum / WeightOutOfRange: ungültiges Profil (keine Normierung).
            MalformedTimeSlot: inkonsistenter Termin.
            UnknownEntityReference: Kandidat passt nicht zu teacher/course.
        """
        self.validator.ensure_valid(weights)
        if candidate.teacher_id != teacher.id:
            raise UnknownEntityReference("teacher", candidate.teacher_id, candidate.id)
        if candidate.course_id != course.id:
            raise UnknownEntityReference("course", candidate.course_id, candidate.id)

        others = [a for a in other_assignments if a.id != candidate.id]
        validate_assignment_slots([candidate])
        validate_assignment_slots(a for a in others if a.is_participating)

        equality = self.equality_score(candidate, teacher, course, others, all_teachers)
        continuity = self.continuity_score(candidate, course, others)
        loyalty = self.loyalty_score(candidate, teacher, course, others, courses)

        final = (
            equality * weights.equality
            + continuity * weights.continuity
            + loyalty * weights.loyalty
        ) / 100
        final = min(1.0, max(0.0, final))

        logger.debug(
            f"Bewertung Zuweisung {candidate.id} (Lehrkraft {teacher.id}, Kurs {course.id}): "
            f"E={equality:.3f} K={continuity:.3f} L={loyalty:.3f} → {final:.4f}"
        )
        return ScoreBreakdown(
            equality=equality,
            continuity=continuity,
            loyalty=loyalty,
            final=final,
            profile_name=weights.name,
        )

    # ── Teilwerte ─────────────────────────────────────────────────────────────

    def equality_score(
        self,
        candidate: Assignment,
        teacher: Teacher,
        course: Course,
        others: list[Assignment],
        all_teachers: list[Teacher],
    ) -> float:
        """1.0 bei Last = Mittelwert, fällt gegen 0 mit wachsender Abweichung.

        Last = Termin-Minuten aus active/pending Zuweisungen inkl. Kandidat;
        ein inaktiver oder stornierter Kandidat trägt keine Last bei.
        Mit höchstens einer Lehrkraft im Blick ist keine Ungleichheit messbar.
        """
        teacher_ids = list(dict.fromkeys(t.id for t in all_teachers))
        if teacher.id not in teacher_ids:
            teacher_ids.append(teacher.id)
        if len(teacher_ids) <= 1:
            return NEUTRAL

        loads = scheduled_minutes_by_teacher(others, teacher_ids)
        loads[teacher.id] += self._candidate_minutes(candidate, course)

        mean = sum(loads.values()) / len(loads)
        if mean <= 0:
            return NEUTRAL
        deviation = abs(loads[teacher.id] - mean)
        return mean / (mean + deviation)

    def continuity_score(
        self, candidate: Assignment, course: Course, others: list[Assignment]
    ) -> float:
        """Anteil direkt aneinander anschließender Termine desselben Kurses.

        Betrachtet die Termine des Kandidaten zusammen mit den bestehenden
        Terminen derselben Lehrkraft für denselben Kurs. Normiert auf das
        Maximum (lessons_count − 1 Übergänge).
        """
        if not candidate.scheduled_slots:
            return self.unscheduled_continuity

        slots = list(candidate.scheduled_slots)
        for a in others:
            if a.is_participating and a.pair == candidate.pair:
                slots.extend(a.scheduled_slots)
        slots = sorted_slots(slots)

        attainable = max(course.lessons_count, len(slots)) - 1
        if attainable <= 0:
            return NEUTRAL

        adjacent = sum(
            1 for first, second in zip(slots, slots[1:])
            if are_adjacent(first, second, self.adjacency_tolerance_minutes)
        )
        return min(1.0, adjacent / attainable)

    def loyalty_score(
        self,
        candidate: Assignment,
        teacher: Teacher,
        course: Course,
        others: list[Assignment],
        courses: Optional[list[Course]] = None,
    ) -> float:
        """Anteil der bisherigen (nicht stornierten) Zuweisungen mit demselben Thema.

        Ohne Historie 0.0; die Wirkung steuert allein das loyalty-Gewicht.
        """
        history = [
            a for a in others
            if a.teacher_id == teacher.id and a.status != AssignmentStatus.CANCELLED
        ]
        if not history:
            return 0.0

        course_map = {c.id: c for c in courses} if courses is not None else None
        same_topic = sum(
            1 for a in history if self._same_topic(a, course, course_map)
        )
        return same_topic / len(history)

    # ── Hilfsfunktionen ───────────────────────────────────────────────────────

    @staticmethod
    def _candidate_minutes(candidate: Assignment, course: Course) -> int:
        if not candidate.is_participating:
            return 0
        # Ungeplante Kandidaten tragen den vollen Kursumfang bei
        if candidate.scheduled_slots:
            return candidate.scheduled_minutes
        return course.total_minutes

    def _same_topic(
        self, past: Assignment, course: Course, course_map: Optional[dict[int, Course]]
    ) -> bool:
        if past.course_id == course.id:
            return True
        if course_map is None:
            return False
        past_course = course_map.get(past.course_id)
        if past_course is None:
            raise UnknownEntityReference("course", past.course_id, past.id)
        return self.policy.normalize(past_course.topic) == self.policy.normalize(course.topic)
