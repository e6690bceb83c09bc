"""Fassade: Kandidaten prüfen, bewerten und Konflikt-Delta melden.

Der Orchestrator entscheidet nicht, ob ein Kandidat übernommen wird. Er
lehnt nur bei harten Verstößen (fehlende Qualifikation, doppelte Zuweisung)
ab und liefert sonst Bewertung und neu entstehende Konflikte, damit der
Aufrufer entscheiden kann.

Alle Komponenten sind zustandslos. "Prüfen → Speichern" muss der Aufrufer
pro Zuweisungskontext serialisieren und bei geänderten Daten einen neuen
Snapshot ziehen.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from analysis.conflict_diff import diff_conflicts
from engine.conflicts import ConflictDetector
from engine.errors import UnknownEntityReference
from engine.qualification import QualificationPolicy
from engine.scoring import ScoreBreakdown, ScoringEngine
from engine.severity import SeverityAggregator, SeverityReport
from engine.slots import validate_assignment_slots
from models.assignment import Assignment
from models.conflict import BLOCKING_TYPES, Conflict
from models.course import Course
from models.snapshot import AssignmentSnapshot
from models.teacher import Teacher
from models.weight_profile import WeightProfile

logger = logging.getLogger(__name__)


class EvaluationResult(BaseModel):
    """Ergebnis der Prüfung eines Kandidaten."""

    candidate_id: int
    accepted: bool
    reason: Optional[str] = None
    score: Optional[float] = None
    breakdown: Optional[ScoreBreakdown] = None
    conflicts_introduced: list[Conflict] = []
    conflicts_resolved: list[Conflict] = []
    severity: SeverityReport

    @property
    def rank_key(self) -> tuple:
        """Akzeptiert vor abgelehnt, weniger neues Risiko, höherer Wert, dann ID."""
        return (
            not self.accepted,
            self.severity.total_score,
            -(self.score if self.score is not None else 0.0),
            self.candidate_id,
        )


class AssignmentOrchestrator:
    """Verbindet Bewertung, Konflikterkennung und Schweregrad-Aggregation."""

    def __init__(
        self,
        scorer: ScoringEngine,
        detector: ConflictDetector,
        aggregator: SeverityAggregator,
    ):
        self.scorer = scorer
        self.detector = detector
        self.aggregator = aggregator

    def evaluate(
        self,
        candidate: Assignment,
        snapshot: AssignmentSnapshot,
        weights: Optional[WeightProfile] = None,
    ) -> EvaluationResult:
        """Prüft einen Kandidaten gegen den Snapshot.

        Ein Kandidat mit bereits vorhandener ID ersetzt die bestehende
        Zuweisung (Änderung statt Neuanlage).

        Raises:
            ValueError: weder weights noch snapshot.weights gesetzt.
            InvalidWeightSum / WeightOutOfRange / MalformedTimeSlot /
            UnknownEntityReference: fehlerhafte Eingaben.
        """
        weights = weights or snapshot.weights
        if weights is None:
            raise ValueError("Keine Gewichtung angegeben (weder Parameter noch Snapshot).")
        self.scorer.validator.ensure_valid(weights)

        teacher, course = self._resolve(candidate, snapshot)
        validate_assignment_slots([candidate])

        after_snapshot = snapshot.with_assignment(candidate)
        before = self.detector.detect_all(snapshot.assignments, snapshot.teachers, snapshot.courses)
        after = self.detector.detect_all(
            after_snapshot.assignments, after_snapshot.teachers, after_snapshot.courses
        )
        diff = diff_conflicts(before, after)
        severity = self.aggregator.aggregate(diff.introduced)

        reason = self._hard_violation(candidate, after)
        if reason is not None:
            logger.warning(f"Kandidat {candidate.id} abgelehnt: {reason}")
            return EvaluationResult(
                candidate_id=candidate.id,
                accepted=False,
                reason=reason,
                conflicts_introduced=diff.introduced,
                conflicts_resolved=diff.resolved,
                severity=severity,
            )

        breakdown = self.scorer.breakdown(
            candidate,
            teacher,
            course,
            after_snapshot.assignments,
            snapshot.teachers,
            weights,
            snapshot.courses,
        )
        logger.info(
            f"Kandidat {candidate.id} (Lehrkraft {teacher.id}, Kurs {course.id}): "
            f"Wert {breakdown.final:.4f}, {len(diff.introduced)} neue Konflikte"
        )
        return EvaluationResult(
            candidate_id=candidate.id,
            accepted=True,
            score=breakdown.final,
            breakdown=breakdown,
            conflicts_introduced=diff.introduced,
            conflicts_resolved=diff.resolved,
            severity=severity,
        )

    def rank_candidates(
        self,
        candidates: list[Assignment],
        snapshot: AssignmentSnapshot,
        weights: Optional[WeightProfile] = None,
    ) -> list[EvaluationResult]:
        """Bewertet mehrere Alternativen unabhängig voneinander und sortiert sie."""
        results = [self.evaluate(c, snapshot, weights) for c in candidates]
        return sorted(results, key=lambda r: r.rank_key)

    def check_snapshot(self, snapshot: AssignmentSnapshot) -> tuple[list[Conflict], SeverityReport]:
        """Konflikte und Schweregrad des bestehenden Snapshots."""
        conflicts = self.detector.detect_all(
            snapshot.assignments, snapshot.teachers, snapshot.courses
        )
        return conflicts, self.aggregator.aggregate(conflicts)

    # ── Private Prüfungen ─────────────────────────────────────────────────────

    @staticmethod
    def _resolve(candidate: Assignment, snapshot: AssignmentSnapshot) -> tuple[Teacher, Course]:
        teacher = snapshot.find_teacher(candidate.teacher_id)
        if teacher is None:
            raise UnknownEntityReference("teacher", candidate.teacher_id, candidate.id)
        course = snapshot.find_course(candidate.course_id)
        if course is None:
            raise UnknownEntityReference("course", candidate.course_id, candidate.id)
        return teacher, course

    @staticmethod
    def _hard_violation(candidate: Assignment, after: list[Conflict]) -> Optional[str]:
        """Ablehnungsgrund oder None.

        Maßgeblich sind die harten Konflikte des Zustands "Snapshot plus
        Kandidat", an denen der Kandidat beteiligt ist. Ein inaktiver oder
        stornierter Kandidat nimmt an der Konfliktprüfung nicht teil und wird
        daher nie hart abgelehnt.
        """
        for blocking_type in BLOCKING_TYPES:
            for c in after:
                if c.type == blocking_type and candidate.id in c.assignment_ids:
                    return f"{c.type.value}: {c.description}"
        return None


def build_orchestrator(config=None) -> AssignmentOrchestrator:
    """Baut den Komponentengraphen aus einer EngineConfig (Default: eingebaute Defaults)."""
    from config.defaults import default_engine_config

    config = config or default_engine_config()
    policy = QualificationPolicy(
        case_sensitive=config.matching.case_sensitive,
        strip_whitespace=config.matching.strip_whitespace,
    )
    scorer = ScoringEngine(
        policy=policy,
        adjacency_tolerance_minutes=config.scoring.adjacency_tolerance_minutes,
        unscheduled_continuity=config.scoring.unscheduled_continuity,
    )
    return AssignmentOrchestrator(
        scorer=scorer,
        detector=ConflictDetector(policy),
        aggregator=SeverityAggregator(),
    )
