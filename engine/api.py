"""Öffentliche Funktions-Schnittstelle der Engine.

Dünne Hüllen um die Komponenten. Jede Funktion nimmt optional eine bereits
konstruierte Komponente entgegen; ohne Angabe wird eine Default-Instanz
für genau diesen Aufruf erzeugt (kein globaler Zustand).
"""

from typing import Optional, Union

from engine.conflicts import ConflictDetector
from engine.orchestrator import AssignmentOrchestrator, EvaluationResult, build_orchestrator
from engine.scoring import ScoringEngine
from engine.severity import SeverityAggregator, SeverityReport
from engine.weights import WeightProfileValidator, WeightValidationResult, rebalance
from models.assignment import Assignment
from models.conflict import Conflict
from models.course import Course
from models.snapshot import AssignmentSnapshot
from models.teacher import Teacher
from models.weight_profile import WeightField, WeightProfile


def validate_weight_profile(profile: WeightProfile) -> WeightValidationResult:
    return WeightProfileValidator().validate(profile)


def rebalance_weight_profile(
    profile: WeightProfile, field: Union[WeightField, str], value: int
) -> WeightProfile:
    return rebalance(profile, field, value)


def score_assignment(
    candidate: Assignment,
    teacher: Teacher,
    course: Course,
    assignments: list[Assignment],
    teachers: list[Teacher],
    weights: WeightProfile,
    courses: Optional[list[Course]] = None,
    scorer: Optional[ScoringEngine] = None,
) -> float:
    scorer = scorer or ScoringEngine()
    return scorer.score(candidate, teacher, course, assignments, teachers, weights, courses)


def detect_conflicts(
    assignments: list[Assignment],
    teachers: list[Teacher],
    courses: list[Course],
    detector: Optional[ConflictDetector] = None,
) -> list[Conflict]:
    detector = detector or ConflictDetector()
    return detector.detect_all(assignments, teachers, courses)


def aggregate_severity(conflicts: list[Conflict]) -> SeverityReport:
    return SeverityAggregator().aggregate(conflicts)


def evaluate_candidate(
    candidate: Assignment,
    snapshot: AssignmentSnapshot,
    weights: Optional[WeightProfile] = None,
    orchestrator: Optional[AssignmentOrchestrator] = None,
) -> EvaluationResult:
    orchestrator = orchestrator or build_orchestrator()
    return orchestrator.evaluate(candidate, snapshot, weights)
