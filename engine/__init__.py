"""Zuweisungs-Engine: Bewertung, Konfliktprüfung und Schweregrad-Aggregation."""

from .errors import (
    EngineError,
    InvalidWeightSum,
    MalformedTimeSlot,
    UnknownEntityReference,
    WeightOutOfRange,
)
from .weights import WeightProfileValidator, WeightValidationResult, rebalance
from .qualification import QualificationPolicy, find_qualified_teachers, qualification_matches
from .scoring import ScoreBreakdown, ScoringEngine
from .conflicts import ConflictDetector
from .severity import SeverityAggregator, SeverityReport
from .orchestrator import AssignmentOrchestrator, EvaluationResult, build_orchestrator
from .api import (
    aggregate_severity,
    detect_conflicts,
    evaluate_candidate,
    rebalance_weight_profile,
    score_assignment,
    validate_weight_profile,
)

__all__ = [
    "EngineError",
    "InvalidWeightSum",
    "MalformedTimeSlot",
    "UnknownEntityReference",
    "WeightOutOfRange",
    "WeightProfileValidator",
    "WeightValidationResult",
    "rebalance",
    "QualificationPolicy",
    "find_qualified_teachers",
    "qualification_matches",
    "ScoreBreakdown",
    "ScoringEngine",
    "ConflictDetector",
    "SeverityAggregator",
    "SeverityReport",
    "AssignmentOrchestrator",
    "EvaluationResult",
    "build_orchestrator",
    "aggregate_severity",
    "detect_conflicts",
    "evaluate_candidate",
    "rebalance_weight_profile",
    "score_assignment",
    "validate_weight_profile",
]
