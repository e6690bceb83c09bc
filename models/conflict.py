"""Konflikt-Datenmodell: typisierte, nach Schweregrad klassifizierte Verletzung."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ConflictType(str, Enum):
    QUALIFICATION_MISMATCH = "qualification_mismatch"
    TIME_OVERLAP = "time_overlap"
    DUPLICATE_ASSIGNMENT = "duplicate_assignment"
    OVERLOAD = "overload"
    AVAILABILITY_VIOLATION = "availability_violation"
    COVERAGE_GAP = "coverage_gap"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Feste Klassifikation, nicht konfigurierbar
SEVERITY_BY_TYPE: dict[ConflictType, Severity] = {
    ConflictType.QUALIFICATION_MISMATCH: Severity.HIGH,
    ConflictType.TIME_OVERLAP: Severity.HIGH,
    ConflictType.DUPLICATE_ASSIGNMENT: Severity.HIGH,
    ConflictType.OVERLOAD: Severity.MEDIUM,
    ConflictType.AVAILABILITY_VIOLATION: Severity.MEDIUM,
    ConflictType.COVERAGE_GAP: Severity.LOW,
}

# Harte Konflikte führen im Orchestrator zur Ablehnung des Kandidaten (in dieser Rangfolge)
BLOCKING_TYPES: tuple[ConflictType, ...] = (
    ConflictType.QUALIFICATION_MISMATCH,
    ConflictType.DUPLICATE_ASSIGNMENT,
)

# Sammelkonflikte: Identität über die betroffene Entität, nicht über die
# beteiligten Zuweisungen (eine weitere Zuweisung verschärft denselben Konflikt)
AGGREGATE_TYPES = frozenset({
    ConflictType.OVERLOAD,
    ConflictType.DUPLICATE_ASSIGNMENT,
})

_SEVERITY_RANK = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


class Conflict(BaseModel):
    """Ein abgeleiteter Konflikt. Wird nie gespeichert, nur pro Aufruf berechnet."""

    model_config = ConfigDict(frozen=True)

    type: ConflictType
    severity: Severity
    description: str
    assignment_ids: frozenset[int] = frozenset()
    teacher_id: Optional[int] = None
    course_id: Optional[int] = None
    period: Optional[str] = None      # z.B. ISO-Woche "2025-W36" bei Überlastung

    @classmethod
    def of(cls, conflict_type: ConflictType, description: str, **kwargs) -> "Conflict":
        """Erzeugt einen Konflikt mit dem Schweregrad aus der festen Tabelle."""
        return cls(
            type=conflict_type,
            severity=SEVERITY_BY_TYPE[conflict_type],
            description=description,
            **kwargs,
        )

    @property
    def key(self) -> tuple:
        """Identität ohne Beschreibung (für Mengenvergleich und Vorher/Nachher-Delta).

        Bei Sammelkonflikten (Überlastung, Doppelzuweisung) zählen die
        beteiligten Zuweisungs-IDs nicht zur Identität.
        """
        ids = () if self.type in AGGREGATE_TYPES else tuple(sorted(self.assignment_ids))
        return (self.type.value, self.teacher_id, self.course_id, ids, self.period)

    @property
    def sort_key(self) -> tuple:
        return (
            _SEVERITY_RANK[self.severity],
            self.type.value,
            self.teacher_id if self.teacher_id is not None else -1,
            self.course_id if self.course_id is not None else -1,
            tuple(sorted(self.assignment_ids)),
            self.period or "",
        )

    @property
    def is_blocking(self) -> bool:
        return self.type in BLOCKING_TYPES
