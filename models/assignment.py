"""Datenmodell für eine Zuweisung Lehrkraft ↔ Kurs (Pydantic v2)."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.timeslot import TimeSlot


class AssignmentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    CANCELLED = "cancelled"


# Nur diese Status nehmen an Konfliktprüfung und Bewertung teil
PARTICIPATING_STATUSES = frozenset({AssignmentStatus.ACTIVE, AssignmentStatus.PENDING})


class Assignment(BaseModel):
    """Zuweisung einer Lehrkraft zu einem Kurs mit geplanten Terminen.

    Die Reihenfolge von scheduled_slots ist die Eingabereihenfolge, nicht
    zwingend chronologisch.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    teacher_id: int
    course_id: int
    scheduled_slots: list[TimeSlot] = []
    status: AssignmentStatus = AssignmentStatus.ACTIVE
    rationale: Optional[str] = None   # Freitext, für die Engine ohne Bedeutung
    created_at: Optional[datetime] = None

    @property
    def is_participating(self) -> bool:
        """True für active/pending."""
        return self.status in PARTICIPATING_STATUSES

    @property
    def pair(self) -> tuple[int, int]:
        return (self.teacher_id, self.course_id)

    @property
    def scheduled_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.scheduled_slots)
