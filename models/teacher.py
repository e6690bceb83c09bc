"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from datetime import datetime, time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """0=Montag .. 6=Sonntag (wie date.weekday())."""
        return list(cls)[index]


class TimeRange(BaseModel):
    """Arbeitszeitfenster eines Wochentags."""

    model_config = ConfigDict(frozen=True)

    start: time
    end: time

    @model_validator(mode="after")
    def _check_order(self):
        if self.end <= self.start:
            raise ValueError(
                f"Arbeitszeitfenster ungültig: Ende ({self.end}) liegt nicht nach Beginn ({self.start})"
            )
        return self

    @property
    def minutes(self) -> int:
        """Länge des Fensters in Minuten."""
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft (Snapshot, nur lesend)."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str                                    # "Dr. Alice Smith"
    qualifications: list[str]                    # exakte Tokens, z.B. "Mathematics"
    working_times: dict[Weekday, TimeRange] = {} # leer = keine Fenster deklariert
    created_at: Optional[datetime] = None

    @property
    def weekly_capacity_minutes(self) -> int:
        """Summe aller Arbeitszeitfenster pro Woche."""
        return sum(r.minutes for r in self.working_times.values())

    @property
    def has_working_times(self) -> bool:
        return bool(self.working_times)
