"""Datenmodell für einen konkreten Unterrichtstermin."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict


class TimeSlot(BaseModel):
    """Ein Termin (Datum + Uhrzeit) einer Zuweisung.

    duration_minutes ist redundant zu start_time/end_time. Die Konsistenz wird
    NICHT hier, sondern von engine.slots.validate_time_slot geprüft, damit
    fehlerhafte Eingaben als MalformedTimeSlot gemeldet werden können.
    """

    model_config = ConfigDict(frozen=True)

    date: date
    start_time: time
    end_time: time
    duration_minutes: int

    @property
    def sort_key(self) -> tuple[date, time, time]:
        return (self.date, self.start_time, self.end_time)

    def __str__(self) -> str:
        return (
            f"{self.date.isoformat()} "
            f"{self.start_time.strftime('%H:%M')}–{self.end_time.strftime('%H:%M')}"
        )
