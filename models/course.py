"""Datenmodell für einen Kurs (Pydantic v2)."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """Ein Kurs, der genau einer qualifizierten Lehrkraft zugewiesen wird."""

    model_config = ConfigDict(frozen=True)

    id: int
    topic: str                        # muss einer Qualifikation entsprechen
    lessons_count: int = Field(ge=0)
    lesson_duration: int = Field(ge=0)  # Minuten pro Unterrichtseinheit
    start_date: date
    end_date: date

    @property
    def total_minutes(self) -> int:
        """Gesamter Unterrichtsumfang laut Kursplanung."""
        return self.lessons_count * self.lesson_duration
