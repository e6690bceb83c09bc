"""Gewichtungsprofil für die Bewertung von Zuweisungen (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WeightField(str, Enum):
    """Die drei Gewichtungsfaktoren in kanonischer Reihenfolge."""

    EQUALITY = "equality"
    CONTINUITY = "continuity"
    LOYALTY = "loyalty"


class WeightProfile(BaseModel):
    """Benanntes Tripel ganzzahliger Prozentwerte.

    Invariante (Summe = 100, jeder Wert in [0, 100]) wird bewusst NICHT im
    Modell erzwungen, sondern von engine.weights.WeightProfileValidator geprüft.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str
    equality: int
    continuity: int
    loyalty: int
    is_default: bool = False

    def weight(self, field: WeightField) -> int:
        return getattr(self, field.value)

    @property
    def total(self) -> int:
        return self.equality + self.continuity + self.loyalty

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.equality, self.continuity, self.loyalty)
