"""Fehlerarten der Zuweisungs-Engine.

Alle Fehler werden synchron an den Aufrufer gemeldet; die Engine wiederholt
nichts und verschluckt nichts. Konflikte sind KEINE Fehler, sondern Daten.
"""

from typing import Optional


class EngineError(Exception):
    """Basisklasse für fehlerhafte Eingaben an die Engine."""


class WeightOutOfRange(EngineError):
    """Ein Gewicht liegt außerhalb von [0, 100]."""

    def __init__(self, field: str, value: int):
        self.field = field
        self.value = value
        super().__init__(f"Gewicht '{field}' muss zwischen 0 und 100 liegen, ist {value}")


class InvalidWeightSum(EngineError):
    """Die drei Gewichte ergeben nicht exakt 100."""

    def __init__(self, total: int):
        self.total = total
        super().__init__(f"Summe der Gewichte muss 100 ergeben, ist {total}")


class MalformedTimeSlot(EngineError):
    """Beginn/Ende/Dauer eines Termins sind inkonsistent oder Ende ≤ Beginn."""

    def __init__(self, message: str, assignment_id: Optional[int] = None):
        self.assignment_id = assignment_id
        prefix = f"Zuweisung {assignment_id}: " if assignment_id is not None else ""
        super().__init__(prefix + message)


class UnknownEntityReference(EngineError):
    """Eine Zuweisung verweist auf eine Lehrkraft oder einen Kurs, die im Snapshot fehlen."""

    def __init__(self, entity: str, entity_id: int, assignment_id: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.assignment_id = assignment_id
        where = f" (Zuweisung {assignment_id})" if assignment_id is not None else ""
        super().__init__(f"Unbekannte Referenz: {entity} {entity_id}{where}")
