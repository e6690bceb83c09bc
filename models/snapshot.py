"""AssignmentSnapshot: unveränderlicher Datenstand für einen Engine-Aufruf (Pydantic v2)."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.assignment import Assignment
from models.course import Course
from models.teacher import Teacher
from models.weight_profile import WeightProfile


class AssignmentSnapshot(BaseModel):
    """Lehrkräfte, Kurse, Zuweisungen und (optional) die aktive Gewichtung.

    Wird vom Persistenz-Kollaborateur geliefert; die Engine liest nur.
    """

    model_config = ConfigDict(frozen=True)

    teachers: list[Teacher] = []
    courses: list[Course] = []
    assignments: list[Assignment] = []
    weights: Optional[WeightProfile] = None

    # ─── Lookups ───

    def teacher_map(self) -> dict[int, Teacher]:
        return {t.id: t for t in self.teachers}

    def course_map(self) -> dict[int, Course]:
        return {c.id: c for c in self.courses}

    def find_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self.teacher_map().get(teacher_id)

    def find_course(self, course_id: int) -> Optional[Course]:
        return self.course_map().get(course_id)

    def participating_assignments(self) -> list[Assignment]:
        """Nur active/pending Zuweisungen."""
        return [a for a in self.assignments if a.is_participating]

    # ─── Hypothetische Änderungen ───

    def with_assignment(self, candidate: Assignment) -> "AssignmentSnapshot":
        """Kopie mit dem Kandidaten. Gleiche ID ersetzt die bestehende Zuweisung."""
        others = [a for a in self.assignments if a.id != candidate.id]
        return self.model_copy(update={"assignments": others + [candidate]})

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datenstand."""
        participating = self.participating_assignments()
        total_minutes = sum(a.scheduled_minutes for a in participating)
        lines = [
            f"Lehrkräfte: {len(self.teachers)}",
            f"Kurse: {len(self.courses)}",
            f"Zuweisungen: {len(self.assignments)} "
            f"({len(participating)} aktiv/ausstehend)",
            f"Geplante Unterrichtszeit: {total_minutes} min",
            f"Gewichtung: {self.weights.name} "
            f"({self.weights.equality}/{self.weights.continuity}/{self.weights.loyalty})"
            if self.weights else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Laden ───

    @classmethod
    def load_json(cls, path: Path) -> "AssignmentSnapshot":
        """Lädt einen Snapshot aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
