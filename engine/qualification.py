"""Abgleich Qualifikation ↔ Kursthema.

Standard ist der exakte String-Vergleich (Groß-/Kleinschreibung zählt, keine
Leerzeichen-Normalisierung). Beide Aspekte sind explizit schaltbar, damit die
Politik getestet und konfiguriert werden kann statt zufällig zu entstehen.
"""

from dataclasses import dataclass

from models.course import Course
from models.teacher import Teacher


@dataclass(frozen=True)
class QualificationPolicy:
    """Regel, wann eine Qualifikation ein Kursthema abdeckt."""

    case_sensitive: bool = True
    strip_whitespace: bool = False

    def normalize(self, token: str) -> str:
        if self.strip_whitespace:
            token = " ".join(token.split())
        if not self.case_sensitive:
            token = token.casefold()
        return token

    def matches(self, qualifications: list[str], topic: str) -> bool:
        """True wenn eine der Qualifikationen das Thema abdeckt."""
        wanted = self.normalize(topic)
        return any(self.normalize(q) == wanted for q in qualifications)

    def is_qualified(self, teacher: Teacher, course: Course) -> bool:
        return self.matches(teacher.qualifications, course.topic)


EXACT_MATCH = QualificationPolicy()


def find_qualified_teachers(
    course: Course, teachers: list[Teacher], policy: QualificationPolicy = EXACT_MATCH
) -> list[Teacher]:
    """Alle Lehrkräfte, deren Qualifikationen das Kursthema abdecken (Eingabereihenfolge)."""
    return [t for t in teachers if policy.is_qualified(t, course)]


def qualification_matches(
    courses: list[Course], teachers: list[Teacher], policy: QualificationPolicy = EXACT_MATCH
) -> list[tuple[Teacher, Course]]:
    """Alle zulässigen (Lehrkraft, Kurs)-Paare."""
    return [
        (teacher, course)
        for course in courses
        for teacher in find_qualified_teachers(course, teachers, policy)
    ]
