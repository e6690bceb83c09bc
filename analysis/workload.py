"""Auslastungsbericht für Lehrkräfte.

Berechnet pro Lehrkraft die geplanten Minuten aus aktiven/ausstehenden
Zuweisungen sowie zusammenfassende Fairness-Metriken. Die Minuten-Summen
werden auch vom Gleichmäßigkeits-Faktor der Bewertung verwendet.
"""

from collections import defaultdict
from collections.abc import Iterable

from pydantic import BaseModel

from models.assignment import Assignment
from models.teacher import Teacher


def scheduled_minutes_by_teacher(
    assignments: Iterable[Assignment], teacher_ids: Iterable[int]
) -> dict[int, int]:
    """Summe der Termin-Minuten pro Lehrkraft (nur active/pending).

    Jede Lehrkraft aus teacher_ids ist enthalten (ggf. mit 0); Zuweisungen
    anderer Lehrkräfte werden ignoriert.
    """
    loads = {tid: 0 for tid in teacher_ids}
    for a in assignments:
        if a.is_participating and a.teacher_id in loads:
            loads[a.teacher_id] += a.scheduled_minutes
    return loads


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class TeacherWorkload(BaseModel):
    """Auslastung einer einzelnen Lehrkraft."""

    teacher_id: int
    name: str
    assignment_count: int
    total_lessons: int
    total_minutes: int
    weekly_capacity_minutes: int
    deviation_from_mean: float   # Minuten, vorzeichenbehaftet


class WorkloadReport(BaseModel):
    """Auslastung aller Lehrkräfte eines Snapshots."""

    teachers: list[TeacherWorkload]
    mean_minutes: float
    fairness_index: float        # Jain's fairness index (1.0 = perfekt)

    def print_rich(self) -> None:
        """Gibt den Bericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        fairness_color = (
            "green" if self.fairness_index >= 0.95
            else "yellow" if self.fairness_index >= 0.85
            else "red"
        )
        console.print(Panel(
            f"Ø Unterrichtszeit/Lehrkraft: [bold]{self.mean_minutes:.0f} min[/bold]\n"
            f"Fairness (Jain): "
            f"[{fairness_color}]{self.fairness_index:.4f}[/{fairness_color}] (1.0 = perfekt)",
            title="Auslastung – Übersicht",
            border_style="cyan",
        ))

        table = Table(title="Lehrkräfte", box=box.ROUNDED, show_lines=False)
        table.add_column("ID", justify="right", width=5)
        table.add_column("Name", width=25)
        table.add_column("Zuweisungen", justify="right", width=11)
        table.add_column("Termine", justify="right", width=8)
        table.add_column("Minuten", justify="right", width=8)
        table.add_column("Δ Mittel", justify="right", width=9)
        for m in sorted(self.teachers, key=lambda x: x.teacher_id):
            color = "yellow" if m.deviation_from_mean > 0 else "green"
            table.add_row(
                str(m.teacher_id), m.name,
                str(m.assignment_count), str(m.total_lessons),
                str(m.total_minutes),
                f"[{color}]{m.deviation_from_mean:+.0f}[/{color}]",
            )
        console.print(table)


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class WorkloadAnalyzer:
    """Berechnet Auslastungsmetriken aus Lehrkräften und Zuweisungen."""

    def analyze(
        self, assignments: list[Assignment], teachers: list[Teacher]
    ) -> WorkloadReport:
        loads = scheduled_minutes_by_teacher(assignments, [t.id for t in teachers])

        counts: dict[int, int] = defaultdict(int)
        lessons: dict[int, int] = defaultdict(int)
        for a in assignments:
            if a.is_participating and a.teacher_id in loads:
                counts[a.teacher_id] += 1
                lessons[a.teacher_id] += len(a.scheduled_slots)

        n = len(teachers)
        mean = sum(loads.values()) / n if n > 0 else 0.0

        # Jain's Fairness Index: (Σ x_i)² / (n * Σ x_i²)
        sum_x = sum(loads.values())
        sum_sq = sum(x * x for x in loads.values())
        fairness = (sum_x ** 2) / (n * sum_sq) if sum_sq > 0 else 1.0

        metrics = [
            TeacherWorkload(
                teacher_id=t.id,
                name=t.name,
                assignment_count=counts[t.id],
                total_lessons=lessons[t.id],
                total_minutes=loads[t.id],
                weekly_capacity_minutes=t.weekly_capacity_minutes,
                deviation_from_mean=round(loads[t.id] - mean, 2),
            )
            for t in teachers
        ]
        return WorkloadReport(
            teachers=metrics,
            mean_minutes=round(mean, 2),
            fairness_index=round(fairness, 4),
        )
