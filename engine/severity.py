"""Verdichtung einer Konfliktliste zu einer vergleichbaren Risikokennzahl."""

from collections import Counter

from pydantic import BaseModel

from models.conflict import Conflict, ConflictType, Severity

# Feste Gewichte pro Schweregrad
SEVERITY_WEIGHTS: dict[Severity, float] = {
    Severity.HIGH: 3.0,
    Severity.MEDIUM: 2.0,
    Severity.LOW: 1.0,
}


class SeverityReport(BaseModel):
    """Aggregiertes Risiko. total_score ist nur vergleichend (kleiner = besser)."""

    total_score: float
    by_type_count: dict[ConflictType, int]
    high_count: int
    medium_count: int
    low_count: int

    @property
    def conflict_count(self) -> int:
        return self.high_count + self.medium_count + self.low_count

    @property
    def has_high(self) -> bool:
        return self.high_count > 0

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ KEINE KONFLIKTE[/bold green]"
            if self.conflict_count == 0
            else "[bold red]✗ KONFLIKTE GEFUNDEN[/bold red]"
        )
        lines = [
            status,
            f"Hoch: {self.high_count} | Mittel: {self.medium_count} | "
            f"Niedrig: {self.low_count} | Risikowert: {self.total_score:g}",
        ]
        console.print(Panel("\n".join(lines), title="Konflikt-Schweregrad", border_style="cyan"))

        if not self.by_type_count:
            return
        table = Table(box=box.ROUNDED)
        table.add_column("Konflikttyp", width=26)
        table.add_column("Anzahl", justify="right", width=8)
        for conflict_type, count in sorted(self.by_type_count.items(), key=lambda x: x[0].value):
            table.add_row(conflict_type.value, str(count))
        console.print(table)


class SeverityAggregator:
    """Summiert feste Schweregrad-Gewichte über alle Konflikte."""

    def aggregate(self, conflicts: list[Conflict]) -> SeverityReport:
        tiers = Counter(c.severity for c in conflicts)
        types = Counter(c.type for c in conflicts)
        total = sum(SEVERITY_WEIGHTS[c.severity] for c in conflicts)
        return SeverityReport(
            total_score=total,
            by_type_count=dict(types),
            high_count=tiers[Severity.HIGH],
            medium_count=tiers[Severity.MEDIUM],
            low_count=tiers[Severity.LOW],
        )
