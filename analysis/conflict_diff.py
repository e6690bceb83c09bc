"""Vergleich zweier Konfliktmengen (vorher / nachher).

Konflikte werden über Conflict.key verglichen (Typ, betroffene Entitäten,
bei Einzelkonflikten auch Zuweisungs-IDs, Zeitraum), nicht über den Beschreibungstext.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from models.conflict import Conflict


@dataclass
class ConflictDiff:
    """Unterschied zwischen zwei Konfliktmengen."""

    introduced: list[Conflict] = field(default_factory=list)
    resolved: list[Conflict] = field(default_factory=list)
    persisting: list[Conflict] = field(default_factory=list)


def diff_conflicts(before: list[Conflict], after: list[Conflict]) -> ConflictDiff:
    """Mengendifferenz zweier Konfliktlisten.

    Args:
        before: Konflikte des bestehenden Snapshots.
        after: Konflikte nach der (hypothetischen) Änderung.

    Returns:
        ConflictDiff; alle Listen nach Schweregrad sortiert.
    """
    keys_before = {c.key for c in before}
    keys_after = {c.key for c in after}

    diff = ConflictDiff()
    diff.introduced = sorted(
        (c for c in _unique(after) if c.key not in keys_before), key=lambda c: c.sort_key
    )
    diff.resolved = sorted(
        (c for c in _unique(before) if c.key not in keys_after), key=lambda c: c.sort_key
    )
    diff.persisting = sorted(
        (c for c in _unique(after) if c.key in keys_before), key=lambda c: c.sort_key
    )
    return diff


def _unique(conflicts: list[Conflict]) -> list[Conflict]:
    seen: dict[tuple, Conflict] = {}
    for c in conflicts:
        seen.setdefault(c.key, c)
    return list(seen.values())
