"""Validierung und Umverteilung von Gewichtungsprofilen.

Invariante: equality + continuity + loyalty == 100, jeder Wert in [0, 100].
Der Validator repariert nichts. Die einzige Korrektur ist das explizite
rebalance(), das nach Änderung eines Gewichts die beiden anderen
proportional anpasst.
"""

import logging
import math
from typing import Literal, Optional, Union

from pydantic import BaseModel

from engine.errors import InvalidWeightSum, WeightOutOfRange
from models.weight_profile import WeightField, WeightProfile

logger = logging.getLogger(__name__)

# Kanonische Reihenfolge (bestimmt auch, wer den Rundungsrest bekommt)
CANONICAL_ORDER: tuple[WeightField, ...] = (
    WeightField.EQUALITY,
    WeightField.CONTINUITY,
    WeightField.LOYALTY,
)

WEIGHT_TOTAL = 100


class WeightIssue(BaseModel):
    """Ein einzelnes Validierungsproblem."""

    code: Literal["weight_out_of_range", "invalid_weight_sum"]
    field: Optional[WeightField] = None
    value: int
    message: str


class WeightValidationResult(BaseModel):
    """Ergebnis von WeightProfileValidator.validate()."""

    profile_name: str
    issues: list[WeightIssue]

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def raise_for_issues(self) -> None:
        """Wirft den passenden Fehler; Bereichsfehler haben Vorrang vor Summenfehlern."""
        for issue in self.issues:
            if issue.code == "weight_out_of_range":
                raise WeightOutOfRange(issue.field.value, issue.value)
        for issue in self.issues:
            if issue.code == "invalid_weight_sum":
                raise InvalidWeightSum(issue.value)


class WeightProfileValidator:
    """Prüft ein WeightProfile gegen die Summen- und Bereichs-Invariante."""

    def validate(self, profile: WeightProfile) -> WeightValidationResult:
        """Sammelt alle Probleme, ohne zu werfen. Keine Seiteneffekte."""
        issues: list[WeightIssue] = []
        for field in CANONICAL_ORDER:
            value = profile.weight(field)
            if not 0 <= value <= WEIGHT_TOTAL:
                issues.append(WeightIssue(
                    code="weight_out_of_range",
                    field=field,
                    value=value,
                    message=f"Gewicht '{field.value}' muss zwischen 0 und 100 liegen, ist {value}",
                ))
        if profile.total != WEIGHT_TOTAL:
            issues.append(WeightIssue(
                code="invalid_weight_sum",
                value=profile.total,
                message=f"Summe der Gewichte muss 100 ergeben, ist {profile.total}",
            ))
        return WeightValidationResult(profile_name=profile.name, issues=issues)

    def ensure_valid(self, profile: WeightProfile) -> WeightProfile:
        """Wirft InvalidWeightSum / WeightOutOfRange oder gibt das Profil unverändert zurück."""
        self.validate(profile).raise_for_issues()
        return profile


def _round_half_up(x: float) -> int:
    # Gleiche Rundung wie die Gewichtungs-Editoren (0.5 → aufrunden)
    return math.floor(x + 0.5)


def rebalance(
    profile: WeightProfile, changed: Union[WeightField, str], new_value: int
) -> WeightProfile:
    """Setzt ein Gewicht neu und verteilt den Rest proportional auf die anderen beiden.

    - Rest = 100 − new_value, aufgeteilt im Verhältnis der BISHERIGEN Werte.
    - Waren beide anderen 0: gleichmäßige Aufteilung (bei Rest 0 bleiben beide 0).
    - Jeder Anteil wird gerundet; eine Rundungsdifferenz zur Summe 100 geht
      vollständig an das erste unveränderte Feld in kanonischer Reihenfolge.
    """
    try:
        changed = WeightField(changed)
    except ValueError:
        raise ValueError(
            f"Unbekanntes Gewicht '{changed}'. Erlaubt: "
            f"{', '.join(f.value for f in CANONICAL_ORDER)}"
        ) from None
    if not 0 <= new_value <= WEIGHT_TOTAL:
        raise WeightOutOfRange(changed.value, new_value)

    others = [f for f in CANONICAL_ORDER if f != changed]
    remaining = WEIGHT_TOTAL - new_value
    previous = {f: profile.weight(f) for f in others}
    other_sum = sum(previous.values())

    updated: dict[WeightField, int] = {changed: new_value}
    if other_sum > 0:
        for f in others:
            updated[f] = _round_half_up(previous[f] / other_sum * remaining)
    else:
        for f in others:
            updated[f] = _round_half_up(remaining / 2)

    diff = WEIGHT_TOTAL - sum(updated.values())
    if diff != 0:
        updated[others[0]] += diff

    logger.debug(
        f"Rebalance '{profile.name}': {changed.value}={new_value} → "
        f"{updated[WeightField.EQUALITY]}/{updated[WeightField.CONTINUITY]}/"
        f"{updated[WeightField.LOYALTY]} (Rundungsrest {diff:+d})"
    )
    return profile.model_copy(update={f.value: v for f, v in updated.items()})
