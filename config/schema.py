from pydantic import BaseModel, Field, model_validator
from typing import Optional

from models.weight_profile import WeightProfile


# ─── QUALIFIKATIONSABGLEICH ───

class MatchingConfig(BaseModel):
    """Regel, nach der Qualifikationen mit Kursthemen verglichen werden."""
    # Groß-/Kleinschreibung beachten ("Mathematics" ≠ "mathematics")
    case_sensitive: bool = Field(True,
        description="Groß-/Kleinschreibung beim Themenvergleich beachten")
    # Führende/folgende und mehrfache Leerzeichen vor dem Vergleich entfernen
    strip_whitespace: bool = Field(False,
        description="Leerzeichen vor dem Themenvergleich normalisieren")


# ─── BEWERTUNG ───

class ScoringConfig(BaseModel):
    """Parameter der Bewertungsfaktoren."""
    # Maximale Lücke zwischen zwei Terminen, die noch als "direkt anschließend" gilt
    adjacency_tolerance_minutes: int = Field(0, ge=0, le=60,
        description="Toleranz für anschließende Termine in Minuten")
    # Kontinuitätswert für Kandidaten ohne geplante Termine
    unscheduled_continuity: float = Field(0.5, ge=0.0, le=1.0,
        description="Kontinuitätswert ohne Termine")


# ─── GESAMTKONFIGURATION ───

def _preset_profiles() -> list[WeightProfile]:
    from config.defaults import preset_profiles
    return preset_profiles()


class EngineConfig(BaseModel):
    """Gesamtkonfiguration der Zuweisungs-Engine."""
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    profiles: list[WeightProfile] = Field(default_factory=_preset_profiles)
    default_profile: str = "Balanced"

    @model_validator(mode='after')
    def validate_profiles(self) -> 'EngineConfig':
        names = [p.name for p in self.profiles]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Profilnamen mehrfach vergeben: {duplicates}")
        if self.default_profile not in names:
            raise ValueError(
                f"Standardprofil '{self.default_profile}' nicht definiert. "
                f"Verfügbar: {names}"
            )
        return self

    def get_profile(self, name: str) -> Optional[WeightProfile]:
        for p in self.profiles:
            if p.name == name:
                return p
        return None

    def get_default_profile(self) -> WeightProfile:
        return self.get_profile(self.default_profile)
