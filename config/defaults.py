from config.schema import EngineConfig, MatchingConfig, ScoringConfig
from models.weight_profile import WeightProfile


# Eingebaute Gewichtungsprofile (equality / continuity / loyalty)
PRESET_PROFILES: list[tuple[str, int, int, int]] = [
    ("Balanced", 33, 33, 34),
    ("Emergency", 60, 40, 0),
    ("Continuity Focus", 25, 60, 15),
    ("Loyalty Priority", 20, 20, 60),
    ("Equal Distribution", 80, 10, 10),
]


def preset_profiles() -> list[WeightProfile]:
    """Standard-Gewichtungsprofile.

    Balanced        33/33/34  ausgewogen (Standard)
    Emergency       60/40/0   Vertretungsfall, Lehrertreue egal
    Continuity Focus 25/60/15 möglichst zusammenhängende Termine
    Loyalty Priority 20/20/60 bisherige Lehrkraft bevorzugen
    Equal Distribution 80/10/10 Arbeitslast gleichmäßig verteilen
    """
    return [
        WeightProfile(
            id=i,
            name=name,
            equality=equality,
            continuity=continuity,
            loyalty=loyalty,
            is_default=(i == 1),
        )
        for i, (name, equality, continuity, loyalty) in enumerate(PRESET_PROFILES, start=1)
    ]


def default_engine_config() -> EngineConfig:
    """Standard-Konfiguration: exakter Themenvergleich, keine Termin-Toleranz."""
    return EngineConfig(
        matching=MatchingConfig(),
        scoring=ScoringConfig(),
        profiles=preset_profiles(),
        default_profile="Balanced",
    )
