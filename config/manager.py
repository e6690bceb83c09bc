"""Konfigurationsmanager: Laden, Speichern und Validieren der Engine-Konfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import default_engine_config
from config.schema import EngineConfig

console = Console()
logger = logging.getLogger(__name__)
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

def _yaml_header() -> str:
    return f"""\
# ============================================
# Zuweisungs-Engine — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""


_SECTION_COMMENTS = {
    "matching": (
        "Qualifikationsabgleich",
        "Wie Qualifikationen einer Lehrkraft mit dem Kursthema verglichen werden.",
    ),
    "scoring": (
        "Bewertung",
        "Toleranz für anschließende Termine und Kontinuitätswert ohne Termine.",
    ),
    "profiles": (
        "Gewichtungsprofile",
        "equality + continuity + loyalty muss 100 ergeben.",
    ),
    "default_profile": (
        "Standardprofil",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "engine_config.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> EngineConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus, um sie anzulegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return EngineConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> EngineConfig:
        """Wie load(), fällt aber bei fehlender Datei auf die eingebauten Defaults zurück.

        Eine vorhandene, aber ungültige Datei bleibt ein Fehler.
        """
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            logger.info(f"Keine Konfiguration unter {target}, verwende Defaults")
            return default_engine_config()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: EngineConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_yaml_header() + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: EngineConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        # Inline-Kommentar für die Termin-Toleranz
        scoring_map = CommentedMap(cm["scoring"])
        scoring_map.yaml_add_eol_comment("Minuten, 0 = lückenlos", "adjacency_tolerance_minutes")
        cm["scoring"] = scoring_map

        return cm
