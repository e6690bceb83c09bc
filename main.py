"""Zuweisungs-Engine — Haupt-CLI.

Verwendung:
  python main.py config init                        Standard-Konfiguration anlegen
  python main.py config show                        Konfiguration anzeigen
  python main.py profiles list                      Gewichtungsprofile auflisten
  python main.py profiles check <name>              Profil validieren
  python main.py profiles rebalance <name> <feld> <wert>
                                                    Gewicht setzen, Rest umverteilen
  python main.py check <snapshot.json>              Konflikte eines Snapshots prüfen
  python main.py evaluate <snapshot.json> <kandidat.json> [--profile NAME]
                                                    Kandidaten bewerten
  python main.py workload <snapshot.json>           Auslastung der Lehrkräfte
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from engine.errors import EngineError

console = Console()


def _load_config():
    """Lädt die Konfiguration (oder die eingebauten Defaults)."""
    from config.manager import ConfigManager
    return ConfigManager().load_or_default()


def _abort(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")
    sys.exit(1)


def _resolve_profile(config, name):
    """Profil nach Name, ohne Name das Standardprofil."""
    if name is None:
        return config.get_default_profile()
    profile = config.get_profile(name)
    if profile is None:
        _abort(
            f"Profil '{name}' nicht gefunden. "
            f"Verfügbar: {', '.join(p.name for p in config.profiles)}"
        )
    return profile


def _load_snapshot(path: Path):
    from models.snapshot import AssignmentSnapshot
    try:
        return AssignmentSnapshot.load_json(path)
    except ValueError as e:
        _abort(f"Snapshot ungültig: {path}\n{e}")


def _conflict_table(conflicts, title: str) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Schwere", width=8)
    table.add_column("Typ", width=24)
    table.add_column("Zuweisungen", width=12)
    table.add_column("Beschreibung")
    colors = {"high": "red", "medium": "yellow", "low": "dim"}
    for c in conflicts:
        color = colors[c.severity.value]
        table.add_row(
            f"[{color}]{c.severity.value}[/{color}]",
            c.type.value,
            ", ".join(str(i) for i in sorted(c.assignment_ids)) or "–",
            c.description,
        )
    return table


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_engine_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Eine Konfiguration existiert bereits: {mgr.DEFAULT_CONFIG}[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    mgr.save(default_engine_config())


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()

    m = config.matching
    s = config.scoring
    console.print(Panel(
        f"Themenvergleich: Groß-/Kleinschreibung "
        f"{'beachten' if m.case_sensitive else 'ignorieren'} | "
        f"Leerzeichen {'normalisieren' if m.strip_whitespace else 'exakt'}\n"
        f"Termin-Toleranz: {s.adjacency_tolerance_minutes} min | "
        f"Kontinuität ohne Termine: {s.unscheduled_continuity}\n"
        f"Standardprofil: [bold]{config.default_profile}[/bold]",
        title="Engine-Konfiguration",
        border_style="cyan",
    ))
    _print_profiles(config)


# ─── PROFILES ─────────────────────────────────────────────────────────────────

def _print_profiles(config) -> None:
    table = Table(title="Gewichtungsprofile", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Gleichm.", justify="right")
    table.add_column("Kontinuität", justify="right")
    table.add_column("Treue", justify="right")
    table.add_column("Standard", justify="center")
    for p in config.profiles:
        table.add_row(
            p.name, str(p.equality), str(p.continuity), str(p.loyalty),
            "✓" if p.name == config.default_profile else "",
        )
    console.print(table)


@click.group("profiles")
def cmd_profiles():
    """Gewichtungsprofile auflisten, prüfen und umverteilen."""


@cmd_profiles.command("list")
def profiles_list():
    """Listet alle Gewichtungsprofile auf."""
    _print_profiles(_load_config())


@cmd_profiles.command("check")
@click.argument("name")
def profiles_check(name: str):
    """Validiert ein Profil (Summe 100, jeder Wert in [0, 100])."""
    from engine.api import validate_weight_profile

    profile = _resolve_profile(_load_config(), name)
    result = validate_weight_profile(profile)
    if result.is_valid:
        console.print(f"[green]✓[/green] Profil '{profile.name}' ist gültig.")
        return
    for issue in result.issues:
        console.print(f"  [red]✗[/red] {issue.message}")
    sys.exit(1)


@cmd_profiles.command("rebalance")
@click.argument("name")
@click.argument("field", type=click.Choice(["equality", "continuity", "loyalty"]))
@click.argument("value", type=int)
@click.option("--save", is_flag=True, default=False,
              help="Ergebnis in die Konfigurationsdatei schreiben.")
def profiles_rebalance(name: str, field: str, value: int, save: bool):
    """Setzt ein Gewicht und verteilt den Rest proportional auf die anderen."""
    from config.manager import ConfigManager
    from engine.api import rebalance_weight_profile

    config = _load_config()
    profile = _resolve_profile(config, name)
    try:
        updated = rebalance_weight_profile(profile, field, value)
    except (EngineError, ValueError) as e:
        _abort(str(e))

    console.print(
        f"[bold]{updated.name}[/bold]: "
        f"{profile.equality}/{profile.continuity}/{profile.loyalty} → "
        f"{updated.equality}/{updated.continuity}/{updated.loyalty}"
    )
    if save:
        profiles = [updated if p.name == updated.name else p for p in config.profiles]
        ConfigManager().save(config.model_copy(update={"profiles": profiles}))


# ─── CHECK ────────────────────────────────────────────────────────────────────

@click.command("check")
@click.argument("snapshot", type=click.Path(exists=True, path_type=Path))
def cmd_check(snapshot: Path):
    """Prüft einen Snapshot auf Konflikte (Exit-Code 1 bei hohem Schweregrad)."""
    from engine.orchestrator import build_orchestrator

    snap = _load_snapshot(snapshot)
    console.print(Panel(snap.summary(), title=str(snapshot), border_style="cyan"))
    try:
        conflicts, report = build_orchestrator(_load_config()).check_snapshot(snap)
    except EngineError as e:
        _abort(str(e))

    if conflicts:
        console.print(_conflict_table(conflicts, "Konflikte"))
    report.print_rich()
    if report.has_high:
        sys.exit(1)


# ─── EVALUATE ─────────────────────────────────────────────────────────────────

@click.command("evaluate")
@click.argument("snapshot", type=click.Path(exists=True, path_type=Path))
@click.argument("candidate", type=click.Path(exists=True, path_type=Path))
@click.option("--profile", "profile_name", default=None,
              help="Gewichtungsprofil (Default: Profil des Snapshots bzw. Standardprofil).")
def cmd_evaluate(snapshot: Path, candidate: Path, profile_name):
    """Bewertet eine Kandidaten-Zuweisung gegen einen Snapshot."""
    from engine.orchestrator import build_orchestrator
    from models.assignment import Assignment

    config = _load_config()
    snap = _load_snapshot(snapshot)
    try:
        cand = Assignment.model_validate_json(candidate.read_text(encoding="utf-8"))
    except ValueError as e:
        _abort(f"Kandidat ungültig: {candidate}\n{e}")

    if profile_name is not None or snap.weights is None:
        weights = _resolve_profile(config, profile_name)
    else:
        weights = snap.weights

    try:
        result = build_orchestrator(config).evaluate(cand, snap, weights)
    except (EngineError, ValueError) as e:
        _abort(str(e))

    if result.accepted:
        b = result.breakdown
        console.print(Panel(
            f"[bold green]✓ ZULÄSSIG[/bold green]  Wert: [bold]{result.score:.4f}[/bold]\n"
            f"Gleichmäßigkeit {b.equality:.3f} | Kontinuität {b.continuity:.3f} | "
            f"Treue {b.loyalty:.3f}  (Profil '{b.profile_name}')",
            title=f"Kandidat {result.candidate_id}",
            border_style="green",
        ))
    else:
        console.print(Panel(
            f"[bold red]✗ ABGELEHNT[/bold red]\n{result.reason}",
            title=f"Kandidat {result.candidate_id}",
            border_style="red",
        ))

    if result.conflicts_introduced:
        console.print(_conflict_table(result.conflicts_introduced, "Neue Konflikte"))
    if result.conflicts_resolved:
        console.print(_conflict_table(result.conflicts_resolved, "Behobene Konflikte"))
    result.severity.print_rich()
    if not result.accepted:
        sys.exit(1)


# ─── WORKLOAD ─────────────────────────────────────────────────────────────────

@click.command("workload")
@click.argument("snapshot", type=click.Path(exists=True, path_type=Path))
def cmd_workload(snapshot: Path):
    """Zeigt die Auslastung aller Lehrkräfte eines Snapshots."""
    from analysis.workload import WorkloadAnalyzer

    snap = _load_snapshot(snapshot)
    WorkloadAnalyzer().analyze(snap.assignments, snap.teachers).print_rich()


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe.")
def cli(verbose: bool):
    """Zuweisungs-Engine: Lehrkraft ↔ Kurs bewerten und Konflikte prüfen.

    Starten Sie mit: python main.py config init
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_profiles)
cli.add_command(cmd_check)
cli.add_command(cmd_evaluate)
cli.add_command(cmd_workload)


if __name__ == "__main__":
    main()
