"""Hilfsfunktionen für Termine: Validierung, Sortierung, Minutenarithmetik."""

from collections.abc import Iterable
from datetime import date, datetime, time

from engine.errors import MalformedTimeSlot
from models.assignment import Assignment
from models.teacher import Teacher, Weekday
from models.timeslot import TimeSlot


def to_minutes(t: time) -> int:
    """Minuten seit Mitternacht (Sekunden werden ignoriert)."""
    return t.hour * 60 + t.minute


def validate_time_slot(slot: TimeSlot, assignment_id: int | None = None) -> None:
    """Prüft Ende > Beginn und duration_minutes == Ende − Beginn."""
    if slot.end_time <= slot.start_time:
        raise MalformedTimeSlot(
            f"Termin {slot}: Ende liegt nicht nach Beginn", assignment_id
        )
    span = datetime.combine(slot.date, slot.end_time) - datetime.combine(slot.date, slot.start_time)
    if span.total_seconds() != slot.duration_minutes * 60:
        raise MalformedTimeSlot(
            f"Termin {slot}: Dauer {slot.duration_minutes} min passt nicht zu "
            f"{int(span.total_seconds() // 60)} min zwischen Beginn und Ende",
            assignment_id,
        )


def validate_assignment_slots(assignments: Iterable[Assignment]) -> None:
    """Validiert alle Termine aller übergebenen Zuweisungen."""
    for a in assignments:
        for slot in a.scheduled_slots:
            validate_time_slot(slot, a.id)


def sorted_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    """Chronologisch nach Datum und Beginn (die Eingabe ist nicht sortiert)."""
    return sorted(slots, key=lambda s: s.sort_key)


def slots_overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """Zwei Termine kollidieren gdw. gleiches Datum und startA < endB && startB < endA."""
    return a.date == b.date and a.start_time < b.end_time and b.start_time < a.end_time


def are_adjacent(first: TimeSlot, second: TimeSlot, tolerance_minutes: int = 0) -> bool:
    """True wenn second am selben Tag direkt (± Toleranz) an first anschließt."""
    if first.date != second.date:
        return False
    gap = to_minutes(second.start_time) - to_minutes(first.end_time)
    return 0 <= gap <= tolerance_minutes


def iso_week(d: date) -> str:
    """ISO-Kalenderwoche, z.B. "2025-W36"."""
    year, week, _ = d.isocalendar()
    return f"{year}-W{week:02d}"


def weekday_of(d: date) -> Weekday:
    return Weekday.from_index(d.weekday())


def within_working_time(teacher: Teacher, slot: TimeSlot) -> bool:
    """Liegt der Termin vollständig im Arbeitszeitfenster des Wochentags?

    Lehrkräfte ohne deklarierte Fenster gelten als immer verfügbar.
    """
    if not teacher.has_working_times:
        return True
    window = teacher.working_times.get(weekday_of(slot.date))
    if window is None:
        return False
    return window.start <= slot.start_time and slot.end_time <= window.end
