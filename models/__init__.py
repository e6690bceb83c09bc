from models.teacher import Teacher, TimeRange, Weekday
from models.course import Course
from models.timeslot import TimeSlot
from models.assignment import Assignment, AssignmentStatus, PARTICIPATING_STATUSES
from models.weight_profile import WeightField, WeightProfile
from models.conflict import (
    AGGREGATE_TYPES,
    BLOCKING_TYPES,
    SEVERITY_BY_TYPE,
    Conflict,
    ConflictType,
    Severity,
)
from models.snapshot import AssignmentSnapshot

__all__ = [
    "Teacher",
    "TimeRange",
    "Weekday",
    "Course",
    "TimeSlot",
    "Assignment",
    "AssignmentStatus",
    "PARTICIPATING_STATUSES",
    "WeightField",
    "WeightProfile",
    "Conflict",
    "ConflictType",
    "Severity",
    "SEVERITY_BY_TYPE",
    "BLOCKING_TYPES",
    "AGGREGATE_TYPES",
    "AssignmentSnapshot",
]
