"""Timetable Scheduler - course timetabling with backtracking search.

This module assigns each course a room and a run of consecutive time
slots while respecting professor and room availability, room capacity,
required room features and (optionally) preferred time windows.

Example usage:
    from timetable_scheduler import DataLoader, create_scheduler

    data = DataLoader("sample-data").load()
    scheduler = create_scheduler(timeout_millis=10_000)
    result = scheduler.schedule(
        data.courses, data.professors, data.rooms, data.time_slots
    )

    print(f"Success: {result.success}")
    for assignment in result.schedule.sorted_assignments():
        print(assignment)

    # Export to JSON
    from timetable_scheduler.exporters import export_schedule_json
    export_schedule_json(result, "schedule.json")
"""

from .algorithm import BacktrackingScheduler, create_scheduler
from .config import SchedulerConfig, parse_timeout
from .constraints import ConstraintValidationResult, ConstraintValidator, ValidationResult
from .exceptions import (
    ConfigurationError,
    DataLoadError,
    InvalidEntityError,
    InvalidRowError,
    MissingColumnsError,
    ScheduleConflictError,
    SchedulerError,
    UnknownTimeSlotError,
)
from .exporters import (
    export_schedule_csv,
    export_schedule_excel,
    export_schedule_json,
    get_exporter,
)
from .loaders import DataLoader, SchedulingData
from .models import (
    Course,
    CourseAssignment,
    Day,
    Professor,
    Room,
    Schedule,
    ScheduleResult,
    TimeSlot,
    UnscheduledCourse,
    UnscheduledReason,
)

__version__ = "0.1.0"

__all__ = [
    # Scheduler
    "BacktrackingScheduler",
    "SchedulerConfig",
    "create_scheduler",
    "parse_timeout",
    # Validation
    "ConstraintValidator",
    "ConstraintValidationResult",
    "ValidationResult",
    # Models
    "Day",
    "TimeSlot",
    "Course",
    "Professor",
    "Room",
    "CourseAssignment",
    "Schedule",
    "ScheduleResult",
    "UnscheduledCourse",
    "UnscheduledReason",
    # Loading
    "DataLoader",
    "SchedulingData",
    # Exporters
    "export_schedule_json",
    "export_schedule_csv",
    "export_schedule_excel",
    "get_exporter",
    # Exceptions
    "SchedulerError",
    "InvalidEntityError",
    "ScheduleConflictError",
    "ConfigurationError",
    "DataLoadError",
    "MissingColumnsError",
    "InvalidRowError",
    "UnknownTimeSlotError",
]
