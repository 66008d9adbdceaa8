"""Custom exceptions for the timetable scheduler."""


class SchedulerError(Exception):
    """Base exception for scheduler errors."""

    pass


class InvalidEntityError(SchedulerError, ValueError):
    """A domain entity was constructed with invalid data."""

    def __init__(self, entity: str, message: str):
        self.entity = entity
        super().__init__(f"Invalid {entity}: {message}")


class ScheduleConflictError(SchedulerError, RuntimeError):
    """A course was added to a schedule that already contains it."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Course {course_id} is already scheduled")


class ConfigurationError(SchedulerError, ValueError):
    """Scheduler configuration is invalid."""

    pass


class DataLoadError(SchedulerError):
    """Base exception for input loading errors."""

    pass


class MissingColumnsError(DataLoadError):
    """Required columns are missing from an input file."""

    def __init__(self, file_name: str, missing: list[str]):
        self.file_name = file_name
        self.missing = missing
        super().__init__(
            f"File '{file_name}' is missing required columns: {', '.join(missing)}"
        )


class InvalidRowError(DataLoadError):
    """A row of an input file could not be converted."""

    def __init__(self, message: str, file_name: str | None = None, row: int | None = None):
        self.file_name = file_name
        self.row = row
        location = ""
        if file_name:
            location += f" in file '{file_name}'"
        if row is not None:
            location += f" at row {row}"
        super().__init__(f"Invalid data{location}: {message}")


class UnknownTimeSlotError(InvalidRowError):
    """A row references a time slot id that was not loaded."""

    def __init__(self, slot_id: str, file_name: str | None = None, row: int | None = None):
        self.slot_id = slot_id
        super().__init__(f"Unknown time slot ID: '{slot_id}'", file_name, row)
