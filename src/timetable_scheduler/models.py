"""Data models for the course timetable scheduler."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from functools import total_ordering
from typing import Any, Self

from .constants import DEFAULT_MAX_LOAD, TIME_FORMAT
from .exceptions import InvalidEntityError, ScheduleConflictError


class Day(Enum):
    """Days of the week."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Look up a day by name, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the name is not a day of the week
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid day of week: '{name}'") from None


@total_ordering
@dataclass(frozen=True, eq=False)
class TimeSlot:
    """A discrete teaching period: a day plus a half-open [start, end) range.

    Equality, hashing and ordering use (day, start, index). The index only
    breaks ties, so two catalog slots sharing a day and start time stay
    distinguishable inside sets.

    Attributes:
        index: Catalog id of the slot
        day: Day of the week
        start: Start time (inclusive)
        end: End time (exclusive)
    """

    index: int
    day: Day
    start: time
    end: time

    def __post_init__(self) -> None:
        if not isinstance(self.day, Day):
            raise InvalidEntityError("time slot", f"day must be a Day, got {self.day!r}")
        if self.end <= self.start:
            raise InvalidEntityError(
                "time slot",
                f"end time {self.end:{TIME_FORMAT}} must be after "
                f"start time {self.start:{TIME_FORMAT}}",
            )

    @property
    def sort_key(self) -> tuple[int, time, int]:
        return (self.day.value, self.start, self.index)

    def overlaps_with(self, other: "TimeSlot") -> bool:
        """Check if two slots share any time on the same day."""
        if self.day != other.day:
            return False
        return self.start < other.end and other.start < self.end

    def is_consecutive_with(self, other: "TimeSlot") -> bool:
        """Check if `other` starts exactly when this slot ends, on the same day."""
        return self.day == other.day and self.end == other.start

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: "TimeSlot") -> bool:
        if not isinstance(other, TimeSlot):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    def __str__(self) -> str:
        return (
            f"{self.day.name} {self.start:{TIME_FORMAT}}-{self.end:{TIME_FORMAT}} "
            f"(slot {self.index})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert time slot to dictionary."""
        return {
            "index": self.index,
            "day": self.day.name.lower(),
            "start": self.start.strftime(TIME_FORMAT),
            "end": self.end.strftime(TIME_FORMAT),
        }


def _require_id(entity: str, field_name: str, value: str | None) -> None:
    if value is None or not str(value).strip():
        raise InvalidEntityError(entity, f"{field_name} is required")


def _freeze(instance: object, name: str, values: Iterable) -> None:
    object.__setattr__(instance, name, frozenset(values))


@dataclass(frozen=True, eq=False)
class Course:
    """A course that needs a room and a run of consecutive time slots.

    Attributes:
        id: Unique course identifier
        name: Course title
        duration: Number of consecutive slots required
        expected_enrollment: Expected number of students
        professor_id: Id of the teaching professor
        required_features: Room features the course needs
        preferred_time_windows: Slots the course would like to be taught in
    """

    id: str
    name: str
    duration: int
    expected_enrollment: int
    professor_id: str
    required_features: frozenset[str] = field(default_factory=frozenset)
    preferred_time_windows: frozenset[TimeSlot] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        _require_id("course", "course ID", self.id)
        _require_id("course", "professor ID", self.professor_id)
        if self.duration < 1:
            raise InvalidEntityError("course", "duration must be at least 1 slot")
        if self.expected_enrollment < 1:
            raise InvalidEntityError("course", "expected enrollment must be positive")
        _freeze(self, "required_features", self.required_features)
        _freeze(self, "preferred_time_windows", self.preferred_time_windows)

    @property
    def has_preferred_time_windows(self) -> bool:
        return bool(self.preferred_time_windows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Course):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert course to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "expected_enrollment": self.expected_enrollment,
            "professor_id": self.professor_id,
            "required_features": sorted(self.required_features),
            "preferred_time_windows": [
                slot.to_dict() for slot in sorted(self.preferred_time_windows)
            ],
        }


@dataclass(frozen=True, eq=False)
class Professor:
    """A professor who teaches courses.

    `max_load` is the number of courses the professor may teach. It is only
    enforced when the load constraint is enabled.
    """

    id: str
    name: str
    unavailable: frozenset[TimeSlot] = field(default_factory=frozenset)
    max_load: int = DEFAULT_MAX_LOAD

    def __post_init__(self) -> None:
        _require_id("professor", "professor ID", self.id)
        if self.max_load < 0:
            raise InvalidEntityError("professor", "max load cannot be negative")
        _freeze(self, "unavailable", self.unavailable)

    def is_available_at(self, time_slot: TimeSlot) -> bool:
        """Check the professor's own unavailability, ignoring any schedule."""
        return not any(slot.overlaps_with(time_slot) for slot in self.unavailable)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Professor):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert professor to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "max_load": None if self.max_load == DEFAULT_MAX_LOAD else self.max_load,
            "unavailable": [slot.to_dict() for slot in sorted(self.unavailable)],
        }


@dataclass(frozen=True, eq=False)
class Room:
    """A physical room where courses can be taught."""

    id: str
    name: str
    capacity: int
    features: frozenset[str] = field(default_factory=frozenset)
    unavailable: frozenset[TimeSlot] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        _require_id("room", "room ID", self.id)
        if self.capacity <= 0:
            raise InvalidEntityError("room", "capacity must be positive")
        _freeze(self, "features", self.features)
        _freeze(self, "unavailable", self.unavailable)

    def can_accommodate(self, expected_enrollment: int) -> bool:
        return self.capacity >= expected_enrollment

    def has_all_features(self, required_features: Iterable[str]) -> bool:
        return self.features.issuperset(required_features)

    def is_available_at(self, time_slot: TimeSlot) -> bool:
        """Check the room's own unavailability, ignoring any schedule."""
        return not any(slot.overlaps_with(time_slot) for slot in self.unavailable)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Room):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert room to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "capacity": self.capacity,
            "features": sorted(self.features),
            "unavailable": [slot.to_dict() for slot in sorted(self.unavailable)],
        }


@dataclass(frozen=True)
class CourseAssignment:
    """A course bound to one room and an ordered run of time slots."""

    course: Course
    room: Room
    time_slots: tuple[TimeSlot, ...]

    def __post_init__(self) -> None:
        slots = tuple(self.time_slots)
        if not slots:
            raise InvalidEntityError("assignment", "time slots cannot be empty")
        if len(slots) != self.course.duration:
            raise InvalidEntityError(
                "assignment",
                f"time slots size ({len(slots)}) must match "
                f"course duration ({self.course.duration})",
            )
        object.__setattr__(self, "time_slots", slots)

    @property
    def first_slot(self) -> TimeSlot:
        return self.time_slots[0]

    def __str__(self) -> str:
        slots = ", ".join(str(slot) for slot in self.time_slots)
        return f"{self.course.id} in {self.room.id} at [{slots}]"

    def to_dict(self) -> dict[str, Any]:
        """Convert assignment to dictionary."""
        return {
            "course_id": self.course.id,
            "course_name": self.course.name,
            "professor_id": self.course.professor_id,
            "room_id": self.room.id,
            "room_name": self.room.name,
            "time_slots": [slot.to_dict() for slot in self.time_slots],
        }


class Schedule:
    """Mutable collection of assignments with per-course, per-professor and
    per-room indices.

    A schedule holds at most one assignment per course. Removing an
    assignment is the only undo operation the search needs.
    """

    def __init__(self) -> None:
        self._assignments: list[CourseAssignment] = []
        # course id -> assignment
        self._by_course: dict[str, CourseAssignment] = {}
        # professor id -> assignments
        self._by_professor: dict[str, list[CourseAssignment]] = {}
        # room id -> assignments
        self._by_room: dict[str, list[CourseAssignment]] = {}

    def add_assignment(self, assignment: CourseAssignment) -> None:
        """Add an assignment to the schedule and all indices.

        Raises:
            ScheduleConflictError: If the course is already scheduled
        """
        course_id = assignment.course.id
        if course_id in self._by_course:
            raise ScheduleConflictError(course_id)

        self._assignments.append(assignment)
        self._by_course[course_id] = assignment
        self._by_professor.setdefault(assignment.course.professor_id, []).append(assignment)
        self._by_room.setdefault(assignment.room.id, []).append(assignment)

    def remove_assignment(self, assignment: CourseAssignment) -> None:
        """Remove an assignment from the schedule and all indices.

        Removing an assignment that is not in the schedule does nothing.
        """
        stored = self._by_course.get(assignment.course.id)
        if stored is None or stored != assignment:
            return

        del self._by_course[assignment.course.id]
        self._assignments.remove(stored)
        self._by_professor[stored.course.professor_id].remove(stored)
        self._by_room[stored.room.id].remove(stored)

    @property
    def assignments(self) -> tuple[CourseAssignment, ...]:
        return tuple(self._assignments)

    def get_assignment(self, course_id: str) -> CourseAssignment | None:
        return self._by_course.get(course_id)

    def assignments_for_professor(self, professor_id: str) -> tuple[CourseAssignment, ...]:
        return tuple(self._by_professor.get(professor_id, ()))

    def assignments_for_room(self, room_id: str) -> tuple[CourseAssignment, ...]:
        return tuple(self._by_room.get(room_id, ()))

    def is_professor_available_at(self, professor_id: str, time_slot: TimeSlot) -> bool:
        """Check that none of the professor's scheduled slots overlap `time_slot`."""
        return not any(
            slot.overlaps_with(time_slot)
            for assignment in self._by_professor.get(professor_id, ())
            for slot in assignment.time_slots
        )

    def is_room_available_at(self, room_id: str, time_slot: TimeSlot) -> bool:
        """Check that none of the room's scheduled slots overlap `time_slot`."""
        return not any(
            slot.overlaps_with(time_slot)
            for assignment in self._by_room.get(room_id, ())
            for slot in assignment.time_slots
        )

    @property
    def scheduled_count(self) -> int:
        return len(self._assignments)

    def is_empty(self) -> bool:
        return not self._assignments

    def sorted_assignments(self) -> list[CourseAssignment]:
        """Assignments ordered by their first time slot."""
        return sorted(self._assignments, key=lambda a: a.first_slot)

    def __len__(self) -> int:
        return len(self._assignments)

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._by_course

    def __repr__(self) -> str:
        return f"Schedule(assignments={len(self._assignments)})"

    def to_dict(self) -> dict[str, Any]:
        """Convert schedule to dictionary."""
        return {
            "scheduled_count": self.scheduled_count,
            "assignments": [a.to_dict() for a in self.sorted_assignments()],
        }


class UnscheduledReason(str, Enum):
    """Reasons why a course could not be scheduled."""

    PROFESSOR_NOT_FOUND = "professor_not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    MISSING_FEATURES = "missing_features"
    NO_CONSECUTIVE_SLOTS = "no_consecutive_slots"
    CONSTRAINT_VIOLATION = "constraint_violation"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass
class UnscheduledCourse:
    """A course that could not be scheduled."""

    course_id: str
    reason: UnscheduledReason
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "course_id": self.course_id,
            "reason": self.reason.value,
            "details": self.details,
        }


@dataclass
class ScheduleResult:
    """Result of a scheduling run.

    `success` is true only when the search ran to the end and every course
    was placed. A partial schedule is still returned in `schedule`.
    """

    success: bool
    schedule: Schedule
    unscheduled_courses: list[UnscheduledCourse] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    execution_time_millis: int = 0

    @property
    def unscheduled_course_ids(self) -> list[str]:
        return [u.course_id for u in self.unscheduled_courses]

    @property
    def scheduled_count(self) -> int:
        return self.schedule.scheduled_count

    @property
    def total_unscheduled(self) -> int:
        return len(self.unscheduled_courses)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "execution_time_millis": self.execution_time_millis,
            "scheduled_count": self.scheduled_count,
            "assignments": [a.to_dict() for a in self.schedule.sorted_assignments()],
            "unscheduled_courses": [u.to_dict() for u in self.unscheduled_courses],
            "unscheduled_course_ids": self.unscheduled_course_ids,
            "messages": list(self.messages),
        }
