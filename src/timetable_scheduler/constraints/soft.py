"""Soft constraint implementations.

Soft constraints are preferences. A violation is reported but does not
reject a candidate unless the validator promotes soft constraints to hard.
"""

from ..constants import PREFERRED_TIME_WINDOW
from ..models import Course, Professor, Room, Schedule, TimeSlot
from .base import ConstraintBase, ValidationResult


def in_preferred_window(course: Course, time_slot: TimeSlot) -> bool:
    """Check if a slot equals or overlaps one of the course's preferred slots."""
    return any(
        preferred == time_slot or preferred.overlaps_with(time_slot)
        for preferred in course.preferred_time_windows
    )


class PreferredTimeWindowConstraint(ConstraintBase):
    """Courses are taught inside their preferred time windows when declared."""

    name = PREFERRED_TIME_WINDOW
    is_hard = False

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        if not course.has_preferred_time_windows:
            return self.success()
        if in_preferred_window(course, time_slot):
            return self.success()
        return self.failure(
            f"Course {course.id} is not scheduled in a preferred time window ({time_slot})"
        )
