"""Hard constraint implementations.

Hard constraints are mandatory requirements. A candidate assignment that
violates any hard constraint is rejected.
"""

from collections.abc import Sequence

from ..constants import (
    CONSECUTIVE_SLOTS,
    PROFESSOR_AVAILABILITY,
    PROFESSOR_LOAD,
    ROOM_AVAILABILITY,
    ROOM_CAPACITY,
    ROOM_FEATURES,
)
from ..models import Course, Professor, Room, Schedule, TimeSlot
from .base import ConstraintBase, ValidationResult


class ProfessorAvailabilityConstraint(ConstraintBase):
    """A professor is never double-booked and never teaches while unavailable."""

    name = PROFESSOR_AVAILABILITY

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        violations = []

        if not professor.is_available_at(time_slot):
            violations.append(
                f"Professor {professor.id} ({professor.name}) is unavailable at {time_slot}"
            )

        if not schedule.is_professor_available_at(professor.id, time_slot):
            violations.append(
                f"Professor {professor.id} ({professor.name}) is already scheduled at {time_slot}"
            )

        if violations:
            return self.failure(*violations)
        return self.success()


class RoomAvailabilityConstraint(ConstraintBase):
    """A room is never double-booked and never used while unavailable."""

    name = ROOM_AVAILABILITY

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        violations = []

        if not room.is_available_at(time_slot):
            violations.append(f"Room {room.id} ({room.name}) is unavailable at {time_slot}")

        if not schedule.is_room_available_at(room.id, time_slot):
            violations.append(f"Room {room.id} ({room.name}) is already occupied at {time_slot}")

        if violations:
            return self.failure(*violations)
        return self.success()


class RoomCapacityConstraint(ConstraintBase):
    """Room capacity covers the expected enrollment."""

    name = ROOM_CAPACITY

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        if room.can_accommodate(course.expected_enrollment):
            return self.success()
        return self.failure(
            f"Room {room.id} (capacity {room.capacity}) cannot accommodate "
            f"course {course.id} (enrollment {course.expected_enrollment})"
        )


class RoomFeaturesConstraint(ConstraintBase):
    """Room provides every feature the course requires."""

    name = ROOM_FEATURES

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        if room.has_all_features(course.required_features):
            return self.success()
        missing = sorted(course.required_features - room.features)
        return self.failure(
            f"Room {room.id} is missing required features for course {course.id}: "
            f"{', '.join(missing)}"
        )


class ConsecutiveSlotsConstraint(ConstraintBase):
    """A multi-slot course occupies an unbroken run of slots.

    This is a structural check over all slots proposed for one course, so
    the single-slot `validate` always passes. Use `validate_multi_slot`.
    """

    name = CONSECUTIVE_SLOTS

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        return self.success()

    def validate_multi_slot(
        self,
        course: Course,
        room: Room,
        time_slots: Sequence[TimeSlot],
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        """Check slot count against the course duration and slot adjacency.

        Args:
            course: The course to be assigned.
            room: The candidate room.
            time_slots: All slots proposed for the course, in order.
            professor: The professor teaching the course.
            schedule: The current schedule state.

        Returns:
            ValidationResult, failing on the first non-adjacent pair.
        """
        if len(time_slots) != course.duration:
            return self.failure(
                f"Course {course.id} requires {course.duration} slots "
                f"but {len(time_slots)} were provided"
            )

        for i, (current, following) in enumerate(zip(time_slots, time_slots[1:])):
            if not current.is_consecutive_with(following):
                return self.failure(
                    f"Course {course.id} requires consecutive slots, "
                    f"but slots {i} and {i + 1} are not consecutive"
                )

        return self.success()


class ProfessorLoadConstraint(ConstraintBase):
    """A professor teaches at most `max_load` courses.

    Load is counted in courses, so every slot of a multi-slot course is
    checked against the same count.
    """

    name = PROFESSOR_LOAD

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ValidationResult:
        current_load = len(schedule.assignments_for_professor(professor.id))
        if current_load < professor.max_load:
            return self.success()
        return self.failure(
            f"Professor {professor.id} ({professor.name}) has reached "
            f"maximum load of {professor.max_load} courses"
        )
