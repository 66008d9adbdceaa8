"""Backtracking search that assigns courses to rooms and time slots."""

import logging
import sys
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import SchedulerConfig
from .constraints import ConstraintValidator
from .heuristics import (
    generate_candidate_windows,
    order_courses_by_difficulty,
    order_rooms_by_fit,
    order_time_slots,
)
from .models import (
    Course,
    CourseAssignment,
    Professor,
    Room,
    Schedule,
    ScheduleResult,
    TimeSlot,
    UnscheduledCourse,
    UnscheduledReason,
)

logger = logging.getLogger(__name__)

# Frames reserved for callers and library code above the search
RECURSION_HEADROOM = 500


@dataclass
class _SearchState:
    """State owned by a single `schedule` call."""

    courses: list[Course]
    professors: dict[str, Professor]
    rooms: Sequence[Room]
    time_slots: Sequence[TimeSlot]
    schedule: Schedule = field(default_factory=Schedule)
    unscheduled: list[UnscheduledCourse] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic)
    iterations: int = 0
    aborted: bool = False

    @property
    def elapsed_millis(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)

    def mark_unscheduled(
        self, course: Course, reason: UnscheduledReason, details: str
    ) -> None:
        self.unscheduled.append(UnscheduledCourse(course.id, reason, details))


class BacktrackingScheduler:
    """
    Course scheduler using depth-first backtracking search.

    Courses are tried one decision level at a time in difficulty order.
    For each course every (room, consecutive-slot window) candidate is
    validated in heuristic order; the first valid one is committed and the
    search moves on to the next course. A course with no valid candidate is
    recorded as unscheduled and the search continues with the rest.

    The wall-clock timeout and iteration cap are checked on every recursive
    call. When either trips, the search stops and keeps everything already
    committed.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        validator: ConstraintValidator | None = None,
    ):
        """
        Initialize the scheduler.

        Args:
            config: Search budgets and validation switches.
            validator: Constraint validator. Built from `config` when omitted.
        """
        self.config = config or SchedulerConfig()
        self.validator = validator or ConstraintValidator.with_default_constraints(
            treat_soft_as_hard=self.config.treat_soft_as_hard,
            enforce_max_load=self.config.enforce_max_load,
        )

    def schedule(
        self,
        courses: Sequence[Course],
        professors: Sequence[Professor],
        rooms: Sequence[Room],
        time_slots: Sequence[TimeSlot],
    ) -> ScheduleResult:
        """
        Schedule courses into rooms and time slots.

        Args:
            courses: Courses to schedule.
            professors: Professors referenced by the courses.
            rooms: Available rooms.
            time_slots: Available time slots.

        Returns:
            ScheduleResult with the (possibly partial) schedule, the ids of
            unscheduled courses and human-readable messages.
        """
        logger.info(
            f"Scheduling {len(courses)} courses into {len(rooms)} rooms and "
            f"{len(time_slots)} time slots "
            f"(timeout {self.config.timeout_millis}ms, "
            f"max iterations {self.config.max_iterations})"
        )
        if self.config.seed is not None:
            logger.debug(f"Seed {self.config.seed} recorded; search order is deterministic")

        state = _SearchState(
            courses=order_courses_by_difficulty(courses),
            professors={p.id: p for p in professors},
            rooms=rooms,
            time_slots=time_slots,
        )
        previous_limit = sys.getrecursionlimit()
        self._ensure_recursion_depth(len(state.courses))
        try:
            completed = self._backtrack(state, 0)
        finally:
            sys.setrecursionlimit(previous_limit)

        success = completed and not state.unscheduled
        execution_time = state.elapsed_millis

        logger.info(
            f"Scheduling completed in {execution_time} ms. Success: {success}, "
            f"Scheduled: {state.schedule.scheduled_count}/{len(courses)}"
        )

        return ScheduleResult(
            success=success,
            schedule=state.schedule,
            unscheduled_courses=state.unscheduled,
            messages=state.messages,
            execution_time_millis=execution_time,
        )

    def _backtrack(self, state: _SearchState, course_index: int) -> bool:
        """Place the course at `course_index` and recurse into the rest.

        Returns:
            True once the end of the course list is reached, False if the
            search budget ran out.
        """
        if self._budget_exceeded(state, course_index):
            return False

        if course_index >= len(state.courses):
            return True

        course = state.courses[course_index]
        professor = state.professors.get(course.professor_id)

        if professor is None:
            details = f"Professor {course.professor_id} not found for course {course.id}"
            logger.warning(details)
            state.mark_unscheduled(course, UnscheduledReason.PROFESSOR_NOT_FOUND, details)
            state.messages.append(details)
            return self._backtrack(state, course_index + 1)

        rooms = order_rooms_by_fit(state.rooms, course)
        slots = order_time_slots(state.time_slots, course)
        windows = generate_candidate_windows(slots, course.duration)
        violated: set[str] = set()

        for room in rooms:
            for window in windows:
                result = self.validator.validate_multi_slot(
                    course, room, window, professor, state.schedule
                )
                if not result.valid:
                    violated.update(result.failed_constraint_names)
                    continue

                assignment = CourseAssignment(course, room, window)
                state.schedule.add_assignment(assignment)
                logger.debug(f"Assigned {assignment}")

                if self._backtrack(state, course_index + 1):
                    return True
                if state.aborted:
                    # Budget ran out; committed assignments stay
                    return False

                # Unreachable while unplaceable courses are skipped rather than failed
                state.schedule.remove_assignment(assignment)
                logger.debug(f"Backtracked {assignment}")

        reason, details = self._diagnose(state, course, rooms, windows, violated)
        logger.warning(f"Could not schedule course {course.id}: {details}")
        state.mark_unscheduled(course, reason, details)
        state.messages.append(f"Failed to schedule course {course.id} - {details}")

        return self._backtrack(state, course_index + 1)

    def _budget_exceeded(self, state: _SearchState, course_index: int) -> bool:
        """Count this call and check the timeout and iteration budgets.

        On the first trip the budget message is recorded and every course
        from `course_index` onward is marked unscheduled.
        """
        if state.aborted:
            return True

        message = None
        if state.elapsed_millis > self.config.timeout_millis:
            message = f"Scheduling timed out after {self.config.timeout_millis} ms"
        else:
            state.iterations += 1
            if state.iterations > self.config.max_iterations:
                message = f"Reached maximum iterations: {self.config.max_iterations}"

        if message is None:
            return False

        logger.warning(message)
        state.aborted = True
        state.messages.append(message)
        for course in state.courses[course_index:]:
            state.mark_unscheduled(course, UnscheduledReason.BUDGET_EXCEEDED, message)
        return True

    @staticmethod
    def _diagnose(
        state: _SearchState,
        course: Course,
        suitable_rooms: list[Room],
        windows: list[tuple[TimeSlot, ...]],
        violated: set[str],
    ) -> tuple[UnscheduledReason, str]:
        """Explain why no candidate was accepted for a course."""
        enrollment = course.expected_enrollment
        if not any(room.can_accommodate(enrollment) for room in state.rooms):
            return (
                UnscheduledReason.CAPACITY_EXCEEDED,
                f"no room has capacity for {enrollment} students",
            )
        if not suitable_rooms:
            features = ", ".join(sorted(course.required_features))
            return (
                UnscheduledReason.MISSING_FEATURES,
                f"no room with capacity for {enrollment} students has features: {features}",
            )
        if not windows:
            return (
                UnscheduledReason.NO_CONSECUTIVE_SLOTS,
                f"no run of {course.duration} consecutive time slots available",
            )
        details = "no valid room/time combination found"
        if violated:
            details += f" (violated: {', '.join(sorted(violated))})"
        return UnscheduledReason.CONSTRAINT_VIOLATION, details

    @staticmethod
    def _ensure_recursion_depth(course_count: int) -> None:
        # One search frame per course
        needed = course_count + RECURSION_HEADROOM
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)


def create_scheduler(
    validator: ConstraintValidator | None = None,
    **config_options,
) -> BacktrackingScheduler:
    """
    Factory function to create a scheduler.

    Args:
        validator: Optional custom constraint validator.
        **config_options: Fields of SchedulerConfig.

    Returns:
        Configured BacktrackingScheduler instance.
    """
    return BacktrackingScheduler(SchedulerConfig(**config_options), validator)
