"""Orchestrates constraint checks for single-slot and multi-slot candidates."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ..models import Course, Professor, Room, Schedule, TimeSlot
from .base import ConstraintBase, ValidationResult
from .hard import (
    ConsecutiveSlotsConstraint,
    ProfessorAvailabilityConstraint,
    ProfessorLoadConstraint,
    RoomAvailabilityConstraint,
    RoomCapacityConstraint,
    RoomFeaturesConstraint,
)
from .soft import PreferredTimeWindowConstraint


@dataclass
class ConstraintValidationResult:
    """Aggregated outcome of running a set of constraints."""

    valid: bool
    results: list[ValidationResult] = field(default_factory=list)

    @property
    def failed_results(self) -> list[ValidationResult]:
        return [r for r in self.results if not r.valid]

    @property
    def messages(self) -> list[str]:
        return [message for r in self.results for message in r.messages]

    @property
    def failed_constraint_names(self) -> set[str]:
        return {r.constraint_name for r in self.failed_results}

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        if self.valid:
            return "All constraints satisfied"
        return "Constraint violations:\n" + "\n".join(self.messages)


class ConstraintValidator:
    """Runs an ordered set of constraints against candidate assignments.

    With `treat_soft_as_hard` every violated constraint rejects the
    candidate; otherwise only violated hard constraints do.
    """

    def __init__(
        self,
        constraints: Iterable[ConstraintBase],
        treat_soft_as_hard: bool = False,
    ):
        self.constraints = list(constraints)
        self.treat_soft_as_hard = treat_soft_as_hard
        self._consecutive = ConsecutiveSlotsConstraint()

    @classmethod
    def with_default_constraints(
        cls,
        treat_soft_as_hard: bool = False,
        enforce_max_load: bool = False,
    ) -> "ConstraintValidator":
        """Create a validator with the standard constraint set.

        Args:
            treat_soft_as_hard: Reject candidates that violate soft constraints.
            enforce_max_load: Also enforce each professor's maximum load.
        """
        constraints: list[ConstraintBase] = [
            ProfessorAvailabilityConstraint(),
            RoomAvailabilityConstraint(),
            RoomCapacityConstraint(),
            RoomFeaturesConstraint(),
            PreferredTimeWindowConstraint(),
        ]
        if enforce_max_load:
            constraints.append(ProfessorLoadConstraint())
        return cls(constraints, treat_soft_as_hard=treat_soft_as_hard)

    def _is_blocking(self, constraint: ConstraintBase) -> bool:
        return constraint.is_hard or self.treat_soft_as_hard

    def validate(
        self,
        course: Course,
        room: Room,
        time_slot: TimeSlot,
        professor: Professor,
        schedule: Schedule,
    ) -> ConstraintValidationResult:
        """Validate a single-slot candidate against every constraint."""
        results = []
        valid = True

        for constraint in self.constraints:
            result = constraint.validate(course, room, time_slot, professor, schedule)
            results.append(result)
            if not result.valid and self._is_blocking(constraint):
                valid = False

        return ConstraintValidationResult(valid=valid, results=results)

    def validate_multi_slot(
        self,
        course: Course,
        room: Room,
        time_slots: Sequence[TimeSlot],
        professor: Professor,
        schedule: Schedule,
    ) -> ConstraintValidationResult:
        """Validate a multi-slot candidate.

        Runs the consecutive-slots check once over the whole run, then the
        single-slot checks for each slot against the schedule as it stands.
        The course's own slots are not in the schedule yet, so they never
        conflict with each other here.
        """
        consecutive = self._consecutive.validate_multi_slot(
            course, room, time_slots, professor, schedule
        )
        results = [consecutive]
        valid = consecutive.valid

        for time_slot in time_slots:
            slot_result = self.validate(course, room, time_slot, professor, schedule)
            results.extend(slot_result.results)
            if not slot_result.valid:
                valid = False

        return ConstraintValidationResult(valid=valid, results=results)
