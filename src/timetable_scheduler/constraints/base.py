"""Base class for constraint implementations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Self

if TYPE_CHECKING:
    from ..models import Course, Professor, Room, Schedule, TimeSlot


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one constraint check."""

    constraint_name: str
    valid: bool
    messages: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, constraint_name: str) -> Self:
        return cls(constraint_name=constraint_name, valid=True)

    @classmethod
    def failure(cls, constraint_name: str, *messages: str) -> Self:
        return cls(constraint_name=constraint_name, valid=False, messages=tuple(messages))

    def __str__(self) -> str:
        if self.valid:
            return f"{self.constraint_name}: PASSED"
        return f"{self.constraint_name}: FAILED - {', '.join(self.messages)}"


class ConstraintBase(ABC):
    """Abstract base class for constraint implementations.

    A constraint checks one candidate (course, room, slot, professor)
    against the current schedule. Implementations must not mutate the
    schedule.
    """

    name: ClassVar[str]
    is_hard: ClassVar[bool] = True

    @abstractmethod
    def validate(
        self,
        course: "Course",
        room: "Room",
        time_slot: "TimeSlot",
        professor: "Professor",
        schedule: "Schedule",
    ) -> ValidationResult:
        """
        Validate a single-slot candidate assignment.

        Args:
            course: The course to be assigned.
            room: The candidate room.
            time_slot: The candidate time slot.
            professor: The professor teaching the course.
            schedule: The current schedule state.

        Returns:
            ValidationResult with the outcome and any violation messages.
        """
        pass

    def success(self) -> ValidationResult:
        return ValidationResult.success(self.name)

    def failure(self, *messages: str) -> ValidationResult:
        return ValidationResult.failure(self.name, *messages)

    def __repr__(self) -> str:
        kind = "hard" if self.is_hard else "soft"
        return f"<{type(self).__name__} {self.name!r} ({kind})>"
