"""Constraint implementations for the scheduler."""

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
from .validator import ConstraintValidationResult, ConstraintValidator

__all__ = [
    "ConstraintBase",
    "ValidationResult",
    "ConstraintValidator",
    "ConstraintValidationResult",
    # Hard constraints
    "ProfessorAvailabilityConstraint",
    "RoomAvailabilityConstraint",
    "RoomCapacityConstraint",
    "RoomFeaturesConstraint",
    "ConsecutiveSlotsConstraint",
    "ProfessorLoadConstraint",
    # Soft constraints
    "PreferredTimeWindowConstraint",
]
