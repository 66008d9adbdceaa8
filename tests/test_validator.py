"""Tests for ConstraintValidator."""

from timetable_scheduler.constants import (
    CONSECUTIVE_SLOTS,
    PREFERRED_TIME_WINDOW,
    PROFESSOR_AVAILABILITY,
    PROFESSOR_LOAD,
    ROOM_CAPACITY,
)
from timetable_scheduler.constraints import (
    ConstraintValidator,
    ProfessorLoadConstraint,
    RoomCapacityConstraint,
)
from timetable_scheduler.models import Course, CourseAssignment, Professor


def _preferring(slot):
    return Course(
        id="C1",
        name="X",
        duration=1,
        expected_enrollment=10,
        professor_id="P1",
        preferred_time_windows={slot},
    )


class TestDefaultConstraints:
    """Tests for the standard constraint set."""

    def test_five_default_constraints(self):
        validator = ConstraintValidator.with_default_constraints()
        assert len(validator.constraints) == 5
        assert not any(isinstance(c, ProfessorLoadConstraint) for c in validator.constraints)

    def test_load_constraint_opt_in(self):
        validator = ConstraintValidator.with_default_constraints(enforce_max_load=True)
        assert isinstance(validator.constraints[-1], ProfessorLoadConstraint)


class TestValidate:
    """Tests for single-slot validation."""

    def test_valid_candidate(self, course, lecture_hall, monday_slots, professor, schedule):
        validator = ConstraintValidator.with_default_constraints()
        result = validator.validate(course, lecture_hall, monday_slots[0], professor, schedule)

        assert result.valid
        assert bool(result)
        assert result.messages == []
        assert str(result) == "All constraints satisfied"

    def test_runs_every_constraint(self, course, small_room, monday_slots, professor, schedule):
        validator = ConstraintValidator.with_default_constraints()
        result = validator.validate(course, small_room, monday_slots[0], professor, schedule)

        assert not result.valid
        assert len(result.results) == 5
        assert ROOM_CAPACITY in result.failed_constraint_names

    def test_soft_violation_reported_but_not_blocking(
        self, lecture_hall, monday_slots, professor, schedule
    ):
        course = _preferring(monday_slots[0])
        validator = ConstraintValidator.with_default_constraints()
        result = validator.validate(course, lecture_hall, monday_slots[2], professor, schedule)

        assert result.valid
        assert result.failed_constraint_names == {PREFERRED_TIME_WINDOW}
        assert len(result.messages) == 1

    def test_soft_violation_blocks_when_promoted(
        self, lecture_hall, monday_slots, professor, schedule
    ):
        course = _preferring(monday_slots[0])
        validator = ConstraintValidator.with_default_constraints(treat_soft_as_hard=True)
        result = validator.validate(course, lecture_hall, monday_slots[2], professor, schedule)

        assert not result.valid
        assert "Constraint violations" in str(result)

    def test_custom_constraint_set(self, course, small_room, monday_slots, professor, schedule):
        validator = ConstraintValidator([RoomCapacityConstraint()])
        result = validator.validate(course, small_room, monday_slots[0], professor, schedule)
        assert [r.constraint_name for r in result.results] == [ROOM_CAPACITY]


class TestValidateMultiSlot:
    """Tests for multi-slot validation."""

    def test_consecutive_pair_passes(self, lecture_hall, monday_slots, professor, schedule):
        course = Course(id="C2", name="Lab", duration=2, expected_enrollment=10, professor_id="P1")
        validator = ConstraintValidator.with_default_constraints()
        result = validator.validate_multi_slot(
            course, lecture_hall, monday_slots[:2], professor, schedule
        )

        assert result.valid
        assert result.results[0].constraint_name == CONSECUTIVE_SLOTS
        assert len(result.results) == 1 + 2 * 5

    def test_non_consecutive_pair_fails(self, lecture_hall, monday_slots, professor, schedule):
        course = Course(id="C2", name="Lab", duration=2, expected_enrollment=10, professor_id="P1")
        validator = ConstraintValidator.with_default_constraints()
        result = validator.validate_multi_slot(
            course, lecture_hall, [monday_slots[2], monday_slots[0]], professor, schedule
        )

        assert not result.valid
        assert CONSECUTIVE_SLOTS in result.failed_constraint_names

    def test_any_slot_conflict_fails(self, lecture_hall, small_room, monday_slots, schedule):
        other = Course(id="C0", name="Other", duration=1, expected_enrollment=5, professor_id="P1")
        schedule.add_assignment(CourseAssignment(other, small_room, [monday_slots[1]]))
        course = Course(id="C2", name="Lab", duration=2, expected_enrollment=10, professor_id="P1")
        validator = ConstraintValidator.with_default_constraints()

        result = validator.validate_multi_slot(
            course, lecture_hall, monday_slots[:2], Professor(id="P1", name="X"), schedule
        )

        assert not result.valid
        assert result.failed_constraint_names == {PROFESSOR_AVAILABILITY}

    def test_load_counts_courses_not_slots(self, lecture_hall, monday_slots, schedule):
        course = Course(id="C2", name="Lab", duration=2, expected_enrollment=10, professor_id="P1")
        professor = Professor(id="P1", name="X", max_load=1)
        validator = ConstraintValidator.with_default_constraints(enforce_max_load=True)

        result = validator.validate_multi_slot(
            course, lecture_hall, monday_slots[:2], professor, schedule
        )

        assert result.valid
        assert PROFESSOR_LOAD not in result.failed_constraint_names

    def test_repeated_validation_is_identical(
        self, course, small_room, monday_slots, professor, schedule
    ):
        validator = ConstraintValidator.with_default_constraints()
        first = validator.validate(course, small_room, monday_slots[0], professor, schedule)
        second = validator.validate(course, small_room, monday_slots[0], professor, schedule)

        assert first == second
        assert schedule.is_empty()
