"""Tests for search ordering heuristics."""

from timetable_scheduler.heuristics import (
    calculate_course_difficulty,
    generate_candidate_windows,
    order_courses_by_difficulty,
    order_rooms_by_fit,
    order_time_slots,
)
from timetable_scheduler.models import Course, Day, Room


def _course(course_id, enrollment=10, duration=1, features=(), preferred=()):
    return Course(
        id=course_id,
        name=course_id,
        duration=duration,
        expected_enrollment=enrollment,
        professor_id="P1",
        required_features=features,
        preferred_time_windows=preferred,
    )


class TestOrderCoursesByDifficulty:
    """Tests for order_courses_by_difficulty."""

    def test_larger_enrollment_first(self):
        courses = [_course("small", 10), _course("large", 90), _course("mid", 40)]
        assert [c.id for c in order_courses_by_difficulty(courses)] == ["large", "mid", "small"]

    def test_duration_breaks_enrollment_tie(self):
        courses = [_course("short", 30, 1), _course("long", 30, 3)]
        assert [c.id for c in order_courses_by_difficulty(courses)] == ["long", "short"]

    def test_feature_count_breaks_remaining_tie(self):
        courses = [_course("plain", 30), _course("equipped", 30, features={"a", "b"})]
        assert [c.id for c in order_courses_by_difficulty(courses)] == ["equipped", "plain"]

    def test_full_tie_keeps_input_order(self):
        courses = [_course("first"), _course("second"), _course("third")]
        assert [c.id for c in order_courses_by_difficulty(courses)] == [
            "first",
            "second",
            "third",
        ]

    def test_input_not_mutated(self):
        courses = [_course("small", 10), _course("large", 90)]
        order_courses_by_difficulty(courses)
        assert [c.id for c in courses] == ["small", "large"]


class TestOrderRoomsByFit:
    """Tests for order_rooms_by_fit."""

    def test_filters_unsuitable_rooms(self):
        rooms = [
            Room(id="tiny", name="Tiny", capacity=5, features={"projector"}),
            Room(id="bare", name="Bare", capacity=50),
            Room(id="ok", name="OK", capacity=50, features={"projector"}),
        ]
        course = _course("C1", 20, features={"projector"})
        assert [r.id for r in order_rooms_by_fit(rooms, course)] == ["ok"]

    def test_tightest_fit_first(self):
        rooms = [
            Room(id="huge", name="Huge", capacity=300),
            Room(id="snug", name="Snug", capacity=25),
            Room(id="roomy", name="Roomy", capacity=60),
        ]
        assert [r.id for r in order_rooms_by_fit(rooms, _course("C1", 20))] == [
            "snug",
            "roomy",
            "huge",
        ]

    def test_fewer_features_break_ties(self):
        rooms = [
            Room(id="rich", name="Rich", capacity=30, features={"projector", "computers"}),
            Room(id="basic", name="Basic", capacity=30, features={"projector"}),
        ]
        course = _course("C1", 20, features={"projector"})
        assert [r.id for r in order_rooms_by_fit(rooms, course)] == ["basic", "rich"]


class TestOrderTimeSlots:
    """Tests for order_time_slots."""

    def test_chronological_without_preferences(self, week_slots):
        shuffled = list(reversed(week_slots))
        assert order_time_slots(shuffled, _course("C1")) == sorted(week_slots)

    def test_preferred_slots_first(self, week_slots):
        preferred = {week_slots[4], week_slots[1]}
        ordered = order_time_slots(week_slots, _course("C1", preferred=preferred))
        assert ordered[:2] == [week_slots[1], week_slots[4]]
        assert ordered[2:] == [week_slots[0], week_slots[2], week_slots[3], week_slots[5]]


class TestGenerateCandidateWindows:
    """Tests for generate_candidate_windows."""

    def test_single_slot_windows_keep_order(self, week_slots):
        ordered = list(reversed(week_slots))
        assert generate_candidate_windows(ordered, 1) == [(slot,) for slot in ordered]

    def test_two_slot_windows(self, week_slots):
        m1, m2, m3, t1, t2, _ = week_slots
        assert generate_candidate_windows(week_slots, 2) == [(m1, m2), (m2, m3), (t1, t2)]

    def test_windows_skip_gaps_and_day_breaks(self, make_slot):
        slots = [
            make_slot(1, Day.MONDAY, 9, 10),
            make_slot(2, Day.MONDAY, 11, 12),
            make_slot(3, Day.TUESDAY, 9, 10),
        ]
        assert generate_candidate_windows(slots, 2) == []

    def test_window_longer_than_day(self, week_slots):
        assert generate_candidate_windows(week_slots, 4) == []

    def test_windows_follow_preferred_order(self, week_slots):
        m1, m2, m3, t1, t2, _ = week_slots
        ordered = order_time_slots(week_slots, _course("C1", duration=2, preferred={t1, t2}))
        assert generate_candidate_windows(ordered, 2) == [(t1, t2), (m1, m2), (m2, m3)]

    def test_windows_are_chronological_inside(self, monday_slots):
        windows = generate_candidate_windows(list(reversed(monday_slots)), 3)
        assert windows == [tuple(monday_slots)]


class TestCalculateCourseDifficulty:
    """Tests for calculate_course_difficulty."""

    def test_score_components(self, monday_slots):
        course = _course("C1", 40, 2, features={"a"}, preferred={monday_slots[0]})
        assert calculate_course_difficulty(course) == 40 + 20 + 5 + 10
