"""Variable and value ordering heuristics for the backtracking search.

All functions are pure: they never mutate their inputs and return new
lists. Ties keep the input order.
"""

from collections.abc import Sequence

from .constants import DIFFICULTY_WEIGHTS
from .constraints.soft import in_preferred_window
from .models import Course, Room, TimeSlot


def order_courses_by_difficulty(courses: Sequence[Course]) -> list[Course]:
    """Sort courses so the hardest to place come first.

    Priority order (applied in sequence):
    1. Expected enrollment (descending) - fewer rooms fit large courses
    2. Duration (descending) - long runs of free slots are scarce
    3. Required feature count (descending) - specialised rooms are scarce

    Args:
        courses: Courses to order

    Returns:
        Sorted list with highest priority first
    """
    return sorted(
        courses,
        key=lambda c: (
            -c.expected_enrollment,
            -c.duration,
            -len(c.required_features),
        ),
    )


def order_rooms_by_fit(rooms: Sequence[Room], course: Course) -> list[Room]:
    """Return rooms that fit the course, tightest fit first.

    Rooms without enough capacity or missing a required feature are dropped.
    The rest are ordered by spare seats, then by feature count, so generously
    equipped rooms are kept for the courses that need them.
    """
    suitable = [
        room
        for room in rooms
        if room.can_accommodate(course.expected_enrollment)
        and room.has_all_features(course.required_features)
    ]
    return sorted(
        suitable,
        key=lambda r: (r.capacity - course.expected_enrollment, len(r.features)),
    )


def order_time_slots(time_slots: Sequence[TimeSlot], course: Course) -> list[TimeSlot]:
    """Order slots with the course's preferred windows first, then by time."""
    return sorted(
        time_slots,
        key=lambda slot: (0 if in_preferred_window(course, slot) else 1, slot.sort_key),
    )


def generate_candidate_windows(
    ordered_slots: Sequence[TimeSlot],
    duration: int,
) -> list[tuple[TimeSlot, ...]]:
    """Build every run of `duration` back-to-back slots.

    Runs are found on the chronologically sorted slots and then returned in
    the order the first slot of each run has in `ordered_slots`, so the
    slot heuristic also orders the windows.

    Args:
        ordered_slots: Slots in heuristic order
        duration: Number of consecutive slots per window

    Returns:
        List of windows, each a tuple of `duration` slots
    """
    if duration == 1:
        return [(slot,) for slot in ordered_slots]

    chronological = sorted(ordered_slots)
    windows = []
    for i in range(len(chronological) - duration + 1):
        candidate = tuple(chronological[i : i + duration])
        if all(a.is_consecutive_with(b) for a, b in zip(candidate, candidate[1:])):
            windows.append(candidate)

    rank = {}
    for position, slot in enumerate(ordered_slots):
        rank.setdefault(slot, position)
    return sorted(windows, key=lambda window: rank[window[0]])


def calculate_course_difficulty(course: Course) -> int:
    """Calculate a difficulty score for a course.

    Higher score = harder to place. Used for diagnostics only; ordering
    uses `order_courses_by_difficulty`.

    Formula:
    - Expected enrollment (x1)
    - Duration in slots (x10)
    - Required features (x5 each)
    - Declared preferred windows (+10)
    """
    score = course.expected_enrollment * DIFFICULTY_WEIGHTS["enrollment"]
    score += course.duration * DIFFICULTY_WEIGHTS["duration"]
    score += len(course.required_features) * DIFFICULTY_WEIGHTS["feature"]
    if course.has_preferred_time_windows:
        score += DIFFICULTY_WEIGHTS["preferences"]
    return score
