"""Test fixtures for timetable scheduler tests."""

from datetime import time

import pytest

from timetable_scheduler.models import Course, Day, Professor, Room, Schedule, TimeSlot


def _slot(index: int, day: Day, start_hour: int, end_hour: int) -> TimeSlot:
    return TimeSlot(index=index, day=day, start=time(start_hour), end=time(end_hour))


@pytest.fixture
def make_slot():
    """Factory for whole-hour time slots."""
    return _slot


@pytest.fixture
def monday_slots():
    """Three back-to-back Monday slots: 09-10, 10-11, 11-12."""
    return [
        _slot(1, Day.MONDAY, 9, 10),
        _slot(2, Day.MONDAY, 10, 11),
        _slot(3, Day.MONDAY, 11, 12),
    ]


@pytest.fixture
def week_slots(monday_slots):
    """Monday slots plus two Tuesday slots and a lone Wednesday slot."""
    return monday_slots + [
        _slot(4, Day.TUESDAY, 9, 10),
        _slot(5, Day.TUESDAY, 10, 11),
        _slot(6, Day.WEDNESDAY, 14, 15),
    ]


@pytest.fixture
def professor():
    """Professor with no unavailability."""
    return Professor(id="P1", name="Dr. Ada Lovelace")


@pytest.fixture
def lecture_hall():
    """Large room with a projector."""
    return Room(id="R1", name="Lecture Hall", capacity=100, features={"projector"})


@pytest.fixture
def small_room():
    """Small room without features."""
    return Room(id="R2", name="Seminar Room", capacity=20)


@pytest.fixture
def course():
    """Single-slot course that needs a projector."""
    return Course(
        id="C1",
        name="Introduction to Programming",
        duration=1,
        expected_enrollment=50,
        professor_id="P1",
        required_features={"projector"},
    )


@pytest.fixture
def schedule():
    """Empty schedule."""
    return Schedule()


@pytest.fixture
def data_dir(tmp_path):
    """Directory with a small, fully schedulable set of input CSV files."""
    (tmp_path / "timeslots.csv").write_text(
        "slotId,dayOfWeek,startTime,endTime\n"
        "1,MONDAY,09:00,10:00\n"
        "2,MONDAY,10:00,11:00\n"
        "3,Tuesday,09:00,10:00\n",
        encoding="utf-8",
    )
    (tmp_path / "professors.csv").write_text(
        "professorId,name,maxLoad,unavailableSlots\n"
        "P1,Dr. Ada Lovelace,2,3\n"
        "P2,Dr. Alan Turing,,\n",
        encoding="utf-8",
    )
    (tmp_path / "rooms.csv").write_text(
        "roomId,name,capacity,features,unavailableSlots\n"
        "R1,Lecture Hall,100,projector;microphone,\n"
        "R2,Lab,30,computers,1\n",
        encoding="utf-8",
    )
    (tmp_path / "courses.csv").write_text(
        "courseId,name,duration,expectedEnrollment,professorId,requiredFeatures,preferredSlots\n"
        "C1,Programming,2,80,P1,projector,1;2\n"
        "C2,Lab Session,1,25,P2,computers,\n",
        encoding="utf-8",
    )
    return tmp_path
