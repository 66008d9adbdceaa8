"""Constants for timetable scheduling."""

import sys

# Search budgets
DEFAULT_TIMEOUT_MILLIS = 60_000
DEFAULT_MAX_ITERATIONS = 10_000

# Professors without an explicit load limit
DEFAULT_MAX_LOAD = sys.maxsize

# Constraint names, reported in every ValidationResult
PROFESSOR_AVAILABILITY = "Professor Availability"
ROOM_AVAILABILITY = "Room Availability"
ROOM_CAPACITY = "Room Capacity"
ROOM_FEATURES = "Room Features"
PREFERRED_TIME_WINDOW = "Preferred Time Window"
CONSECUTIVE_SLOTS = "Consecutive Slots"
PROFESSOR_LOAD = "Professor Load"

# Course difficulty score weights (diagnostic only)
DIFFICULTY_WEIGHTS = {
    "enrollment": 1,
    "duration": 10,
    "feature": 5,
    "preferences": 10,
}

# Time format used in input files and rendered slots
TIME_FORMAT = "%H:%M"

# Semicolon separates list values inside a single CSV cell
LIST_SEPARATOR = ";"
