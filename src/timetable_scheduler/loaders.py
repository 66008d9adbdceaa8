"""CSV loaders for scheduling input data.

Four files describe a scheduling problem:
- timeslots.csv: slotId,dayOfWeek,startTime,endTime
- professors.csv: professorId,name,maxLoad,unavailableSlots
- rooms.csv: roomId,name,capacity,features,unavailableSlots
- courses.csv: courseId,name,duration,expectedEnrollment,professorId,requiredFeatures,preferredSlots

List cells (features, slot ids) are semicolon-separated. Time slot ids
referenced by the other files must exist in timeslots.csv.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, time
from pathlib import Path
from typing import Any, Generic, TypeVar

import pandas as pd

from .constants import LIST_SEPARATOR, TIME_FORMAT
from .exceptions import (
    DataLoadError,
    InvalidEntityError,
    InvalidRowError,
    MissingColumnsError,
    UnknownTimeSlotError,
)
from .models import Course, Day, Professor, Room, TimeSlot

T = TypeVar("T")


def parse_list(value: str) -> list[str]:
    """Split a semicolon-separated cell, dropping blanks."""
    return [item.strip() for item in value.split(LIST_SEPARATOR) if item.strip()]


def parse_time(value: str) -> time:
    """Parse an HH:MM string.

    Raises:
        ValueError: If the value is not a valid time
    """
    return datetime.strptime(value.strip(), TIME_FORMAT).time()


class CsvLoader(ABC, Generic[T]):
    """Base class for CSV loaders.

    Subclasses declare their required and optional columns and convert one
    row at a time. Conversion errors are reported with the file name and
    the 1-based data row. Ids in `id_column` must be unique within a file.
    """

    file_name: str = ""
    id_column: str = ""
    required_columns: tuple[str, ...] = ()
    optional_columns: tuple[str, ...] = ()

    def load(self, file_path: str | Path) -> list[T]:
        """Load all rows of a CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            List of converted entities, in file order

        Raises:
            DataLoadError: If the file cannot be read or a row is invalid
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise DataLoadError(f"File not found: {file_path}")

        try:
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            raise DataLoadError(f"File is empty: {file_path}") from None

        df.columns = [str(column).strip() for column in df.columns]
        missing = [c for c in self.required_columns if c not in df.columns]
        if missing:
            raise MissingColumnsError(self.file_name or file_path.name, missing)

        for column in self.optional_columns:
            if column not in df.columns:
                df[column] = ""

        df = df.fillna("")
        for column in df.columns:
            df[column] = df[column].astype(str).str.strip()

        entities = []
        seen_ids: set[str] = set()
        for row_number, row in enumerate(df.to_dict("records"), start=1):
            if self.id_column:
                entity_id = row[self.id_column]
                if entity_id in seen_ids:
                    raise InvalidRowError(
                        f"Duplicate {self.id_column}: '{entity_id}'", self.file_name, row_number
                    )
                seen_ids.add(entity_id)
            try:
                entities.append(self.parse_row(row, row_number))
            except InvalidEntityError as e:
                raise InvalidRowError(str(e), self.file_name, row_number) from e
        return entities

    @abstractmethod
    def parse_row(self, row: dict[str, Any], row_number: int) -> T:
        """Convert one CSV row into an entity."""
        pass

    def parse_int(self, row: dict[str, Any], column: str, row_number: int) -> int:
        value = row[column]
        try:
            return int(value)
        except ValueError:
            raise InvalidRowError(
                f"Invalid integer for {column}: '{value}'", self.file_name, row_number
            ) from None


class TimeSlotLoader(CsvLoader[TimeSlot]):
    """Loads time slots and remembers them by slot id."""

    file_name = "timeslots.csv"
    id_column = "slotId"
    required_columns = ("slotId", "dayOfWeek", "startTime", "endTime")

    def __init__(self) -> None:
        self.slot_id_map: dict[str, TimeSlot] = {}

    def parse_row(self, row: dict[str, Any], row_number: int) -> TimeSlot:
        slot_id = row["slotId"]
        index = self.parse_int(row, "slotId", row_number)

        try:
            day = Day.from_name(row["dayOfWeek"])
        except ValueError as e:
            raise InvalidRowError(str(e), self.file_name, row_number) from None

        times = {}
        for column in ("startTime", "endTime"):
            try:
                times[column] = parse_time(row[column])
            except ValueError:
                raise InvalidRowError(
                    f"Invalid time format for {column}: '{row[column]}' (expected HH:MM)",
                    self.file_name,
                    row_number,
                ) from None

        slot = TimeSlot(index=index, day=day, start=times["startTime"], end=times["endTime"])
        self.slot_id_map[slot_id] = slot
        return slot


class _SlotReferenceLoader(CsvLoader[T]):
    """Loader for files that reference time slots by id."""

    def __init__(self, slot_id_map: dict[str, TimeSlot]):
        self.slot_id_map = slot_id_map

    def resolve_slots(self, value: str, row_number: int) -> set[TimeSlot]:
        slots = set()
        for slot_id in parse_list(value):
            slot = self.slot_id_map.get(slot_id)
            if slot is None:
                raise UnknownTimeSlotError(slot_id, self.file_name, row_number)
            slots.add(slot)
        return slots


class ProfessorLoader(_SlotReferenceLoader[Professor]):
    """Loads professors. A blank maxLoad means no load limit."""

    file_name = "professors.csv"
    id_column = "professorId"
    required_columns = ("professorId", "name")
    optional_columns = ("maxLoad", "unavailableSlots")

    def parse_row(self, row: dict[str, Any], row_number: int) -> Professor:
        options = {}
        if row["maxLoad"]:
            options["max_load"] = self.parse_int(row, "maxLoad", row_number)

        return Professor(
            id=row["professorId"],
            name=row["name"],
            unavailable=self.resolve_slots(row["unavailableSlots"], row_number),
            **options,
        )


class RoomLoader(_SlotReferenceLoader[Room]):
    """Loads rooms."""

    file_name = "rooms.csv"
    id_column = "roomId"
    required_columns = ("roomId", "name", "capacity")
    optional_columns = ("features", "unavailableSlots")

    def parse_row(self, row: dict[str, Any], row_number: int) -> Room:
        return Room(
            id=row["roomId"],
            name=row["name"],
            capacity=self.parse_int(row, "capacity", row_number),
            features=parse_list(row["features"]),
            unavailable=self.resolve_slots(row["unavailableSlots"], row_number),
        )


class CourseLoader(_SlotReferenceLoader[Course]):
    """Loads courses."""

    file_name = "courses.csv"
    id_column = "courseId"
    required_columns = ("courseId", "name", "duration", "expectedEnrollment", "professorId")
    optional_columns = ("requiredFeatures", "preferredSlots")

    def parse_row(self, row: dict[str, Any], row_number: int) -> Course:
        return Course(
            id=row["courseId"],
            name=row["name"],
            duration=self.parse_int(row, "duration", row_number),
            expected_enrollment=self.parse_int(row, "expectedEnrollment", row_number),
            professor_id=row["professorId"],
            required_features=parse_list(row["requiredFeatures"]),
            preferred_time_windows=self.resolve_slots(row["preferredSlots"], row_number),
        )


@dataclass
class SchedulingData:
    """All entities needed for one scheduling run."""

    courses: list[Course] = field(default_factory=list)
    professors: list[Professor] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    time_slots: list[TimeSlot] = field(default_factory=list)


class DataLoader:
    """Unified loader for the four scheduling input files."""

    def __init__(
        self,
        data_dir: Path | None = None,
        courses_csv: Path | None = None,
        professors_csv: Path | None = None,
        rooms_csv: Path | None = None,
        timeslots_csv: Path | None = None,
    ):
        """
        Initialize the data loader.

        Args:
            data_dir: Directory containing courses.csv, professors.csv,
                      rooms.csv and timeslots.csv. Defaults to 'sample-data/'.
            courses_csv: Overrides courses.csv from data_dir.
            professors_csv: Overrides professors.csv from data_dir.
            rooms_csv: Overrides rooms.csv from data_dir.
            timeslots_csv: Overrides timeslots.csv from data_dir.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else Path("sample-data")
        self.courses_csv = courses_csv or self.data_dir / CourseLoader.file_name
        self.professors_csv = professors_csv or self.data_dir / ProfessorLoader.file_name
        self.rooms_csv = rooms_csv or self.data_dir / RoomLoader.file_name
        self.timeslots_csv = timeslots_csv or self.data_dir / TimeSlotLoader.file_name

    def load(self) -> SchedulingData:
        """Load all files. Time slots are loaded first so ids can be resolved."""
        slot_loader = TimeSlotLoader()
        time_slots = slot_loader.load(self.timeslots_csv)
        slot_map = slot_loader.slot_id_map

        return SchedulingData(
            courses=CourseLoader(slot_map).load(self.courses_csv),
            professors=ProfessorLoader(slot_map).load(self.professors_csv),
            rooms=RoomLoader(slot_map).load(self.rooms_csv),
            time_slots=time_slots,
        )
