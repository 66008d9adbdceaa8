"""Export functionality for scheduling results."""

import json
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .models import Schedule, ScheduleResult

SLOT_SEPARATOR = "; "

SCHEDULE_COLUMNS = [
    "Course ID",
    "Course Name",
    "Room ID",
    "Room Name",
    "Professor ID",
    "Time Slots",
]

UNSCHEDULED_COLUMNS = ["Course ID", "Reason", "Details"]

COLUMN_WIDTHS = {
    "Schedule": [12.0, 35.0, 12.0, 25.0, 14.0, 60.0],
    "Unscheduled": [12.0, 25.0, 80.0],
}

FONT_TITLE = Font(size=14, bold=True)
FONT_HEADER = Font(size=11, bold=True, color="FFFFFF")
FONT_CELL = Font(size=11)

FILL_HEADER = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")

ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)
ALIGN_LEFT = Alignment(horizontal="left", vertical="center", wrap_text=True)

THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def schedule_rows(schedule: Schedule) -> list[list[str]]:
    """Flatten a schedule into table rows ordered by first time slot."""
    return [
        [
            assignment.course.id,
            assignment.course.name,
            assignment.room.id,
            assignment.room.name,
            assignment.course.professor_id,
            SLOT_SEPARATOR.join(str(slot) for slot in assignment.time_slots),
        ]
        for assignment in schedule.sorted_assignments()
    ]


def export_schedule_json(result: ScheduleResult, output_path: Path | str) -> None:
    """Export schedule result to JSON file.

    Args:
        result: ScheduleResult to export
        output_path: Path to output JSON file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)


def export_schedule_csv(schedule: Schedule, output_path: Path | str) -> None:
    """Export schedule assignments to a CSV file.

    One row per assignment, sorted by first time slot. The time slots of
    multi-slot assignments are joined with '; '.

    Args:
        schedule: Schedule to export
        output_path: Path to output CSV file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(schedule_rows(schedule), columns=SCHEDULE_COLUMNS)
    df.to_csv(output, index=False, encoding="utf-8")


def export_schedule_excel(result: ScheduleResult, output_path: Path | str) -> None:
    """Export schedule result to an Excel workbook.

    Creates workbook with sheets:
    - Schedule: Title, run summary and one row per assignment
    - Unscheduled: One row per unscheduled course with reason and details

    Args:
        result: ScheduleResult to export
        output_path: Path to output .xlsx file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = "Schedule"

    status = "complete" if result.success else "partial"
    ws.cell(row=1, column=1, value="COURSE TIMETABLE").font = FONT_TITLE
    ws.cell(
        row=2,
        column=1,
        value=(
            f"Generated {datetime.now():%Y-%m-%d %H:%M} | {status} | "
            f"{result.scheduled_count} scheduled, {result.total_unscheduled} unscheduled | "
            f"{result.execution_time_millis} ms"
        ),
    ).font = FONT_CELL
    _write_table(ws, 4, SCHEDULE_COLUMNS, schedule_rows(result.schedule))

    ws_unscheduled = wb.create_sheet("Unscheduled")
    _write_table(
        ws_unscheduled,
        1,
        UNSCHEDULED_COLUMNS,
        [[u.course_id, u.reason.value, u.details] for u in result.unscheduled_courses],
    )

    for sheet in (ws, ws_unscheduled):
        for col_idx, width in enumerate(COLUMN_WIDTHS[sheet.title], start=1):
            sheet.column_dimensions[get_column_letter(col_idx)].width = width

    wb.save(output)


def _write_table(ws, start_row: int, headers: list[str], rows: list[list]) -> None:
    """Write a bordered header row followed by data rows."""
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=start_row, column=col_idx, value=header)
        cell.font = FONT_HEADER
        cell.fill = FILL_HEADER
        cell.alignment = ALIGN_CENTER
        cell.border = THIN_BORDER

    for row_offset, row in enumerate(rows, start=1):
        for col_idx, value in enumerate(row, start=1):
            cell = ws.cell(row=start_row + row_offset, column=col_idx, value=value)
            cell.font = FONT_CELL
            cell.alignment = ALIGN_LEFT
            cell.border = THIN_BORDER

    ws.freeze_panes = ws.cell(row=start_row + 1, column=1)


def _export_result_csv(result: ScheduleResult, output_path: Path | str) -> None:
    export_schedule_csv(result.schedule, output_path)


def get_exporter(format_type: str) -> Callable[[ScheduleResult, Path | str], None]:
    """Get export function for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Function taking a ScheduleResult and an output path

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": export_schedule_json,
        "csv": _export_result_csv,
        "excel": export_schedule_excel,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]
