# cli/csv_io.py

"""
Line-oriented CSV import and export for a `Tracker`.

Each line holds one assignment: `CLASS_CODE,NAME,MARK_OR_None,WEIGHT`.

- The mark column is the mark's display form (e.g. "85.0%", "A", "15 / 20") or the literal `None`.
  Percentages are written with full float precision (e.g. "85.25%") so they read back unchanged.
- The weight is written as the shortest float string that reads back unchanged (e.g. "10.0", "33.33").
- Assignment ids are not part of the format; imports hand out fresh ids with
  `Tracker.next_assignment_id()`, and classes are created on first use.

Imports are all-or-nothing: rows are applied to a copy of the tracker and the copy is
only returned once every row has been accepted.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable

from core.response import ErrorCode, Response
from models.assignment import Assignment
from models.mark import Mark, Percent
from models.tracker import Tracker
from models.tracker_class import Class

logger = logging.getLogger(__name__)

NO_MARK = "None"
FIELD_COUNT = 4


# === export ===


def format_mark_field(mark: Mark | None) -> str:
    if mark is None:
        return NO_MARK

    if isinstance(mark, Percent):
        return f"{float(mark.value)!r}%"

    return str(mark)


def format_row(code: str, assignment: Assignment) -> list[str]:
    return [
        code,
        assignment.name,
        format_mark_field(assignment.mark),
        repr(float(assignment.weight)),
    ]


def to_csv(tracker: Tracker) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    for tracked_class in tracker.classes:
        for assignment in tracked_class.assignments:
            writer.writerow(format_row(tracked_class.code, assignment))

    return buffer.getvalue()


def write_csv(tracker: Tracker, file_path: str) -> Response:
    """
    Writes every assignment in the tracker to `file_path`, one per line.

    Returns:
        Response: success with "path" and "count" in data, or `ErrorCode.INTERNAL_ERROR` if the file cannot be written.
    """
    contents = to_csv(tracker)

    try:
        with open(file_path, "w", newline="") as f:
            f.write(contents)

    except OSError as e:
        return Response.fail(
            detail=f"Failed to write data to disk: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    return Response.succeed(
        detail="Assignments successfully exported.",
        data={"path": file_path, "count": len(tracker.assignments)},
    )


# === import ===


def import_rows(tracker: Tracker, rows: Iterable[list[str]]) -> Response:
    """
    Applies CSV rows to a copy of `tracker`.

    Args:
        tracker (Tracker): The tracker to import into. It is never mutated.
        rows (Iterable[list[str]]): Parsed CSV rows. Blank rows are skipped.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True if every row was accepted.
            - detail (str | None): On failure, the line number and the reason.
            - error (ErrorCode | str | None):
                - `ErrorCode.INVALID_INPUT` if a row has the wrong number of fields or an unparseable mark.
                - Any model error code the row triggered (e.g. `ErrorCode.NAME_TAKEN`).
            - status_code (int | None): 200 on success, otherwise per the error code.
            - data (dict): Payload with the following keys:
                - On success:
                    - "tracker" (Tracker): The updated copy.
                    - "count" (int): The number of assignments imported.
                - On failure:
                    - "line" (int): The 1-based line number of the offending row.
    """
    updated = Tracker.from_dict(tracker.to_dict())
    updated.path = tracker.path
    count = 0

    for line, row in enumerate(rows, 1):
        if not row or all(not field.strip() for field in row):
            continue

        response = _import_row(updated, row)

        if not response.success:
            logger.info("CSV import stopped at line %d: %s", line, response.detail)
            return Response.fail(
                detail=f"Line {line}: {response.detail}",
                error=response.error,
                status_code=response.status_code,
                data={**response.data, "line": line},
            )

        count += 1

    return Response.succeed(
        detail=f"{count} assignments successfully imported.",
        data={"tracker": updated, "count": count},
    )


def read_csv(file_path: str, tracker: Tracker | None = None) -> Response:
    """
    Imports a CSV file into a copy of `tracker` (or a new, empty tracker).

    Returns:
        Response: As for `import_rows()`, or `ErrorCode.INTERNAL_ERROR` if the file cannot be read.
    """
    tracker = tracker if tracker is not None else Tracker()

    try:
        with open(file_path, "r", newline="") as f:
            rows = list(csv.reader(f))

    except OSError as e:
        return Response.fail(
            detail=f"Failed to read data from disk: {e}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    return import_rows(tracker, rows)


def _import_row(tracker: Tracker, row: list[str]) -> Response:
    if len(row) != FIELD_COUNT:
        return Response.fail(
            detail=f"Expected {FIELD_COUNT} fields (CLASS_CODE,NAME,MARK_OR_None,WEIGHT), got {len(row)}.",
            error=ErrorCode.INVALID_INPUT,
            data={"row": row},
        )

    code, name, mark_text, weight_text = (field.strip() for field in row)

    if not code:
        return Response.fail(
            detail="Class code cannot be blank.",
            error=ErrorCode.INVALID_INPUT,
            data={"row": row},
        )

    mark = None
    if mark_text != NO_MARK:
        mark_response = Mark.parse(mark_text)
        if not mark_response.success:
            return mark_response
        mark = mark_response.data["mark"]

    assignment_response = Assignment.create(
        tracker.next_assignment_id(), name, weight_text, mark=mark
    )
    if not assignment_response.success:
        return assignment_response

    if tracker.get_class(code) is None:
        class_response = tracker.add_class(Class(code))
        if not class_response.success:
            return class_response

    return tracker.add_assignment(code, assignment_response.data["assignment"])
