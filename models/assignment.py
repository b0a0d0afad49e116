# models/assignment.py

"""
The Assignment model represents a named, identified unit of work belonging to a class.

Each assignment carries a weight (its percentage contribution to the class's final grade),
and optionally a `Mark`, a due date, and a completion status.

Key behaviors:
- `__init__` validates eagerly and raises `ValidationError`; `create()` is the
  result-returning equivalent.
- `set_mark()` re-validates the mark and flips the status to `MARKED`.
- `remove_mark()` clears the mark and flips a `MARKED` status back to `INCOMPLETE`.
- Status is `MARKED` if and only if a mark is present, whenever a status is set.

Notes:
- Weight changes on an assignment owned by a `Class` should go through
  `Class.update_assignment_weight()`, which re-checks the class total.
"""

from __future__ import annotations

import datetime
import logging
import math
from enum import Enum
from typing import Any

from core.config import MAX_NAME_LEN, MAX_TOTAL_VALUE
from core.errors import ValidationError
from core.response import ErrorCode, Response
from models.mark import Mark

logger = logging.getLogger(__name__)


class AssignmentStatus(str, Enum):
    INCOMPLETE = "Incomplete"
    COMPLETE = "Complete"
    MARKED = "Marked"


class Assignment:

    def __init__(
        self,
        id: int,
        name: str,
        weight: float,
        mark: Mark | None = None,
        due_date: datetime.datetime | None = None,
        status: AssignmentStatus | None = None,
    ):
        self._id = Assignment.validate_id_input(id)
        self._name = Assignment.validate_name_input(name)
        self._weight = Assignment.validate_weight_input(weight)
        self._mark: Mark | None = None
        self._due_date = due_date
        self._status: AssignmentStatus | None = None

        if mark is not None:
            Assignment.validate_mark_input(mark)
            self._mark = mark
            self._status = AssignmentStatus.MARKED

        elif status is not None:
            self._status = self._validate_status_change(status)

    # === properties ===

    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def mark(self) -> Mark | None:
        return self._mark

    @property
    def due_date(self) -> datetime.datetime | None:
        return self._due_date

    @property
    def due_date_iso(self) -> str | None:
        return self._due_date.isoformat() if self._due_date else None

    @property
    def status(self) -> AssignmentStatus | None:
        return self._status

    @property
    def is_marked(self) -> bool:
        return self._mark is not None

    @property
    def final_pct(self) -> float | None:
        """
        The contribution of this assignment to the final grade, or None if it has no percentage-convertible mark.
        """
        pct = self._mark.as_percent() if self._mark else None
        if pct is None:
            return None

        return self._weight * pct / 100.0

    # === public classmethods ===

    @classmethod
    def create(
        cls,
        id: int,
        name: str,
        weight: float,
        mark: Mark | None = None,
        due_date: datetime.datetime | None = None,
        status: AssignmentStatus | None = None,
    ) -> Response:
        """
        Creates and validates a new `Assignment`.

        Args:
            id (int): The caller-assigned id, unique within a tracker.
            name (str): Non-empty, at most `MAX_NAME_LEN` bytes in UTF-8.
            weight (float): Contribution to the class total, 0 to 100 inclusive.
            mark (Mark | None): Optional mark, re-validated with `check_valid()`.
            due_date (datetime.datetime | None): Optional due date.
            status (AssignmentStatus | None): Optional status. Ignored in favour of `MARKED` when a mark is given.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the `Assignment` was created.
                    - False if any field fails validation.
                - detail (str | None):
                    - On failure, a human-readable description including the offending value.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the id is not a non-negative integer.
                    - `ErrorCode.INVALID_NAME` if the name is empty, too long, or not a string.
                    - `ErrorCode.INVALID_WEIGHT` if the weight is out of range or not a number.
                    - A `Mark` error code if the mark is invalid.
                    - `ErrorCode.STATUS_CONFLICT` if the status is `MARKED` without a mark.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict): Payload with the following keys:
                    - On success:
                        - "assignment" (Assignment): The new `Assignment`.
                    - On failure:
                        - The offending value(s).
        """
        try:
            assignment = cls(id, name, weight, mark, due_date, status)

        except ValidationError as e:
            logger.info("Rejected assignment '%s': %s", name, e)
            return Response.from_error(e)

        else:
            return Response.succeed(data={"assignment": assignment})

    # === data manipulators ===

    def set_mark(self, mark: Mark) -> Response:
        """
        Sets the mark after re-validating it with `Mark.check_valid()`.

        Returns:
            Response: success with "mark" in data, or the failure from the mark's validation
            (`ErrorCode.INVALID_INPUT` if `mark` is not a `Mark` at all).

        Notes:
            - On success the status becomes `AssignmentStatus.MARKED`.
            - On failure the assignment is unchanged.
        """
        try:
            Assignment.validate_mark_input(mark)

        except ValidationError as e:
            logger.info("%s -> rejected mark: %s", self, e)
            return Response.from_error(e)

        self._mark = mark
        self._status = AssignmentStatus.MARKED
        logger.debug("%s -> set mark -> %r", self, mark)

        return Response.succeed(
            detail="Mark successfully set.",
            data={"mark": mark},
        )

    def remove_mark(self) -> None:
        self._mark = None
        if self._status is AssignmentStatus.MARKED:
            self._status = AssignmentStatus.INCOMPLETE
        logger.debug("%s -> set mark -> None", self)

    def set_weight(self, weight: float) -> Response:
        """
        Sets the weight after validating the 0 to 100 range.

        Returns:
            Response: success with "weight" in data, or `ErrorCode.INVALID_WEIGHT`.
        """
        try:
            self._weight = Assignment.validate_weight_input(weight)

        except ValidationError as e:
            return Response.from_error(e)

        logger.debug("%s -> set weight -> %s", self, self._weight)
        return Response.succeed(data={"weight": self._weight})

    def set_name(self, name: str) -> Response:
        try:
            self._name = Assignment.validate_name_input(name)

        except ValidationError as e:
            return Response.from_error(e)

        logger.debug("%s -> set name", self)
        return Response.succeed(data={"name": self._name})

    def set_due_date(self, due_date: datetime.datetime) -> None:
        self._due_date = due_date
        logger.debug("%s -> set due date -> %s", self, self.due_date_iso)

    def remove_due_date(self) -> None:
        self._due_date = None
        logger.debug("%s -> set due date -> None", self)

    def set_status(self, status: AssignmentStatus) -> Response:
        """
        Sets the completion status, keeping it consistent with the mark.

        Returns:
            Response: success with "status" in data, or `ErrorCode.STATUS_CONFLICT` if the
            status would disagree with the mark (e.g. `MARKED` without a mark, or `COMPLETE`
            while marked).
        """
        try:
            self._status = self._validate_status_change(status)

        except ValidationError as e:
            return Response.from_error(e)

        logger.debug("%s -> set status -> %s", self, status)
        return Response.succeed(data={"status": self._status})

    def remove_status(self) -> Response:
        """
        Stops tracking status. Fails with `ErrorCode.STATUS_CONFLICT` while the assignment is marked.
        """
        if self._mark is not None:
            return Response.fail(
                detail=f"{self} -> status cannot be cleared while a mark is set",
                error=ErrorCode.STATUS_CONFLICT,
            )

        self._status = None
        logger.debug("%s -> set status -> None", self)
        return Response.succeed()

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "weight": self._weight,
            "mark": self._mark.to_dict() if self._mark else None,
            "due_date": self.due_date_iso,
            "status": self._status.value if self._status else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        """
        Rebuilds an assignment from `to_dict()` output.

        Raises:
            KeyError: If a required key is missing.
            ValidationError: If any field fails validation.
        """
        due_date_str = data.get("due_date")
        due_date = (
            datetime.datetime.fromisoformat(due_date_str) if due_date_str else None
        )
        mark_data = data.get("mark")
        status = data.get("status")

        return cls(
            id=data["id"],
            name=data["name"],
            weight=data["weight"],
            mark=Mark.from_dict(mark_data) if mark_data else None,
            due_date=due_date,
            status=AssignmentStatus(status) if status else None,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        return f"Assignment({self._id}, {self._name!r}, {self._weight}, {self._mark!r}, {self.due_date_iso}, {self._status})"

    def __str__(self) -> str:
        return f"{self._name} ({self._id})"

    # === data validators ===

    def _validate_status_change(self, status: Any) -> AssignmentStatus:
        try:
            status = AssignmentStatus(status)

        except ValueError:
            raise ValidationError(
                f"{self._name} -> unknown status ({status!r})",
                ErrorCode.INVALID_FIELD_VALUE,
                data={"status": status},
            )

        if (status is AssignmentStatus.MARKED) != (self._mark is not None):
            raise ValidationError(
                f"{self._name} -> status ({status.value}) must be Marked if and only if a mark is set",
                ErrorCode.STATUS_CONFLICT,
                data={"status": status.value},
            )

        return status

    @staticmethod
    def validate_id_input(id: Any) -> int:
        """
        Ensures the id is a non-negative integer. Bools are rejected.

        Raises:
            ValidationError: With `ErrorCode.INVALID_FIELD_VALUE` if it is not.
        """
        if isinstance(id, bool) or not isinstance(id, int) or id < 0:
            raise ValidationError(
                f"Assignment id ({id!r}) must be a non-negative integer",
                ErrorCode.INVALID_FIELD_VALUE,
                data={"id": id},
            )

        return id

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates input for an `Assignment` name.

        Ensures the name is a string that is non-empty once stripped and at most
        `MAX_NAME_LEN` bytes when encoded as UTF-8.

        Returns:
            The name, unchanged.

        Raises:
            ValidationError: With `ErrorCode.INVALID_NAME` if any condition fails.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(
                f"Assignment name ({name!r}) must be a non-empty string",
                ErrorCode.INVALID_NAME,
                data={"name": name},
            )

        length = len(name.encode("utf-8"))
        if length > MAX_NAME_LEN:
            raise ValidationError(
                f"Assignment name ({name!r}) is {length} bytes, at most {MAX_NAME_LEN} allowed",
                ErrorCode.INVALID_NAME,
                data={"name": name},
            )

        return name

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Validates and normalizes input for an `Assignment` weight.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is between 0 and 100, inclusive.

        Returns:
            The normalized weight (float).

        Raises:
            ValidationError: With `ErrorCode.INVALID_WEIGHT` if any condition fails.
        """
        try:
            value = float(weight)

        except (TypeError, ValueError):
            raise ValidationError(
                f"Assignment weight ({weight!r}) must be a number",
                ErrorCode.INVALID_WEIGHT,
                data={"value": weight},
            )

        if not math.isfinite(value) or not 0.0 <= value <= MAX_TOTAL_VALUE:
            raise ValidationError(
                f"Assignment weight ({value}) must be within range 0.0..=100.0",
                ErrorCode.INVALID_WEIGHT,
                data={"value": value},
            )

        return value

    @staticmethod
    def validate_mark_input(mark: Any) -> Mark:
        """
        Ensures the input is a `Mark` whose variant range holds.

        Raises:
            ValidationError: With `ErrorCode.INVALID_INPUT` for non-marks, or the mark's own error code.
        """
        if not isinstance(mark, Mark):
            raise ValidationError(
                f"Expected a Mark, got {type(mark).__name__}",
                ErrorCode.INVALID_INPUT,
                data={"value": mark},
            )

        mark.validate()
        return mark
