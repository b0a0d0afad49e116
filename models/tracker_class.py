# models/tracker_class.py

"""
Represents a class (course, paper) within the Tracker.

Each `Class` is identified by its code and exclusively owns its `Assignment` records,
keyed by assignment id. The total value of a class is the sum of its assignments'
weights and never exceeds 100.

Key behaviors:
- `add_assignment()`: checks the total value first, then id uniqueness, then name uniqueness.
- `remove_assignment()`: hands the removed `Assignment` back to the caller.
- `update_assignment_weight()` / `rename_assignment()`: re-check the class invariants.
- Every mutator is atomic and returns a `Response`; on failure nothing changes.

Notes:
- `total_value` is derived with `math.fsum`, so removing an assignment restores the exact prior total.
- Assignment names are compared exactly, so "Exam" and "exam" may coexist.
- Once a class is added to a `Tracker`, add and remove its assignments through the
  tracker so the tracker's id index stays current.
"""

from __future__ import annotations

import logging
import math

from core.config import MAX_TOTAL_VALUE
from core.errors import ConflictError, NotFoundError, TrackerError, ValidationError
from core.response import ErrorCode, Response
from models.assignment import Assignment
from models.mark import Mark

logger = logging.getLogger(__name__)


class Class:

    def __init__(self, code: str, name: str | None = None):
        self._code = code
        self._name = name if name is not None else code
        self._assignments: dict[int, Assignment] = {}

    # === properties ===

    @property
    def code(self) -> str:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def assignments(self) -> list[Assignment]:
        return list(self._assignments.values())

    @property
    def total_value(self) -> float:
        return math.fsum(a.weight for a in self._assignments.values())

    @property
    def earned_value(self) -> float:
        """
        The sum of final percentages over assignments with a percentage-convertible mark.
        """
        return math.fsum(
            a.final_pct for a in self._assignments.values() if a.final_pct is not None
        )

    # === data accessors ===

    def get_assignment(self, id: int) -> Assignment | None:
        return self._assignments.get(id)

    def has_assignment(self, id: int) -> bool:
        return id in self._assignments

    def has_assignment_name(self, name: str) -> bool:
        return any(a.name == name for a in self._assignments.values())

    # === data manipulators ===

    def add_assignment(self, assignment: Assignment) -> Response:
        """
        Adds an `Assignment` to this class.

        Args:
            assignment (Assignment): The assignment to add. Ownership passes to the class.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the assignment was added.
                    - False if any class invariant would be violated.
                - detail (str | None):
                    - On failure, a human-readable description including the offending value.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.TOTAL_VALUE_EXCEEDED` if the weights would sum past 100.
                    - `ErrorCode.ID_TAKEN` if an assignment with the same id exists.
                    - `ErrorCode.NAME_TAKEN` if an assignment with the same name exists.
                    - `ErrorCode.INVALID_INPUT` if the argument is not an `Assignment`.
                - status_code (int | None):
                    - 200 on success
                    - 400 on a validation failure, 409 on a conflict
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Assignment): The added assignment.
                    - On failure:
                        - The offending value(s).

        Notes:
            - The checks run in a fixed order: total value, then id, then name.
            - On failure the class is unchanged.
        """
        try:
            self._add_assignment(assignment)

        except TrackerError as e:
            logger.info("%s -> rejected assignment: %s", self, e)
            return Response.from_error(e)

        return Response.succeed(
            detail="Assignment successfully added to the class.",
            data={"record": assignment},
        )

    def remove_assignment(self, id: int) -> Response:
        """
        Removes the assignment with the given id and returns it in `data["record"]`.

        Fails with `ErrorCode.NOT_FOUND` if no such assignment exists.
        """
        try:
            assignment = self._remove_assignment(id)

        except NotFoundError as e:
            return Response.from_error(e)

        return Response.succeed(
            detail="Assignment successfully removed from the class.",
            data={"record": assignment},
        )

    def set_mark(self, id: int, mark: Mark) -> Response:
        try:
            assignment = self._require_assignment(id)

        except NotFoundError as e:
            return Response.from_error(e)

        return assignment.set_mark(mark)

    def remove_mark(self, id: int) -> Response:
        try:
            assignment = self._require_assignment(id)

        except NotFoundError as e:
            return Response.from_error(e)

        assignment.remove_mark()
        return Response.succeed(detail="Mark successfully removed.")

    def update_assignment_weight(self, id: int, weight: float) -> Response:
        """
        Changes an assignment's weight, re-checking the class total.

        Returns:
            Response: success with "record" in data, or one of `ErrorCode.NOT_FOUND`,
            `ErrorCode.INVALID_WEIGHT`, `ErrorCode.TOTAL_VALUE_EXCEEDED`.

        Notes:
            - On failure the assignment keeps its previous weight.
        """
        try:
            assignment = self._require_assignment(id)
            weight = Assignment.validate_weight_input(weight)
            self.require_total_value_within_limit(weight, excluding=id)

        except TrackerError as e:
            return Response.from_error(e)

        assignment.set_weight(weight)
        return Response.succeed(
            detail="Assignment weight successfully updated.",
            data={"record": assignment},
        )

    def rename_assignment(self, id: int, name: str) -> Response:
        """
        Changes an assignment's name, re-checking name uniqueness within the class.

        Returns:
            Response: success with "record" in data, or one of `ErrorCode.NOT_FOUND`,
            `ErrorCode.INVALID_NAME`, `ErrorCode.NAME_TAKEN`.
        """
        try:
            assignment = self._require_assignment(id)
            name = Assignment.validate_name_input(name)
            if name != assignment.name:
                self.require_unique_assignment_name(name)

        except TrackerError as e:
            return Response.from_error(e)

        assignment.set_name(name)
        return Response.succeed(
            detail="Assignment successfully renamed.",
            data={"record": assignment},
        )

    # --- raising counterparts, shared with Tracker ---

    def _add_assignment(self, assignment: Assignment) -> None:
        if not isinstance(assignment, Assignment):
            raise ValidationError(
                f"Expected an Assignment, got {type(assignment).__name__}",
                ErrorCode.INVALID_INPUT,
                data={"value": assignment},
            )

        self.require_total_value_within_limit(assignment.weight)
        self.require_unique_assignment_id(assignment.id)
        self.require_unique_assignment_name(assignment.name)

        self._assignments[assignment.id] = assignment
        logger.debug("%s -> add assignment -> %r", self, assignment)

    def _remove_assignment(self, id: int) -> Assignment:
        assignment = self._require_assignment(id)
        del self._assignments[id]
        logger.debug("%s -> remove assignment -> %r", self, assignment)
        return assignment

    def _require_assignment(self, id: int) -> Assignment:
        try:
            return self._assignments[id]

        except KeyError:
            raise NotFoundError(
                f"{self} -> could not find an assignment with id: {id}",
                ErrorCode.NOT_FOUND,
                data={"id": id, "code": self._code},
            )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "code": self._code,
            "name": self._name,
            "assignments": [a.to_dict() for a in self._assignments.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Class:
        """
        Rebuilds a class and its assignments from `to_dict()` output.

        Raises:
            KeyError: If a required key is missing.
            TrackerError: If any assignment is invalid or violates a class invariant.
        """
        new_class = cls(code=data["code"], name=data.get("name"))

        for assignment_data in data.get("assignments", []):
            new_class._add_assignment(Assignment.from_dict(assignment_data))

        return new_class

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Class):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __len__(self) -> int:
        return len(self._assignments)

    def __repr__(self) -> str:
        return f"Class({self._code!r}, {self._name!r}, {len(self._assignments)} assignments)"

    def __str__(self) -> str:
        if self._name == self._code:
            return self._code

        return f"{self._name} ({self._code})"

    # === data validators ===

    def require_total_value_within_limit(
        self, weight: float, excluding: int | None = None
    ) -> None:
        """
        Validates that adding `weight` keeps the class total within 100.

        Args:
            weight (float): The weight being added.
            excluding (int | None): An assignment id whose current weight is left out (for updates).

        Raises:
            ValidationError: With `ErrorCode.TOTAL_VALUE_EXCEEDED` if the total would exceed 100.
        """
        weights = [a.weight for a in self._assignments.values() if a.id != excluding]
        total = math.fsum(weights + [weight])

        if total > MAX_TOTAL_VALUE:
            raise ValidationError(
                f"{self} -> total value ({total}) must be within 0.0..=100.0",
                ErrorCode.TOTAL_VALUE_EXCEEDED,
                data={"total_value": total, "code": self._code},
            )

    def require_unique_assignment_id(self, id: int) -> None:
        if id in self._assignments:
            raise ConflictError(
                f"{self} -> assignment id ({id}) already exists",
                ErrorCode.ID_TAKEN,
                data={"id": id, "code": self._code},
            )

    def require_unique_assignment_name(self, name: str) -> None:
        if self.has_assignment_name(name):
            raise ConflictError(
                f"{self} -> assignment name ({name}) already taken",
                ErrorCode.NAME_TAKEN,
                data={"name": name, "code": self._code},
            )
