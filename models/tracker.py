# models/tracker.py

"""
The Tracker model is the aggregate root of the program and the "source of truth" for all classes and assignments.

Classes are stored in a dictionary keyed by class code; each `Class` owns its assignments. A denormalized
index maps every assignment id to the code of its owning class, so "which class owns this id" is O(1).

Invariants enforced across the whole tracker:
- Class codes are unique.
- Assignment ids are unique across all classes, not just within one.
- Assignment names are unique within a single class.

Every mutator returns a `Response` and is atomic: a rejected operation leaves the classes, their
assignments, and the index unchanged. Trackers are saved to and loaded from a single JSON file.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from core.config import DEFAULT_TRACKER_NAME
from core.errors import ConflictError, NotFoundError, TrackerError, ValidationError
from core.response import ErrorCode, Response
from models.assignment import Assignment
from models.mark import Mark
from models.tracker_class import Class

logger = logging.getLogger(__name__)


class Tracker:

    def __init__(self, name: str = DEFAULT_TRACKER_NAME, file_path: str | None = None):
        self._name = name
        self._classes: dict[str, Class] = {}
        self._index: dict[int, str] = {}
        # session-scoped, not serialized
        self._file_path = file_path
        self._unsaved_changes: bool = False

    # === properties ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def classes(self) -> list[Class]:
        return list(self._classes.values())

    @property
    def assignments(self) -> list[Assignment]:
        return [a for c in self._classes.values() for a in c.assignments]

    @property
    def index(self) -> dict[int, str]:
        return dict(self._index)

    @property
    def path(self) -> str | None:
        return self._file_path

    @path.setter
    def path(self, file_path: str | None) -> None:
        self._file_path = file_path

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === data accessors ===

    def get_class(self, code: str) -> Class | None:
        return self._classes.get(code)

    def get_assignment(self, id: int) -> Assignment | None:
        code = self._index.get(id)
        if code is None:
            return None

        return self._classes[code].get_assignment(id)

    def class_of(self, id: int) -> Class | None:
        """
        Returns the `Class` owning the assignment with the given id, or None.
        """
        code = self._index.get(id)
        return self._classes[code] if code is not None else None

    def assignments_from_class(self, code: str) -> list[Assignment]:
        tracked_class = self._classes.get(code)
        return tracked_class.assignments if tracked_class else []

    def next_assignment_id(self) -> int:
        return max(self._index, default=-1) + 1

    # === data manipulators ===

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    # --- class manipulation ---

    def add_class(self, new_class: Class) -> Response:
        """
        Adds a `Class` to the tracker.

        Args:
            new_class (Class): The class to add, along with any assignments it already owns.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the class was added.
                    - False if the code is taken, or an assignment it carries clashes with an existing id.
                - detail (str | None):
                    - On failure, a human-readable description of the error.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.CODE_TAKEN` if a class with the same code already exists.
                    - `ErrorCode.ID_TAKEN` if one of its assignments reuses an id tracked elsewhere.
                    - `ErrorCode.INVALID_INPUT` if the argument is not a `Class`.
                - status_code (int | None):
                    - 200 on success
                    - 409 on a conflict, 400 otherwise
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Class): The added class.
                    - On failure:
                        - The offending value(s).

        Notes:
            - This method mutates `Tracker` state and calls `_mark_dirty()` if successful.
        """
        try:
            self._add_class(new_class)

        except TrackerError as e:
            logger.info("%s -> rejected class: %s", self, e)
            return Response.from_error(e)

        self._mark_dirty()

        return Response.succeed(
            detail="Class successfully added to the tracker.",
            data={"record": new_class},
        )

    def remove_class(self, code: str) -> Response:
        """
        Removes a `Class` and all of its assignments' index entries.

        Args:
            code (str): The code of the class to remove.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the class was removed.
                - detail (str | None): A confirmation message or a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.NO_CLASS` if no class has the given code.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the class cannot be found
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Class): The removed class, still owning its assignments.

        Notes:
            - After removal, `get_assignment()` returns None for every id the class owned.
            - This method calls `_mark_dirty()` if and only if the operation succeeds.
        """
        try:
            removed = self._require_class(code)

        except NotFoundError as e:
            return Response.from_error(e)

        for id in [i for i, owner_code in self._index.items() if owner_code == code]:
            del self._index[id]

        del self._classes[code]
        self._mark_dirty()
        logger.debug("%s -> remove class -> %r", self, removed)

        return Response.succeed(
            detail="Class successfully removed from the tracker.",
            data={"record": removed},
        )

    # --- assignment manipulation ---

    def add_assignment(self, code: str, assignment: Assignment) -> Response:
        """
        Adds an `Assignment` to the class with the given code.

        Args:
            code (str): The code of the owning class.
            assignment (Assignment): The assignment to add.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the assignment was added and indexed.
                    - False if any tracker or class invariant would be violated.
                - detail (str | None):
                    - On failure, a human-readable description including the offending value.
                    - On success, a simple confirmation message.
                - error (ErrorCode | str | None):
                    - `ErrorCode.ID_TAKEN` if the id exists anywhere in the tracker.
                    - `ErrorCode.NAME_TAKEN` if the name exists within the same class.
                    - `ErrorCode.NO_CLASS` if `code` does not resolve to a class.
                    - `ErrorCode.TOTAL_VALUE_EXCEEDED` if the class total would exceed 100.
                    - `ErrorCode.INVALID_INPUT` if the argument is not an `Assignment`.
                - status_code (int | None):
                    - 200 on success
                    - 404 if the class cannot be found, 409 on a conflict, 400 otherwise
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Assignment): The added assignment.

        Notes:
            - Checks run in a fixed order: global id, name within the class, class existence, then the class-level checks.
            - The index is only written after the class accepts the assignment.
        """
        try:
            self._add_assignment(code, assignment)

        except TrackerError as e:
            logger.info("%s -> rejected assignment for %s: %s", self, code, e)
            return Response.from_error(e)

        self._mark_dirty()

        return Response.succeed(
            detail="Assignment successfully added to the tracker.",
            data={"record": assignment},
        )

    def remove_assignment(self, id: int) -> Response:
        """
        Removes the assignment with the given id from its owning class.

        Returns:
            Response: success with the removed assignment in `data["record"]`, or
            `ErrorCode.NO_ASSIGNMENT` (404) if the id is not tracked.

        Notes:
            - This method calls `_mark_dirty()` if and only if the operation succeeds.
        """
        try:
            owner = self._require_owner(id)
            assignment = owner._remove_assignment(id)

        except NotFoundError as e:
            return Response.from_error(e)

        del self._index[id]
        self._mark_dirty()
        logger.debug("%s -> remove assignment -> %r", self, assignment)

        return Response.succeed(
            detail="Assignment successfully removed from the tracker.",
            data={"record": assignment},
        )

    def set_mark(self, id: int, mark: Mark) -> Response:
        """
        Sets the mark of a tracked assignment.

        Fails with `ErrorCode.NO_ASSIGNMENT` if the id is not tracked, or with the mark's
        error code if the mark is invalid.
        """
        try:
            owner = self._require_owner(id)

        except NotFoundError as e:
            return Response.from_error(e)

        response = owner.set_mark(id, mark)
        if response.success:
            self._mark_dirty()

        return response

    def remove_mark(self, id: int) -> Response:
        try:
            owner = self._require_owner(id)

        except NotFoundError as e:
            return Response.from_error(e)

        response = owner.remove_mark(id)
        if response.success:
            self._mark_dirty()

        return response

    def update_assignment_weight(self, id: int, weight: float) -> Response:
        try:
            owner = self._require_owner(id)

        except NotFoundError as e:
            return Response.from_error(e)

        response = owner.update_assignment_weight(id, weight)
        if response.success:
            self._mark_dirty()

        return response

    def rename_assignment(self, id: int, name: str) -> Response:
        try:
            owner = self._require_owner(id)

        except NotFoundError as e:
            return Response.from_error(e)

        response = owner.rename_assignment(id, name)
        if response.success:
            self._mark_dirty()

        return response

    # --- raising counterparts ---

    def _add_class(self, new_class: Class) -> None:
        if not isinstance(new_class, Class):
            raise ValidationError(
                f"Expected a Class, got {type(new_class).__name__}",
                ErrorCode.INVALID_INPUT,
                data={"value": new_class},
            )

        self.require_unique_class_code(new_class.code)
        for assignment in new_class.assignments:
            self.require_unique_assignment_id(assignment.id)

        self._classes[new_class.code] = new_class
        for assignment in new_class.assignments:
            self._index[assignment.id] = new_class.code

        logger.debug("%s -> add class -> %r", self, new_class)

    def _add_assignment(self, code: str, assignment: Assignment) -> None:
        if not isinstance(assignment, Assignment):
            raise ValidationError(
                f"Expected an Assignment, got {type(assignment).__name__}",
                ErrorCode.INVALID_INPUT,
                data={"value": assignment},
            )

        self.require_unique_assignment_id(assignment.id)
        self.require_unique_assignment_name(code, assignment.name)
        owner = self._require_class(code)

        owner._add_assignment(assignment)
        self._index[assignment.id] = code

        logger.debug("%s -> add assignment to %s -> %r", self, code, assignment)

    def _require_class(self, code: str) -> Class:
        try:
            return self._classes[code]

        except KeyError:
            raise NotFoundError(
                f"{self} -> could not find a class with code: {code}",
                ErrorCode.NO_CLASS,
                data={"code": code},
            )

    def _require_owner(self, id: int) -> Class:
        try:
            return self._classes[self._index[id]]

        except KeyError:
            raise NotFoundError(
                f"{self} -> could not find an assignment with id: {id}",
                ErrorCode.NO_ASSIGNMENT,
                data={"id": id},
            )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "name": self._name,
            "classes": [c.to_dict() for c in self._classes.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Tracker:
        """
        Rebuilds a tracker from `to_dict()` output, replaying every class and assignment through validation.

        Raises:
            KeyError: If a required key is missing.
            TypeError: If a value has the wrong structure (e.g. `classes` is not a list of objects).
            TrackerError: If the data violates any invariant.
        """
        tracker = cls(data["name"])

        for class_data in data.get("classes", []):
            tracker._add_class(
                Class(code=class_data["code"], name=class_data.get("name"))
            )

            for assignment_data in class_data.get("assignments", []):
                tracker._add_assignment(
                    class_data["code"], Assignment.from_dict(assignment_data)
                )

        return tracker

    def save(self, file_path: str | None = None) -> Response:
        """
        Serializes the tracker to a JSON file.

        Args:
            file_path (str | None):
                - The target file. Intentionally overwritten if it exists.
                - If no argument is provided, `self.path` will be used by default.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the tracker was written to disk.
                - detail (str | None): A confirmation message or a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if no path is given or remembered.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the data is not JSON serializable.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be written.
                - status_code (int | None): 200 on success, otherwise per the error code.
                - data (dict): On success, "path" (str): the file written.

        Notes:
            - The caller is responsible for ensuring the parent directory exists.
            - On success the path is remembered for later saves.
        """
        file_path = file_path or self._file_path
        if file_path is None:
            return Response.fail(
                detail="No save location has been set for this tracker.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            with open(file_path, "w") as f:
                json.dump(self.to_dict(), f, indent=2, sort_keys=True)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Object not JSON serializable: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to write data to disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        self._file_path = file_path
        self._unsaved_changes = False
        logger.debug("%s -> saved to %s", self, file_path)

        return Response.succeed(
            detail="Tracker successfully saved to disk.",
            data={"path": os.path.abspath(file_path)},
        )

    @classmethod
    def load(cls, file_path: str) -> Response:
        """
        Loads a tracker previously written by `save()`.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the file was read and every record passed validation.
                - detail (str | None): On failure, a human-readable description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_INPUT` if the file is not valid JSON, not an object, or has the wrong structure.
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if a required key is missing.
                    - Any model error code if a record violates an invariant.
                    - `ErrorCode.INTERNAL_ERROR` if the file cannot be read.
                - status_code (int | None): 200 on success, otherwise per the error code.
                - data (dict): On success, "tracker" (Tracker): the loaded tracker.
        """
        try:
            with open(file_path, "r") as f:
                data: Any = json.load(f)

            if not isinstance(data, dict):
                raise ValueError(f"Expected {file_path} to contain an object.")

            tracker = cls.from_dict(data)

        except json.JSONDecodeError as e:
            return Response.fail(
                detail=f"Failed to parse JSON data: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except TrackerError as e:
            return Response.from_error(e)

        except KeyError as e:
            return Response.fail(
                detail=f"Missing required field: {e}",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_INPUT,
            )

        except OSError as e:
            return Response.fail(
                detail=f"Failed to read data from disk: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        tracker.path = file_path
        logger.debug("%s -> loaded from %s", tracker, file_path)
        return Response.succeed(data={"tracker": tracker})

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tracker):
            return NotImplemented

        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        return f"Tracker({self._name!r}, {len(self._classes)} classes, {len(self._index)} assignments)"

    def __str__(self) -> str:
        return self._name

    # === data validators ===

    def require_unique_class_code(self, code: str) -> None:
        if code in self._classes:
            raise ConflictError(
                f"{self} -> class code ({code}) already exists",
                ErrorCode.CODE_TAKEN,
                data={"code": code},
            )

    def require_unique_assignment_id(self, id: int) -> None:
        if id in self._index:
            raise ConflictError(
                f"{self} -> assignment id ({id}) already exists",
                ErrorCode.ID_TAKEN,
                data={"id": id, "code": self._index[id]},
            )

    def require_unique_assignment_name(self, code: str, name: str) -> None:
        """
        Validates, via the index, that no assignment in class `code` is already called `name`.

        Raises:
            ConflictError: With `ErrorCode.NAME_TAKEN` if the name is taken within that class.
        """
        for id, owner_code in self._index.items():
            if owner_code != code:
                continue

            if self._classes[owner_code].get_assignment(id).name == name:
                raise ConflictError(
                    f"{self} -> assignment name ({name}) already taken for {code}",
                    ErrorCode.NAME_TAKEN,
                    data={"name": name, "code": code},
                )
