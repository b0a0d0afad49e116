# core/response.py

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    # === Not Found ===
    NOT_FOUND = "NOT_FOUND"
    NO_CLASS = "NO_CLASS"
    NO_ASSIGNMENT = "NO_ASSIGNMENT"

    # === Constraint Violations ===
    CODE_TAKEN = "CODE_TAKEN"
    ID_TAKEN = "ID_TAKEN"
    NAME_TAKEN = "NAME_TAKEN"

    # === Validation Failures ===
    PERCENT_OUT_OF_RANGE = "PERCENT_OUT_OF_RANGE"
    LETTER_OUT_OF_RANGE = "LETTER_OUT_OF_RANGE"
    OUT_OF_INVALID = "OUT_OF_INVALID"
    INVALID_WEIGHT = "INVALID_WEIGHT"
    INVALID_NAME = "INVALID_NAME"

    # the weights of a class would sum past the ceiling
    TOTAL_VALUE_EXCEEDED = "TOTAL_VALUE_EXCEEDED"

    # status and mark disagree
    STATUS_CONFLICT = "STATUS_CONFLICT"

    # required argument or attribute is missing
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # input structure is malformed or incomplete
    INVALID_INPUT = "INVALID_INPUT"

    # field value is out of bounds or incorrectly formatted
    INVALID_FIELD_VALUE = "INVALID_FIELD_VALUE"

    # === Internal Faults ===
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @property
    def kind(self) -> str:
        """
        The broad category of the error: "not_found", "conflict", "validation", or "internal".
        """
        if self in _NOT_FOUND_CODES:
            return "not_found"

        if self in _CONFLICT_CODES:
            return "conflict"

        if self is ErrorCode.INTERNAL_ERROR:
            return "internal"

        return "validation"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS_CODES[self.kind]


_NOT_FOUND_CODES = frozenset(
    {ErrorCode.NOT_FOUND, ErrorCode.NO_CLASS, ErrorCode.NO_ASSIGNMENT}
)
_CONFLICT_CODES = frozenset(
    {ErrorCode.CODE_TAKEN, ErrorCode.ID_TAKEN, ErrorCode.NAME_TAKEN}
)
_KIND_STATUS_CODES = {
    "not_found": 404,
    "conflict": 409,
    "validation": 400,
    "internal": 500,
}


class Response:
    """
    Standard Response object for Tracker manipulator and constructor methods.

    Attributes:
        success (bool): Indicates whether the operation succeeded.
        detail (str | None): Optional human-readable explanation.
        error (ErrorCode | str | None): Optional machine-readable error identifier.
        status_code (int | None): Optional HTTP-style response code.
        data (dict): Optional payload, varies by operation.
        trace (str | None): Optional exception traceback when errors occur.
    """

    def __init__(
        self,
        success: bool,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
        trace: str | None = None,
    ):
        self._success = success
        self._detail = detail
        self._error = error
        self._status_code = status_code
        self._data = data or {}
        self._trace = trace

    # === properties ===

    @property
    def success(self) -> bool:
        return self._success

    @property
    def detail(self) -> str | None:
        return self._detail

    @property
    def error(self) -> ErrorCode | str | None:
        return self._error

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def data(self) -> dict:
        return self._data or {}

    @property
    def trace(self) -> str | None:
        return self._trace

    # === public classmethods ===

    @classmethod
    def succeed(
        cls,
        detail: str | None = None,
        status_code: int | None = 200,
        data: dict | None = None,
    ) -> Response:
        return cls(
            success=True,
            detail=detail,
            error=None,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def fail(
        cls,
        detail: str | None = None,
        error: ErrorCode | str | None = None,
        status_code: int | None = None,
        data: dict | None = None,
    ) -> Response:
        if status_code is None:
            status_code = error.status_code if isinstance(error, ErrorCode) else 400

        return cls(
            success=False,
            detail=detail,
            error=error,
            status_code=status_code,
            data=data,
        )

    @classmethod
    def from_error(cls, error: Exception) -> Response:
        """
        Builds a failed `Response` from a `TrackerError`, preserving its code and payload.

        Any other exception is reported as `ErrorCode.INTERNAL_ERROR`.
        """
        # local import, core.errors depends on this module
        from core.errors import TrackerError

        if isinstance(error, TrackerError):
            return cls.fail(detail=str(error), error=error.error, data=error.data)

        return cls.fail(
            detail=f"Unexpected error: {error}",
            error=ErrorCode.INTERNAL_ERROR,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "error": self.error.value if isinstance(self.error, Enum) else self.error,
            "detail": self.detail,
            "data": self.data,
            "status_code": self.status_code,
            "trace": self.trace,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> Response:
        error = payload.get("error")

        if error in ErrorCode._value2member_map_:
            error = ErrorCode(error)

        return cls(
            success=payload["success"],
            error=error,
            detail=payload.get("detail"),
            data=payload.get("data", {}),
            status_code=payload.get("status_code"),
            trace=payload.get("trace"),
        )

    # === dunder methods ===

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.detail or ''}"
        else:
            error_str = (
                self.error.value if isinstance(self.error, Enum) else self.error or ""
            )
            return f"Error: {error_str}"
