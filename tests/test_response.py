# tests/test_response.py

import pytest

from core.errors import ConflictError, NotFoundError, TrackerError, ValidationError
from core.response import ErrorCode, Response


@pytest.mark.parametrize(
    "error, kind, status_code",
    [
        (ErrorCode.NO_CLASS, "not_found", 404),
        (ErrorCode.NO_ASSIGNMENT, "not_found", 404),
        (ErrorCode.CODE_TAKEN, "conflict", 409),
        (ErrorCode.NAME_TAKEN, "conflict", 409),
        (ErrorCode.TOTAL_VALUE_EXCEEDED, "validation", 400),
        (ErrorCode.PERCENT_OUT_OF_RANGE, "validation", 400),
        (ErrorCode.INTERNAL_ERROR, "internal", 500),
    ],
)
def test_error_code_kind(error, kind, status_code):
    assert error.kind == kind
    assert error.status_code == status_code


def test_fail_defaults_status_code_from_error():
    assert Response.fail(error=ErrorCode.ID_TAKEN).status_code == 409
    assert Response.fail(error="CUSTOM").status_code == 400
    assert Response.fail(error=ErrorCode.ID_TAKEN, status_code=418).status_code == 418


def test_from_error_keeps_code_and_data():
    error = ConflictError("id taken", ErrorCode.ID_TAKEN, data={"id": 3})
    response = Response.from_error(error)

    assert not response.success
    assert response.error is ErrorCode.ID_TAKEN
    assert response.detail == "id taken"
    assert response.data == {"id": 3}
    assert response.status_code == 409


def test_from_error_wraps_unexpected_exceptions():
    response = Response.from_error(RuntimeError("boom"))
    assert response.error is ErrorCode.INTERNAL_ERROR
    assert response.status_code == 500
    assert "boom" in response.detail


def test_error_hierarchy():
    assert issubclass(ValidationError, ValueError)
    assert issubclass(NotFoundError, LookupError)
    assert issubclass(ConflictError, TrackerError)


def test_response_to_dict_from_dict():
    response = Response.fail(
        detail="missing", error=ErrorCode.NO_CLASS, data={"code": "C1"}
    )
    payload = response.to_dict()

    assert payload == {
        "success": False,
        "error": "NO_CLASS",
        "detail": "missing",
        "data": {"code": "C1"},
        "status_code": 404,
        "trace": None,
    }

    restored = Response.from_dict(payload)
    assert restored.error is ErrorCode.NO_CLASS
    assert restored.data == {"code": "C1"}


def test_response_to_str():
    assert str(Response.succeed(detail="done")) == "Success: done"
    assert str(Response.fail(error=ErrorCode.NO_CLASS)) == "Error: NO_CLASS"
