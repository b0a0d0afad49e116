# tests/test_assignment.py

import pytest

from core.errors import ValidationError
from core.response import ErrorCode
from models.assignment import Assignment, AssignmentStatus
from models.mark import Letter, OutOf, Percent


def test_assignment_to_dict(sample_assignment):
    assert sample_assignment.to_dict() == {
        "id": 0,
        "name": "test_assignment",
        "weight": 30.0,
        "mark": None,
        "due_date": "1987-06-21T23:59:00",
        "status": None,
    }


def test_assignment_from_dict():
    assignment = Assignment.from_dict(
        {
            "id": 7,
            "name": "test_assignment",
            "weight": 30.0,
            "mark": {"kind": "out_of", "numerator": 15, "denominator": 20},
            "due_date": "1987-06-21T23:59:00",
            "status": "Marked",
        }
    )

    assert assignment.id == 7
    assert assignment.name == "test_assignment"
    assert assignment.weight == 30.0
    assert assignment.mark == OutOf(15, 20)
    assert assignment.due_date_iso == "1987-06-21T23:59:00"
    assert assignment.status is AssignmentStatus.MARKED


def test_assignment_from_dict_rejects_invalid_data():
    with pytest.raises(ValidationError):
        Assignment.from_dict({"id": 1, "name": "", "weight": 10.0})

    with pytest.raises(KeyError):
        Assignment.from_dict({"id": 1, "name": "Quiz"})


def test_assignment_to_str(sample_assignment):
    assert sample_assignment.__str__() == "test_assignment (0)"


# === create ===


def test_create_assignment():
    response = Assignment.create(3, "Quiz 1", "12.5")
    assert response.success

    assignment = response.data["assignment"]
    assert assignment.weight == 12.5
    assert assignment.mark is None
    assert assignment.status is None


@pytest.mark.parametrize("name", ["", "   ", None, 42, "x" * 33])
def test_create_assignment_invalid_name(name):
    response = Assignment.create(0, name, 10.0)
    assert not response.success
    assert response.error is ErrorCode.INVALID_NAME


def test_name_length_is_measured_in_bytes():
    assert Assignment.create(0, "x" * 32, 10.0).success
    # "é" is two bytes in UTF-8
    assert not Assignment.create(0, "é" * 17, 10.0).success


@pytest.mark.parametrize("weight", [-1, 100.5, "heavy", None, float("nan")])
def test_create_assignment_invalid_weight(weight):
    response = Assignment.create(0, "Quiz", weight)
    assert not response.success
    assert response.error is ErrorCode.INVALID_WEIGHT


@pytest.mark.parametrize("weight", [0, 0.0, 100, 100.0])
def test_create_assignment_weight_boundaries(weight):
    assert Assignment.create(0, "Quiz", weight).success


def test_create_assignment_with_invalid_mark():
    response = Assignment.create(0, "Quiz", 10.0, mark=Percent(120.0))
    assert not response.success
    assert response.error is ErrorCode.PERCENT_OUT_OF_RANGE


def test_create_assignment_with_mark_is_marked():
    response = Assignment.create(
        0, "Quiz", 10.0, mark=Letter("A"), status=AssignmentStatus.COMPLETE
    )
    assert response.success
    assert response.data["assignment"].status is AssignmentStatus.MARKED


def test_create_assignment_marked_without_mark():
    response = Assignment.create(0, "Quiz", 10.0, status=AssignmentStatus.MARKED)
    assert not response.success
    assert response.error is ErrorCode.STATUS_CONFLICT


# === mark ===


def test_set_mark(sample_assignment):
    response = sample_assignment.set_mark(Percent(85.0))
    assert response.success
    assert sample_assignment.mark == Percent(85.0)
    assert sample_assignment.is_marked
    assert sample_assignment.status is AssignmentStatus.MARKED


def test_set_mark_replaces_existing(sample_marked_assignment):
    sample_marked_assignment.set_mark(Letter("A"))
    assert sample_marked_assignment.mark == Letter("A")


def test_set_invalid_mark_leaves_assignment_unchanged(sample_marked_assignment):
    response = sample_marked_assignment.set_mark(OutOf(21, 20))
    assert not response.success
    assert response.error is ErrorCode.OUT_OF_INVALID
    assert sample_marked_assignment.mark == Percent(75.0)


def test_set_mark_rejects_non_mark(sample_assignment):
    response = sample_assignment.set_mark("A")
    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT
    assert sample_assignment.mark is None


def test_remove_mark(sample_marked_assignment):
    sample_marked_assignment.remove_mark()
    assert sample_marked_assignment.mark is None
    assert sample_marked_assignment.status is AssignmentStatus.INCOMPLETE


def test_remove_mark_keeps_untracked_status(sample_assignment):
    sample_assignment.remove_mark()
    assert sample_assignment.status is None


def test_final_pct():
    assert Assignment(0, "Quiz", 20.0, mark=Percent(50.0)).final_pct == 10.0
    assert Assignment(0, "Quiz", 40.0, mark=OutOf(15, 20)).final_pct == 30.0
    assert Assignment(0, "Quiz", 40.0, mark=Letter("A")).final_pct is None
    assert Assignment(0, "Quiz", 40.0).final_pct is None


# === status ===


def test_set_status(sample_assignment):
    response = sample_assignment.set_status(AssignmentStatus.COMPLETE)
    assert response.success
    assert sample_assignment.status is AssignmentStatus.COMPLETE


def test_set_status_conflicts_with_mark(sample_assignment, sample_marked_assignment):
    assert (
        sample_assignment.set_status(AssignmentStatus.MARKED).error
        is ErrorCode.STATUS_CONFLICT
    )
    assert (
        sample_marked_assignment.set_status(AssignmentStatus.COMPLETE).error
        is ErrorCode.STATUS_CONFLICT
    )
    assert sample_marked_assignment.status is AssignmentStatus.MARKED


def test_set_unknown_status(sample_assignment):
    response = sample_assignment.set_status("Abandoned")
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_remove_status(sample_assignment, sample_marked_assignment):
    sample_assignment.set_status(AssignmentStatus.INCOMPLETE)
    assert sample_assignment.remove_status().success
    assert sample_assignment.status is None

    response = sample_marked_assignment.remove_status()
    assert not response.success
    assert response.error is ErrorCode.STATUS_CONFLICT


# === other setters ===


def test_set_weight(sample_assignment):
    assert sample_assignment.set_weight(45).success
    assert sample_assignment.weight == 45.0

    assert sample_assignment.set_weight(101).error is ErrorCode.INVALID_WEIGHT
    assert sample_assignment.weight == 45.0


def test_set_name(sample_assignment):
    assert sample_assignment.set_name("Renamed").success
    assert sample_assignment.name == "Renamed"

    assert sample_assignment.set_name("").error is ErrorCode.INVALID_NAME
    assert sample_assignment.name == "Renamed"


def test_remove_due_date(sample_assignment):
    sample_assignment.remove_due_date()
    assert sample_assignment.due_date is None
    assert sample_assignment.due_date_iso is None


# === id ===


@pytest.mark.parametrize("id", ["five", "7", -1, 1.0, True, None])
def test_create_assignment_invalid_id(id):
    response = Assignment.create(id, "Exam", 10.0)
    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_from_dict_rejects_string_id():
    with pytest.raises(ValidationError):
        Assignment.from_dict({"id": "7", "name": "Exam", "weight": 10.0})
