# tests/test_class.py

import pytest

from core.errors import ValidationError
from core.response import ErrorCode
from models.assignment import Assignment
from models.mark import Letter, Percent
from models.tracker_class import Class


def test_class_defaults_name_to_code():
    tracked_class = Class("CS101")
    assert tracked_class.name == "CS101"
    assert str(tracked_class) == "CS101"
    assert tracked_class.total_value == 0.0
    assert len(tracked_class) == 0


def test_class_to_str(sample_class):
    assert str(sample_class) == "Calculus I (MATH101)"


# === add assignment ===


def test_add_assignment_exceeding_total_value():
    tracked_class = Class("CS101")

    response = tracked_class.add_assignment(Assignment(0, "A1", 60.0))
    assert response.success
    assert tracked_class.total_value == 60.0

    response = tracked_class.add_assignment(Assignment(1, "A2", 50.0))
    assert not response.success
    assert response.error is ErrorCode.TOTAL_VALUE_EXCEEDED
    assert response.data["total_value"] == 110.0
    assert tracked_class.total_value == 60.0
    assert not tracked_class.has_assignment(1)


def test_add_assignment_up_to_exactly_one_hundred(sample_class):
    for i, weight in enumerate([10.0, 20.0, 30.0, 40.0]):
        assert sample_class.add_assignment(Assignment(i, f"A{i}", weight)).success

    assert sample_class.total_value == 100.0
    assert sample_class.add_assignment(Assignment(9, "Zero", 0.0)).success


def test_tenths_sum_to_one_hundred(sample_class):
    for i in range(1000):
        assert sample_class.add_assignment(Assignment(i, f"A{i}", 0.1)).success

    assert sample_class.total_value == pytest.approx(100.0)
    assert not sample_class.add_assignment(Assignment(1000, "Extra", 0.1)).success


def test_add_assignment_duplicate_id(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0))

    response = sample_class.add_assignment(Assignment(0, "A2", 10.0))
    assert not response.success
    assert response.error is ErrorCode.ID_TAKEN
    assert response.status_code == 409
    assert sample_class.get_assignment(0).name == "A1"


def test_add_assignment_duplicate_name(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0))

    response = sample_class.add_assignment(Assignment(1, "A1", 10.0))
    assert not response.success
    assert response.error is ErrorCode.NAME_TAKEN
    assert len(sample_class) == 1


def test_names_are_case_sensitive(sample_class):
    sample_class.add_assignment(Assignment(0, "Exam", 10.0))
    assert sample_class.add_assignment(Assignment(1, "exam", 10.0)).success


def test_total_value_checked_before_id_and_name(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 90.0))

    response = sample_class.add_assignment(Assignment(0, "A1", 20.0))
    assert response.error is ErrorCode.TOTAL_VALUE_EXCEEDED


def test_id_checked_before_name(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0))

    response = sample_class.add_assignment(Assignment(0, "A1", 10.0))
    assert response.error is ErrorCode.ID_TAKEN


def test_add_non_assignment(sample_class):
    response = sample_class.add_assignment("A1")
    assert not response.success
    assert response.error is ErrorCode.INVALID_INPUT


# === remove assignment ===


def test_remove_assignment_restores_total_value(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 33.3))
    before = sample_class.total_value

    sample_class.add_assignment(Assignment(1, "A2", 0.7))
    response = sample_class.remove_assignment(1)

    assert response.success
    assert response.data["record"].name == "A2"
    assert sample_class.total_value == before
    assert sample_class.get_assignment(1) is None


def test_remove_missing_assignment(sample_class):
    response = sample_class.remove_assignment(42)
    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404


def test_removed_name_can_be_reused(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0))
    sample_class.remove_assignment(0)

    assert sample_class.add_assignment(Assignment(1, "A1", 10.0)).success


# === update ===


def test_update_assignment_weight(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 60.0))
    sample_class.add_assignment(Assignment(1, "A2", 30.0))

    assert sample_class.update_assignment_weight(0, 70.0).success
    assert sample_class.total_value == 100.0

    response = sample_class.update_assignment_weight(1, 31.0)
    assert response.error is ErrorCode.TOTAL_VALUE_EXCEEDED
    assert sample_class.get_assignment(1).weight == 30.0

    assert sample_class.update_assignment_weight(1, -5).error is ErrorCode.INVALID_WEIGHT
    assert sample_class.update_assignment_weight(9, 5).error is ErrorCode.NOT_FOUND


def test_rename_assignment(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0))
    sample_class.add_assignment(Assignment(1, "A2", 10.0))

    assert sample_class.rename_assignment(0, "A1").success
    assert sample_class.rename_assignment(0, "Quiz").success
    assert sample_class.get_assignment(0).name == "Quiz"

    assert sample_class.rename_assignment(1, "Quiz").error is ErrorCode.NAME_TAKEN
    assert sample_class.rename_assignment(1, "").error is ErrorCode.INVALID_NAME
    assert sample_class.get_assignment(1).name == "A2"


def test_set_and_remove_mark(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 40.0))

    assert sample_class.set_mark(0, Percent(50.0)).success
    assert sample_class.earned_value == 20.0

    assert sample_class.remove_mark(0).success
    assert sample_class.earned_value == 0.0

    assert sample_class.set_mark(5, Letter("A")).error is ErrorCode.NOT_FOUND
    assert sample_class.remove_mark(5).error is ErrorCode.NOT_FOUND


# === persistence ===


def test_class_to_dict(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0, mark=Letter("A")))

    assert sample_class.to_dict() == {
        "code": "MATH101",
        "name": "Calculus I",
        "assignments": [
            {
                "id": 0,
                "name": "A1",
                "weight": 10.0,
                "mark": {"kind": "letter", "value": "A"},
                "due_date": None,
                "status": "Marked",
            }
        ],
    }


def test_class_from_dict_preserves_state(sample_class):
    sample_class.add_assignment(Assignment(0, "A1", 10.0, mark=Percent(85.0)))
    sample_class.add_assignment(Assignment(1, "A2", 20.0))

    assert Class.from_dict(sample_class.to_dict()) == sample_class


def test_class_from_dict_rejects_over_allocation():
    data = {
        "code": "CS101",
        "assignments": [
            {"id": 0, "name": "A1", "weight": 60.0},
            {"id": 1, "name": "A2", "weight": 60.0},
        ],
    }

    with pytest.raises(ValidationError):
        Class.from_dict(data)
