# tests/conftest.py

from datetime import datetime

import pytest

from models.assignment import Assignment
from models.mark import Letter, OutOf, Percent
from models.tracker import Tracker
from models.tracker_class import Class


@pytest.fixture
def sample_tracker():
    return Tracker("Fall 2025")


@pytest.fixture
def sample_class():
    return Class("MATH101", "Calculus I")


@pytest.fixture
def sample_assignment():
    due_date = datetime.strptime("1987-06-21 23:59", "%Y-%m-%d %H:%M")
    return Assignment(
        id=0,
        name="test_assignment",
        weight=30.0,
        due_date=due_date,
    )


@pytest.fixture
def sample_marked_assignment():
    return Assignment(1, "marked_assignment", 20.0, mark=Percent(75.0))


@pytest.fixture
def populated_tracker():
    tracker = Tracker("Fall 2025")
    tracker.add_class(Class("MATH101", "Calculus I"))
    tracker.add_class(Class("PHYS101"))

    tracker.add_assignment("MATH101", Assignment(0, "Quiz 1", 10.0, mark=Percent(85.0)))
    tracker.add_assignment("MATH101", Assignment(1, "Midterm", 40.0, mark=Letter("B")))
    tracker.add_assignment("PHYS101", Assignment(2, "Lab 1", 25.0, mark=OutOf(15, 20)))
    tracker.add_assignment("PHYS101", Assignment(3, "Final", 50.0))

    return tracker
