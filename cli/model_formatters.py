# cli/model_formatters.py

# anything that renders domain objects or performs Tracker read-only operations
from textwrap import dedent

import core.formatters as formatters
from models.assignment import Assignment
from models.tracker import Tracker
from models.tracker_class import Class

# === class formatters ===


def format_class_oneline(tracked_class: Class) -> str:
    total = formatters.format_weight(tracked_class.total_value)

    return f"{tracked_class.code:<12} | {tracked_class.name:<24} | {total} allocated"


def format_class_multiline(tracked_class: Class, tracker: Tracker) -> str:
    return dedent(
        f"""\
        Class in {tracker.name}:
        ... Code: {tracked_class.code}
        ... Name: {tracked_class.name}
        ... Assignments: {len(tracked_class)}
        ... Total Value: {formatters.format_weight(tracked_class.total_value)}
        ... Earned So Far: {formatters.format_weight(tracked_class.earned_value)}"""
    )


# === assignment formatters ===


def format_mark(assignment: Assignment) -> str:
    return formatters.format_optional(assignment.mark, "[NO MARK]")


def format_assignment_oneline(assignment: Assignment) -> str:
    weight = formatters.format_weight(assignment.weight)

    return f"{assignment.id:>4} | {assignment.name:<32} | {weight} | {format_mark(assignment)}"


def format_assignment_multiline(assignment: Assignment, tracker: Tracker) -> str:
    owner = tracker.class_of(assignment.id)
    due_date = formatters.format_due_date_from_datetime(assignment.due_date)
    status = assignment.status.value if assignment.status else "[UNTRACKED]"
    final_pct = (
        formatters.format_weight(assignment.final_pct)
        if assignment.final_pct is not None
        else "[N/A]"
    )

    return dedent(
        f"""\
        Assignment in {owner.code if owner else '[UNTRACKED]'}:
        ... ID: {assignment.id}
        ... Name: {assignment.name}
        ... Weight: {formatters.format_weight(assignment.weight)}
        ... Mark: {format_mark(assignment)}
        ... Final Pct: {final_pct}
        ... Due: {due_date}
        ... Status: {status}"""
    )
