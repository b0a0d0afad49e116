# cli/tracker_menu.py

"""
Tracker Manager menu for the Tracker CLI.

This module defines the interface for working with an open `Tracker`, including:
- Viewing classes and assignments
- Adding and removing classes
- Adding and removing assignments
- Recording and clearing marks
- Exporting to CSV and saving

All operations are routed through the `Tracker` API so that uniqueness and weight limits are checked
in one place; failures are displayed and the menu continues.
"""

from __future__ import annotations

import datetime
from typing import cast

import cli.csv_io as csv_io
import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.path_utils import expand_path
from models.assignment import Assignment
from models.mark import Mark
from models.tracker import Tracker
from models.tracker_class import Class


def run(tracker: Tracker) -> None:
    """
    Top-level loop with dispatch for the Tracker Manager menu.

    Args:
        tracker (Tracker): The active `Tracker`.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text(tracker.name)
    options = [
        ("View Classes", view_classes),
        ("View Assignments", view_assignments),
        ("Add Class", add_class),
        ("Remove Class", find_and_remove_class),
        ("Add Assignment", add_assignment),
        ("Remove Assignment", find_and_remove_assignment),
        ("Record Mark", find_and_set_mark),
        ("Clear Mark", find_and_remove_mark),
        ("Export to CSV", export_csv),
        ("Save Tracker", save_tracker),
    ]
    zero_option = "Return to Start Menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response(tracker)

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(tracker)

    helpers.returning_to("Start Menu")


# === view ===


def view_classes(tracker: Tracker) -> None:
    if not tracker.classes:
        print("\nThere are no classes.")
        return

    print(f"\n{formatters.format_banner_text('Classes')}")
    for tracked_class in sorted(tracker.classes, key=lambda x: x.code):
        print(model_formatters.format_class_multiline(tracked_class, tracker))


def view_assignments(tracker: Tracker) -> None:
    tracked_class = helpers.find_class_from_list(tracker)

    if tracked_class is MenuSignal.CANCEL:
        return
    tracked_class = cast(Class, tracked_class)

    assignments = tracker.assignments_from_class(tracked_class.code)

    if not assignments:
        print(f"\nThere are no assignments in {tracked_class.code}.")
        return

    print(f"\n{formatters.format_banner_text(str(tracked_class))}")
    helpers.display_results(
        sorted(assignments, key=lambda x: x.id),
        formatter=model_formatters.format_assignment_oneline,
    )


# === classes ===


def add_class(tracker: Tracker) -> None:
    """
    Prompts for a class code and optional display name, and adds the class to the tracker.

    Args:
        tracker (Tracker): The active `Tracker`.

    Notes:
        - Additions are not saved automatically.
    """
    code = helpers.prompt_user_input_or_cancel(
        "Enter the class code (e.g. MATH 101, leave blank to cancel):"
    )

    if code is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    code = cast(str, code)

    name = helpers.prompt_user_input_or_none(
        "Enter the class name (leave blank to use the code):"
    )

    tracker_response = tracker.add_class(Class(code, name))

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        print(f"\n{code} was not added.")
        return

    print(f"\n{tracker_response.detail}")


def find_and_remove_class(tracker: Tracker) -> None:
    tracked_class = helpers.find_class_from_list(tracker)

    if tracked_class is MenuSignal.CANCEL:
        return
    tracked_class = cast(Class, tracked_class)

    print(model_formatters.format_class_multiline(tracked_class, tracker))

    if len(tracked_class):
        names = [a.name for a in tracked_class.assignments]
        print(f"\nThis will also remove {formatters.format_list_with_and(names)}.")

    if not helpers.confirm_action(
        f"Remove {tracked_class.code} and its {len(tracked_class)} assignments? This cannot be undone."
    ):
        helpers.returning_without_changes()
        return

    tracker_response = tracker.remove_class(tracked_class.code)

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        return

    print(f"\n{tracker_response.detail}")


# === assignments ===


def add_assignment(tracker: Tracker) -> None:
    """
    Loops a prompt to create a new `Assignment` and add it to a chosen class.

    Args:
        tracker (Tracker): The active `Tracker`.

    Notes:
        - Ids are handed out by `Tracker.next_assignment_id()`.
        - Name and weight are validated by `Assignment.create()`; uniqueness and the class total are checked by `Tracker.add_assignment()`.
    """
    tracked_class = helpers.find_class_from_list(tracker)

    if tracked_class is MenuSignal.CANCEL:
        return
    tracked_class = cast(Class, tracked_class)

    while True:
        new_assignment = prompt_new_assignment(tracker)

        if new_assignment is not None:
            print("\nYou are about to create the following assignment:")
            print(model_formatters.format_assignment_oneline(new_assignment))

            if helpers.confirm_action("Would you like to create this assignment?"):
                tracker_response = tracker.add_assignment(
                    tracked_class.code, new_assignment
                )

                if not tracker_response.success:
                    helpers.display_response_failure(tracker_response)
                    print(f"\n{new_assignment.name} was not added.")

                else:
                    print(f"\n{tracker_response.detail}")

        if not helpers.confirm_action(
            f"Would you like to continue adding assignments to {tracked_class.code}?"
        ):
            break


def prompt_new_assignment(tracker: Tracker) -> Assignment | None:
    name = helpers.prompt_user_input_or_cancel(
        "Enter assignment name (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        return None
    name = cast(str, name)

    weight = prompt_weight_input_or_cancel()

    if weight is MenuSignal.CANCEL:
        return None
    weight = cast(float, weight)

    due_date = prompt_due_date()

    assignment_response = Assignment.create(
        tracker.next_assignment_id(), name, weight, due_date=due_date
    )

    if not assignment_response.success:
        helpers.display_response_failure(assignment_response)
        return None

    return assignment_response.data["assignment"]


def prompt_weight_input_or_cancel() -> float | MenuSignal:
    while True:
        user_input = helpers.prompt_user_input_or_cancel(
            "Enter the weight as a percentage of the class (leave blank to cancel):"
        )

        if isinstance(user_input, MenuSignal):
            return user_input

        try:
            return Assignment.validate_weight_input(user_input)

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def prompt_due_date() -> datetime.datetime | None:
    """
    Solicits user input for due date and time, with a default due time of '23:59' if only a due date is provided.

    Returns:
        A datetime.datetime object, or None to signal 'No due date'.
    """
    while True:
        due_date_str = helpers.prompt_user_input_or_none(
            "Enter due date (YYYY-MM-DD, leave blank for no due date):"
        )

        if due_date_str is None:
            return None

        due_time_str = (
            helpers.prompt_user_input_or_none(
                "Enter due time (24-hour HH:MM, leave blank for 23:59):"
            )
            or "23:59"
        )

        try:
            return formatters.parse_due_date(due_date_str, due_time_str)

        except ValueError as e:
            print(f"\n[ERROR] {e}")
            print("Please try again.")


def find_and_remove_assignment(tracker: Tracker) -> None:
    assignment = helpers.find_assignment_from_list(tracker)

    if assignment is MenuSignal.CANCEL:
        return
    assignment = cast(Assignment, assignment)

    print(model_formatters.format_assignment_multiline(assignment, tracker))

    if not helpers.confirm_action(
        "Are you sure you want to permanently remove this assignment? This cannot be undone."
    ):
        helpers.returning_without_changes()
        return

    tracker_response = tracker.remove_assignment(assignment.id)

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        return

    print(f"\n{tracker_response.detail}")


# === marks ===


def find_and_set_mark(tracker: Tracker) -> None:
    """
    Prompts for an assignment and a mark, and records the mark.

    Args:
        tracker (Tracker): The active `Tracker`.

    Notes:
        - Marks are entered in their display form: `85`, `85%`, `A`, or `15/20`. Parsing is handled by `Mark.parse()`.
        - Recording a mark replaces any existing one.
    """
    assignment = helpers.find_assignment_from_list(tracker)

    if assignment is MenuSignal.CANCEL:
        return
    assignment = cast(Assignment, assignment)

    while True:
        mark_input = helpers.prompt_user_input_or_cancel(
            "Enter the mark (e.g. 85%, A, or 15/20, leave blank to cancel):"
        )

        if mark_input is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return
        mark_input = cast(str, mark_input)

        mark_response = Mark.parse(mark_input)

        if not mark_response.success:
            helpers.display_response_failure(mark_response)
            print("Please try again.")
            continue

        break

    tracker_response = tracker.set_mark(assignment.id, mark_response.data["mark"])

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        return

    print(f"\n{tracker_response.detail}")


def find_and_remove_mark(tracker: Tracker) -> None:
    assignment = helpers.find_assignment_from_list(tracker)

    if assignment is MenuSignal.CANCEL:
        return
    assignment = cast(Assignment, assignment)

    if not assignment.is_marked:
        print(f"\n{assignment.name} has no mark to clear.")
        return

    tracker_response = tracker.remove_mark(assignment.id)

    if not tracker_response.success:
        helpers.display_response_failure(tracker_response)
        return

    print(f"\n{tracker_response.detail}")


# === persistence ===


def export_csv(tracker: Tracker) -> None:
    file_path = helpers.prompt_user_input_or_cancel(
        "Enter a file path for the CSV export (leave blank to cancel):"
    )

    if file_path is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    file_path = expand_path(cast(str, file_path))

    export_response = csv_io.write_csv(tracker, file_path)

    if not export_response.success:
        helpers.display_response_failure(export_response)
        return

    print(f"\n{export_response.data['count']} assignments written to {file_path}.")


def save_tracker(tracker: Tracker) -> None:
    if tracker.path is None:
        file_path = helpers.prompt_user_input_or_cancel(
            "Enter a file path to save the Tracker (leave blank to cancel):"
        )

        if file_path is MenuSignal.CANCEL:
            helpers.returning_without_changes()
            return
        tracker.path = expand_path(cast(str, file_path))

    save_response = tracker.save()

    if not save_response.success:
        helpers.display_response_failure(save_response)
        return

    print(f"\nTracker saved to {save_response.data['path']}.")
