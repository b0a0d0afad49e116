# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the Tracker application.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for and validating user input
- Handling user selections and confirmation flows
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior and reduce duplication.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.path_utils import expand_path
from core.response import Response
from models.assignment import Assignment
from models.tracker import Tracker
from models.tracker_class import Class

RecordType = TypeVar("RecordType", Assignment, Class)


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            # casts choice to int and adjusts for zero-index, retrieves action from tuple
            return options[int(choice) - 1][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


# === confirm and prompt methods ===

# ---
# Prompt helpers strip whitespace; blank input maps to:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL`.
#     - `prompt_user_input_or_none()` returns `None`.
# `confirm_action()` loops until the user enters a valid yes/no response.
# ---


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def confirm_unsaved_changes() -> bool:
    return confirm_action(
        "There are unsaved changes to the Tracker. Do you want to save now?"
    )


def prompt_if_dirty(tracker: Tracker) -> None:
    if tracker.has_unsaved_changes and confirm_unsaved_changes():
        if tracker.path is None:
            path = prompt_user_input_or_cancel(
                "Enter a file path to save the Tracker (leave blank to cancel):"
            )
            if path is MenuSignal.CANCEL:
                return
            tracker.path = expand_path(str(path))

        response = tracker.save()
        if not response.success:
            display_response_failure(response)


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


# === finder and select methods ===


def prompt_selection_from_list(
    list_data: list[RecordType],
    list_description: str,
    sort_key: Callable[[RecordType], Any] = lambda x: x,
    formatter: Callable[[RecordType], str] = lambda x: str(x),
) -> RecordType | None:
    """
    Prompts the user to select an item from a list of records.

    Args:
        list_data (list[RecordType]): The records to choose from.
        list_description (str): A short description used in prompts and headings (e.g. "classes").
        sort_key (Callable[[RecordType], Any], optional): Sort function for ordering the list. Defaults to identity.
        formatter (Callable[[RecordType], str], optional): Function to convert each record to a display string. Defaults to str().

    Returns:
        RecordType: The selected record if a valid index is chosen.
        None: If the list is empty or the user cancels with "0".
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return

    sorted_list = sorted(list_data, key=sort_key)

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(sorted_list, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(index)
            return sorted_list[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def find_class_from_list(tracker: Tracker) -> Class | MenuSignal:
    tracked_class = prompt_selection_from_list(
        tracker.classes,
        "Classes",
        sort_key=lambda x: x.code,
        formatter=model_formatters.format_class_oneline,
    )

    return MenuSignal.CANCEL if tracked_class is None else tracked_class


def find_assignment_from_list(tracker: Tracker) -> Assignment | MenuSignal:
    assignment = prompt_selection_from_list(
        tracker.assignments,
        "Assignments",
        sort_key=lambda x: x.id,
        formatter=model_formatters.format_assignment_oneline,
    )

    return MenuSignal.CANCEL if assignment is None else assignment


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def display_response_failure(response: Response, debug: bool = False) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Args:
        response (Response): The response object to inspect.
        debug (bool, optional): If True, prints the trace field when present. Defaults to False.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")

    if debug and response.trace:
        print(f"\nDebug Trace: {response.trace}")
