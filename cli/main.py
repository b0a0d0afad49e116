# cli/main.py

"""
Start Menu for the Tracker CLI.

Provides functions for creating, loading, or importing a Tracker.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import cast

import cli.csv_io as csv_io
import cli.menu_helpers as helpers
import core.formatters as formatters
from cli import tracker_menu
from cli.menu_helpers import MenuSignal
from cli.path_utils import expand_path, file_exists, resolve_save_path
from core.logging_utils import setup_logging
from models.tracker import Tracker

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tracker", description="Track assignments, weights and marks per class."
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level name (e.g. DEBUG, INFO). Defaults to $TRACKER_LOG_LEVEL or WARNING.",
    )
    return parser.parse_args(argv)


def run_cli(argv: list[str] | None = None) -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Args:
        argv (list[str] | None): Command-line arguments. Defaults to `sys.argv[1:]`.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    args = parse_args(argv)

    try:
        setup_logging(args.log_level)
    except ValueError as e:
        raise SystemExit(f"[ERROR] {e}")

    logger.debug("Tracker CLI started.")

    title = formatters.format_banner_text("ASSIGNMENT TRACKER")
    options = [
        ("Create a new Tracker", create_tracker),
        ("Load an existing Tracker", load_tracker),
        ("Import a Tracker from CSV", import_tracker),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            tracker = menu_response()

            if tracker is not None:
                tracker_menu.run(tracker)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def create_tracker() -> Tracker | None:
    """
    Prompts the user to create a new, empty `Tracker` by collecting a name and an optional save path.

    Returns:
        Tracker: A new `Tracker` instance.
        None: If the user cancels during input.

    Notes:
        - If the save path is left blank, the `Tracker` will be stored in `~/Documents/Trackers/<name>.json`, with spaces in the name replaced with underscores.
        - If a file already exists at the resolved path, the user must explicitly confirm before continuing.
        - Nothing is written to disk until the `Tracker` is saved.
    """
    while True:
        name = helpers.prompt_user_input_or_cancel(
            "Enter the tracker name (e.g. Fall 2025, leave blank to cancel):"
        )

        if name is MenuSignal.CANCEL:
            return None
        name = cast(str, name)

        path_input = helpers.prompt_user_input_or_none(
            "Enter a file path to save the Tracker (leave blank to use default):"
        )

        try:
            file_path = resolve_save_path(name, path_input)

        except OSError as e:
            print(f"\n[ERROR] Could not prepare the save location: {e}")
            continue

        if file_exists(file_path):
            warning_banner = formatters.format_banner_text("WARNING!")
            print(f"\n{warning_banner}")
            print(f"A file already exists at {file_path} and will be overwritten on save.")

            if not helpers.confirm_action("\nDo you wish to continue?"):
                continue

        print("\n... Tracker created successfully.")

        return Tracker(name, file_path)


def load_tracker() -> Tracker | None:
    """
    Prompts the user to load a `Tracker` from a JSON file.

    Returns:
        Tracker: A `Tracker` instance if loading succeeds.
        None: If the user cancels.

    Notes:
        - Relative paths and `~` are expanded to absolute paths.
        - Deserialization and validation are handled by `Tracker.load()`, which returns a structured `Response`.
    """
    while True:
        file_path = prompt_existing_file("Enter path to a Tracker file (leave blank to cancel):")

        if file_path is MenuSignal.CANCEL:
            return None
        file_path = cast(str, file_path)

        print("\nLoading Tracker ...")

        tracker_response = Tracker.load(file_path)

        if not tracker_response.success:
            helpers.display_response_failure(tracker_response)
            continue

        print("... Tracker loaded successfully.")

        return tracker_response.data["tracker"]


def import_tracker() -> Tracker | None:
    """
    Prompts the user to import a CSV file into a new `Tracker`.

    Returns:
        Tracker: The imported `Tracker`, flagged with unsaved changes if any rows were imported.
        None: If the user cancels.

    Notes:
        - The import is all-or-nothing; a failing line is reported and nothing is kept.
        - The new `Tracker` has no save path until the user provides one.
    """
    while True:
        file_path = prompt_existing_file("Enter path to a CSV file (leave blank to cancel):")

        if file_path is MenuSignal.CANCEL:
            return None
        file_path = cast(str, file_path)

        print("\nImporting assignments ...")

        import_response = csv_io.read_csv(file_path)

        if not import_response.success:
            helpers.display_response_failure(import_response)
            continue

        print(f"... {import_response.detail}")

        return import_response.data["tracker"]


def prompt_existing_file(prompt: str) -> str | MenuSignal:
    while True:
        file_path = helpers.prompt_user_input_or_cancel(prompt)

        if isinstance(file_path, MenuSignal):
            return file_path

        file_path = expand_path(file_path)

        if not os.path.isfile(file_path):
            print(f"\nFile not found: {file_path}. Please try again.")
            continue

        return file_path


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
