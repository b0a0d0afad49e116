# cli/path_utils.py

import os

TRACKER_FILE_EXTENSION = ".json"


def sanitize_name(name: str) -> str:
    """
    Sanitizes a tracker name for use in file paths.

    Args:
        name (str): The input string to sanitize.

    Returns:
        A string with leading and trailing whitespace removed and internal spaces and path separators replaced with underscores.
    """
    sanitized = name.strip().replace(" ", "_")
    return sanitized.replace(os.sep, "_").replace("/", "_")


def expand_path(path: str) -> str:
    """
    Expands `~` and resolves a user-entered path to an absolute path.
    """
    return os.path.abspath(os.path.expanduser(path.strip()))


def get_save_path(tracker_name: str, user_input: str | None) -> str:
    """
    Resolves a save file path for a `Tracker` based on user input or the default location.

    Args:
        tracker_name (str): The sanitized tracker name.
        user_input (str | None): An optional user-specified file path. If None, the default path is used.

    Returns:
        A resolved path string. If user input is provided, it is expanded and returned directly.
        Otherwise, defaults to: `~/Documents/Trackers/<tracker_name>.json`.
    """
    if user_input is not None:
        return expand_path(user_input)
    else:
        documents = os.path.join(os.path.expanduser("~"), "Documents")
        return os.path.join(documents, "Trackers", tracker_name + TRACKER_FILE_EXTENSION)


def resolve_save_path(tracker_name: str, path_input: str | None) -> str:
    """
    Produces a save file path for a `Tracker` and ensures its parent directory exists.

    Args:
        tracker_name (str): The tracker name (may contain spaces).
        path_input (str | None): An optional file path string. If None, the default path is used.

    Returns:
        A fully resolved file path for storing the `Tracker`.

    Notes:
        - Creates the parent directory on disk (including its parents) if it does not exist.
    """
    save_path = get_save_path(sanitize_name(tracker_name), path_input)

    parent = os.path.dirname(save_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    return save_path


def file_exists(file_path: str) -> bool:
    return os.path.isfile(file_path)
