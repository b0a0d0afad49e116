# core/formatters.py

# all pure utilities & date/datetime helpers
# must never import from models!

import datetime
from typing import Any

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_list_with_and(items: list[Any]) -> str:
    items = [str(item) for item in items]

    if not items:
        return ""

    if len(items) == 1:
        return items[0]

    if len(items) == 2:
        return " and ".join(items)

    return ", ".join(items[:-1]) + ", and " + items[-1]


# === numeric formatters ===


def format_weight(weight: float) -> str:
    return f"{weight:>5.1f} %"


def format_optional(value: Any, placeholder: str = "None") -> str:
    return placeholder if value is None else str(value)


# === date formatters ===


def format_due_date_from_datetime(due_date_dt: datetime.datetime | None) -> str:
    due_date_str = due_date_dt.strftime("%Y-%m-%d") if due_date_dt else None
    due_time_str = due_date_dt.strftime("%H:%M") if due_date_dt else None

    return format_due_date_from_strings(due_date_str, due_time_str)


def format_due_date_from_strings(
    due_date_str: str | None,
    due_time_str: str | None,
) -> str:
    return (
        f"{due_date_str} at {due_time_str}"
        if due_date_str and due_time_str
        else "[NO DUE DATE]"
    )


def parse_due_date(due_date: str | None, due_time: str | None) -> datetime.datetime | None:
    """
    Parses a due date from YYYY-MM-DD and 24-hour HH:MM strings.

    Returns:
        A `datetime.datetime`, or None if either part is missing.

    Raises:
        ValueError: If the strings do not match the expected formats.
    """
    if not due_date or not due_time:
        return None

    return datetime.datetime.strptime(f"{due_date} {due_time}", "%Y-%m-%d %H:%M")
