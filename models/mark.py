# models/mark.py

"""
The Mark model represents the grade awarded for an assignment.

A `Mark` is a tagged value under one of several grading schemes:
- `Percent(value)`: a percentage between 0 and 100, inclusive.
- `Letter(char)`: a single uppercase ASCII letter, 'A' through 'Z'.
- `OutOf(numerator, denominator)`: X marks out of Y, with 0 <= X <= Y.

Variants may be constructed directly without validation (handy for literals and for
deserialized data), so `check_valid()` is always available for re-verification. The smart
constructors `Mark.percent()`, `Mark.letter()`, and `Mark.out_of()` validate first and
return a `Response`.

Marks are immutable, hashable value objects with no identity.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

from core.config import MAX_TOTAL_VALUE, MIN_PERCENT_WARNING
from core.errors import ValidationError
from core.response import ErrorCode, Response

logger = logging.getLogger(__name__)


class MarkKind(str, Enum):
    PERCENT = "percent"
    LETTER = "letter"
    OUT_OF = "out_of"


class Mark:
    __slots__ = ()

    kind: MarkKind

    # === public classmethods ===

    @classmethod
    def percent(cls, value: Any) -> Response:
        """
        Creates a validated `Percent` mark.

        Args:
            value (Any): The percentage, castable to a finite float within 0 to 100.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the value is a valid percentage.
                - detail (str | None): On failure, a description including the rejected value.
                - error (ErrorCode | str | None):
                    - `ErrorCode.PERCENT_OUT_OF_RANGE` if the value is outside 0 to 100 or non-finite.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the value is not a number.
                - status_code (int | None): 200 on success, 400 on failure.
                - data (dict): On success, "mark" (Percent). On failure, "value" (Any).

        Notes:
            - Logs a warning for non-zero values below 0.1, which are likely fractions typed as percentages.
        """
        return cls._create(lambda: Percent(Percent.validate_percent_input(value)))

    @classmethod
    def letter(cls, char: Any) -> Response:
        """
        Creates a validated `Letter` mark.

        Fails with `ErrorCode.LETTER_OUT_OF_RANGE` unless `char` is a single character from 'A' to 'Z'.
        """
        return cls._create(lambda: Letter(Letter.validate_letter_input(char)))

    @classmethod
    def out_of(cls, numerator: Any, denominator: Any) -> Response:
        """
        Creates a validated `OutOf` mark.

        Fails with `ErrorCode.OUT_OF_INVALID` if either value is not a non-negative integer
        or if the numerator is greater than the denominator.
        """
        return cls._create(
            lambda: OutOf(*OutOf.validate_out_of_input(numerator, denominator))
        )

    @classmethod
    def parse(cls, text: str) -> Response:
        """
        Parses a mark from its display form.

        Accepts "85.5%" or a bare number such as "85.5" for percentages, a single letter such as
        "A", and "15/20" or "15 / 20" for X-out-of-Y marks.

        Returns:
            Response: As for the smart constructors. Text that matches no scheme fails with
            `ErrorCode.INVALID_INPUT`.
        """
        text = text.strip()

        if "/" in text:
            numerator, _, denominator = text.partition("/")
            try:
                return cls.out_of(int(numerator.strip()), int(denominator.strip()))

            except ValueError:
                return cls._parse_failure(text)

        if len(text) == 1 and text.isalpha():
            return cls.letter(text)

        number = text[:-1].strip() if text.endswith("%") else text
        try:
            value = float(number)

        except ValueError:
            return cls._parse_failure(text)

        return cls.percent(value)

    @classmethod
    def from_dict(cls, data: dict) -> Mark:
        """
        Rebuilds a mark from `to_dict()` output without validating it.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If the kind is not recognized.
        """
        kind = MarkKind(data["kind"])

        if kind is MarkKind.PERCENT:
            return Percent(data["value"])

        if kind is MarkKind.LETTER:
            return Letter(data["value"])

        return OutOf(data["numerator"], data["denominator"])

    # === public methods ===

    def check_valid(self) -> Response:
        """
        Re-validates an already-constructed mark.

        Returns:
            Response: success with "mark" in data if the variant's range holds, otherwise a
            failure carrying the variant-specific `ErrorCode`.

        Notes:
            - This method is read-only and does not raise.
        """
        try:
            self.validate()

        except ValidationError as e:
            return Response.from_error(e)

        else:
            return Response.succeed(data={"mark": self})

    def validate(self) -> None:
        raise NotImplementedError

    def as_percent(self) -> float | None:
        return None

    def to_dict(self) -> dict:
        raise NotImplementedError

    # === helper methods ===

    @staticmethod
    def _create(build) -> Response:
        try:
            mark = build()

        except ValidationError as e:
            logger.info("Rejected mark: %s", e)
            return Response.from_error(e)

        else:
            return Response.succeed(data={"mark": mark})

    @staticmethod
    def _parse_failure(text: str) -> Response:
        return Response.fail(
            detail=f"Could not parse a mark from '{text}'.",
            error=ErrorCode.INVALID_INPUT,
            data={"value": text},
        )


class Percent(Mark):
    __slots__ = ("_value",)

    kind = MarkKind.PERCENT

    def __init__(self, value: float):
        self._value = value

    @property
    def value(self) -> float:
        return self._value

    def validate(self) -> None:
        Percent.validate_percent_input(self._value)

    def as_percent(self) -> float | None:
        return float(self._value)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "value": self._value}

    # === data validators ===

    @staticmethod
    def validate_percent_input(value: Any) -> float:
        """
        Validates and normalizes input for a `Percent` mark.

        Accepts any input, and then:
            - Casts to float.
            - Ensures the number is finite.
            - Ensures it is between 0 and 100, inclusive.

        Returns:
            The normalized percentage (float).

        Raises:
            ValidationError: If the input cannot be cast to float, is non-finite, or is out of bounds.
        """
        try:
            pct = float(value)

        except (TypeError, ValueError):
            raise ValidationError(
                f"Mark::Percent -> value ({value!r}) is not a number",
                ErrorCode.INVALID_FIELD_VALUE,
                data={"value": value},
            )

        if not math.isfinite(pct) or not 0.0 <= pct <= MAX_TOTAL_VALUE:
            raise ValidationError(
                f"Mark::Percent -> value ({pct}) is outside the valid range: 0.0 to 100.0",
                ErrorCode.PERCENT_OUT_OF_RANGE,
                data={"value": pct},
            )

        if 0.0 < pct < MIN_PERCENT_WARNING:
            logger.warning(
                "Percent range is 0.0 to 100.0 -> provided value (%s) might not be correct.",
                pct,
            )

        return pct

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Percent) and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.kind, self._value))

    def __repr__(self) -> str:
        return f"Percent({self._value!r})"

    def __str__(self) -> str:
        return f"{self._value:.1f}%"


class Letter(Mark):
    __slots__ = ("_char",)

    kind = MarkKind.LETTER

    def __init__(self, char: str):
        self._char = char

    @property
    def char(self) -> str:
        return self._char

    def validate(self) -> None:
        Letter.validate_letter_input(self._char)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "value": self._char}

    @staticmethod
    def validate_letter_input(char: Any) -> str:
        """
        Ensures the input is a single character within 'A' to 'Z'.

        Raises:
            ValidationError: If it is not.
        """
        if not (isinstance(char, str) and len(char) == 1 and "A" <= char <= "Z"):
            raise ValidationError(
                f"Mark::Letter -> char ({char!r}) is outside the valid range: A to Z",
                ErrorCode.LETTER_OUT_OF_RANGE,
                data={"value": char},
            )

        return char

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Letter) and self._char == other._char

    def __hash__(self) -> int:
        return hash((self.kind, self._char))

    def __repr__(self) -> str:
        return f"Letter({self._char!r})"

    def __str__(self) -> str:
        return f"{self._char}"


class OutOf(Mark):
    __slots__ = ("_numerator", "_denominator")

    kind = MarkKind.OUT_OF

    def __init__(self, numerator: int, denominator: int):
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def validate(self) -> None:
        OutOf.validate_out_of_input(self._numerator, self._denominator)

    def as_percent(self) -> float | None:
        if not self._denominator:
            return None

        return 100.0 * self._numerator / self._denominator

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "numerator": self._numerator,
            "denominator": self._denominator,
        }

    @staticmethod
    def validate_out_of_input(numerator: Any, denominator: Any) -> tuple[int, int]:
        """
        Validates input for an `OutOf` mark.

        Both values must be non-negative integers (bools are rejected) and the numerator
        must not exceed the denominator.

        Raises:
            ValidationError: If any condition fails.
        """
        data = {"numerator": numerator, "denominator": denominator}

        for part in (numerator, denominator):
            if isinstance(part, bool) or not isinstance(part, int) or part < 0:
                raise ValidationError(
                    f"Mark::OutOf -> values ({numerator!r}, {denominator!r}) must be non-negative integers",
                    ErrorCode.OUT_OF_INVALID,
                    data=data,
                )

        if numerator > denominator:
            raise ValidationError(
                f"Mark::OutOf -> left value ({numerator}) is greater than right value ({denominator})",
                ErrorCode.OUT_OF_INVALID,
                data=data,
            )

        return numerator, denominator

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, OutOf)
            and self._numerator == other._numerator
            and self._denominator == other._denominator
        )

    def __hash__(self) -> int:
        return hash((self.kind, self._numerator, self._denominator))

    def __repr__(self) -> str:
        return f"OutOf({self._numerator!r}, {self._denominator!r})"

    def __str__(self) -> str:
        return f"{self._numerator} / {self._denominator}"
