"""Content filter ratings."""

from __future__ import annotations

from enum import IntEnum


class Safety(IntEnum):
    """The result of a content filter request.

    Ratings are totally ordered: ``SAFE`` is the unique minimum and every
    other rating compares greater.
    """

    SAFE = 0
    SENSITIVE = 1
    UNSAFE = 2
    UNCERTAIN = 3

    @classmethod
    def from_code(cls, code: int | str) -> Safety:
        """Build a rating from its numeric label.

        Raises:
            ValueError: If the code is not a known rating. Out of range codes
                are rejected, never clamped.
        """
        if isinstance(code, str) and code.isascii() and code.isdigit():
            value = int(code)
        elif isinstance(code, int) and not isinstance(code, bool):
            value = code
        else:
            raise ValueError(f"invalid safety code: {code!r}")
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(f"safety code out of range: {value}") from e

    def __str__(self) -> str:
        return self.name.capitalize()
