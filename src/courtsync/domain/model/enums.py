"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Category(StrEnum):
    MENS_SINGLES = "ms"
    MENS_DOUBLES = "md"
    WOMENS_SINGLES = "ws"
    WOMENS_DOUBLES = "wd"
    MIXED_DOUBLES = "xd"

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]


_CATEGORY_DESCRIPTIONS: dict[Category, str] = {
    Category.MENS_SINGLES: "Men's singles",
    Category.MENS_DOUBLES: "Men's doubles",
    Category.WOMENS_SINGLES: "Women's singles",
    Category.WOMENS_DOUBLES: "Women's doubles",
    Category.MIXED_DOUBLES: "Mixed doubles",
}


class DrawType(IntEnum):
    """Draw layouts as numbered by TournamentSoftware.

    Only the three values below carry a known planning-code layout; any other
    number found in a message is kept as a plain ``int``.
    """

    ELIMINATION = 1
    POOL = 2
    QUALIFICATION = 6
