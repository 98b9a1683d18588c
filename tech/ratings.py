from __future__ import annotations

"""Tech base, rating, era and milestone enumerations."""

from bisect import bisect_right
from enum import Enum
import logging
from typing import Union

from . import settings
from .errors import TechProgressionError

logger = logging.getLogger("tech.Ratings")
logger.addHandler(logging.NullHandler())


class TechBase(Enum):
    """Which faction a technology belongs to."""

    ALL = 0
    IS = 1
    CLAN = 2

    @classmethod
    def coerce(cls, value: Union["TechBase", str, int]) -> "TechBase":
        """Accept a TechBase, its name (case-insensitive) or its ordinal."""
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, str):
                return cls[value.strip().upper()]
            return cls(value)
        except (KeyError, ValueError):
            logger.debug("Rejecting tech base %r", value)
            valid = ", ".join(b.name for b in cls)
            raise TechProgressionError(
                f"Invalid tech base '{value}'. Valid values: {valid}"
            ) from None


class Milestone(Enum):
    """Slots of a faction's advancement list, in timeline order."""

    PROTOTYPE = 0
    PRODUCTION = 1
    COMMON = 2
    EXTINCT = 3
    REINTRODUCED = 4


MILESTONE_COUNT = len(Milestone)


class Rating(Enum):
    """Letter rating used for both tech rating and era availability."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4
    F = 5
    X = 6

    @property
    def code(self) -> str:
        return self.name

    @classmethod
    def from_code(cls, code: str) -> "Rating":
        """Look up a rating by its letter, case-insensitively."""
        key = str(code).strip().upper()
        try:
            return cls[key]
        except KeyError:
            logger.debug("Rejecting rating code %r", code)
            valid = ", ".join(r.name for r in cls)
            raise TechProgressionError(
                f"Invalid rating '{code}'. Valid values: {valid}"
            ) from None

    @classmethod
    def coerce(cls, value: Union["Rating", str, int]) -> "Rating":
        """Accept a Rating, its letter code or its ordinal."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_code(value)
        try:
            return cls(value)
        except ValueError:
            logger.debug("Rejecting rating ordinal %r", value)
            raise TechProgressionError(f"Invalid rating ordinal: {value}") from None

    def __lt__(self, other: "Rating") -> bool:
        if not isinstance(other, Rating):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: "Rating") -> bool:
        if not isinstance(other, Rating):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: "Rating") -> bool:
        if not isinstance(other, Rating):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: "Rating") -> bool:
        if not isinstance(other, Rating):
            return NotImplemented
        return self.value >= other.value


class Era(Enum):
    """Game eras covered by availability ratings."""

    STAR_LEAGUE = 0
    SUCCESSION_WARS = 1
    CLAN_INVASION = 2
    DARK_AGE = 3


ERA_COUNT = len(Era)


def era_for_year(year: int) -> Era:
    """Return the era a game year falls in."""
    return Era(bisect_right(settings.ERA_START_YEARS, year))


__all__ = [
    "TechBase",
    "Milestone",
    "MILESTONE_COUNT",
    "Rating",
    "Era",
    "ERA_COUNT",
    "era_for_year",
]
