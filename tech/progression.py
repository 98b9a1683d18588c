from __future__ import annotations

"""
Technology progression through prototype, production, common use, extinction
and reintroduction, tracked separately for the Inner Sphere and the Clans.

Universe-wide dates merge the two factions: introduction milestones take the
earliest recorded date, while extinction only counts once every faction has
lost the technology.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from . import settings
from .errors import TechProgressionError
from .ratings import (
    ERA_COUNT,
    MILESTONE_COUNT,
    Era,
    Milestone,
    Rating,
    TechBase,
    era_for_year,
)

logger = logging.getLogger("tech.Progression")
logger.addHandler(logging.NullHandler())

DATE_NONE = settings.DATE_NONE

EraIndex = Union[Era, int]
RatingLike = Union[Rating, str, int]


def is_date_none(date: Optional[int]) -> bool:
    """True if ``date`` is unset.  ``None`` and negative years count as unset."""
    return date is None or date < 0


def _normalize_date(date: Optional[int]) -> int:
    return DATE_NONE if is_date_none(date) else int(date)


def earliest_date(d1: Optional[int], d2: Optional[int]) -> int:
    """Return the earlier of two dates, ignoring an unset date unless both are."""
    if is_date_none(d1):
        return _normalize_date(d2)
    if is_date_none(d2):
        return int(d1)
    return min(d1, d2)


def format_date(date: Optional[int], approximate: bool = False) -> str:
    """Format a year for display, e.g. ``2400``, ``~2400`` or ``-``."""
    if is_date_none(date):
        return settings.DATE_NONE_LABEL
    prefix = settings.APPROXIMATE_PREFIX if approximate else ""
    return f"{prefix}{date}"


def _era_index(era: EraIndex) -> int:
    if isinstance(era, Era):
        return era.value
    try:
        return int(era)
    except (TypeError, ValueError):
        logger.debug("Rejecting era %r", era)
        raise TechProgressionError(f"Invalid era: {era!r}") from None


def _fill(values: Iterable, fill) -> list:
    """Copy up to MILESTONE_COUNT values, padding the rest with ``fill``."""
    result = [fill] * MILESTONE_COUNT
    for i, value in enumerate(list(values)[:MILESTONE_COUNT]):
        result[i] = value
    return result


@dataclass
class TechProgression:
    """
    Progression record for a single piece of technology.

    Attributes:
      tech_base: Faction the technology belongs to.
      is_advancement: Inner Sphere dates indexed by Milestone.
      clan_advancement: Clan dates indexed by Milestone.
      is_approx: Inner Sphere flags marking dates as approximate.
      clan_approx: Clan flags marking dates as approximate.
      intro_level: Treat the standard rules level as the intro box set.
      unofficial: Technology is not from an official rules source.
      tech_rating: Letter rating of the technology itself.
      availability: Availability rating per era, indexed by Era.

    All setters return the record so configuration can be chained::

        TechProgression(TechBase.IS).set_is_advancement(2400, 2420).set_tech_rating("D")
    """

    tech_base: TechBase = TechBase.ALL
    is_advancement: List[int] = field(
        default_factory=lambda: [DATE_NONE] * MILESTONE_COUNT
    )
    clan_advancement: List[int] = field(
        default_factory=lambda: [DATE_NONE] * MILESTONE_COUNT
    )
    is_approx: List[bool] = field(default_factory=lambda: [False] * MILESTONE_COUNT)
    clan_approx: List[bool] = field(default_factory=lambda: [False] * MILESTONE_COUNT)
    intro_level: bool = False
    unofficial: bool = False
    tech_rating: Rating = field(
        default_factory=lambda: Rating.from_code(settings.DEFAULT_TECH_RATING)
    )
    availability: List[Rating] = field(
        default_factory=lambda: [Rating.from_code(settings.DEFAULT_AVAILABILITY)]
        * ERA_COUNT
    )

    def __post_init__(self) -> None:
        self.tech_base = TechBase.coerce(self.tech_base)
        self.is_advancement = _fill(map(_normalize_date, self.is_advancement), DATE_NONE)
        self.clan_advancement = _fill(
            map(_normalize_date, self.clan_advancement), DATE_NONE
        )
        self.is_approx = _fill(map(bool, self.is_approx), False)
        self.clan_approx = _fill(map(bool, self.clan_approx), False)
        self.tech_rating = Rating.coerce(self.tech_rating)
        default = Rating.from_code(settings.DEFAULT_AVAILABILITY)
        avail = [Rating.coerce(a) for a in self.availability[:ERA_COUNT]]
        self.availability = avail + [default] * (ERA_COUNT - len(avail))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_tech_base(self, base: Union[TechBase, str, int]) -> "TechProgression":
        self.tech_base = TechBase.coerce(base)
        return self

    def get_tech_base(self) -> TechBase:
        return self.tech_base

    def set_is_advancement(self, *dates: Optional[int]) -> "TechProgression":
        """Replace all Inner Sphere dates; missing trailing dates become DATE_NONE."""
        self.is_advancement = _fill(map(_normalize_date, dates), DATE_NONE)
        return self

    def set_is_approximate(self, *flags: bool) -> "TechProgression":
        self.is_approx = _fill(map(bool, flags), False)
        return self

    def set_clan_advancement(self, *dates: Optional[int]) -> "TechProgression":
        """Replace all Clan dates; missing trailing dates become DATE_NONE."""
        self.clan_advancement = _fill(map(_normalize_date, dates), DATE_NONE)
        return self

    def set_clan_approximate(self, *flags: bool) -> "TechProgression":
        self.clan_approx = _fill(map(bool, flags), False)
        return self

    def set_advancement(self, *dates: Optional[int]) -> "TechProgression":
        """Give both factions the same dates."""
        self.set_is_advancement(*dates)
        self.set_clan_advancement(*dates)
        return self

    def set_approximate(self, *flags: bool) -> "TechProgression":
        self.set_is_approximate(*flags)
        self.set_clan_approximate(*flags)
        return self

    def set_intro_level(self, intro: bool) -> "TechProgression":
        self.intro_level = bool(intro)
        return self

    def is_intro_level(self) -> bool:
        return self.intro_level

    def set_unofficial(self, unofficial: bool) -> "TechProgression":
        self.unofficial = bool(unofficial)
        return self

    def is_unofficial(self) -> bool:
        return self.unofficial

    def set_tech_rating(self, rating: RatingLike) -> "TechProgression":
        self.tech_rating = Rating.coerce(rating)
        return self

    def get_tech_rating(self) -> Rating:
        return self.tech_rating

    def set_availability(self, *ratings: RatingLike) -> "TechProgression":
        """Overwrite availability from the first era onward; later eras keep their value."""
        # Convert everything first so a bad rating leaves the record untouched
        coerced = [Rating.coerce(r) for r in ratings[:ERA_COUNT]]
        for i, rating in enumerate(coerced):
            self.availability[i] = rating
        return self

    def set_era_availability(self, era: EraIndex, rating: RatingLike) -> "TechProgression":
        idx = _era_index(era)
        if 0 <= idx < len(self.availability):
            self.availability[idx] = Rating.coerce(rating)
        else:
            logger.debug("Ignoring availability for out-of-range era %s", era)
        return self

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    def _faction_dates(self, clan: bool) -> List[int]:
        return self.clan_advancement if clan else self.is_advancement

    def _both_extinct(self) -> bool:
        return not (
            is_date_none(self.is_advancement[Milestone.EXTINCT.value])
            or is_date_none(self.clan_advancement[Milestone.EXTINCT.value])
        )

    def get_date(self, milestone: Milestone, clan: Optional[bool] = None) -> int:
        """
        Date of ``milestone`` for one faction, or universe-wide when ``clan`` is None.
        """
        if clan is not None:
            return self._faction_dates(clan)[milestone.value]
        is_date = self.is_advancement[milestone.value]
        clan_date = self.clan_advancement[milestone.value]
        if milestone is Milestone.EXTINCT:
            if not self._both_extinct():
                return DATE_NONE
            return max(is_date, clan_date)
        if milestone is Milestone.REINTRODUCED and not self._both_extinct():
            return DATE_NONE
        return earliest_date(is_date, clan_date)

    def get_prototype_date(self, clan: Optional[bool] = None) -> int:
        return self.get_date(Milestone.PROTOTYPE, clan)

    def get_production_date(self, clan: Optional[bool] = None) -> int:
        return self.get_date(Milestone.PRODUCTION, clan)

    def get_common_date(self, clan: Optional[bool] = None) -> int:
        return self.get_date(Milestone.COMMON, clan)

    def get_extinction_date(self, clan: Optional[bool] = None) -> int:
        """Universe-wide, the technology is extinct only after every faction loses it."""
        return self.get_date(Milestone.EXTINCT, clan)

    def get_reintroduction_date(self, clan: Optional[bool] = None) -> int:
        return self.get_date(Milestone.REINTRODUCED, clan)

    def get_introduction_date(self, clan: Optional[bool] = None) -> int:
        """First meaningful entry point: prototype, then production, then common."""
        prototype = self.get_prototype_date(clan)
        if prototype > 0:
            return prototype
        production = self.get_production_date(clan)
        if production > 0:
            return production
        return self.get_common_date(clan)

    def is_approximate(self, milestone: Milestone, clan: Optional[bool] = None) -> bool:
        """
        Whether the date for ``milestone`` is approximate.  Universe-wide, a date
        is approximate if a faction supplying that date marks it as such.
        """
        if clan is not None:
            flags = self.clan_approx if clan else self.is_approx
            return flags[milestone.value]
        date = self.get_date(milestone)
        if is_date_none(date):
            return False
        return (
            self.is_advancement[milestone.value] == date
            and self.is_approx[milestone.value]
        ) or (
            self.clan_advancement[milestone.value] == date
            and self.clan_approx[milestone.value]
        )

    def get_date_label(self, milestone: Milestone, clan: Optional[bool] = None) -> str:
        return format_date(
            self.get_date(milestone, clan), self.is_approximate(milestone, clan)
        )

    def is_extinct(self, year: int, clan: Optional[bool] = None) -> bool:
        """True if the technology has died out by ``year`` and not come back yet."""
        extinct = self.get_extinction_date(clan)
        if is_date_none(extinct) or year <= extinct:
            return False
        reintroduced = self.get_reintroduction_date(clan)
        return is_date_none(reintroduced) or year < reintroduced

    def is_available_in(self, year: int, clan: Optional[bool] = None) -> bool:
        """True if the technology has been introduced by ``year`` and is in use."""
        intro = self.get_introduction_date(clan)
        if is_date_none(intro) or year < intro:
            return False
        return not self.is_extinct(year, clan)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------
    def is_clan(self) -> bool:
        return self.tech_base is TechBase.CLAN

    def is_mixed_tech(self) -> bool:
        return self.tech_base is TechBase.ALL

    def get_base_availability(self, era: EraIndex) -> Rating:
        """Availability in ``era``; unknown eras are rated X."""
        idx = _era_index(era)
        if idx < 0 or idx >= len(self.availability):
            return Rating.X
        return self.availability[idx]

    def get_base_availability_for_year(self, year: int) -> Rating:
        return self.get_base_availability(era_for_year(year))

    def get_availability_code(self, era: EraIndex) -> str:
        return self.get_base_availability(era).code

    # ------------------------------------------------------------------
    # Validation and copies
    # ------------------------------------------------------------------
    def validation_errors(self) -> List[str]:
        """Describe chronological problems in the recorded dates."""
        errors: List[str] = []
        for clan in (False, True):
            faction = "Clan" if clan else "IS"
            dates = self._faction_dates(clan)
            # Compare each recorded entry milestone with the last recorded one
            previous = None
            for milestone in (Milestone.PROTOTYPE, Milestone.PRODUCTION, Milestone.COMMON):
                date = dates[milestone.value]
                if is_date_none(date):
                    continue
                if previous is not None and previous[1] > date:
                    errors.append(
                        f"{faction} {previous[0].name.lower()} date {previous[1]} is after "
                        f"{milestone.name.lower()} date {date}"
                    )
                previous = (milestone, date)
            extinct = dates[Milestone.EXTINCT.value]
            reintroduced = dates[Milestone.REINTRODUCED.value]
            if not is_date_none(reintroduced):
                if is_date_none(extinct):
                    errors.append(
                        f"{faction} reintroduction date {reintroduced} has no extinction date"
                    )
                elif reintroduced < extinct:
                    errors.append(
                        f"{faction} reintroduction date {reintroduced} is before "
                        f"extinction date {extinct}"
                    )
            intro = self.get_introduction_date(clan)
            if not is_date_none(extinct) and not is_date_none(intro) and extinct < intro:
                errors.append(
                    f"{faction} extinction date {extinct} is before introduction date {intro}"
                )
        return errors

    def validate(self) -> "TechProgression":
        """Raise TechProgressionError if the dates are out of order."""
        errors = self.validation_errors()
        if errors:
            logger.warning("Invalid tech progression %r: %s", self, "; ".join(errors))
            raise TechProgressionError("; ".join(errors))
        return self

    def copy(self) -> "TechProgression":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        def dates(values: List[int], flags: List[bool]) -> str:
            return "/".join(format_date(d, a) for d, a in zip(values, flags))

        return (
            f"<TechProgression base={self.tech_base.name} rating={self.tech_rating.code} "
            f"IS={dates(self.is_advancement, self.is_approx)} "
            f"Clan={dates(self.clan_advancement, self.clan_approx)}>"
        )


__all__ = [
    "DATE_NONE",
    "TechProgression",
    "earliest_date",
    "format_date",
    "is_date_none",
]
