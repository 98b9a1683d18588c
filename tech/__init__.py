"""Technology progression package exposing the progression record and ratings."""

from .errors import TechProgressionError
from .progression import (
    DATE_NONE,
    TechProgression,
    earliest_date,
    format_date,
    is_date_none,
)
from .ratings import (
    ERA_COUNT,
    MILESTONE_COUNT,
    Era,
    Milestone,
    Rating,
    TechBase,
    era_for_year,
)

__all__ = [
    "DATE_NONE",
    "ERA_COUNT",
    "MILESTONE_COUNT",
    "Era",
    "Milestone",
    "Rating",
    "TechBase",
    "TechProgression",
    "TechProgressionError",
    "earliest_date",
    "era_for_year",
    "format_date",
    "is_date_none",
]
