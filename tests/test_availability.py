import logging
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

import pytest

from tech import ERA_COUNT, Era, Rating, TechProgression, TechProgressionError


def test_default_availability():
    tech = TechProgression()
    assert tech.availability == [Rating.A] * ERA_COUNT


def test_set_availability_overwrites_leading_eras():
    tech = TechProgression().set_availability("E", "E", "E", "E")
    tech.set_availability("C", Rating.D)
    assert tech.availability == [Rating.C, Rating.D, Rating.E, Rating.E]


def test_set_availability_drops_extra_eras():
    tech = TechProgression().set_availability("B", "C", "D", "E", "F", "X")
    assert tech.availability == [Rating.B, Rating.C, Rating.D, Rating.E]


def test_single_era_write():
    tech = TechProgression().set_era_availability(Era.CLAN_INVASION, "F")
    assert tech.get_base_availability(Era.CLAN_INVASION) is Rating.F
    assert tech.get_base_availability(2) is Rating.F
    assert tech.get_availability_code(2) == "F"


def test_first_era_can_be_written():
    tech = TechProgression().set_era_availability(Era.STAR_LEAGUE, "D")
    assert tech.get_base_availability(0) is Rating.D


def test_out_of_range_write_is_ignored(caplog):
    tech = TechProgression().set_availability("B", "C", "D", "E")
    before = list(tech.availability)
    with caplog.at_level(logging.DEBUG, logger="tech.Progression"):
        result = tech.set_era_availability(ERA_COUNT, "F")
        tech.set_era_availability(-1, "F")
    assert result is tech
    assert tech.availability == before
    assert "out-of-range era" in caplog.text


def test_out_of_range_read_is_unrated():
    tech = TechProgression()
    assert tech.get_base_availability(ERA_COUNT) is Rating.X
    assert tech.get_base_availability(-1) is Rating.X
    assert tech.get_availability_code(99) == "X"


def test_availability_for_year():
    tech = TechProgression().set_availability("C", "E", "D", "B")
    assert tech.get_base_availability_for_year(2750) is Rating.C
    assert tech.get_base_availability_for_year(2900) is Rating.E
    assert tech.get_base_availability_for_year(3067) is Rating.D
    assert tech.get_base_availability_for_year(3145) is Rating.B


def test_bad_rating_leaves_availability_untouched():
    tech = TechProgression().set_availability("B", "B", "B", "B")
    with pytest.raises(TechProgressionError):
        tech.set_availability("F", "Q")
    assert tech.availability == [Rating.B] * ERA_COUNT


def test_unconvertible_era_raises(caplog):
    tech = TechProgression()
    with caplog.at_level(logging.DEBUG, logger="tech.Progression"):
        with pytest.raises(TechProgressionError):
            tech.get_base_availability("late")
    with pytest.raises(TechProgressionError):
        tech.get_base_availability(None)
    with pytest.raises(TechProgressionError):
        tech.set_era_availability("late", "F")
    assert "Rejecting era 'late'" in caplog.text
