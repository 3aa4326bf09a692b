"""Tests for the education cost table."""

import pytest
from life_plan_jp.education import (
    EDUCATION_AGE_END,
    EDUCATION_AGE_START,
    annual_education_cost,
    child_living_surcharge,
)

BUILT_IN_TRACKS = ["all-public", "high-private", "middle-private"]


class TestAnnualEducationCost:
    @pytest.mark.parametrize("track", BUILT_IN_TRACKS + ["custom"])
    def test_zero_outside_window(self, track):
        assert annual_education_cost(track, 2, 100) == 0
        assert annual_education_cost(track, 22, 100) == 0
        assert annual_education_cost(track, -1, 100) == 0

    @pytest.mark.parametrize("track", BUILT_IN_TRACKS)
    def test_bands_cover_window(self, track):
        for age in range(EDUCATION_AGE_START, EDUCATION_AGE_END + 1):
            assert annual_education_cost(track, age) > 0, f"{track} age {age}"

    def test_custom_uses_manual_amount(self):
        assert annual_education_cost("custom", 3, 80) == 80
        assert annual_education_cost("custom", 21, 80) == 80

    def test_all_public(self):
        assert annual_education_cost("all-public", 4) == 20
        assert annual_education_cost("all-public", 11) == 35
        assert annual_education_cost("all-public", 12) == 50
        assert annual_education_cost("all-public", 18) == 60

    def test_private_tracks_diverge(self):
        assert annual_education_cost("high-private", 14) == 50
        assert annual_education_cost("high-private", 15) == 80
        assert annual_education_cost("middle-private", 12) == 120
        assert annual_education_cost("middle-private", 21) == 150

    def test_unknown_track_costs_nothing(self):
        assert annual_education_cost("boarding-school", 10) == 0


class TestChildLivingSurcharge:
    def test_bands(self):
        assert child_living_surcharge(12) == 0
        assert child_living_surcharge(13) == 36
        assert child_living_surcharge(15) == 36
        assert child_living_surcharge(16) == 60
        assert child_living_surcharge(22) == 60
        assert child_living_surcharge(23) == 0
