"""
Tests for services/scoring.py - screening score calculation.
"""

import pytest

from hirelane.services.scoring import (
    DEFAULT_KEYWORDS,
    availability_points,
    calculate_screening_score,
    count_keywords,
    experience_points,
    parse_int,
    stack_points,
    system_design_points,
)


class TestParseInt:
    @pytest.mark.parametrize("raw,expected", [
        ("8", 8),
        (" 12 ", 12),
        ("5 years", 5),
        ("3.7", 3),
        ("-2", -2),
        ("abc", 0),
        ("", 0),
        (None, 0),
    ])
    def test_leading_integer(self, raw, expected):
        assert parse_int(raw) == expected


class TestExperiencePoints:
    @pytest.mark.parametrize("years", ["8", "9", "15", "40"])
    def test_eight_or_more_years_is_max(self, years):
        assert experience_points({"yearsExperience": years}) == 30

    @pytest.mark.parametrize("years,points", [("5", 25), ("7", 25), ("3", 20), ("4", 20), ("1", 10), ("2", 10)])
    def test_tiers(self, years, points):
        assert experience_points({"yearsExperience": years}) == points

    @pytest.mark.parametrize("years", ["0", "", "n/a", "-3"])
    def test_below_one_or_unparsable_is_floor(self, years):
        assert experience_points({"yearsExperience": years}) == 5

    def test_missing_key_is_floor(self):
        assert experience_points({}) == 5


class TestStackPoints:
    @pytest.mark.parametrize("years,points", [
        ("5", 30), ("10", 30), ("3", 25), ("4", 25), ("2", 20), ("1", 10), ("0", 0), ("none", 0),
    ])
    def test_tiers(self, years, points):
        assert stack_points({"reactExperience": years}) == points


class TestSystemDesignPoints:
    def test_keywords_counted_once_each(self):
        text = "cache cache cache CACHE"
        assert count_keywords(text, ["cache"]) == 1

    def test_matching_is_case_insensitive_substring(self):
        assert count_keywords("We used Kubernetes and AWS", ["kubernetes", "aws"]) == 2

    def test_six_keywords_is_max(self):
        answer = "redis postgres docker kubernetes monitoring security"
        assert system_design_points({"systemDesign": answer}, DEFAULT_KEYWORDS) == 20

    def test_four_keywords(self):
        answer = "redis postgres docker kubernetes"
        assert system_design_points({"systemDesign": answer}, DEFAULT_KEYWORDS) == 15

    def test_two_keywords(self):
        answer = "redis and kubernetes"
        assert system_design_points({"systemDesign": answer}, DEFAULT_KEYWORDS) == 10

    def test_long_answer_without_keywords(self):
        answer = "I led a small team rebuilding our internal tooling from scratch over a year."
        assert len(answer) > 50
        assert system_design_points({"systemDesign": answer}, ["kubernetes"]) == 5

    def test_short_answer_without_keywords(self):
        assert system_design_points({"systemDesign": "Not much."}, DEFAULT_KEYWORDS) == 0

    def test_custom_vocabulary(self):
        answer = "graphql federation with relay"
        assert system_design_points({"systemDesign": answer}, ["graphql", "relay"]) == 10


class TestAvailabilityPoints:
    def test_immediate_and_no_notice_is_capped_at_twenty(self):
        assert availability_points({"availability": "immediate", "noticePeriod": "none"}) == 20

    @pytest.mark.parametrize("availability,notice,points", [
        ("2weeks", "1week", 16),
        ("1month", "2weeks", 12),
        ("2months", "1month", 7),
        ("3months", "3months", 1),
        ("immediate", "", 10),
        ("", "none", 10),
        ("someday", "forever", 0),
    ])
    def test_sum_of_both_scales(self, availability, notice, points):
        assert availability_points({"availability": availability, "noticePeriod": notice}) == min(20, points)


class TestCalculateScreeningScore:
    def test_best_answers_score_one_hundred(self, strong_answers):
        assert calculate_screening_score(strong_answers) == 100

    def test_weakest_answers(self, weak_answers):
        # 5 + 0 + 0 + min(20, 1 + 0)
        assert calculate_screening_score(weak_answers) == 6

    def test_empty_answers(self):
        assert calculate_screening_score({}) == 5
        assert calculate_screening_score(None) == 5

    def test_is_deterministic(self, strong_answers):
        assert calculate_screening_score(strong_answers) == calculate_screening_score(dict(strong_answers))

    def test_malformed_input_never_raises(self):
        answers = {"yearsExperience": "lots", "reactExperience": None, "systemDesign": None,
                   "availability": None, "noticePeriod": 42}
        score = calculate_screening_score(answers)
        assert 0 <= score <= 100

    def test_custom_keywords_change_only_design_points(self, strong_answers):
        score = calculate_screening_score(strong_answers, keywords=["nothing-matches"])
        # design answer is longer than 50 chars, so it keeps the 5 point floor
        assert score == 30 + 30 + 5 + 20
