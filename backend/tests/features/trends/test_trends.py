"""
Tests for improvement trends and big movers.

Cutoff used throughout: 2024-10-01.
"""

from datetime import date

import pytest

from conftest import RATED_COURSE, UNRATED_COURSE, make_athlete, make_race, make_result, make_school
from xcstats.features.trends import (
    DatedTime,
    big_movers,
    history_from_results,
    improvement,
    recent_top_performances,
)
from xcstats.shared.constants import Gender


CUTOFF = date(2024, 10, 1)

EARLY = make_race("early", course=RATED_COURSE, meet_date=date(2024, 9, 14))
LATE = make_race("late", course=RATED_COURSE, meet_date=date(2024, 10, 20))
LATE_UNRATED = make_race("late-city", course=UNRATED_COURSE, meet_date=date(2024, 10, 12))


def dated(month: int, day: int, time: float) -> DatedTime:
    return DatedTime(result_date=date(2024, month, day), normalized_time=time)


# =============================================================================
# Test improvement
# =============================================================================

class TestImprovement:
    """Best since cutoff vs best before."""

    def test_improvement_percentage(self):
        report = improvement([dated(9, 1, 320), dated(10, 15, 300)], CUTOFF)

        assert report.improved
        assert report.old_pr == 320
        assert report.new_pr == 300
        assert report.improvement_pct == pytest.approx(6.25)

    def test_uses_best_of_each_window(self):
        history = [dated(9, 1, 330), dated(9, 20, 320), dated(10, 5, 310), dated(10, 15, 300)]

        report = improvement(history, CUTOFF)

        assert report.old_pr == 320
        assert report.new_pr == 300
        assert report.races_before == 2
        assert report.races_since == 2

    def test_cutoff_day_counts_as_recent(self):
        report = improvement([dated(9, 1, 320), dated(10, 1, 300)], CUTOFF)
        assert report.races_since == 1

    def test_no_recent_results(self):
        assert improvement([dated(9, 1, 320)], CUTOFF) is None

    def test_no_earlier_results(self):
        assert improvement([dated(10, 15, 300)], CUTOFF) is None

    def test_empty_history(self):
        assert improvement([], CUTOFF) is None

    @pytest.mark.parametrize("recent", [320, 330])
    def test_slower_or_equal_is_not_improvement(self, recent):
        report = improvement([dated(9, 1, 320), dated(10, 15, recent)], CUTOFF)

        assert not report.improved
        assert report.improvement_pct is None

    def test_history_from_results_skips_unrated(self):
        athlete = make_athlete("h")
        results = [
            make_result(athlete, LATE, 990, result_id="late"),
            make_result(athlete, LATE_UNRATED, 900, result_id="city"),
            make_result(athlete, EARLY, 1000, result_id="early"),
        ]

        history = history_from_results(results)

        assert [h.result_id for h in history] == ["early", "late"]


# =============================================================================
# Test big_movers
# =============================================================================

class TestBigMovers:
    """Top improvers per gender."""

    @pytest.fixture
    def results(self):
        school = make_school("alpha")
        b1 = make_athlete("b1", school=school)
        b2 = make_athlete("b2", school=school)
        b3 = make_athlete("b3", school=school)
        # Girl entered in races labelled as boys' races
        g1 = make_athlete("g1", school=school, gender=Gender.FEMALE)
        return [
            make_result(b1, EARLY, 1000),
            make_result(b1, LATE, 950),     # 5%
            make_result(b2, EARLY, 1100),
            make_result(b2, LATE, 990),     # 10%
            make_result(b3, EARLY, 1000),
            make_result(b3, LATE, 1010),    # slower
            make_result(g1, EARLY, 1200),
            make_result(g1, LATE, 1140),    # 5%
        ]

    def test_sorted_by_improvement(self, results):
        movers = big_movers(results, CUTOFF)

        assert [m.athlete_id for m in movers.boys] == ["b2", "b1"]
        assert movers.boys[0].report.improvement_pct == pytest.approx(10.0)
        assert movers.boys[0].school_name == "Alpha High School"

    def test_genders_never_mix(self, results):
        movers = big_movers(results, CUTOFF)

        assert [m.athlete_id for m in movers.girls] == ["g1"]
        assert all(m.gender == Gender.MALE for m in movers.boys)
        assert all(m.gender == Gender.FEMALE for m in movers.girls)

    def test_limit_applies_per_gender(self, results):
        movers = big_movers(results, CUTOFF, limit=1)

        assert [m.athlete_id for m in movers.boys] == ["b2"]
        assert [m.athlete_id for m in movers.girls] == ["g1"]

    def test_unrated_results_reported(self, results):
        athlete = results[0].athlete
        results.append(make_result(athlete, LATE_UNRATED, 800, result_id="city"))

        movers = big_movers(results, CUTOFF)

        assert [i.result_id for i in movers.excluded] == ["city"]
        # 800 on an unrated course does not make b1 the top mover
        assert movers.boys[0].athlete_id == "b2"


# =============================================================================
# Test recent_top_performances
# =============================================================================

class TestRecentTopPerformances:
    """Fastest raw times since a date."""

    def test_recent_only_fastest_first(self):
        boys = [make_athlete(f"b{i}") for i in range(3)]
        results = [
            make_result(boys[0], EARLY, 900),
            make_result(boys[1], LATE, 1010),
            make_result(boys[2], LATE, 1000),
        ]

        performances = recent_top_performances(results, CUTOFF)

        assert [p.athlete_id for p in performances[Gender.MALE]] == ["b2", "b1"]
        assert performances[Gender.FEMALE] == []

    def test_implausible_times_skipped(self):
        results = [
            make_result(make_athlete("slow"), LATE, 3600),
            make_result(make_athlete("ok"), LATE, 1100),
        ]

        performances = recent_top_performances(results, CUTOFF)

        assert [p.athlete_id for p in performances[Gender.MALE]] == ["ok"]

    def test_limit(self):
        results = [make_result(make_athlete(f"r{i}"), LATE, 1000 + i) for i in range(8)]

        performances = recent_top_performances(results, CUTOFF, limit=3)

        assert len(performances[Gender.MALE]) == 3
