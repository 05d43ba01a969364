"""
Tests for team scoring.

Covers overall placement, complete/incomplete teams, roles,
displacement and the team tie-break.
"""

from datetime import date

import pytest

from conftest import (
    UNRATED_COURSE,
    make_athlete,
    make_race,
    make_result,
    make_school,
    make_team,
)
from xcstats.features.scoring import score_race, score_meet, combined_placements, team_role
from xcstats.shared.constants import Gender, TeamRole
from xcstats.shared.errors import DuplicateResultError


ALPHA = make_school("alpha")
BRAVO = make_school("bravo")
CHARLIE = make_school("charlie")


def by_athlete(scoring, athlete_id):
    return next(p for p in scoring.individuals if p.athlete_id == athlete_id)


# =============================================================================
# Team roles
# =============================================================================

class TestTeamRole:
    """Tests for role classification by team place."""

    @pytest.mark.parametrize("place", [1, 2, 3, 4, 5])
    def test_counting(self, place):
        assert team_role(place) == TeamRole.COUNTING

    @pytest.mark.parametrize("place", [6, 7])
    def test_displacer(self, place):
        assert team_role(place) == TeamRole.DISPLACER

    @pytest.mark.parametrize("place", [8, 9, 15])
    def test_non_counting(self, place):
        assert team_role(place) == TeamRole.NON_COUNTING


# =============================================================================
# Complete vs incomplete teams
# =============================================================================

class TestTeamCompleteness:
    """A school needs five finishers to be ranked."""

    def test_one_complete_team_others_incomplete(self, race):
        results = (
            make_team(ALPHA, race, [1000, 1001, 1002, 1003, 1004])
            + make_team(BRAVO, race, [990, 1001.5, 1010])
            + make_team(CHARLIE, race, [995])
        )

        scoring = score_race(results)

        assert [s.school.id for s in scoring.standings] == ["alpha"]
        assert {t.school.id for t in scoring.incomplete_teams} == {"bravo", "charlie"}

    def test_incomplete_runners_keep_overall_place(self, race):
        results = (
            make_team(ALPHA, race, [1000, 1001, 1002, 1003, 1004])
            + make_team(BRAVO, race, [990, 1001.5, 1010])
        )

        scoring = score_race(results)
        bravo = next(t for t in scoring.incomplete_teams if t.school.id == "bravo")

        assert [r.overall_place for r in bravo.runners] == [1, 4, 8]
        assert all(r.scoring_place is None for r in bravo.runners)
        assert all(r.role == TeamRole.INCOMPLETE for r in bravo.runners)

    def test_incomplete_team_runners_take_overall_places(self, race):
        """Bravo's runners are not scored but still occupy places 1 and 4."""
        results = (
            make_team(ALPHA, race, [1000, 1001, 1002, 1003, 1004])
            + make_team(BRAVO, race, [990, 1001.5, 1010])
        )

        scoring = score_race(results)
        alpha = scoring.standings[0]

        assert alpha.score == 2 + 3 + 5 + 6 + 7
        assert [r.scoring_place for r in alpha.counting] == [2, 3, 5, 6, 7]
        assert all(r.scoring_place == r.overall_place for r in alpha.runners)

    def test_lone_runner_ahead_of_both_teams(self, race):
        results = (
            make_team(ALPHA, race, [1000, 1001, 1002, 1003, 1004])
            + make_team(CHARLIE, race, [990])
            + make_team(BRAVO, race, [1010, 1011, 1012, 1013, 1014])
        )

        scoring = score_race(results)
        alpha, bravo = scoring.standings

        assert by_athlete(scoring, "alpha-r1-1").overall_place == 2
        assert by_athlete(scoring, "alpha-r1-1").scoring_place == 2
        assert alpha.score == 2 + 3 + 4 + 5 + 6
        assert bravo.score == 7 + 8 + 9 + 10 + 11
        assert by_athlete(scoring, "charlie-r1-1").scoring_place is None

    def test_no_complete_teams_is_valid(self, race):
        results = make_team(ALPHA, race, [1000, 1010]) + make_team(BRAVO, race, [1005])

        scoring = score_race(results)

        assert scoring.standings == []
        assert not scoring.has_team_scores
        assert len(scoring.incomplete_teams) == 2
        assert len(scoring.individuals) == 3

    def test_empty_race(self):
        scoring = score_race([])

        assert scoring.race_id is None
        assert scoring.standings == []
        assert scoring.individuals == []


# =============================================================================
# Team scores and displacement
# =============================================================================

class TestTeamScores:
    """Scores are sums of counting runners' scoring places."""

    @pytest.fixture
    def dual_meet(self, race):
        # Overall: A B A B A B A B A A A B
        return (
            make_team(ALPHA, race, [1000, 1020, 1040, 1060, 1080, 1090, 1095])
            + make_team(BRAVO, race, [1010, 1030, 1050, 1070, 1100])
        )

    def test_displacers_push_opponent_scorers(self, dual_meet):
        scoring = score_race(dual_meet)
        alpha, bravo = scoring.standings

        assert alpha.school.id == "alpha"
        assert alpha.score == 1 + 3 + 5 + 7 + 9
        assert bravo.score == 2 + 4 + 6 + 8 + 12
        assert [r.scoring_place for r in alpha.displacers] == [10, 11]
        for placement in scoring.individuals:
            assert placement.scoring_place == placement.overall_place

    def test_score_equals_sum_of_counting_places(self, dual_meet):
        scoring = score_race(dual_meet)

        for standing in scoring.standings:
            assert standing.score == sum(r.scoring_place for r in standing.counting)
            assert all(r.role == TeamRole.COUNTING for r in standing.counting)

    def test_standings_sorted_ascending(self, race):
        results = (
            make_team(ALPHA, race, [1100, 1110, 1120, 1130, 1140])
            + make_team(BRAVO, race, [1000, 1010, 1020, 1030, 1040])
            + make_team(CHARLIE, race, [1050, 1060, 1070, 1080, 1090])
        )

        scoring = score_race(results)

        assert [s.school.id for s in scoring.standings] == ["bravo", "charlie", "alpha"]
        assert [s.rank for s in scoring.standings] == [1, 2, 3]
        scores = [s.score for s in scoring.standings]
        assert scores == sorted(scores)

    def test_eighth_runner_is_non_counting(self, race):
        """Alpha's 8th runner beats Bravo and takes place 8 without scoring it."""
        results = (
            make_team(ALPHA, race, [1000, 1001, 1002, 1003, 1004, 1005, 1006, 1007])
            + make_team(BRAVO, race, [1010, 1011, 1012, 1013, 1014])
        )

        scoring = score_race(results)
        alpha8 = by_athlete(scoring, "alpha-r1-8")
        bravo1 = by_athlete(scoring, "bravo-r1-1")

        assert alpha8.role == TeamRole.NON_COUNTING
        assert alpha8.team_place == 8
        assert alpha8.scoring_place is None
        assert bravo1.overall_place == 9
        assert bravo1.scoring_place == 9
        assert scoring.standing_for("bravo").score == 9 + 10 + 11 + 12 + 13

    def test_non_qualifiers_are_never_summed(self, dual_meet, race):
        # Overall: A C B C A B A B A B A A A B A(late)
        extra = (
            make_team(CHARLIE, race, [1005, 1015])
            + [make_result(make_athlete("alpha-late", school=ALPHA), race, 1200)]
        )
        scoring = score_race(dual_meet + extra)

        assert scoring.standing_for("alpha").score == 1 + 5 + 7 + 9 + 11
        assert scoring.standing_for("bravo").score == 3 + 6 + 8 + 10 + 14
        late = by_athlete(scoring, "alpha-late")
        assert late.role == TeamRole.NON_COUNTING
        assert late.team_place == 8
        assert late.scoring_place is None
        assert all(
            r.scoring_place is None for r in scoring.individuals if r.school_id == "charlie"
        )
        for standing in scoring.standings:
            assert all(r.scoring_place == r.overall_place for r in standing.runners[:7])

    def test_point_in_time_school_wins_over_current(self, race):
        """A transferred athlete's result counts for the school on the result."""
        results = make_team(ALPHA, race, [1000, 1010, 1020, 1030])
        transfer = make_athlete("transfer", school=BRAVO)
        results.append(make_result(transfer, race, 1040, school=ALPHA))

        scoring = score_race(results)

        assert [s.school.id for s in scoring.standings] == ["alpha"]
        assert by_athlete(scoring, "transfer").school_id == "alpha"


# =============================================================================
# Tie-breaks
# =============================================================================

class TestTieBreaks:
    """Deterministic ordering for equal times and equal scores."""

    def test_equal_times_ordered_by_result_id(self, race):
        first = make_result(make_athlete("x"), race, 1000, result_id="b-result")
        second = make_result(make_athlete("y"), race, 1000, result_id="a-result")

        for batch in ([first, second], [second, first]):
            scoring = score_race(batch)
            assert [p.result_id for p in scoring.individuals] == ["a-result", "b-result"]
            assert [p.overall_place for p in scoring.individuals] == [1, 2]

    def test_equal_scores_broken_by_sixth_runner(self, race):
        # Places: A=1,5,6,7,9 (6th: 10)  B=2,3,4,8,11 (6th: 12)
        results = (
            make_team(ALPHA, race, [1010, 1050, 1060, 1070, 1090, 1100])
            + make_team(BRAVO, race, [1020, 1030, 1040, 1080, 1110, 1120])
        )

        scoring = score_race(results)
        first, second = scoring.standings

        assert first.score == second.score == 28
        assert first.school.id == "alpha"
        assert first.sixth_runner_place == 10
        assert second.sixth_runner_place == 12
        assert first.tiebreak is None
        assert second.tiebreak == "sixth_runner"

    def test_team_without_sixth_runner_loses_tie(self, race):
        # Places: A=2,3,4,8,11 (no 6th)  B=1,5,6,7,9 (6th: 10)
        results = (
            make_team(ALPHA, race, [1020, 1030, 1040, 1080, 1110])
            + make_team(BRAVO, race, [1010, 1050, 1060, 1070, 1090, 1100])
        )

        scoring = score_race(results)
        first, second = scoring.standings

        assert first.score == second.score == 28
        assert first.school.id == "bravo"
        assert second.sixth_runner_place is None
        assert second.tiebreak == "sixth_runner"


# =============================================================================
# Unscored results and batch errors
# =============================================================================

class TestUnscoredAndErrors:
    """Unratable results are reported; duplicates abort."""

    def test_unrated_course_results_are_unscored(self):
        race = make_race(course=UNRATED_COURSE)
        results = make_team(ALPHA, race, [1000, 1010, 1020, 1030, 1040])

        scoring = score_race(results)

        assert scoring.standings == []
        assert scoring.individuals == []
        assert len(scoring.unscored) == 5
        assert {i.reason for i in scoring.unscored} == {"missing_rating"}
        assert scoring.unscored[0].course_id == UNRATED_COURSE.id

    def test_duplicate_pair_raises(self, race):
        athlete = make_athlete("dup", school=ALPHA)
        results = [
            make_result(athlete, race, 1000, result_id="r-a"),
            make_result(athlete, race, 1010, result_id="r-b"),
        ]

        with pytest.raises(DuplicateResultError) as exc_info:
            score_race(results)

        assert exc_info.value.athlete_id == "dup"
        assert exc_info.value.race_id == race.id
        assert exc_info.value.result_ids == ["r-a", "r-b"]

    def test_multiple_races_rejected(self):
        results = (
            make_team(ALPHA, make_race("r1"), [1000])
            + make_team(ALPHA, make_race("r2"), [1000])
        )

        with pytest.raises(ValueError, match="one race"):
            score_race(results)


# =============================================================================
# Meets
# =============================================================================

class TestMeetScoring:
    """Scoring every race of a meet."""

    def test_each_race_scored_independently_boys_first(self):
        boys = make_race("boys", gender=Gender.MALE, meet_id="m1")
        girls = make_race("girls", gender=Gender.FEMALE, meet_id="m1")
        results = (
            make_team(ALPHA, girls, [1200, 1210, 1220, 1230, 1240], gender=Gender.FEMALE)
            + make_team(ALPHA, boys, [1000, 1010, 1020, 1030, 1040])
        )

        scorings = score_meet(results)

        assert [s.race_id for s in scorings] == ["boys", "girls"]
        assert all(s.standings[0].score == 15 for s in scorings)

    def test_combined_placements_split_by_gender(self):
        varsity = make_race("varsity", meet_id="m1", meet_date=date(2024, 9, 14))
        jv = make_race("jv", meet_id="m1", meet_date=date(2024, 9, 14))
        girls = make_race("girls", gender=Gender.FEMALE, meet_id="m1")
        results = [
            make_result(make_athlete("v1"), varsity, 1000),
            make_result(make_athlete("j1"), jv, 990),
            make_result(make_athlete("g1", gender=Gender.FEMALE), girls, 1150),
        ]

        combined = combined_placements(results)

        assert [p.athlete_id for p in combined[Gender.MALE]] == ["j1", "v1"]
        assert [p.overall_place for p in combined[Gender.MALE]] == [1, 2]
        assert [p.athlete_id for p in combined[Gender.FEMALE]] == ["g1"]

    def test_combined_placements_reject_several_meets(self):
        results = [
            make_result(make_athlete("v1"), make_race("a", meet_id="m1"), 1000),
            make_result(make_athlete("v2"), make_race("b", meet_id="m2", course=UNRATED_COURSE), 990),
        ]

        with pytest.raises(ValueError, match="one meet"):
            combined_placements(results)
