"""
Unit tests for the fair-round scheduling core.
"""

import random

import pytest

from americano.scheduling.coverage import (
    partner_coverage, recommend_rounds, seen_partnerships, total_partnerships
)
from americano.scheduling.generator import (
    FairnessWeights, RoundPlan, best_split, generate_fair_round, rank_for_play,
    split_cost, usable_courts
)
from americano.scheduling.models import Match, Player, SavedRound, Score
from americano.scheduling.pairs import cross_pairs, pair_key, team_splits
from americano.scheduling.stats import StatsSnapshot, aggregate_stats


def make_players(n):
    return [Player(id=f"p{i}", name=f"Player {i}") for i in range(1, n + 1)]


def saved_round(*courts):
    """Build a SavedRound from (a1, a2, b1, b2) player tuples, one per court."""
    matches = tuple(
        Match(court=i, team_a=(c[0], c[1]), team_b=(c[2], c[3]))
        for i, c in enumerate(courts, 1)
    )
    return SavedRound(matches=matches, results={m.court: Score(0, 0) for m in matches})


def assert_valid_plan(plan: RoundPlan, roster):
    """Every roster player appears exactly once across matches and bench."""
    seen = []
    for i, m in enumerate(plan.matches, 1):
        assert m.court == i
        team_a_ids = {p.id for p in m.team_a}
        team_b_ids = {p.id for p in m.team_b}
        assert len(team_a_ids) == 2
        assert len(team_b_ids) == 2
        assert not (team_a_ids & team_b_ids)
        seen.extend(m.player_ids)
    seen.extend(p.id for p in plan.bench)
    assert sorted(seen) == sorted(p.id for p in roster)


class TestPairKey:
    """Tests for pair keys and team splits."""

    def test_symmetric(self):
        """Argument order should not matter."""
        assert pair_key("a", "b") == pair_key("b", "a")

    def test_format(self):
        """Lesser id comes first."""
        assert pair_key("zed", "amy") == "amy__zed"

    def test_distinct_pairs(self):
        """Different partners give different keys."""
        assert pair_key("a", "b") != pair_key("a", "c")
        assert pair_key("ab", "c") != pair_key("a", "bc")

    def test_uuid_ids(self):
        """Generated player ids produce symmetric keys."""
        a, b = Player.new("A"), Player.new("B")
        assert pair_key(a.id, b.id) == pair_key(b.id, a.id)

    def test_cross_pairs(self):
        """Cross pairs list all four opponent combinations."""
        assert cross_pairs(("a", "b"), ("c", "d")) == [
            ("a", "c"), ("a", "d"), ("b", "c"), ("b", "d")
        ]

    def test_team_splits(self):
        """Four items split into two pairs in exactly three ways."""
        splits = team_splits(["p", "q", "r", "s"])
        assert splits == [
            (("p", "q"), ("r", "s")),
            (("p", "r"), ("q", "s")),
            (("p", "s"), ("q", "r")),
        ]
        as_sets = {frozenset([frozenset(a), frozenset(b)]) for a, b in splits}
        assert len(as_sets) == 3


class TestAggregateStats:
    """Tests for history aggregation."""

    def test_empty_history(self):
        """Every roster player starts at zero games."""
        players = make_players(5)
        stats = aggregate_stats(players, [])
        assert stats.games_played == {p.id: 0 for p in players}
        assert stats.partner_count == {}
        assert stats.opponent_count == {}

    def test_single_match(self):
        """One match adds games, two partnerships and four oppositions."""
        p = make_players(5)
        stats = aggregate_stats(p, [saved_round((p[0], p[1], p[2], p[3]))])

        assert stats.games(p[0].id) == 1
        assert stats.games(p[3].id) == 1
        assert stats.games(p[4].id) == 0
        assert stats.partners(p[0].id, p[1].id) == 1
        assert stats.partners(p[1].id, p[0].id) == 1
        assert stats.partners(p[2].id, p[3].id) == 1
        assert stats.partners(p[0].id, p[2].id) == 0
        assert stats.opponents(p[0].id, p[2].id) == 1
        assert stats.opponents(p[1].id, p[3].id) == 1
        assert stats.opponents(p[0].id, p[1].id) == 0
        assert len(stats.partner_count) == 2
        assert len(stats.opponent_count) == 4

    def test_counts_accumulate(self):
        """Repeated partnerships are counted each time."""
        p = make_players(4)
        history = [
            saved_round((p[0], p[1], p[2], p[3])),
            saved_round((p[1], p[0], p[3], p[2])),
        ]
        stats = aggregate_stats(p, history)
        assert stats.partners(p[0].id, p[1].id) == 2
        assert stats.opponents(p[0].id, p[3].id) == 2
        assert all(stats.games(x.id) == 2 for x in p)

    def test_orphaned_players_ignored(self):
        """History players missing from the roster get no games entry."""
        p = make_players(4)
        history = [saved_round((p[0], p[1], p[2], p[3]))]
        stats = aggregate_stats(p[:3], history)
        assert p[3].id not in stats.games_played
        assert stats.games(p[3].id) == 0
        assert stats.games(p[0].id) == 1

    def test_idempotent(self):
        """Same inputs give identical counters."""
        p = make_players(8)
        history = [saved_round((p[0], p[1], p[2], p[3]), (p[4], p[5], p[6], p[7]))]
        first = aggregate_stats(p, history)
        second = aggregate_stats(p, history)
        assert first == second
        assert first.partner_count is not second.partner_count

    def test_unseen_pair_defaults_to_zero(self):
        """Lookups of never-seen pairs return zero."""
        stats = StatsSnapshot()
        assert stats.partners("x", "y") == 0
        assert stats.opponents("x", "y") == 0
        assert stats.games("x") == 0


class TestPartnerCoverage:
    """Tests for partner coverage."""

    def test_total_partnerships(self):
        assert total_partnerships(4) == 6
        assert total_partnerships(8) == 28

    def test_tiny_roster_complete(self):
        """Zero or one player counts as complete."""
        for n in (0, 1):
            report = partner_coverage(make_players(n), [])
            assert report.complete
            assert report.percent == 100
            assert report.total_pairs == 0
            assert report.missing_pairs == 0

    def test_empty_history(self):
        report = partner_coverage(make_players(4), [])
        assert not report.complete
        assert report.percent == 0
        assert report.missing_pairs == 6

    def test_one_round_of_four(self):
        """Two of six partnerships is 33%."""
        p = make_players(4)
        report = partner_coverage(p, [saved_round((p[0], p[1], p[2], p[3]))])
        assert report.covered_pairs == 2
        assert report.percent == 33
        assert report.missing_pairs == 4

    def test_repeats_count_once(self):
        """A repeated partnership still counts once."""
        p = make_players(4)
        history = [saved_round((p[0], p[1], p[2], p[3]))] * 5
        assert len(seen_partnerships(history)) == 2
        assert partner_coverage(p, history).covered_pairs == 2

    def test_full_coverage(self):
        """All three splits of four players cover every pair."""
        p = make_players(4)
        history = [
            saved_round((p[0], p[1], p[2], p[3])),
            saved_round((p[0], p[2], p[1], p[3])),
            saved_round((p[0], p[3], p[1], p[2])),
        ]
        report = partner_coverage(p, history)
        assert report.complete
        assert report.percent == 100
        assert report.missing_pairs == 0

    def test_percent_rounds_half_up(self):
        """3 of 120 pairs is 2.5% and rounds up to 3."""
        p = make_players(16)
        history = [
            saved_round((p[0], p[1], p[4], p[5])),
            saved_round((p[0], p[1], p[2], p[3])),
        ]
        report = partner_coverage(p, history)
        assert report.covered_pairs == 3
        assert report.percent == 3

    def test_percent_rounded(self):
        """8 of 120 pairs is 6.67% and rounds to 7."""
        p = make_players(16)
        history = [saved_round(
            (p[0], p[1], p[2], p[3]), (p[4], p[5], p[6], p[7]),
            (p[8], p[9], p[10], p[11]), (p[12], p[13], p[14], p[15]),
        )]
        assert partner_coverage(p, history).percent == 7

    def test_monotonic_over_prefixes(self):
        """Coverage never drops as rounds are added."""
        players = make_players(9)
        rng = random.Random(11)
        history = []
        last = partner_coverage(players, history).percent
        for _ in range(10):
            plan = generate_fair_round(players, 2, history, rng=rng)
            history.insert(0, SavedRound(matches=tuple(plan.matches)))
            current = partner_coverage(players, history).percent
            assert current >= last
            last = current


class TestRecommendRounds:
    """Tests for the round-count recommendation."""

    def test_too_few_players(self):
        assert recommend_rounds(0, 1) == 0
        assert recommend_rounds(3, 1) == 0

    def test_known_values(self):
        assert recommend_rounds(4, 1) == 3
        assert recommend_rounds(8, 2) == 7
        assert recommend_rounds(9, 2) == 9

    def test_courts_clamped_to_roster(self):
        """More courts than the roster can fill are ignored."""
        assert recommend_rounds(10, 5) == recommend_rounds(10, 2) == 12

    def test_zero_courts_forces_one(self):
        assert recommend_rounds(8, 0) == 14

    @pytest.mark.parametrize("n", range(4, 21))
    @pytest.mark.parametrize("courts", range(1, 6))
    def test_lower_bound_has_enough_slots(self, n, courts):
        """Recommended rounds provide enough player slots for every pair."""
        rounds = recommend_rounds(n, courts)
        assert rounds * 4 * min(courts, n // 4) >= n * (n - 1) / 2


class TestSplitCost:
    """Tests for the cost function."""

    @pytest.fixture
    def abcd(self):
        return make_players(4)

    @pytest.fixture
    def stats(self, abcd):
        a, b, c, d = abcd
        return StatsSnapshot(
            games_played={a.id: 2, b.id: 2, c.id: 0, d.id: 0},
            partner_count={pair_key(a.id, b.id): 1},
            opponent_count={pair_key(a.id, c.id): 2},
        )

    def test_cost_terms(self, abcd, stats):
        """14 per partner repeat, 3 per opponent repeat, -0.25 per game."""
        a, b, c, d = abcd
        assert split_cost(stats, (a, b), (c, d)) == pytest.approx(14 + 6 - 1)

    def test_custom_weights(self, abcd, stats):
        a, b, c, d = abcd
        weights = FairnessWeights(partner=1, opponent=0, playtime=0)
        assert split_cost(stats, (a, b), (c, d), weights) == pytest.approx(1)

    def test_best_split_avoids_repeats(self, abcd, stats):
        a, b, c, d = abcd
        cost, team_a, team_b = best_split(stats, abcd)
        assert (team_a, team_b) == ((a, c), (b, d))
        assert cost == pytest.approx(-1)

    def test_best_split_tie_keeps_first(self, abcd):
        cost, team_a, team_b = best_split(StatsSnapshot(), abcd)
        assert cost == 0
        assert (team_a, team_b) == ((abcd[0], abcd[1]), (abcd[2], abcd[3]))


class TestGenerateFairRound:
    """Tests for fair round generation."""

    def test_four_players_one_court(self):
        """Four players and one court give one match and an empty bench."""
        players = make_players(4)
        plan = generate_fair_round(players, 1, [], rng=random.Random(1))

        assert len(plan.matches) == 1
        assert plan.bench == []
        assert plan.used_courts == 1
        assert_valid_plan(plan, players)

    def test_concrete_scenario_coverage(self):
        """Saving the only match of four players covers both of its teams."""
        players = make_players(4)
        plan = generate_fair_round(players, 1, [], rng=random.Random(1))
        history = [SavedRound(matches=tuple(plan.matches))]
        report = partner_coverage(players, history)
        assert report.total_pairs == 6
        assert report.covered_pairs == 2
        assert report.percent == 33
        assert report.missing_pairs == 4
        assert not report.complete

    def test_roster_too_small(self):
        """Fewer than four players: no matches, everybody benched."""
        players = make_players(3)
        plan = generate_fair_round(players, 2, [], rng=random.Random(0))
        assert plan.matches == []
        assert plan.bench == players

    def test_zero_courts(self):
        players = make_players(8)
        plan = generate_fair_round(players, 0, [], rng=random.Random(0))
        assert plan.matches == []
        assert len(plan.bench) == 8

    def test_courts_clamped(self):
        """Requesting more courts than the roster fills is clamped."""
        players = make_players(9)
        plan = generate_fair_round(players, 5, [], rng=random.Random(0))
        assert len(plan.matches) == 2
        assert len(plan.bench) == 1
        assert usable_courts(9, 5) == 2

    @pytest.mark.parametrize("n,courts", [(4, 1), (7, 1), (8, 2), (10, 2), (13, 3), (16, 4)])
    def test_slot_conservation(self, n, courts):
        """Every player is in exactly one match or on the bench."""
        players = make_players(n)
        rng = random.Random(n)
        history = []
        for _ in range(4):
            plan = generate_fair_round(players, courts, history, rng=rng)
            assert_valid_plan(plan, players)
            assert len(plan.matches) == usable_courts(n, courts)
            assert len(plan.matches) * 4 + len(plan.bench) == n
            history.insert(0, SavedRound(matches=tuple(plan.matches)))

    def test_no_repeat_partner(self):
        """A partnership from the previous round is not repeated when avoidable."""
        p = make_players(8)
        history = [saved_round((p[0], p[1], p[2], p[3]))]
        for seed in range(20):
            plan = generate_fair_round(p, 2, history, rng=random.Random(seed))
            teams = [
                {t[0].id, t[1].id}
                for m in plan.matches for t in (m.team_a, m.team_b)
            ]
            assert {p[0].id, p[1].id} not in teams
            assert {p[2].id, p[3].id} not in teams

    def test_players_with_fewer_games_play(self):
        """The only player without games is never benched."""
        p = make_players(5)
        history = [saved_round((p[0], p[1], p[2], p[3]))]
        for seed in range(10):
            plan = generate_fair_round(p, 1, history, rng=random.Random(seed))
            assert p[4] not in plan.bench
            assert len(plan.bench) == 1

    def test_bench_rotates(self):
        """With five players and one court everyone sits out once in five rounds."""
        p = make_players(5)
        rng = random.Random(3)
        history = []
        benched = []
        for _ in range(5):
            plan = generate_fair_round(p, 1, history, rng=rng)
            benched.extend(plan.bench)
            history.insert(0, SavedRound(matches=tuple(plan.matches)))
        assert sorted(x.id for x in benched) == sorted(x.id for x in p)

    def test_deterministic_with_seed(self):
        """The same seed gives the same round."""
        players = make_players(10)
        a = generate_fair_round(players, 2, [], rng=random.Random(99))
        b = generate_fair_round(players, 2, [], rng=random.Random(99))
        assert a.matches == b.matches
        assert a.bench == b.bench

    def test_rank_for_play_orders_by_games(self):
        p = make_players(4)
        stats = StatsSnapshot(games_played={p[0].id: 3, p[1].id: 0, p[2].id: 1, p[3].id: 0})
        ranked = rank_for_play(p, stats, random.Random(5))
        assert [stats.games(x.id) for x in ranked] == [0, 0, 1, 3]

    def test_full_coverage_for_four_players(self):
        """Three rounds of four players use all three splits."""
        players = make_players(4)
        rng = random.Random(0)
        history = []
        for _ in range(3):
            plan = generate_fair_round(players, 1, history, rng=rng)
            history.insert(0, SavedRound(matches=tuple(plan.matches)))
        assert partner_coverage(players, history).complete

    def test_input_history_not_mutated(self):
        p = make_players(8)
        history = [saved_round((p[0], p[1], p[2], p[3]))]
        before = list(history)
        generate_fair_round(p, 2, history, rng=random.Random(0))
        assert history == before
