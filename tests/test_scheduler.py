import random

import pytest

from courtside.exceptions import InsufficientParticipants, InsufficientTeams
from courtside.models import FairnessTracker, MatchStatus
from courtside.pairing import RoundScheduler


def _all_players(matches):
    return [p for m in matches for p in m.participants]


def test_eight_players_two_courts_uses_everyone(individual_config, rng):
    scheduler = RoundScheduler(individual_config(8, 2), FairnessTracker(), rng)

    matches = scheduler.schedule(1)

    assert len(matches) == 2
    assert [m.court for m in matches] == [1, 2]
    players = _all_players(matches)
    assert len(players) == 8
    assert set(players) == {f"P{i}" for i in range(1, 9)}
    for match in matches:
        assert match.status is MatchStatus.ACTIVE
        assert match.round_number == 1
        assert match.scores == (0, 0)
        assert len(match.side_a.players) == 2
        assert len(match.side_b.players) == 2


def test_six_players_two_courts_fills_one_court(individual_config, rng):
    fairness = FairnessTracker()
    scheduler = RoundScheduler(individual_config(6, 2), fairness, rng)

    round_one = scheduler.schedule(1)

    assert len(round_one) == 1
    # Everybody is idle in round 1 so roster order decides
    assert set(round_one[0].participants) == {"P1", "P2", "P3", "P4"}

    fairness.record_round_played(round_one[0].participants, 1)
    round_two = scheduler.schedule(2)

    assert len(round_two) == 1
    assert {"P5", "P6"} <= set(round_two[0].participants)


def test_court_count_caps_matches(individual_config, rng):
    scheduler = RoundScheduler(individual_config(12, 2), FairnessTracker(), rng)
    matches = scheduler.schedule(1)

    assert len(matches) == 2
    assert set(_all_players(matches)) == {f"P{i}" for i in range(1, 9)}


def test_idle_participants_come_before_recent_ones(individual_config, rng):
    fairness = FairnessTracker()
    fairness.record_round_played(["P1", "P2", "P3", "P4", "P5", "P6"], 1)
    scheduler = RoundScheduler(individual_config(10, 2), fairness, rng)

    matches = scheduler.schedule(2)

    # Idle P7..P10 take court 1, then P1..P4 in roster order take court 2
    assert set(matches[0].participants) == {"P7", "P8", "P9", "P10"}
    assert set(matches[1].participants) == {"P1", "P2", "P3", "P4"}


def test_too_few_participants(individual_config, rng):
    scheduler = RoundScheduler(individual_config(3, 1), FairnessTracker(), rng)
    with pytest.raises(InsufficientParticipants):
        scheduler.schedule(1)


def test_too_few_teams(team_config, rng):
    scheduler = RoundScheduler(team_config(1, 1), FairnessTracker(), rng)
    with pytest.raises(InsufficientTeams):
        scheduler.schedule(1)


def test_same_seed_same_draw(individual_config):
    config = individual_config(8, 2)
    first = RoundScheduler(config, FairnessTracker(), random.Random(5)).schedule(1)
    second = RoundScheduler(config, FairnessTracker(), random.Random(5)).schedule(1)

    assert [m.side_a.players for m in first] == [m.side_a.players for m in second]
    assert [m.side_b.players for m in first] == [m.side_b.players for m in second]


def test_partners_are_shuffled(individual_config):
    config = individual_config(4, 1)
    partnerships = set()
    for seed in range(20):
        match = RoundScheduler(config, FairnessTracker(), random.Random(seed)).schedule(1)[0]
        partnerships.add(frozenset(match.side_a.players))
    assert len(partnerships) > 1


def test_match_ids_are_never_reused(individual_config, rng):
    scheduler = RoundScheduler(individual_config(8, 2), FairnessTracker(), rng)
    first = scheduler.schedule(1)
    again = scheduler.schedule(1)

    ids = [m.id for m in first + again]
    assert ids == [1, 2, 3, 4]


def test_scheduler_does_not_touch_fairness(individual_config, rng):
    fairness = FairnessTracker()
    RoundScheduler(individual_config(8, 2), fairness, rng).schedule(1)
    assert fairness.last_played == {}


def test_fixed_partner_round_one_follows_roster(team_config, rng):
    scheduler = RoundScheduler(team_config(4, 2), FairnessTracker(), rng)
    matches = scheduler.schedule(1)

    assert [(m.side_a.label, m.side_b.label) for m in matches] == [
        ("T1", "T2"),
        ("T3", "T4"),
    ]
    assert matches[0].side_a.players == ("T1a", "T1b")
    assert matches[1].side_b.players == ("T4a", "T4b")


def test_fixed_partner_rested_team_goes_first(team_config, rng):
    fairness = FairnessTracker()
    scheduler = RoundScheduler(team_config(5, 2), fairness, rng)
    round_one = scheduler.schedule(1)
    assert [m.side_a.label for m in round_one] == ["T1", "T3"]
    for match in round_one:
        fairness.record_round_played(match.participants, 1)

    round_two = scheduler.schedule(2)

    assert [(m.side_a.label, m.side_b.label) for m in round_two] == [
        ("T5", "T1"),
        ("T2", "T3"),
    ]


def test_fixed_partner_orders_by_idle_member_count(team_config, rng):
    fairness = FairnessTracker()
    fairness.record_round_played(["T1a", "T2a", "T2b"], 1)
    scheduler = RoundScheduler(team_config(3, 1), fairness, rng)

    match = scheduler.schedule(2)[0]

    # T3 has two idle members, T1 one, T2 none
    assert (match.side_a.label, match.side_b.label) == ("T3", "T1")


def test_excluded_participants_are_not_drawn(individual_config, rng):
    scheduler = RoundScheduler(individual_config(8, 2), FairnessTracker(), rng)

    matches = scheduler.schedule(1, exclude={"P1", "P5"})

    assert len(matches) == 1
    assert set(matches[0].participants) == {"P2", "P3", "P4", "P6"}


def test_excluding_too_many_raises(individual_config, rng):
    scheduler = RoundScheduler(individual_config(5, 1), FairnessTracker(), rng)
    with pytest.raises(InsufficientParticipants):
        scheduler.schedule(1, exclude={"P1", "P2"})
