import pytest

from courtside.models import FairnessTracker
from courtside.pairing import RoundScheduler
from courtside.testing import (
    ScorePattern,
    SimulationConfig,
    TournamentSimulator,
    check_round,
    create_roster,
    create_simulator,
)


def _run(**kwargs):
    kwargs.setdefault("seed", 11)
    return TournamentSimulator(SimulationConfig(**kwargs)).run()


def test_full_courts_everyone_plays_every_round():
    report = _run(num_participants=8, court_count=2, num_rounds=30)

    assert report.violations == []
    assert report.max_idle_streak == 0
    assert set(report.games_played.values()) == {30}


@pytest.mark.parametrize(
    "players,courts",
    [(5, 1), (6, 1), (7, 1), (8, 1), (9, 2), (10, 2), (11, 2), (14, 3)],
)
def test_nobody_sits_out_twice_in_a_row(players, courts):
    # Holds whenever the players left over fit on the courts
    report = _run(
        num_participants=players,
        court_count=courts,
        num_rounds=60,
        score_pattern=ScorePattern.MIXED,
        reroll_rate=0.3,
    )

    assert report.violations == []
    assert report.is_starvation_free()


def test_fixed_partner_rotation():
    report = _run(num_participants=10, court_count=2, num_rounds=40, fixed_partner=True)

    assert report.violations == []
    assert report.is_starvation_free()


def test_rally_scoring():
    report = _run(
        num_participants=9,
        court_count=2,
        num_rounds=10,
        score_pattern=ScorePattern.RALLY,
        target_points=21,
    )
    assert report.violations == []
    assert report.rounds_played == 10


def test_too_many_waiting_players_starve():
    # 13 players on one court: P9..P13 lose every idle-priority tie to P1..P4
    report = _run(num_participants=13, court_count=1, num_rounds=30)

    assert report.violations == []
    assert report.never_scheduled == [f"Player-{i:03d}" for i in range(9, 14)]
    assert not report.is_starvation_free()
    assert report.longest_idle_streak["Player-009"] == 30


def test_check_round_catches_a_skipped_idle_player():
    roster = create_roster(SimulationConfig(num_participants=6, court_count=1))
    fairness = FairnessTracker()
    fairness.record_round_played(roster.participants[:4], 1)
    # Draw round 2 as if nobody had played round 1
    matches = RoundScheduler(roster, FairnessTracker()).schedule(2)

    problems = check_round(roster, fairness, 2, matches)

    assert len(problems) == 1
    assert "sat out" in problems[0]


def test_create_roster_pairs_players_in_team_mode():
    roster = create_roster(SimulationConfig(num_participants=6, fixed_partner=True))
    assert [t.name for t in roster.teams] == ["Team-01", "Team-02", "Team-03"]
    assert roster.teams[1].players == ("Player-003", "Player-004")


def test_report_to_dict():
    report = _run(num_participants=6, court_count=1, num_rounds=3)
    data = report.to_dict()
    assert data["rounds_played"] == 3
    assert data["max_idle_streak"] == report.max_idle_streak
    assert sum(data["games_played"].values()) == 3 * 4


def test_create_simulator_warns_on_tiny_rosters(caplog):
    simulator = create_simulator(3, 1, num_rounds=2, seed=1)
    assert simulator.config.num_participants == 3
    assert "cannot fill a court" in caplog.text


def test_create_simulator_passes_options_through():
    simulator = create_simulator(
        8, 2, num_rounds=4, seed=2, target_points=21, score_pattern=ScorePattern.RALLY
    )
    assert simulator.config.target_points == 21
    assert simulator.config.score_pattern is ScorePattern.RALLY
    assert simulator.run().violations == []
