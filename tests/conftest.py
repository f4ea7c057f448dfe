import random
from datetime import datetime, timedelta, timezone

import pytest

from courtside import Team, TournamentConfig, TournamentFormat, TournamentNight


class FakeClock:
    """Ticks one minute per call, starting at 19:00 UTC."""

    def __init__(self):
        self.now = datetime(2025, 3, 4, 19, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.now += timedelta(minutes=1)
        return self.now


def player_names(count):
    return [f"P{i}" for i in range(1, count + 1)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def individual_config():
    def _make(players=8, courts=2, target=16):
        return TournamentConfig(
            format=TournamentFormat.INDIVIDUAL,
            court_count=courts,
            target_points=target,
            participants=tuple(player_names(players)),
            name="Test night",
        )

    return _make


@pytest.fixture
def team_config():
    def _make(teams=4, courts=2, target=21):
        return TournamentConfig(
            format=TournamentFormat.FIXED_PARTNER,
            court_count=courts,
            target_points=target,
            teams=tuple(
                Team(name=f"T{i}", players=(f"T{i}a", f"T{i}b"), colour="blue")
                for i in range(1, teams + 1)
            ),
            name="Team night",
        )

    return _make


@pytest.fixture
def make_night(rng, clock):
    """Build a night with the shared seeded rng and fake clock."""

    def _make(config, recorder=None):
        return TournamentNight(config, rng=rng, recorder=recorder, clock=clock)

    return _make
