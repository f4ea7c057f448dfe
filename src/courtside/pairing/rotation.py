"""Court rotation pairing for individual and fixed-partner formats."""

# Courtside
# Copyright (C) 2025  Courtside developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from typing import List, Sequence, Tuple

from courtside.constants import PLAYERS_PER_COURT, PLAYERS_PER_SIDE, TEAMS_PER_COURT
from courtside.models.fairness import FairnessTracker
from courtside.models.match import MatchSide
from courtside.models.roster import Team
from courtside.type_hints import ParticipantId

# One court's worth of sides, before ids and court numbers are attached
CourtDraw = Tuple[MatchSide, MatchSide]


def priority_order(
    participants: Sequence[ParticipantId],
    fairness: FairnessTracker,
    round_number: int,
) -> List[ParticipantId]:
    """Idle participants first, then those who played last round.

    Both halves keep roster order.
    """
    idle, recent = fairness.idle_partition(round_number, participants)
    return idle + recent


def team_idle_count(team: Team, fairness: FairnessTracker, round_number: int) -> int:
    """Number of the team's members who sat out the previous round."""
    return sum(1 for p in team.players if fairness.is_idle(p, round_number))


def create_individual_rotation(
    participants: Sequence[ParticipantId],
    fairness: FairnessTracker,
    round_number: int,
    court_count: int,
    rng: random.Random,
) -> Tuple[List[CourtDraw], List[ParticipantId]]:
    """
    Draw one round of Americano matches.

    Courts are filled in order with the next four unused candidates from the
    priority list. Once fewer than four candidates remain no further courts
    are filled. The four players on a court are shuffled with ``rng`` and
    split into two sides, which randomises partners without a tie-break
    policy.

    Returns
    -------
        (draws, sitting_out) where draws has one entry per filled court.
    """
    candidates = priority_order(participants, fairness, round_number)
    draws: List[CourtDraw] = []
    position = 0

    for _court in range(court_count):
        if len(candidates) - position < PLAYERS_PER_COURT:
            break
        selected = candidates[position : position + PLAYERS_PER_COURT]
        position += PLAYERS_PER_COURT
        rng.shuffle(selected)
        draws.append(
            (
                MatchSide(players=tuple(selected[:PLAYERS_PER_SIDE])),
                MatchSide(players=tuple(selected[PLAYERS_PER_SIDE:])),
            )
        )

    return draws, candidates[position:]


def create_fixed_partner_rotation(
    teams: Sequence[Team],
    fairness: FairnessTracker,
    round_number: int,
    court_count: int,
) -> Tuple[List[CourtDraw], List[Team]]:
    """
    Draw one round of team-vs-team matches.

    Teams are ordered by how many of their members sat out the previous
    round (most first); ``sorted`` is stable so ties keep roster order. Each
    court takes the next two teams.

    Returns
    -------
        (draws, sitting_out) where sitting_out lists the unused teams.
    """
    ordered = sorted(
        teams, key=lambda team: -team_idle_count(team, fairness, round_number)
    )
    draws: List[CourtDraw] = []
    position = 0

    for _court in range(court_count):
        if len(ordered) - position < TEAMS_PER_COURT:
            break
        first, second = ordered[position], ordered[position + 1]
        position += TEAMS_PER_COURT
        draws.append(
            (
                MatchSide(players=first.players, label=first.name),
                MatchSide(players=second.players, label=second.name),
            )
        )

    return draws, list(ordered[position:])
