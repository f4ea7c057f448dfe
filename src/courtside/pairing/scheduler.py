"""Round scheduling: turns a roster and fairness state into a round of matches.

This module owns match id allocation and picks the rotation for the
tournament's format.
"""

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
from typing import AbstractSet, List, Optional

from courtside.constants import MIN_PARTICIPANTS, MIN_TEAMS
from courtside.exceptions import InsufficientParticipants, InsufficientTeams
from courtside.models.fairness import FairnessTracker
from courtside.models.match import Match
from courtside.models.roster import TournamentConfig
from courtside.pairing.rotation import (
    CourtDraw,
    create_fixed_partner_rotation,
    create_individual_rotation,
)
from courtside.type_hints import ParticipantId
from courtside.utils import setup_logger

logger = setup_logger(__name__)


class RoundScheduler:
    """Produces the Active matches for a round.

    The scheduler never mutates fairness state; it only reads it. Each call
    to :meth:`schedule` returns a fresh set of matches with new ids, so a
    re-roll never reuses the id of an abandoned match.
    """

    def __init__(
        self,
        config: TournamentConfig,
        fairness: FairnessTracker,
        rng: Optional[random.Random] = None,
        next_match_id: int = 1,
    ) -> None:
        """Initialize the scheduler.

        Args:
            config: Tournament configuration
            fairness: Shared fairness tracker to read idle state from
            rng: Randomness source for partner shuffles; seed it for reproducible draws
            next_match_id: First id to hand out (used when restoring a saved night)
        """
        self.config = config
        self.fairness = fairness
        self.rng = rng if rng is not None else random.Random()
        self.next_match_id = next_match_id

    def schedule(
        self, round_number: int, exclude: Optional[AbstractSet[ParticipantId]] = None
    ) -> List[Match]:
        """Generate the matches for ``round_number``.

        Args:
            round_number: The round to schedule (1-indexed)
            exclude: Participants who must not be drawn, such as those who
                already completed a match in this round. A team is left out
                if either member is excluded.

        Returns:
            One Active match per filled court, ordered by court

        Raises:
            InsufficientParticipants: If an individual roster cannot fill one court
            InsufficientTeams: If a team roster cannot fill one court
        """
        exclude = exclude or frozenset()
        if self.config.is_fixed_partner:
            teams = [
                t for t in self.config.teams if not any(p in exclude for p in t.players)
            ]
            draws, sitting_out = create_fixed_partner_rotation(
                teams,
                self.fairness,
                round_number,
                self.config.court_count,
            )
            if not draws:
                raise InsufficientTeams(
                    f"Need at least {MIN_TEAMS} teams to fill a court, "
                    f"have {len(teams)}"
                )
            sitting_out_names = [team.name for team in sitting_out]
        else:
            participants = [p for p in self.config.participants if p not in exclude]
            draws, sitting_out_names = create_individual_rotation(
                participants,
                self.fairness,
                round_number,
                self.config.court_count,
                self.rng,
            )
            if not draws:
                raise InsufficientParticipants(
                    f"Need at least {MIN_PARTICIPANTS} participants to fill a court, "
                    f"have {len(participants)}"
                )

        matches = self._build_matches(draws, round_number)
        logger.info(
            f"Scheduled round {round_number}: {len(matches)} match(es) on "
            f"{self.config.court_count} court(s), sitting out: "
            f"{', '.join(sitting_out_names) or 'nobody'}"
        )
        return matches

    def _build_matches(self, draws: List[CourtDraw], round_number: int) -> List[Match]:
        matches = []
        for court, (side_a, side_b) in enumerate(draws, start=1):
            matches.append(
                Match(
                    id=self.next_match_id,
                    round_number=round_number,
                    court=court,
                    side_a=side_a,
                    side_b=side_b,
                )
            )
            self.next_match_id += 1
        return matches
