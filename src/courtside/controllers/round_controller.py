"""Round management for tournament nights.

This module handles round progression: starting the first round, re-rolling
the current draw, and completing a round before scheduling the next one.
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

from typing import Dict, List

from courtside.constants import NO_ROUND
from courtside.controllers.score_controller import ScoreController
from courtside.exceptions import TournamentStateException
from courtside.models.match import Match
from courtside.pairing.scheduler import RoundScheduler
from courtside.type_hints import MatchId
from courtside.utils import setup_logger

logger = setup_logger(__name__)


class RoundController:
    """Manages round progression for a tournament night.

    This class is responsible for:
    - Owning the current round number
    - Owning the set of active matches for that round
    - Completing a round as one batch and scheduling the next
    - Replacing the current draw on request (re-roll)
    """

    def __init__(
        self,
        scheduler: RoundScheduler,
        score_controller: ScoreController,
        active_matches: Dict[MatchId, Match],
        round_number: int = NO_ROUND,
    ) -> None:
        """Initialize the round controller.

        Args:
            scheduler: Produces the matches for a round
            score_controller: Used to complete matches
            active_matches: Live mapping of active match id -> Match, shared
                with the score controller
            round_number: Current round; 0 until the first round is started
        """
        self.scheduler = scheduler
        self.score_controller = score_controller
        self.active_matches = active_matches
        self._round_number = round_number

    @property
    def round_number(self) -> int:
        """The current round number (1-indexed), or 0 before the first round."""
        return self._round_number

    @property
    def started(self) -> bool:
        return self._round_number != NO_ROUND

    @property
    def matches(self) -> List[Match]:
        """Active matches of the current round, by court."""
        return sorted(self.active_matches.values(), key=lambda m: m.court)

    def start(self) -> List[Match]:
        """Schedule round 1.

        Raises:
            TournamentStateException: If a round has already been started
            InsufficientParticipants / InsufficientTeams: If no court can be filled
        """
        if self.started:
            raise TournamentStateException(
                f"Tournament already started (round {self._round_number})"
            )
        matches = self.scheduler.schedule(1)
        self._install(matches)
        self._round_number = 1
        return self.matches

    def reroll(self) -> List[Match]:
        """Redraw the current round.

        The whole active set is replaced. Abandoned matches never reach the
        history and leave fairness untouched, even if they had scores.
        Participants who already completed a match this round are not drawn
        again. If the scheduler fails the current draw is kept.
        """
        self._require_started()
        finished = {
            p
            for m in self.score_controller.history.for_round(self._round_number)
            for p in m.participants
        }
        matches = self.scheduler.schedule(self._round_number, exclude=finished)
        abandoned = [m.id for m in self.matches]
        self._install(matches)
        logger.info(
            f"Re-rolled round {self._round_number}, abandoned match(es): "
            f"{abandoned or 'none'}"
        )
        return self.matches

    def complete_round(self) -> List[Match]:
        """Complete every active match, advance the round and schedule it.

        All fairness updates for the finished round land before the
        scheduler runs, so idle priority reflects the whole round.

        Returns:
            The matches completed by this call, by court
        """
        self._require_started()
        finished_round = self._round_number
        completed = self.score_controller.complete_matches(
            [m.id for m in self.matches]
        )
        next_round = finished_round + 1
        matches = self.scheduler.schedule(next_round)
        self._install(matches)
        self._round_number = next_round
        logger.info(
            f"Round {finished_round} completed with {len(completed)} match(es); "
            f"round {next_round} has {len(matches)} match(es)"
        )
        return completed

    def _install(self, matches: List[Match]) -> None:
        self.active_matches.clear()
        self.active_matches.update((m.id, m) for m in matches)

    def _require_started(self) -> None:
        if not self.started:
            raise TournamentStateException("No round has been started yet")
