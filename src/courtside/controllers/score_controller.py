"""Score entry and match completion.

This module handles score changes on active matches with proper validation,
and the Active -> Completed transition that feeds history and fairness.
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

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from courtside.exceptions import UnknownMatch, ValidationError
from courtside.models.fairness import FairnessTracker
from courtside.models.history import HistoryLog
from courtside.models.match import Match, MatchStatus, check_side, other_side
from courtside.models.roster import TournamentConfig
from courtside.type_hints import MatchId, Side
from courtside.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class ScoreController:
    """Validates and applies score changes to active matches.

    This class is responsible for:
    - Incrementing and decrementing a side's score
    - Complementary score entry (the other side gets ``target - value``)
    - Completing matches: stamping, appending to history, updating fairness

    Every method validates before touching state, so a rejected command
    leaves the match exactly as it was.
    """

    def __init__(
        self,
        config: TournamentConfig,
        active_matches: Dict[MatchId, Match],
        history: HistoryLog,
        fairness: FairnessTracker,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize the score controller.

        Args:
            config: Tournament configuration (for target points)
            active_matches: Live mapping of active match id -> Match, shared
                with the round controller
            history: History log completed matches are prepended to
            fairness: Fairness tracker updated on completion
            clock: Returns the completion timestamp; defaults to UTC now
        """
        self.config = config
        self.active_matches = active_matches
        self.history = history
        self.fairness = fairness
        self.clock = clock or utc_now

    def get_active_match(self, match_id: MatchId) -> Match:
        """Return the active match with ``match_id``.

        Raises:
            UnknownMatch: If no such match is active
        """
        match = self.active_matches.get(match_id)
        if match is None or not match.is_active:
            raise UnknownMatch(match_id)
        return match

    def increment(self, match_id: MatchId, side: Side) -> Match:
        """Add one point to ``side``."""
        match = self.get_active_match(match_id)
        match_side = match.side(side)
        match_side.score += 1
        logger.debug(f"Match {match_id}: side {side} -> {match_side.score}")
        return match

    def decrement(self, match_id: MatchId, side: Side) -> Match:
        """Remove one point from ``side``; scores never go below zero."""
        match = self.get_active_match(match_id)
        match_side = match.side(side)
        if match_side.score > 0:
            match_side.score -= 1
        logger.debug(f"Match {match_id}: side {side} -> {match_side.score}")
        return match

    def set_score(self, match_id: MatchId, side: Side, value: int) -> Match:
        """Enter one side's score and derive the other.

        Args:
            match_id: Active match to update
            side: "A" or "B"
            value: Points for ``side``, between 0 and target points inclusive

        Returns:
            The updated match

        Raises:
            UnknownMatch: If the match is not active
            ValidationError: If the side or value is invalid
        """
        match = self.get_active_match(match_id)
        check_side(side)
        target = self.config.target_points
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning(f"Rejected score {value!r} for match {match_id}")
            raise ValidationError(f"Score must be a whole number, got {value!r}")
        if not (0 <= value <= target):
            logger.warning(f"Rejected score {value} for match {match_id}")
            raise ValidationError(f"Score must be between 0 and {target}, got {value}")

        match.side(side).score = value
        match.side(other_side(side)).score = target - value
        logger.debug(
            f"Match {match_id}: score set to {match.side_a.score}-{match.side_b.score}"
        )
        return match

    def complete_match(self, match_id: MatchId) -> Match:
        """Finalize an active match.

        Raises:
            UnknownMatch: If the match is unknown or already completed
        """
        match = self.get_active_match(match_id)
        self._finalize(match, self.clock())
        return match

    def complete_matches(self, match_ids: Iterable[MatchId]) -> List[Match]:
        """Finalize several matches as one batch.

        Every id is checked before any match is touched, and all fairness
        updates are applied before this returns.
        """
        matches = [self.get_active_match(match_id) for match_id in match_ids]
        if len({m.id for m in matches}) != len(matches):
            raise ValidationError("The same match was listed more than once")

        completed_at = self.clock()
        for match in matches:
            self._finalize(match, completed_at)
        return matches

    def _finalize(self, match: Match, completed_at: datetime) -> None:
        match.status = MatchStatus.COMPLETED
        match.completed_at = completed_at
        del self.active_matches[match.id]
        self.history.prepend(match)
        self.fairness.record_round_played(match.participants, match.round_number)
        logger.info(
            f"Completed match {match.id} (round {match.round_number}, court "
            f"{match.court}): {match.side_a.display_players} {match.side_a.score} - "
            f"{match.side_b.score} {match.side_b.display_players}"
        )
