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

"""
Tournament change notifications.

This module provides the event kinds published to subscribers and the
immutable snapshot that accompanies every event, so a presentation layer can
redraw from the snapshot alone without touching live state.
"""

import copy
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Tuple

from courtside.models.match import Match
from courtside.type_hints import MatchId, ParticipantId

if TYPE_CHECKING:
    from courtside.tournament import TournamentNight


class TournamentEvent(Enum):
    """What just changed."""

    ROUND_STARTED = auto()  # A new round has been scheduled
    ROUND_REROLLED = auto()  # The current round was redrawn
    SCORE_CHANGED = auto()  # A score on an active match changed
    MATCH_COMPLETED = auto()  # One match moved to the history
    ROUND_COMPLETED = auto()  # Whole round finished, next round scheduled


class TournamentPhase(Enum):
    """Represents the current phase of a tournament night."""

    NOT_STARTED = auto()  # Roster loaded, no round drawn yet
    IN_PROGRESS = auto()  # Active matches on court
    AWAITING_NEXT_ROUND = auto()  # Every match in the round completed


@dataclass(frozen=True)
class TournamentSnapshot:
    """
    Point-in-time copy of a tournament night.

    Attributes
    ----------
    round_number : int
        Current round (0 before the first round).
    phase : TournamentPhase
        Current phase of the night.
    active_matches : tuple of Match
        Deep copies of the active matches, ordered by court.
    history : tuple of Match
        Deep copies of completed matches, newest first.
    sitting_out : tuple of str
        Participants without a court this round, in roster order.
    changed_match_id : int or None
        Match the triggering event was about, if any.
    """

    round_number: int
    phase: TournamentPhase
    active_matches: Tuple[Match, ...]
    history: Tuple[Match, ...]
    sitting_out: Tuple[ParticipantId, ...]
    changed_match_id: Optional[MatchId] = None

    @classmethod
    def compute(
        cls, night: "TournamentNight", changed_match_id: Optional[MatchId] = None
    ) -> "TournamentSnapshot":
        """
        Capture the current state of ``night``.

        Parameters
        ----------
        night : TournamentNight
            The tournament to capture
        changed_match_id : int or None
            Match the triggering event was about

        Returns
        -------
        TournamentSnapshot
            A snapshot sharing no mutable objects with ``night``
        """
        active = tuple(copy.deepcopy(m) for m in night.active_matches)
        history = tuple(copy.deepcopy(m) for m in night.history)

        if night.round_number == 0:
            phase = TournamentPhase.NOT_STARTED
        elif active:
            phase = TournamentPhase.IN_PROGRESS
        else:
            phase = TournamentPhase.AWAITING_NEXT_ROUND

        on_court = {p for m in active for p in m.participants}
        this_round = {
            p
            for m in history
            if m.round_number == night.round_number
            for p in m.participants
        }
        sitting_out = tuple(
            p
            for p in night.config.participants
            if p not in on_court and p not in this_round
        )

        return cls(
            round_number=night.round_number,
            phase=phase,
            active_matches=active,
            history=history,
            sitting_out=sitting_out if night.round_number else (),
            changed_match_id=changed_match_id,
        )

    def active_match(self, match_id: MatchId) -> Optional[Match]:
        for match in self.active_matches:
            if match.id == match_id:
                return match
        return None

    @property
    def status_message(self) -> str:
        """Human-readable one-line summary."""
        if self.phase is TournamentPhase.NOT_STARTED:
            return "Tournament not started"
        if self.phase is TournamentPhase.AWAITING_NEXT_ROUND:
            return f"Round {self.round_number} finished, ready for next round"
        return (
            f"Round {self.round_number}: {len(self.active_matches)} match(es) in play"
        )
