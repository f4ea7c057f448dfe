"""Main TournamentNight class - the state machine behind a tournament night.

This is the primary interface for running a night, coordinating the
specialized controllers behind one command API that a presentation layer
can drive and subscribe to.
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
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from courtside.constants import NO_ROUND
from courtside.controllers import RoundController, ScoreController
from courtside.exceptions import UnknownMatch
from courtside.models import FairnessTracker, HistoryLog, Match, TournamentConfig
from courtside.pairing import RoundScheduler
from courtside.persistence import MatchRecorder, RecordDispatcher
from courtside.state import TournamentEvent, TournamentSnapshot
from courtside.type_hints import Listener, MatchId, Side
from courtside.utils import setup_logger

logger = setup_logger(__name__)


class TournamentNight:
    """Main tournament night management class.

    This class coordinates all operations through specialized controllers:
    - RoundScheduler: draws the matches for a round
    - ScoreController: score entry and match completion
    - RoundController: round progression and re-rolls

    Commands are applied one at a time under a lock. After a command
    commits, subscribers receive a :class:`TournamentSnapshot` and any
    completed matches are handed to the recorder in the background.
    """

    def __init__(
        self,
        config: TournamentConfig,
        rng: Optional[random.Random] = None,
        recorder: Optional[MatchRecorder] = None,
        clock: Optional[Callable[[], datetime]] = None,
        *,
        fairness: Optional[FairnessTracker] = None,
        history: Optional[HistoryLog] = None,
        active_matches: Optional[List[Match]] = None,
        round_number: int = NO_ROUND,
        next_match_id: int = 1,
    ) -> None:
        """Initialize a tournament night.

        Args
        ----
        config: Tournament configuration
        rng: Randomness source for partner shuffles; seed it for reproducible nights
        recorder: External log receiving completed matches, if any
        clock: Timestamp source for completed matches
        fairness, history, active_matches, round_number, next_match_id:
            Restored state, see :meth:`from_dict`
        """
        self.config = config
        self.fairness = fairness if fairness is not None else FairnessTracker()
        self.history = history if history is not None else HistoryLog()
        self._active: Dict[MatchId, Match] = {m.id: m for m in active_matches or []}

        self.scheduler = RoundScheduler(
            config, self.fairness, rng=rng, next_match_id=next_match_id
        )
        self.score_controller = ScoreController(
            config, self._active, self.history, self.fairness, clock=clock
        )
        self.round_controller = RoundController(
            self.scheduler, self.score_controller, self._active, round_number
        )

        self._dispatcher = RecordDispatcher(recorder) if recorder else None
        self._recorder_closed = False
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @property
    def round_number(self) -> int:
        """Current round (1-indexed), 0 before :meth:`start`."""
        return self.round_controller.round_number

    @property
    def active_matches(self) -> List[Match]:
        """Active matches of the current round, by court."""
        with self._lock:
            return self.round_controller.matches

    def get_match(self, match_id: MatchId) -> Match:
        """Find a match, active or completed.

        Raises:
            UnknownMatch: If the id was never scheduled or was abandoned
        """
        with self._lock:
            if match_id in self._active:
                return self._active[match_id]
            for match in self.history:
                if match.id == match_id:
                    return match
        raise UnknownMatch(match_id)

    def snapshot(self) -> TournamentSnapshot:
        with self._lock:
            return TournamentSnapshot.compute(self)

    # ========== Subscriptions ==========

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(event, snapshot)``; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(
        self, event: TournamentEvent, changed_match_id: Optional[MatchId] = None
    ) -> None:
        if not self._listeners:
            return
        snapshot = TournamentSnapshot.compute(self, changed_match_id)
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:
                # The command has already committed; a broken view must not undo it
                logger.exception(f"Listener {listener!r} failed on {event.name}")

    # ========== Round Management ==========

    def start(self) -> List[Match]:
        """Draw round 1.

        Returns:
            The matches of round 1
        """
        with self._lock:
            matches = self.round_controller.start()
            if self._dispatcher:
                self._dispatcher.submit_tournament(self.config)
            logger.info(
                f"Started {self.config.format.value} tournament {self.name!r} with "
                f"{self.config.roster_size} entries on {self.config.court_count} "
                f"court(s) to {self.config.target_points} points"
            )
            self._publish(TournamentEvent.ROUND_STARTED)
            return matches

    def reroll(self) -> List[Match]:
        """Redraw the current round, abandoning its active matches."""
        with self._lock:
            matches = self.round_controller.reroll()
            self._publish(TournamentEvent.ROUND_REROLLED)
            return matches

    def complete_round(self) -> List[Match]:
        """Complete every active match and move on to the next round.

        Returns:
            The matches completed by this call
        """
        with self._lock:
            completed = self.round_controller.complete_round()
            self._dispatch(completed)
            self._publish(TournamentEvent.ROUND_COMPLETED)
            return completed

    # ========== Score Management ==========

    def increment(self, match_id: MatchId, side: Side) -> Match:
        with self._lock:
            match = self.score_controller.increment(match_id, side)
            self._publish(TournamentEvent.SCORE_CHANGED, match_id)
            return match

    def decrement(self, match_id: MatchId, side: Side) -> Match:
        with self._lock:
            match = self.score_controller.decrement(match_id, side)
            self._publish(TournamentEvent.SCORE_CHANGED, match_id)
            return match

    def set_score(self, match_id: MatchId, side: Side, value: int) -> Match:
        """Enter ``side``'s score; the other side gets the complement."""
        with self._lock:
            match = self.score_controller.set_score(match_id, side, value)
            self._publish(TournamentEvent.SCORE_CHANGED, match_id)
            return match

    def complete_match(self, match_id: MatchId) -> Match:
        with self._lock:
            match = self.score_controller.complete_match(match_id)
            self._dispatch([match])
            self._publish(TournamentEvent.MATCH_COMPLETED, match_id)
            return match

    # ========== Persistence ==========

    def _dispatch(self, matches: List[Match]) -> None:
        if self._dispatcher is None:
            if self._recorder_closed:
                for match in matches:
                    logger.warning(
                        f"Recorder already closed, match {match.id} was not recorded"
                    )
            return
        for match in matches:
            self._dispatcher.submit(match.to_record())

    def close(self, wait: bool = True) -> None:
        """Stop the background recorder, by default after draining it.

        Commands keep working afterwards; their completions are just no
        longer recorded.
        """
        with self._lock:
            dispatcher, self._dispatcher = self._dispatcher, None
            if dispatcher is not None:
                self._recorder_closed = True
        if dispatcher is not None:
            dispatcher.shutdown(wait=wait)

    def __enter__(self) -> "TournamentNight":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the night to a dictionary.

        Returns:
            Dictionary containing all tournament state
        """
        with self._lock:
            return {
                "config": self.config.to_dict(),
                "round_number": self.round_number,
                "next_match_id": self.scheduler.next_match_id,
                "fairness": self.fairness.to_dict(),
                "active_matches": [m.to_dict() for m in self.active_matches],
                "history": self.history.to_dict(),
            }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        rng: Optional[random.Random] = None,
        recorder: Optional[MatchRecorder] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "TournamentNight":
        """Deserialize a night from a dictionary.

        Args:
            data: Dictionary produced by :meth:`to_dict`
            rng, recorder, clock: As for the constructor

        Returns:
            Reconstructed TournamentNight
        """
        config = TournamentConfig.from_dict(data["config"])
        night = cls(
            config,
            rng=rng,
            recorder=recorder,
            clock=clock,
            fairness=FairnessTracker.from_dict(data.get("fairness", {})),
            history=HistoryLog.from_dict(data.get("history", {})),
            active_matches=[Match.from_dict(m) for m in data.get("active_matches", [])],
            round_number=data.get("round_number", NO_ROUND),
            next_match_id=data.get("next_match_id", 1),
        )
        logger.info(f"Loaded tournament: {night.name} (round {night.round_number})")
        return night
