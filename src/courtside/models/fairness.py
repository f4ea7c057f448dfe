"""Per-participant play tracking used to prioritise idle players."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from courtside.type_hints import IdlePartition, ParticipantId


@dataclass
class FairnessTracker:
    """
    Tracks the last round each participant played.

    Attributes
    ----------
    last_played : dict of str to int
        Mapping of participant id to the most recent round number in which
        they completed a match. Participants who never played are absent.
    """

    last_played: Dict[ParticipantId, int] = field(default_factory=dict)

    def record_round_played(
        self, participants: Iterable[ParticipantId], round_number: int
    ) -> None:
        """Mark every participant as having played in ``round_number``."""
        for participant in participants:
            self.last_played[participant] = round_number

    def last_round_played(self, participant: ParticipantId) -> Optional[int]:
        """Return the last round played, or None if never played."""
        return self.last_played.get(participant)

    def is_idle(self, participant: ParticipantId, round_number: int) -> bool:
        """True if the participant did not play in the round before ``round_number``."""
        return self.last_played.get(participant) != round_number - 1

    def idle_partition(
        self, round_number: int, participants: Iterable[ParticipantId]
    ) -> IdlePartition:
        """Split participants into (idle, recent) for ``round_number``.

        This is a stable partition: each half keeps the order in which
        ``participants`` were given, it is not sorted by recency.
        """
        idle, recent = [], []
        for participant in participants:
            if self.is_idle(participant, round_number):
                idle.append(participant)
            else:
                recent.append(participant)
        return idle, recent

    def copy(self) -> "FairnessTracker":
        return FairnessTracker(last_played=dict(self.last_played))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize fairness state to dictionary."""
        return {"last_played": dict(self.last_played)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FairnessTracker":
        """Deserialize fairness state from dictionary."""
        return cls(
            last_played={
                str(k): int(v) for k, v in data.get("last_played", {}).items()
            }
        )
