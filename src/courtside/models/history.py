"""Append-only record of completed matches."""

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

from collections import deque
from typing import Any, Deque, Dict, Iterator, List, Optional

from courtside.models.match import Match


class HistoryLog:
    """Completed matches, newest first.

    Only completed matches are accepted and a match id can appear once.
    There is no removal: completed matches are never rolled back.
    """

    def __init__(self, matches: Optional[List[Match]] = None) -> None:
        self._matches: Deque[Match] = deque()
        self._ids = set()
        # ``matches`` is newest first, so prepend oldest first
        for match in reversed(matches or []):
            self.prepend(match)

    def prepend(self, match: Match) -> None:
        if not match.is_completed:
            raise ValueError(f"Match {match.id} is not completed")
        if match.id in self._ids:
            raise ValueError(f"Match {match.id} is already in the history")
        self._matches.appendleft(match)
        self._ids.add(match.id)

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._ids

    def __iter__(self) -> Iterator[Match]:
        return iter(self._matches)

    def __len__(self) -> int:
        return len(self._matches)

    @property
    def latest(self) -> Optional[Match]:
        return self._matches[0] if self._matches else None

    def for_round(self, round_number: int) -> List[Match]:
        return [m for m in self._matches if m.round_number == round_number]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history to dictionary."""
        return {"matches": [m.to_dict() for m in self._matches]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryLog":
        """Deserialize history from dictionary."""
        return cls([Match.from_dict(m) for m in data.get("matches", [])])
