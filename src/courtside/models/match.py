"""Match data classes and the record handed to persistence collaborators."""

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

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from courtside.constants import PLAYER_JOINER, PLAYERS_PER_SIDE
from courtside.exceptions import ValidationError
from courtside.type_hints import SIDE_A, SIDE_B, SIDES, MaybeSide, Pair, Side


class MatchStatus(Enum):
    """Lifecycle of a match. ACTIVE -> COMPLETED is the only transition."""

    ACTIVE = "active"
    COMPLETED = "completed"


def check_side(side: Any) -> Side:
    """Return ``side`` if it names side A or B, otherwise raise ValidationError."""
    if side not in SIDES:
        raise ValidationError(f"Unknown side {side!r}, expected one of {SIDES}")
    return side


def other_side(side: Side) -> Side:
    return SIDE_B if check_side(side) == SIDE_A else SIDE_A


@dataclass
class MatchSide:
    """One side of the net.

    Attributes
    ----------
    players : tuple of str
        Exactly two participant ids.
    score : int
        Non-negative points won by this side.
    label : str or None
        Team name in fixed-partner tournaments.
    """

    players: Pair
    score: int = 0
    label: Optional[str] = None

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        if len(self.players) != PLAYERS_PER_SIDE:
            raise ValueError(
                f"A side needs exactly {PLAYERS_PER_SIDE} players, got {self.players}"
            )

    @property
    def display_players(self) -> str:
        return PLAYER_JOINER.join(self.players)

    def to_dict(self) -> Dict[str, Any]:
        return {"players": list(self.players), "score": self.score, "label": self.label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchSide":
        return cls(
            players=tuple(data["players"]),
            score=int(data.get("score", 0)),
            label=data.get("label"),
        )


@dataclass
class Match:
    """A court assignment for one round.

    Attributes
    ----------
    id : int
        Identifier unique within the tournament.
    round_number : int
        Round (1-indexed) the match belongs to.
    court : int
        Court number (1-indexed).
    side_a, side_b : MatchSide
        The two sides.
    status : MatchStatus
        ACTIVE until completed.
    completed_at : datetime or None
        Set once the match is completed.
    """

    id: int
    round_number: int
    court: int
    side_a: MatchSide
    side_b: MatchSide
    status: MatchStatus = MatchStatus.ACTIVE
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        overlap = set(self.side_a.players) & set(self.side_b.players)
        if overlap:
            raise ValueError(f"Players on both sides of match {self.id}: {overlap}")

    @property
    def is_active(self) -> bool:
        return self.status is MatchStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is MatchStatus.COMPLETED

    @property
    def participants(self) -> Tuple[str, ...]:
        """All four players, side A first."""
        return self.side_a.players + self.side_b.players

    def side(self, side: Side) -> MatchSide:
        return self.side_a if check_side(side) == SIDE_A else self.side_b

    @property
    def scores(self) -> Tuple[int, int]:
        return self.side_a.score, self.side_b.score

    @property
    def winning_side(self) -> MaybeSide:
        """Side with the higher score, or None on a tie."""
        if self.side_a.score > self.side_b.score:
            return SIDE_A
        if self.side_b.score > self.side_a.score:
            return SIDE_B
        return None

    def to_record(self) -> "CompletedMatchRecord":
        """Build the persistence record for a completed match."""
        if not self.is_completed or self.completed_at is None:
            raise ValueError(f"Match {self.id} has not been completed")
        return CompletedMatchRecord(
            match_id=self.id,
            round_number=self.round_number,
            side_a_players=self.side_a.players,
            side_a_score=self.side_a.score,
            side_b_players=self.side_b.players,
            side_b_score=self.side_b.score,
            winning_side=self.winning_side,
            completed_at=self.completed_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "court": self.court,
            "side_a": self.side_a.to_dict(),
            "side_b": self.side_b.to_dict(),
            "status": self.status.value,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        completed_at = data.get("completed_at")
        return cls(
            id=int(data["id"]),
            round_number=int(data["round_number"]),
            court=int(data["court"]),
            side_a=MatchSide.from_dict(data["side_a"]),
            side_b=MatchSide.from_dict(data["side_b"]),
            status=MatchStatus(data.get("status", MatchStatus.ACTIVE.value)),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        )


@dataclass(frozen=True)
class CompletedMatchRecord:
    """What an external match log receives for every completed match.

    Attributes
    ----------
    match_id : int
        Id of the completed match.
    round_number : int
        Round the match was played in.
    side_a_players, side_b_players : tuple of str
        Participant names on each side.
    side_a_score, side_b_score : int
        Final scores.
    winning_side : str or None
        "A", "B", or None for a tie. Ties are passed through as-is.
    completed_at : datetime
        Completion timestamp.
    """

    match_id: int
    round_number: int
    side_a_players: Pair
    side_a_score: int
    side_b_players: Pair
    side_b_score: int
    winning_side: MaybeSide
    completed_at: datetime

    @property
    def winner_names(self) -> Optional[Pair]:
        if self.winning_side == SIDE_A:
            return self.side_a_players
        if self.winning_side == SIDE_B:
            return self.side_b_players
        return None

    def to_row(self) -> List[str]:
        """Spreadsheet-style row: id, side A, score A, side B, score B, winner, time."""
        winner = self.winner_names
        return [
            str(self.match_id),
            PLAYER_JOINER.join(self.side_a_players),
            str(self.side_a_score),
            PLAYER_JOINER.join(self.side_b_players),
            str(self.side_b_score),
            PLAYER_JOINER.join(winner) if winner else "",
            self.completed_at.isoformat(),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "round_number": self.round_number,
            "side_a_players": list(self.side_a_players),
            "side_a_score": self.side_a_score,
            "side_b_players": list(self.side_b_players),
            "side_b_score": self.side_b_score,
            "winning_side": self.winning_side,
            "completed_at": self.completed_at.isoformat(),
        }


MATCH_LOG_HEADERS = [
    "Match ID",
    "Side A Players",
    "Side A Score",
    "Side B Players",
    "Side B Score",
    "Winner",
    "Timestamp",
]
