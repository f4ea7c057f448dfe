"""Roster and tournament configuration data classes."""

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
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from courtside.constants import (
    DEFAULT_COURT_COUNT,
    DEFAULT_TARGET_POINTS,
    DEFAULT_TOURNAMENT_NAME,
    FORMAT_FIXED_PARTNER,
    FORMAT_INDIVIDUAL,
    PLAYER_JOINER,
    PLAYERS_PER_SIDE,
)
from courtside.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from courtside.type_hints import Pair, ParticipantId


class TournamentFormat(Enum):
    """How sides are formed each round."""

    INDIVIDUAL = FORMAT_INDIVIDUAL  # partners reshuffled every round
    FIXED_PARTNER = FORMAT_FIXED_PARTNER  # teams fixed for the whole night

    @classmethod
    def parse(cls, value: Any) -> "TournamentFormat":
        """Accept an enum member, its value, or a loose spelling from a form."""
        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        aliases = {
            "individual": cls.INDIVIDUAL,
            "americano": cls.INDIVIDUAL,
            "fixed_partner": cls.FIXED_PARTNER,
            "fixed": cls.FIXED_PARTNER,
            "teams": cls.FIXED_PARTNER,
        }
        if normalised not in aliases:
            raise InvalidConfigurationException(f"Unknown tournament format: {value!r}")
        return aliases[normalised]


@dataclass(frozen=True)
class Team:
    """A fixed pair of participants playing together all night.

    Attributes
    ----------
    name : str
        Display label shown on the side of the match.
    players : tuple of str
        Exactly two distinct participant ids.
    colour : str or None
        Optional colour tag used by presentation layers.
    """

    name: str
    players: Pair
    colour: Optional[str] = None

    def __post_init__(self) -> None:
        players = tuple(self.players)
        if len(players) != PLAYERS_PER_SIDE:
            raise InvalidConfigurationException(
                f"Team {self.name!r} must have exactly {PLAYERS_PER_SIDE} players, "
                f"got {len(players)}"
            )
        if players[0] == players[1]:
            raise InvalidConfigurationException(
                f"Team {self.name!r} lists {players[0]!r} twice"
            )
        object.__setattr__(self, "players", players)

    @property
    def display_players(self) -> str:
        return PLAYER_JOINER.join(self.players)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {"name": self.name, "players": list(self.players), "colour": self.colour}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        try:
            return cls(
                name=data["name"],
                players=tuple(data["players"]),
                colour=data.get("colour", data.get("color")),
            )
        except KeyError as e:
            raise InvalidConfigurationException(f"Team entry missing {e}") from e


@dataclass(frozen=True)
class TournamentConfig:
    """Immutable per-tournament configuration.

    Attributes
    ----------
    format : TournamentFormat
        Individual rotation (Americano) or fixed partners.
    court_count : int
        Number of matches that can run in parallel, at least 1.
    target_points : int
        Points played per match; complementary score entry sums to this.
    participants : tuple of str
        Individual roster in declared order. Derived from ``teams`` in
        fixed-partner mode.
    teams : tuple of Team
        Team roster in declared order (fixed-partner mode only).
    name : str
        Tournament name.
    """

    format: TournamentFormat
    court_count: int = DEFAULT_COURT_COUNT
    target_points: int = DEFAULT_TARGET_POINTS
    participants: Tuple[ParticipantId, ...] = field(default_factory=tuple)
    teams: Tuple[Team, ...] = field(default_factory=tuple)
    name: str = DEFAULT_TOURNAMENT_NAME

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", TournamentFormat.parse(self.format))
        object.__setattr__(self, "participants", tuple(self.participants))
        object.__setattr__(self, "teams", tuple(self.teams))

        if isinstance(self.court_count, bool) or not isinstance(self.court_count, int):
            raise InvalidConfigurationException("Court count must be an integer")
        if self.court_count < 1:
            raise InvalidConfigurationException(
                f"Court count must be at least 1, got {self.court_count}"
            )
        if isinstance(self.target_points, bool) or not isinstance(
            self.target_points, int
        ):
            raise InvalidConfigurationException("Target points must be an integer")
        if self.target_points <= 0:
            raise InvalidConfigurationException(
                f"Target points must be positive, got {self.target_points}"
            )

        if self.format is TournamentFormat.FIXED_PARTNER:
            self._validate_teams()
            flattened = tuple(p for team in self.teams for p in team.players)
            if self.participants and set(self.participants) != set(flattened):
                raise InvalidConfigurationException(
                    "Participants do not match the players listed in the teams"
                )
            object.__setattr__(self, "participants", flattened)
        else:
            if self.teams:
                raise InvalidConfigurationException(
                    "Teams are only used in fixed-partner tournaments"
                )
            self._validate_participants()

    def _validate_participants(self) -> None:
        seen = set()
        for participant in self.participants:
            if not isinstance(participant, str) or not participant.strip():
                raise InvalidConfigurationException("Participant name cannot be empty")
            if participant in seen:
                raise InvalidConfigurationException(
                    f"Duplicate participant: {participant}"
                )
            seen.add(participant)

    def _validate_teams(self) -> None:
        seen_players = set()
        seen_names = set()
        for team in self.teams:
            if team.name in seen_names:
                raise InvalidConfigurationException(f"Duplicate team name: {team.name}")
            seen_names.add(team.name)
            for player in team.players:
                if not isinstance(player, str) or not player.strip():
                    raise InvalidConfigurationException(
                        f"Team {team.name!r} has an empty player name"
                    )
                # Teams are disjoint
                if player in seen_players:
                    raise InvalidConfigurationException(
                        f"Player {player!r} appears in more than one team"
                    )
                seen_players.add(player)

    @property
    def is_fixed_partner(self) -> bool:
        return self.format is TournamentFormat.FIXED_PARTNER

    @property
    def roster_size(self) -> int:
        """Number of schedulable units: teams or individuals."""
        return len(self.teams) if self.is_fixed_partner else len(self.participants)

    def team_of(self, participant: ParticipantId) -> Optional[Team]:
        for team in self.teams:
            if participant in team.players:
                return team
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        data: Dict[str, Any] = {
            "name": self.name,
            "format": self.format.value,
            "court_count": self.court_count,
            "target_points": self.target_points,
        }
        if self.is_fixed_partner:
            data["teams"] = [team.to_dict() for team in self.teams]
        else:
            data["participants"] = list(self.participants)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        if "participants" not in data and "teams" not in data:
            raise MissingConfigurationException(
                'Configuration needs a "participants" or "teams" list'
            )
        if "format" not in data:
            # A team list alone is enough to tell the format apart
            fmt: Any = (
                TournamentFormat.FIXED_PARTNER
                if data.get("teams")
                else TournamentFormat.INDIVIDUAL
            )
        else:
            fmt = data["format"]
        teams: List[Team] = [Team.from_dict(t) for t in data.get("teams", [])]
        return cls(
            format=fmt,
            court_count=data.get("court_count", DEFAULT_COURT_COUNT),
            target_points=data.get("target_points", DEFAULT_TARGET_POINTS),
            participants=tuple(data.get("participants", ())),
            teams=tuple(teams),
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
        )
