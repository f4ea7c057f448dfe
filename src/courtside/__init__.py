"""Courtside: court rotation and scorekeeping for tournament nights."""

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

__version__ = "0.1.0"

from courtside.exceptions import (
    CourtsideException,
    InsufficientParticipants,
    InsufficientTeams,
    UnknownMatch,
    ValidationError,
)
from courtside.models import (
    CompletedMatchRecord,
    FairnessTracker,
    HistoryLog,
    Match,
    MatchSide,
    MatchStatus,
    Team,
    TournamentConfig,
    TournamentFormat,
)
from courtside.state import TournamentEvent, TournamentPhase, TournamentSnapshot
from courtside.tournament import TournamentNight

__all__ = [
    "TournamentNight",
    "TournamentConfig",
    "TournamentFormat",
    "Team",
    "Match",
    "MatchSide",
    "MatchStatus",
    "CompletedMatchRecord",
    "FairnessTracker",
    "HistoryLog",
    "TournamentEvent",
    "TournamentPhase",
    "TournamentSnapshot",
    "CourtsideException",
    "ValidationError",
    "UnknownMatch",
    "InsufficientParticipants",
    "InsufficientTeams",
]
