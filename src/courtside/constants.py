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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Tournament formats
FORMAT_INDIVIDUAL = "americano"
FORMAT_FIXED_PARTNER = "fixed_partner"

# Points to play per match; 21 is the other common choice
DEFAULT_TARGET_POINTS = 16

DEFAULT_COURT_COUNT = 1
DEFAULT_TOURNAMENT_NAME = "Untitled Tournament"

# Court capacity
PLAYERS_PER_SIDE = 2
TEAMS_PER_COURT = 2
PLAYERS_PER_COURT = PLAYERS_PER_SIDE * TEAMS_PER_COURT

# Smallest rosters that can fill one court
MIN_PARTICIPANTS = PLAYERS_PER_COURT
MIN_TEAMS = TEAMS_PER_COURT

# Round numbering is 1-indexed; 0 means no round has been scheduled yet
NO_ROUND = 0

# Separator used when flattening a side's players into one cell
PLAYER_JOINER = " & "

# Logging
LOG_LEVEL_ENV_VAR = "COURTSIDE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
