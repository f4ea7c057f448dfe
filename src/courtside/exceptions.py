"""Exceptions for use in Courtside"""

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


# ========== Base Application Exception ==========


class CourtsideException(Exception):
    """Base exception for all Courtside errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Scheduling Exceptions ==========


class SchedulingException(CourtsideException):
    """Base exception for round scheduling errors."""

    pass


class InsufficientParticipants(SchedulingException):
    """Raised when an individual roster cannot fill even one court."""

    pass


class InsufficientTeams(SchedulingException):
    """Raised when a fixed-partner roster cannot fill even one court."""

    pass


# ========== Match Exceptions ==========


class MatchException(CourtsideException):
    """Base exception for match and score errors."""

    pass


class UnknownMatch(MatchException):
    """Raised when operating on a match that does not exist or is no longer active."""

    def __init__(self, match_id) -> None:
        super().__init__(f"No active match with id {match_id!r}")
        self.match_id = match_id


class ValidationError(MatchException):
    """Raised when score input is rejected (out of range, bad side, not an integer)."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(CourtsideException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtsideException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when required configuration is missing."""

    pass


# ========== Persistence Exceptions ==========


class RecorderException(CourtsideException):
    """Raised by match recorders when a record cannot be written."""

    pass


class FileLoadException(RecorderException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(RecorderException):
    """Raised when a file cannot be saved."""

    pass
