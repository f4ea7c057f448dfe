"""Roster and saved-night files.

Rosters are JSON documents shaped like :meth:`TournamentConfig.to_dict`, for
example::

    {
        "name": "Tuesday Padel",
        "format": "americano",
        "court_count": 2,
        "target_points": 16,
        "participants": ["Ann", "Bob", "Cid", "Dee", "Eve", "Fay"]
    }

Fixed-partner rosters carry ``"teams"`` instead, each with ``name``,
``players`` and an optional ``colour``.
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

import json
import random
from pathlib import Path
from typing import Any, Dict, Optional, Union

from courtside.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidConfigurationException,
)
from courtside.models.roster import TournamentConfig
from courtside.persistence import MatchRecorder
from courtside.tournament import TournamentNight
from courtside.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise FileLoadException(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileLoadException(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FileLoadException(f"{path} must contain a JSON object")
    return data


def _write_json(path: PathLike, data: Dict[str, Any]) -> None:
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise FileSaveException(f"Could not write {path}: {e}") from e


def load_roster(path: PathLike) -> TournamentConfig:
    """Read a roster file into a validated configuration."""
    data = _read_json(path)
    try:
        config = TournamentConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationException(f"Invalid roster in {path}: {e}") from e
    logger.info(
        f"Loaded roster {config.name!r} from {path}: {config.roster_size} entries"
    )
    return config


def save_roster(config: TournamentConfig, path: PathLike) -> None:
    _write_json(path, config.to_dict())


def save_tournament(night: TournamentNight, path: PathLike) -> None:
    """Write the whole night (roster, rounds, scores, history) to ``path``."""
    _write_json(path, night.to_dict())
    logger.info(f"Saved tournament {night.name!r} to {path}")


def load_tournament(
    path: PathLike,
    rng: Optional[random.Random] = None,
    recorder: Optional[MatchRecorder] = None,
) -> TournamentNight:
    data = _read_json(path)
    try:
        return TournamentNight.from_dict(data, rng=rng, recorder=recorder)
    except (KeyError, TypeError, ValueError) as e:
        raise FileLoadException(f"Invalid tournament file {path}: {e}") from e
