"""Completed-match logs and the fire-and-forget dispatcher that feeds them."""

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
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from courtside.exceptions import FileSaveException
from courtside.models.match import CompletedMatchRecord
from courtside.models.roster import TournamentConfig
from courtside.utils import setup_logger, utc_now

logger = setup_logger(__name__)


class MatchRecorder(ABC):
    """External log of completed matches.

    Implementations may block or fail; the dispatcher keeps both away from
    the tournament's commands.
    """

    def record_tournament(self, config: TournamentConfig) -> None:
        """Called once when the first round starts. Optional."""

    @abstractmethod
    def record_match(self, record: CompletedMatchRecord) -> None:
        """Persist one completed match."""


class MemoryMatchLog(MatchRecorder):
    """Keeps everything in lists. Useful for tests and embedding."""

    def __init__(self) -> None:
        self.tournaments: List[TournamentConfig] = []
        self.records: List[CompletedMatchRecord] = []

    def record_tournament(self, config: TournamentConfig) -> None:
        self.tournaments.append(config)

    def record_match(self, record: CompletedMatchRecord) -> None:
        self.records.append(record)


class JsonLinesMatchLog(MatchRecorder):
    """Appends one JSON document per line to a file.

    The first line written for a tournament is a ``"tournament"`` entry with
    its configuration, followed by one ``"match"`` entry per completed match.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def record_tournament(self, config: TournamentConfig) -> None:
        self._append(
            {"type": "tournament", "created_at": utc_now().isoformat(), **config.to_dict()}
        )

    def record_match(self, record: CompletedMatchRecord) -> None:
        self._append({"type": "match", **record.to_dict()})

    def read(self) -> List[Dict[str, Any]]:
        """Return every entry written so far, oldest first."""
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

    def _append(self, entry: Dict[str, Any]) -> None:
        try:
            with self._lock:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.path, "a", encoding="utf-8") as f:
                    f.write(json.dumps(entry) + "\n")
        except OSError as e:
            raise FileSaveException(f"Could not write to {self.path}: {e}") from e


class RecordDispatcher:
    """Hands records to a recorder on a background thread.

    Submission returns immediately. A single worker keeps records in
    completion order. Failures are logged and otherwise ignored: they never
    reach the command that completed the match.
    """

    def __init__(self, recorder: MatchRecorder) -> None:
        self.recorder = recorder
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="courtside-recorder"
        )

    def submit_tournament(self, config: TournamentConfig) -> Future:
        future = self._executor.submit(self.recorder.record_tournament, config)
        future.add_done_callback(
            lambda f: self._log_failure(f, f"tournament {config.name!r}")
        )
        return future

    def submit(self, record: CompletedMatchRecord) -> Future:
        future = self._executor.submit(self.recorder.record_match, record)
        future.add_done_callback(
            lambda f: self._log_failure(f, f"match {record.match_id}")
        )
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting records; with ``wait`` drain the ones in flight."""
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future: Future, what: str) -> None:
        error: Optional[BaseException] = future.exception()
        if error is not None:
            logger.error(f"Failed to record {what}: {error}")
