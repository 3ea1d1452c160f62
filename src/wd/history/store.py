"""History store — load, persist and reorder the visited-directory list.

The on-disk file is rewritten wholesale on every save (truncate + write, no
temp-file rename). A crash mid-write can therefore leave a truncated file;
reads treat any content they cannot make sense of as an empty history so a
damaged store never blocks navigation.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from wd.errors import HistoryStoreError

logger = logging.getLogger(__name__)

PATHS_KEY = "paths"


# ── In-memory history ────────────────────────────────────────


@dataclass
class PathHistory:
    """Visited directories, most recently used first. No duplicates."""

    entries: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def paths(self) -> list[str]:
        return list(self.entries)

    def promote(self, path: str) -> PathHistory:
        """Move `path` to the front, inserting it if absent."""
        self.entries = [p for p in self.entries if p != path]
        self.entries.insert(0, path)
        logger.debug("Promoted %s", path)
        return self

    def remove(self, path: str) -> PathHistory:
        """Drop `path` from the history. Absent paths are ignored."""
        before = len(self.entries)
        self.entries = [p for p in self.entries if p != path]
        if len(self.entries) != before:
            logger.debug("Removed %s", path)
        return self


# ── Loading ──────────────────────────────────────────────────


class LoadStatus(enum.Enum):
    OK = "ok"
    CORRUPTED = "corrupted"


@dataclass
class LoadResult:
    """Outcome of reading the history file.

    A corrupted file still yields a usable (empty) history; `reason`
    describes what was wrong with it.
    """

    history: PathHistory
    status: LoadStatus = LoadStatus.OK
    reason: str = ""

    @property
    def corrupted(self) -> bool:
        return self.status is LoadStatus.CORRUPTED


def _ensure_parent(location: Path) -> None:
    """Create the directory holding `location`. Failure is only logged."""
    try:
        location.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create data directory %s: %s", location.parent, e)


def _parse(text: str) -> list[str]:
    """Decode the JSON document, raising ValueError on any shape mismatch."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    if PATHS_KEY not in data:
        raise ValueError(f"missing '{PATHS_KEY}' field")
    paths = data[PATHS_KEY]
    if not isinstance(paths, list):
        raise ValueError(f"'{PATHS_KEY}' is not a list")
    for p in paths:
        if not isinstance(p, str):
            raise ValueError(f"non-string entry in '{PATHS_KEY}': {p!r}")
    # dict.fromkeys keeps the first (most recent) occurrence of each path
    return list(dict.fromkeys(paths))


def read_history(location: Path) -> LoadResult:
    """Read the history file at `location`.

    A missing file gives an empty history. Unparseable content gives an
    empty history with status CORRUPTED. Any other I/O failure raises
    HistoryStoreError.
    """
    location = Path(location)
    _ensure_parent(location)

    try:
        raw = location.read_bytes()
    except FileNotFoundError:
        return LoadResult(PathHistory())
    except OSError as e:
        raise HistoryStoreError(f"error loading wd db {location}: {e}") from e

    try:
        paths = _parse(raw.decode("utf-8"))
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        return LoadResult(PathHistory(), LoadStatus.CORRUPTED, str(e))

    return LoadResult(PathHistory(paths))


def load_history(location: Path) -> PathHistory:
    """Like read_history, but logs a warning and carries on if corrupted."""
    result = read_history(location)
    if result.corrupted:
        logger.warning(
            "History file %s is corrupted (%s); starting with an empty history",
            location,
            result.reason,
        )
    return result.history


# ── Persistence ──────────────────────────────────────────────


def save_history(history: PathHistory, location: Path) -> None:
    """Overwrite `location` with the full ordered history."""
    location = Path(location)
    _ensure_parent(location)
    payload = json.dumps({PATHS_KEY: history.paths()})
    try:
        with open(location, "w", encoding="utf-8") as fh:
            fh.write(payload)
    except OSError as e:
        raise HistoryStoreError(f"error writing wd db {location}: {e}") from e
    logger.debug("Saved %d paths to %s", len(history), location)
