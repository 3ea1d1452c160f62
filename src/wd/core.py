"""wd orchestrator — resolve a query to a directory and record the visit.

Each call is one load -> rank -> promote -> save cycle against the history
file. There is no locking: concurrent invocations race and the last writer
wins, which at worst loses a recency bump.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from wd.config import WdConfig
from wd.errors import PathResolutionError
from wd.history.store import load_history, save_history
from wd.ranking import Candidate, rank

logger = logging.getLogger(__name__)

DIRECT_HIT_CONFIDENCE = 1.0


def canonicalize(path: str) -> str:
    """Absolute, symlink-resolved form of an existing path."""
    try:
        return str(Path(path).resolve(strict=True))
    except (OSError, RuntimeError) as e:
        raise PathResolutionError(f"cannot resolve {path!r}: {e}") from e


class Completer:
    """Answers `complete` and `forget` against a single history file."""

    def __init__(self, config: WdConfig) -> None:
        self.config = config

    @property
    def db_path(self) -> Path:
        return self.config.db_path

    # ── complete ─────────────────────────────────────────────

    def complete(
        self,
        query: str,
        min_confidence: float | None = None,
        result_count: int | None = None,
    ) -> list[Candidate]:
        """Return the best history matches for `query`.

        If `query` is an existing directory it is recorded and returned
        with confidence 1.0. Otherwise history is ranked; when no
        `result_count` is given the single best match is promoted, while
        listing N results leaves history untouched.
        """
        if min_confidence is None:
            min_confidence = self.config.min_confidence

        if query and Path(query).is_dir():
            logger.debug("Input is a concrete path: %s", query)
            return [self._direct_hit(query)]

        history = load_history(self.db_path)
        if not history:
            return []

        start = time.perf_counter()
        limit = 1 if result_count is None else result_count
        matches = rank(query, history, min_confidence, limit=limit)
        logger.debug(
            "Ranked %d entries in %.2f ms", len(history), (time.perf_counter() - start) * 1000
        )

        if result_count is None and matches:
            history.promote(matches[0].path)
            save_history(history, self.db_path)
        return matches

    def _direct_hit(self, query: str) -> Candidate:
        path = canonicalize(query)
        history = load_history(self.db_path)
        history.promote(path)
        save_history(history, self.db_path)
        return Candidate(DIRECT_HIT_CONFIDENCE, path)

    # ── forget ───────────────────────────────────────────────

    def forget(self, path: str | None = None) -> str:
        """Remove `path` (default: the current directory) from history.

        Returns the canonical path that was forgotten.
        """
        target = canonicalize(path if path is not None else ".")
        history = load_history(self.db_path)
        history.remove(target)
        save_history(history, self.db_path)
        return target
