"""Directory history — MRU-ordered list of visited paths.

Persisted as a single JSON object:

    {"paths": ["/most/recent", "/older", ...]}
"""

from wd.history.store import (
    LoadResult,
    LoadStatus,
    PathHistory,
    load_history,
    read_history,
    save_history,
)

__all__ = [
    "LoadResult",
    "LoadStatus",
    "PathHistory",
    "load_history",
    "read_history",
    "save_history",
]
