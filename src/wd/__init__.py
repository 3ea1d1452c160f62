"""wd — jump to previously visited directories by fuzzy name.

Keeps a most-recently-used list of directories and ranks them against a
query by edit-distance similarity weighted by recency.
"""

try:
    from importlib.metadata import version

    __version__ = version("wd")
except Exception:
    __version__ = "0.0.0.dev"
