"""quotebook - keep, tag, search and export your favourite quotes."""

__version__ = "0.1.0"
