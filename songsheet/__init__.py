"""SongSheet: chord-over-lyrics rendering, transposition and paginated export."""

__version__ = "0.1.0"
