"""Web search interface over the Open Library catalogue."""

__version__ = "1.0.0"
