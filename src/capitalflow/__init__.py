"""Capital Flow Advisory market dashboard."""

__version__ = "0.1.0"
