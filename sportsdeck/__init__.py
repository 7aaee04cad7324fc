"""sportsdeck: paged, cached, favorite-aware sports catalog client."""

__version__ = "0.1.0"
