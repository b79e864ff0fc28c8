"""Upload local files to MediaSilo and register them as assets."""

__version__ = "0.1.0"
