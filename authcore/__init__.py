"""Account and session management core."""

__version__ = "0.1.0"
