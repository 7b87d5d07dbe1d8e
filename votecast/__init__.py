"""VoteCast: single-choice online voting service."""

__version__ = "0.1.0"
