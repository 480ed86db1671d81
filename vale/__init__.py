"""Whispers of the Forgotten Vale - a turn-based interactive-fiction engine."""

__version__ = "0.1.0"
