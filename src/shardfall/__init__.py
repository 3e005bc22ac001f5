"""Shardfall: deterministic turn-based battle engine."""

__version__ = "0.1.0"
