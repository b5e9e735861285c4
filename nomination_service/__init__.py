"""Nomination collection service."""

__version__ = "1.0.0"
