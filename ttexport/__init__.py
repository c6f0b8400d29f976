"""Teamtailor candidate export to CSV."""

__version__ = "0.1.0"
