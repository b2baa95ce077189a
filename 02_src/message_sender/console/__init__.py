"""Console module."""

from .session import ConsoleSession, format_timestamp

__all__ = ["ConsoleSession", "format_timestamp"]
