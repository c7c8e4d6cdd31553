"""Revision timestamps from version control history."""

from .history import VersionHistoryResolver, GitHistoryResolver, format_timestamp

__all__ = ["VersionHistoryResolver", "GitHistoryResolver", "format_timestamp"]
