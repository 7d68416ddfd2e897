"""Schemas for the application."""

from .git import FileChange, FileStatus, parse_name_status
from .target import Target

__all__ = ["FileChange", "FileStatus", "Target", "parse_name_status"]
