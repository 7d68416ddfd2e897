"""Models for the application."""

from .change import REGULAR_FILE_MODE, Change, FileEntry

__all__ = ["Change", "FileEntry", "REGULAR_FILE_MODE"]
