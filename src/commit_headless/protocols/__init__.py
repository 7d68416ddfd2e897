"""Protocols for the application."""

from .history_protocol import HistoryReaderProtocol
from .remote_protocols import BranchService, GitDataService

__all__ = ["BranchService", "GitDataService", "HistoryReaderProtocol"]
