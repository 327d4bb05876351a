"""Loaded commit history per repository context"""

from gitlane.history.model import CommitHistory, FetchTicket, HistoryContext

__all__ = ["CommitHistory", "FetchTicket", "HistoryContext"]
