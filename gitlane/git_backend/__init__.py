"""Git backend for reading repository history"""

from gitlane.git_backend.commit_types import CommitType, parse_commit_message
from gitlane.git_backend.repository import GitRepository

__all__ = ["CommitType", "GitRepository", "parse_commit_message"]
