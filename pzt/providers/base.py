"""Abstract base class for issue tracker clients."""

from abc import ABC, abstractmethod

from pzt.models import Commit, CreatedIssue, TrackerIssue


class TrackerClient(ABC):
    @abstractmethod
    def get_issue(self, repo: str, number: int) -> TrackerIssue: ...

    @abstractmethod
    def create_issue(self, repo: str, title: str, body: str) -> CreatedIssue: ...

    @abstractmethod
    def close_issue(self, repo: str, number: int) -> None: ...

    @abstractmethod
    def add_comment(self, repo: str, number: int, text: str) -> None: ...

    @abstractmethod
    def list_commits(self, repo: str) -> list[Commit]:
        """Return commits of the default branch, most recent first."""
