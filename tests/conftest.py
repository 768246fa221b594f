"""Shared test fixtures."""

import pytest

from pzt.models import Puzzle, TrackerIssue


@pytest.fixture
def puzzle() -> Puzzle:
    return Puzzle(
        id="42-3b5f7e1a",
        file="src/a.rb",
        lines="10-10",
        body="fix bug",
        ticket="42",
        author="yegor256",
        time="2024-01-01T00:00:00Z",
        estimate=30,
        role="DEV",
    )


@pytest.fixture
def closing_puzzle() -> Puzzle:
    return Puzzle(id="42-3b5f7e1a", file="src/a.rb", lines="10-12", body="fix bug", issue="7")


@pytest.fixture
def open_issue() -> TrackerIssue:
    return TrackerIssue(
        number=7,
        state="opened",
        author="jdoe",
        url="https://gitlab.com/yegor256/pdd/-/issues/7",
    )


@pytest.fixture
def closed_issue(open_issue: TrackerIssue) -> TrackerIssue:
    return open_issue.model_copy(update={"state": "closed"})

