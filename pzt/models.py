"""Shared pydantic models — the contract between the tracker client, sources and tickets."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict


class Puzzle(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str  # e.g. 42-3b5f7e1a
    file: str  # path relative to the repo root
    lines: str  # "start-stop"
    body: str
    issue: str | None = None  # tracker issue number once submitted
    ticket: str | None = None  # issue the puzzle was created in
    author: str | None = None
    email: str | None = None
    time: str | None = None
    estimate: int | None = None  # minutes
    role: str | None = None

    @property
    def start(self) -> str:
        return self.lines.split("-", 1)[0].strip()

    @property
    def stop(self) -> str:
        start, _, stop = self.lines.partition("-")
        return stop.strip() or start.strip()


class IssueRef(BaseModel):
    """Returned by submit — the number and web link of the new issue."""

    model_config = ConfigDict(frozen=True)

    number: int
    href: str


class TrackerIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    state: str  # "opened" | "closed"
    author: str  # login of the issue author
    url: str


class CreatedIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    url: str


class Commit(BaseModel):
    model_config = ConfigDict(frozen=True)

    sha: str


class SourceConfig(BaseModel):
    """Project-level options read from the .pdd.yml file."""

    model_config = ConfigDict(frozen=True)

    format: list[str] | None = None
    alerts: dict[str, list[str]] = {}

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "SourceConfig":
        """Build a config from a loosely-typed mapping, dropping malformed keys."""
        fmt = raw.get("format")
        fmt = [str(item) for item in fmt] if isinstance(fmt, list) else None

        alerts: dict[str, list[str]] = {}
        raw_alerts = raw.get("alerts")
        if isinstance(raw_alerts, Mapping):
            for tracker, users in raw_alerts.items():
                if isinstance(users, list):
                    alerts[str(tracker)] = [str(u) for u in users]

        return cls(format=fmt, alerts=alerts)
