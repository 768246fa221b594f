"""Puzzle tickets in GitLab: submit, close and notify."""

import logging
import posixpath
import re

from pzt.exceptions import NotFoundError
from pzt.models import IssueRef, Puzzle, SourceConfig
from pzt.providers.base import TrackerClient
from pzt.sources import Sources
from pzt.truncated import truncated

logger = logging.getLogger("pzt.tickets")

TRACKER = "gitlab"

DEFAULT_TITLE_LENGTH = 60
MIN_TITLE_LENGTH = 30
MAX_TITLE_LENGTH = 255
MAX_USERNAME_LENGTH = 65

_TITLE_LENGTH = re.compile(r"title-length=(\d+)")
_NOT_USERNAME = re.compile(r"[^0-9a-zA-Z-]+")

_FOOTER = (
    "If you have any technical questions, don't ask me, submit new tickets instead. "
    'The task will be "done" when the problem is fixed and the text of the puzzle is '
    "_removed_ from the source code. Here is more about "
    "[PDD](http://www.yegor256.com/2009/03/04/pdd.html) and "
    "[about me](http://www.yegor256.com/2017/04/05/pdd-in-action.html)."
)


def mention_handles(config: SourceConfig | None) -> list[str]:
    """Return sanitized @-handles from the alerts option, in configured order."""
    if config is None or not config.alerts.get(TRACKER):
        return []
    users = []
    for name in config.alerts[TRACKER]:
        handle = _NOT_USERNAME.sub("", name.strip().lower())
        users.append(f"@{handle[:MAX_USERNAME_LENGTH]}")
    return users


def title_length(options: list[str]) -> int:
    """Return the title-length=N option clamped to [30, 255], or 60 when unset."""
    length = DEFAULT_TITLE_LENGTH
    for option in options:
        match = _TITLE_LENGTH.match(option)
        if match:
            length = int(match.group(1))
            break
    return min(max(length, MIN_TITLE_LENGTH), MAX_TITLE_LENGTH)


def make_title(puzzle: Puzzle, config: SourceConfig | None) -> str:
    """Return the issue title for the puzzle.

    a.rb:10: fix bug       (single line)
    a.rb:10-12: fix bug    (line range)
    fix bug                (short-title format option)
    """
    options = [o.strip().lower() for o in config.format] if config and config.format else []
    if "short-title" in options:
        text = puzzle.body
    else:
        where = puzzle.start if puzzle.start == puzzle.stop else f"{puzzle.start}-{puzzle.stop}"
        text = f"{posixpath.basename(puzzle.file)}:{where}: {puzzle.body}"
    return truncated(text, title_length(options))


def render_body(puzzle: Puzzle, url: str) -> str:
    """Render the markdown description of a puzzle issue."""
    origin = f" from #{puzzle.ticket}" if puzzle.ticket else ""
    lines = [
        f"The puzzle `{puzzle.id}`{origin} has to be resolved:",
        "",
        url,
        "",
        f'"{puzzle.body}"',
    ]

    if puzzle.author:
        created = f"The puzzle was created by {puzzle.author}"
        if puzzle.time:
            created += f" on {puzzle.time}"
        lines += ["", created + "."]

    if puzzle.estimate:
        role = f" by {puzzle.role}" if puzzle.role else ""
        lines += ["", f"Estimate: {puzzle.estimate} minutes{role}."]
    elif puzzle.role:
        lines += ["", f"Role: {puzzle.role}."]

    lines += ["", _FOOTER]
    return "\n".join(lines)


class GitLabTickets:
    """Keeps GitLab issues in step with the puzzles found in a repository."""

    def __init__(
        self,
        repo: str,
        client: TrackerClient,
        sources: Sources,
        web_url: str = "https://gitlab.com",
    ) -> None:
        self.repo = repo
        self._client = client
        self._sources = sources
        self._web_url = web_url.rstrip("/")

    def notify(self, issue: str | int, message: str) -> None:
        """Comment on the issue, addressing its author."""
        try:
            author = self._client.get_issue(self.repo, int(issue)).author
            self._client.add_comment(self.repo, int(issue), f"@{author} {message}")
        except NotFoundError as e:
            logger.warning("The issue most probably is not found, can't comment: %s", e)

    def submit(self, puzzle: Puzzle) -> IssueRef:
        """Open a new issue for the puzzle and alert the configured users."""
        created = self._client.create_issue(self.repo, self.title(puzzle), self.body(puzzle))
        logger.info("Puzzle %s submitted as %s#%d", puzzle.id, self.repo, created.number)
        users = self.mention_users()
        if users:
            self._client.add_comment(
                self.repo,
                created.number,
                " ".join(users) + " please pay attention to this new issue.",
            )
        return IssueRef(number=created.number, href=created.url)

    def close(self, puzzle: Puzzle) -> bool:
        """Close the puzzle's issue; an issue that is already gone counts as closed."""
        if puzzle.issue is None:
            raise ValueError(f"Puzzle {puzzle.id} has no issue to close")
        number = int(puzzle.issue)
        try:
            if self._client.get_issue(self.repo, number).state == "closed":
                return True
            self._client.close_issue(self.repo, number)
            users = self.mention_users()
            self._client.add_comment(
                self.repo,
                number,
                f"The puzzle `{puzzle.id}` has disappeared from the source code, "
                "that's why I closed this issue." + (" //cc " + " ".join(users) if users else ""),
            )
            logger.info("Issue %s#%d closed, puzzle %s is gone", self.repo, number, puzzle.id)
        except NotFoundError as e:
            logger.warning("The issue most probably is not found, can't close: %s", e)
        return True

    def mention_users(self) -> list[str]:
        return mention_handles(self._sources.config())

    def title(self, puzzle: Puzzle) -> str:
        return make_title(puzzle, self._sources.config())

    def body(self, puzzle: Puzzle) -> str:
        sha = self._client.list_commits(self.repo)[0].sha
        url = f"{self._web_url}/{self.repo}/blob/{sha}/{puzzle.file}#L{puzzle.start}-L{puzzle.stop}"
        return render_body(puzzle, url)
