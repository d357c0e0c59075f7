"""Review-status aggregation and digest rendering.

One open pull request becomes a three-line Slack mrkdwn block:

    *<title> - <<html_url>|<owner/repo>#<number>>*
    unapproved reviewers - <login> <login> ...
    *<state>* - Created by <<author url>|<author login>> on <YYYY-MM-DD HH:MM:SS>

The middle line is empty when no reviewer is pending, but the line itself is
always present so every block has the same shape.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import datetime

from prdigest_core.errors import TimestampParseError
from prdigest_core.models import PullRequest, Repository, Review, User

DEFAULT_HEADER = "*Open Pull Request*"
APPROVED = "APPROVED"

_CREATED_AT_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z")
_CREATED_AT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def unapproved_reviewers(requested_reviewers: Iterable[User], reviews: Sequence[Review]) -> list[str]:
    """Return the logins of requested reviewers that still owe an approval.

    With no reviews at all, every requested reviewer is listed once. Otherwise
    a reviewer is listed once for every non-approving review they submitted,
    so a reviewer who commented twice appears twice. A reviewer who was
    requested but has not reviewed yet is not listed once other reviews exist.
    Order follows ``requested_reviewers``.
    """
    names: list[str] = []
    for reviewer in requested_reviewers:
        if not reviews:
            names.append(reviewer.login)
            continue
        for review in reviews:
            if review.reviewer.login == reviewer.login and review.state != APPROVED:
                names.append(reviewer.login)
    return names


def render_title(pull: PullRequest, repo: Repository) -> str:
    return f"*{pull.title} - <{pull.html_url}|{repo.full_name}#{pull.number}>*"


def render_unapproved(names: Sequence[str]) -> str:
    if not names:
        return ""
    return f"unapproved reviewers - {' '.join(names)}"


def parse_created_at(value: str) -> datetime:
    """Parse a GitHub ``created_at`` timestamp (UTC, second precision).

    Only the exact ``YYYY-MM-DDTHH:MM:SSZ`` form is accepted; offsets,
    fractional seconds and date-only values raise TimestampParseError.
    """
    if not isinstance(value, str) or not _CREATED_AT_RE.fullmatch(value):
        raise TimestampParseError(f"Unsupported created_at timestamp: {value!r}")
    try:
        return datetime.strptime(value, _CREATED_AT_FORMAT)
    except ValueError as e:
        # Matches the pattern but is not a real date, e.g. month 13.
        raise TimestampParseError(f"Invalid created_at timestamp {value!r}: {e}") from e


def render_state(pull: PullRequest) -> str:
    created = parse_created_at(pull.created_at)
    return (
        f"*{pull.state}* - Created by <{pull.author.html_url}|{pull.author.login}> "
        f"on {created.strftime(_DISPLAY_FORMAT)}"
    )


def message(
    repo: Repository,
    pull: PullRequest,
    requested_reviewers: Iterable[User],
    reviews: Sequence[Review],
) -> str:
    """Render the three-line digest block for one pull request."""
    return "\n".join(
        [
            render_title(pull, repo),
            render_unapproved(unapproved_reviewers(requested_reviewers, reviews)),
            render_state(pull),
        ]
    )


class DigestBuilder:
    """Append-only list of digest blocks under a fixed header line.

    Blocks keep the order they were added in; nothing is sorted or
    de-duplicated.
    """

    def __init__(self, header: str = DEFAULT_HEADER):
        self._lines: list[str] = [header]

    def add(self, line: str) -> None:
        self._lines.append(line)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)
