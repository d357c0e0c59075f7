"""GitHub records consumed by the digest.

Each record is decoded from the REST API's JSON with ``from_dict``. Only the
fields the digest needs are kept; everything else in the payload is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from prdigest_core.errors import DecodeError


def _require(data: Any, key: str, record: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object for {record}, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"{record} is missing required field {key!r}")
    return data[key]


@dataclass(frozen=True)
class User:
    login: str
    html_url: str

    @classmethod
    def from_dict(cls, data: Any) -> User:
        return cls(
            login=_require(data, "login", "User"),
            html_url=_require(data, "html_url", "User"),
        )


@dataclass(frozen=True)
class Repository:
    """A repository as returned by ``GET /user/repos``.

    ``url`` is the repository's API URL; pull request endpoints hang off it.
    """

    name: str
    full_name: str
    url: str

    @classmethod
    def from_dict(cls, data: Any) -> Repository:
        return cls(
            name=_require(data, "name", "Repository"),
            full_name=_require(data, "full_name", "Repository"),
            url=_require(data, "url", "Repository"),
        )


@dataclass(frozen=True)
class PullRequest:
    html_url: str
    number: int
    state: str
    title: str
    author: User
    created_at: str  # YYYY-MM-DDTHH:MM:SSZ

    @classmethod
    def from_dict(cls, data: Any) -> PullRequest:
        number = _require(data, "number", "PullRequest")
        if not isinstance(number, int) or isinstance(number, bool) or number < 1:
            raise DecodeError(f"PullRequest number must be a positive integer, got {number!r}")
        return cls(
            html_url=_require(data, "html_url", "PullRequest"),
            number=number,
            state=_require(data, "state", "PullRequest"),
            title=_require(data, "title", "PullRequest"),
            author=User.from_dict(_require(data, "user", "PullRequest")),
            created_at=_require(data, "created_at", "PullRequest"),
        )


@dataclass(frozen=True)
class RequestedReviewers:
    """Body of ``GET /pulls/{number}/requested_reviewers``.

    Team requests are kept by slug for completeness but never count as
    reviewers in the digest.
    """

    users: tuple[User, ...] = ()
    teams: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> RequestedReviewers:
        users = _require(data, "users", "RequestedReviewers")
        if not isinstance(users, list):
            raise DecodeError("RequestedReviewers.users must be a list")
        teams = data.get("teams") or []
        if not isinstance(teams, list):
            raise DecodeError("RequestedReviewers.teams must be a list")
        return cls(
            users=tuple(User.from_dict(u) for u in users),
            teams=tuple(_require(t, "slug", "Team") for t in teams),
        )


@dataclass(frozen=True)
class Review:
    reviewer: User
    state: str  # "APPROVED" | "COMMENTED" | "CHANGES_REQUESTED" | ...

    @classmethod
    def from_dict(cls, data: Any) -> Review:
        return cls(
            reviewer=User.from_dict(_require(data, "user", "Review")),
            state=_require(data, "state", "Review"),
        )
