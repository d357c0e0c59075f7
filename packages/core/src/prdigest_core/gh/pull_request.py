from __future__ import annotations

from typing import TYPE_CHECKING

from prdigest_core.models import PullRequest, Repository, RequestedReviewers, Review

if TYPE_CHECKING:
    from prdigest_core.gh.client import GitHubClient


def get_repositories(client: GitHubClient, repos_url: str) -> list[Repository]:
    return client.list_records(repos_url, Repository)


def get_pull_requests(client: GitHubClient, repo: Repository, state: str = "open") -> list[PullRequest]:
    return client.list_records(f"{repo.url}/pulls?state={state}", PullRequest)


def get_requested_reviewers(client: GitHubClient, repo: Repository, pr_number: int) -> RequestedReviewers:
    return client.fetch_record(f"{repo.url}/pulls/{pr_number}/requested_reviewers", RequestedReviewers)


def get_reviews(client: GitHubClient, repo: Repository, pr_number: int) -> list[Review]:
    """Return every submitted review on a PR, oldest first as GitHub lists them."""
    return client.list_records(f"{repo.url}/pulls/{pr_number}/reviews", Review)
