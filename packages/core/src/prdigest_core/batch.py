"""One digest run: GitHub fan-out, aggregation and Slack delivery."""

from __future__ import annotations

import logging

import httpx
from rich.console import Console

from prdigest_core.config import Settings
from prdigest_core.digest import DigestBuilder, message
from prdigest_core.gh.client import GitHubClient
from prdigest_core.gh.pull_request import (
    get_pull_requests,
    get_repositories,
    get_requested_reviewers,
    get_reviews,
)
from prdigest_core.notify.slack import build_payload, send_message

console = Console()
logger = logging.getLogger(__name__)


def collect_digest(client: GitHubClient, settings: Settings) -> DigestBuilder:
    """Walk every repository's open pull requests and render one block each.

    Repositories and pulls are visited in the order GitHub lists them.
    Reviews are only fetched for pulls that have requested reviewers. Any
    fetch or parse failure propagates and the partial digest is discarded.
    """
    digest = DigestBuilder(header=settings.header)

    repositories = get_repositories(client, settings.repos_url)
    logger.info("Found %d repositories", len(repositories))

    for repo in repositories:
        pulls = get_pull_requests(client, repo)
        logger.info("%s: %d open pull request(s)", repo.full_name, len(pulls))

        for pull in pulls:
            requested = get_requested_reviewers(client, repo, pull.number)
            reviews = get_reviews(client, repo, pull.number) if requested.users else []
            digest.add(message(repo, pull, requested.users, reviews))

    return digest


def run(
    settings: Settings,
    dry_run: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> list[str]:
    """Build the digest and post it to the webhook. Returns the posted lines.

    With ``dry_run`` the digest is built but not sent.
    """
    with GitHubClient.from_settings(settings, transport=transport) as client:
        digest = collect_digest(client, settings)

    lines = digest.lines
    if dry_run:
        console.print(f"[yellow]Dry run: {len(lines) - 1} pull request(s), nothing posted.[/yellow]")
        return lines

    delivered = send_message(build_payload(lines), settings.webhook_url, transport=transport)
    if delivered:
        console.print(f"[green]Posted digest with {len(lines) - 1} pull request(s).[/green]")
    else:
        console.print("[yellow]Digest built but the webhook rejected it. See the log for details.[/yellow]")
    return lines
