"""CLI entry point for prdigest.

Running ``prdigest`` with no arguments performs one full cycle: collect the
open pull requests across the token owner's repositories, render the review
digest and post it to the Slack webhook.

Required environment variables (a .env file in the working directory is
loaded first):
  GITHUB_TOKEN   GitHub token used for every API request
  WEBHOOK_URI    Slack incoming-webhook URL
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    numeric = logging.getLevelName(level.upper())
    root.setLevel(numeric if isinstance(numeric, int) else logging.WARNING)


@click.command()
@click.version_option(
    version=importlib.metadata.version("prdigest"),
    prog_name="prdigest",
)
@click.option(
    "--config",
    "config_path",
    default=".prdigest.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRDIGEST_CONFIG",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Build the digest and print it without posting to the webhook.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(config_path: str, dry_run: bool, verbose: bool):
    """Post a digest of open pull requests and their pending reviewers to Slack."""
    from prdigest_core.batch import run
    from prdigest_core.config import build_settings, load_config
    from prdigest_core.errors import ConfigError, PRDigestError

    load_dotenv()

    try:
        config = load_config(config_path, cli_overrides={"log_level": "DEBUG" if verbose else None})
        settings = build_settings(config)
    except ConfigError as e:
        raise click.UsageError(str(e))

    _setup_logging(str(config.get("log_level") or "WARNING"))

    try:
        lines = run(settings, dry_run=dry_run)
    except PRDigestError as e:
        logger.debug("Run aborted", exc_info=True)
        raise click.ClickException(f"{type(e).__name__}: {e}")

    if dry_run:
        console.print("\n".join(lines), markup=False, highlight=False, soft_wrap=True)
