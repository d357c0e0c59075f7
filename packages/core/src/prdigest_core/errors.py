"""Exception hierarchy for a digest run.

Every failure that should abort a run derives from PRDigestError so the CLI
can map it to a non-zero exit in one place. A non-2xx webhook response is
not an exception; the notifier logs it and carries on.
"""

from __future__ import annotations


class PRDigestError(Exception):
    """Base class for all prdigest failures."""


class ConfigError(PRDigestError):
    """A required setting or credential is missing or invalid."""


class GitHubAPIError(PRDigestError):
    """A GitHub request failed at the transport level or returned non-2xx."""

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(PRDigestError):
    """A GitHub response body did not have the expected shape."""


class TimestampParseError(PRDigestError, ValueError):
    """A pull request timestamp did not match YYYY-MM-DDTHH:MM:SSZ."""


class NotificationError(PRDigestError):
    """The webhook could not be reached at all."""
