from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

import httpx

from prdigest_core.config import Settings
from prdigest_core.errors import DecodeError, GitHubAPIError

logger = logging.getLogger(__name__)

ACCEPT = "application/vnd.github.v3+json"


class Record(Protocol):
    @classmethod
    def from_dict(cls, data: Any) -> Any: ...


T = TypeVar("T", bound=Record)


class GitHubClient:
    """Authenticated GET-only client for the GitHub REST API.

    Every call is a single attempt: a non-2xx status or a transport failure
    raises GitHubAPIError, an unexpected body raises DecodeError. URLs are
    absolute because repository records already carry their API URL.
    """

    def __init__(
        self,
        token: str,
        user_agent: str = "request",
        api_version: str = "2022-11-28",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": ACCEPT,
                "User-Agent": user_agent,
                "X-GitHub-Api-Version": api_version,
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.BaseTransport | None = None) -> GitHubClient:
        return cls(
            token=settings.github_token,
            user_agent=settings.user_agent,
            api_version=settings.api_version,
            transport=transport,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def list_records(self, url: str, record_type: type[T]) -> list[T]:
        """GET ``url`` and decode a JSON array of ``record_type``."""
        data = self._get_json(url)
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array from {url}, got {type(data).__name__}")
        return [record_type.from_dict(item) for item in data]

    def fetch_record(self, url: str, record_type: type[T]) -> T:
        """GET ``url`` and decode a single JSON object of ``record_type``."""
        data = self._get_json(url)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object from {url}, got {type(data).__name__}")
        return record_type.from_dict(data)

    def _get_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub request to {url} failed: {e}", url=url) from e

        if not response.is_success:
            raise GitHubAPIError(
                f"GitHub API error {response.status_code} for {url}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Response from {url} is not valid JSON: {e}") from e
