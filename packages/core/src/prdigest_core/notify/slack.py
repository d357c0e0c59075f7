"""Slack incoming-webhook delivery.

Delivery is fire-and-forget: a non-2xx response is logged and reported back
as ``False`` but never aborts the run. Only a webhook that cannot be reached
at all raises.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from prdigest_core.errors import NotificationError

logger = logging.getLogger(__name__)


def build_payload(lines: Sequence[str]) -> dict:
    """Wrap digest lines in a single mrkdwn section block."""
    return {
        "blocks": [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "\n".join(lines),
                },
            }
        ]
    }


def send_message(payload: dict, webhook_url: str, transport: httpx.BaseTransport | None = None) -> bool:
    """POST ``payload`` to the webhook. Returns True on a 2xx response."""
    with httpx.Client(transport=transport) as client:
        try:
            response = client.post(webhook_url, json=payload)
        except httpx.HTTPError as e:
            raise NotificationError(f"Could not reach Slack webhook: {e}") from e

    if not response.is_success:
        logger.warning("Failed to send notification (%s): %s", response.status_code, response.text)
        return False

    logger.debug("Notification delivered (%s)", response.status_code)
    return True
