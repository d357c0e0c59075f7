"""Tests for Slack payload construction and webhook delivery."""

import json
import logging

import httpx
import pytest

from prdigest_core.errors import NotificationError
from prdigest_core.notify.slack import build_payload, send_message

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


class TestBuildPayload:
    def test_single_section_block(self):
        payload = build_payload(["*Open Pull Request*", "line one\n\nline three"])
        assert payload == {
            "blocks": [
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": "*Open Pull Request*\nline one\n\nline three",
                    },
                }
            ]
        }

    def test_header_only(self):
        assert build_payload(["*Open Pull Request*"])["blocks"][0]["text"]["text"] == "*Open Pull Request*"


class TestSendMessage:
    def test_posts_json(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, text="ok")

        payload = build_payload(["*Open Pull Request*"])
        assert send_message(payload, WEBHOOK, transport=httpx.MockTransport(handler)) is True
        assert seen == {"method": "POST", "url": WEBHOOK, "body": payload}

    def test_non_2xx_logged_not_raised(self, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(400, text="invalid_blocks"))

        with caplog.at_level(logging.WARNING, logger="prdigest_core.notify.slack"):
            delivered = send_message(build_payload(["x"]), WEBHOOK, transport=transport)

        assert delivered is False
        assert "invalid_blocks" in caplog.text

    def test_unreachable_webhook_raises(self):
        def handler(request):
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(NotificationError):
            send_message(build_payload(["x"]), WEBHOOK, transport=httpx.MockTransport(handler))
