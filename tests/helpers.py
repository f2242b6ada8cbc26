"""
Test helpers — feed builders and a fake urlopen.
"""

from __future__ import annotations

import email.message
import json
import urllib.error

FEED_URL = "https://feed.example.test/v1/macos_data_feed.json"


def make_feed(os_versions: list[str], models: dict[str, list[str]] | None = None) -> dict:
    """Build a feed document in the published JSON shape."""
    return {
        "UpdateHash": "abc123",
        "OSVersions": [
            {"OSVersion": v, "Latest": {"ProductVersion": v}} for v in os_versions
        ],
        "Models": {
            ident: {"MarketingName": f"Mac ({ident})", "SupportedOS": supported}
            for ident, supported in (models or {}).items()
        },
    }


def feed_bytes(os_versions: list[str], models: dict[str, list[str]] | None = None) -> bytes:
    return json.dumps(make_feed(os_versions, models)).encode("utf-8")


class FakeResponse:
    """Stands in for the object returned by ``urllib.request.urlopen``."""

    def __init__(self, body: bytes = b"", status: int = 200, headers: dict | None = None):
        self.status = status
        self.headers = headers or {}
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc) -> None:
        return None


class FakeOpener:
    """urlopen replacement that replays queued outcomes and records requests.

    Each outcome is a FakeResponse to return or an exception to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.timeouts = []

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if not self.outcomes:
            raise AssertionError("unexpected request")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last_request(self):
        return self.requests[-1]


def http_error(code: int, msg: str = "") -> urllib.error.HTTPError:
    return urllib.error.HTTPError(FEED_URL, code, msg, email.message.Message(), None)
