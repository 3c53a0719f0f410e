from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import pytest

from sharepoint_rest import Settings, SharePointRest

SITE_URL = "https://contoso.sharepoint.com/sites/dev"
WEB_URL = f"{SITE_URL}/_api/web"


class DummyResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: object = None,
        *,
        content: bytes | None = None,
        reason: str = "OK",
        headers: dict[str, str] | None = None,
    ):
        if content is None:
            content = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self.status_code = status_code
        self.content = content
        self.text = content.decode("utf-8", "replace")
        self.reason = reason
        self.headers = headers or {}

    def json(self) -> Any:
        return json.loads(self.content)


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    data: str | bytes | None
    timeout: float | None

    def json(self) -> Any:
        return json.loads(self.data)


class DummyHttpClient:
    """Answers ``_api/contextinfo`` itself and queued responses for the rest."""

    def __init__(self, responses: list[DummyResponse] | None = None, digest: str = "digest-1"):
        self.responses = list(responses or [])
        self.digest = digest
        self.requests: list[RecordedRequest] = []

    def queue(self, *responses: DummyResponse) -> None:
        self.responses.extend(responses)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers=None,
        data=None,
        timeout=None,
    ) -> DummyResponse:
        self.requests.append(RecordedRequest(method, url, dict(headers or {}), data, timeout))
        if url.endswith("/_api/contextinfo"):
            return DummyResponse(
                200,
                {
                    "d": {
                        "GetContextWebInformation": {
                            "FormDigestValue": self.digest,
                            "FormDigestTimeoutSeconds": 1800,
                        }
                    }
                },
            )
        if self.responses:
            return self.responses.pop(0)
        return DummyResponse(200, {"d": {}})

    @property
    def calls(self) -> list[RecordedRequest]:
        return [r for r in self.requests if not r.url.endswith("/_api/contextinfo")]

    @property
    def digest_requests(self) -> int:
        return len(self.requests) - len(self.calls)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(site_url=SITE_URL, access_token="token", request_timeout=10.0)


@pytest.fixture
def http() -> DummyHttpClient:
    return DummyHttpClient()


@pytest.fixture
def sp(http: DummyHttpClient, test_settings: Settings) -> SharePointRest:
    return SharePointRest(settings=test_settings, http_client=http)
