from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import requests

from .config import Settings, settings as default_settings
from .util import combine_paths, extract_web_url

logger = logging.getLogger(__name__)

ODATA_VERBOSE = "application/json;odata=verbose"
DIGEST_HEADER = "X-RequestDigest"


class SharePointError(Exception):
    """Base SharePoint client error."""


class SharePointRequestError(SharePointError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, data: Any = None) -> None:
        self.status_code = status_code
        self.reason = reason
        self.data = data
        message = _error_message(data) or reason
        super().__init__(f"Error making request: [{status_code}] {message}")


class ParsingError(SharePointError):
    """Raised when a response does not contain the expected data."""


class HttpResponseProtocol(Protocol):
    status_code: int
    headers: Mapping[str, str]
    content: bytes
    text: str

    def json(self) -> Any:  # pragma: no cover - protocol definition
        ...


class HttpClientProtocol(Protocol):
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | bytes | None = None,
        timeout: float | None = None,
    ) -> HttpResponseProtocol:  # pragma: no cover - protocol definition
        ...


class RequestsHttpClient:
    """Small adapter over ``requests`` so we can mock in tests."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | bytes | None = None,
        timeout: float | None = None,
    ) -> requests.Response:
        return self.session.request(method, url, headers=headers, data=data, timeout=timeout)

    def close(self) -> None:
        self.session.close()


class HttpxHttpClient:
    """Adapter over ``httpx.Client``; pass a client built on ``MockTransport`` in tests."""

    def __init__(self, client: httpx.Client | None = None) -> None:
        self.client = client or httpx.Client()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | bytes | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        if timeout is None:
            return self.client.request(method, url, headers=headers, content=data)
        return self.client.request(method, url, headers=headers, content=data, timeout=timeout)

    def close(self) -> None:
        self.client.close()


def response_reason(response: HttpResponseProtocol) -> str:
    reason = getattr(response, "reason_phrase", None) or getattr(response, "reason", None)
    return str(reason or "")


def _error_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    error = data.get("error") or data.get("odata.error")
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    if isinstance(message, dict):
        value = message.get("value")
        return str(value) if value else None
    return str(message) if message else None


def raise_for_response(response: HttpResponseProtocol) -> None:
    """Raise ``SharePointRequestError`` unless the response is 2xx."""

    if 200 <= response.status_code < 300:
        return
    try:
        data: Any = response.json()
    except ValueError:
        data = response.text
    reason = response_reason(response)
    logger.warning("SharePoint request failed with %s %s", response.status_code, reason)
    raise SharePointRequestError(response.status_code, reason, data)


@dataclass
class CachedDigest:
    value: str
    expires_at: float


class DigestCache:
    """Form digests keyed by web URL.

    Every non-GET request to SharePoint needs an ``X-RequestDigest`` header.
    A digest is fetched from ``_api/contextinfo`` and reused until it is
    ``margin_seconds`` away from its server-side expiry.
    """

    def __init__(
        self,
        client: SharePointHttpClient,
        margin_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._margin_seconds = margin_seconds
        self._clock = clock
        self._digests: dict[str, CachedDigest] = {}

    def get_digest(self, web_url: str) -> str:
        now = self._clock()
        cached = self._digests.get(web_url)
        if cached is not None and now < cached.expires_at:
            return cached.value

        url = combine_paths(web_url, "_api/contextinfo")
        response = self._client.send("POST", url, self._client.default_headers())
        raise_for_response(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise ParsingError("contextinfo returned unexpected payload")

        info = payload.get("d", payload)
        info = info.get("GetContextWebInformation", info)
        try:
            value = str(info["FormDigestValue"])
            timeout = float(info.get("FormDigestTimeoutSeconds", 1800))
        except (KeyError, TypeError, ValueError) as exc:
            raise ParsingError("contextinfo payload missing FormDigestValue") from exc

        self._digests[web_url] = CachedDigest(
            value=value, expires_at=now + max(timeout - self._margin_seconds, 0)
        )
        logger.debug("Form digest refreshed for %s", web_url)
        return value


class SharePointHttpClient:
    """Sends SharePoint REST requests with the headers the service expects."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: HttpClientProtocol | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or default_settings
        self.http_client = http_client or RequestsHttpClient()
        self.digests = DigestCache(
            self, margin_seconds=self.settings.digest_margin_seconds, clock=clock
        )

    def default_headers(self) -> dict[str, str]:
        headers = {
            "Accept": ODATA_VERBOSE,
            "Content-Type": f"{ODATA_VERBOSE};charset=utf-8",
            "User-Agent": self.settings.user_agent,
        }
        if self.settings.access_token:
            headers["Authorization"] = f"Bearer {self.settings.access_token}"
        return headers

    def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> HttpResponseProtocol:
        merged = self.default_headers()
        merged.update(headers or {})
        if method.upper() != "GET" and DIGEST_HEADER not in merged:
            merged[DIGEST_HEADER] = self.digests.get_digest(extract_web_url(url))
        return self.send(method, url, merged, body)

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> HttpResponseProtocol:
        return self.fetch(url, "GET", headers)

    def post(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> HttpResponseProtocol:
        return self.fetch(url, "POST", headers, body)

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Any = None,
    ) -> HttpResponseProtocol:
        if body is None or isinstance(body, (bytes, str)):
            data = body
        else:
            data = json.dumps(body)
        logger.debug("%s %s", method, url)
        return self.http_client.request(
            method, url, headers=headers, data=data, timeout=self.settings.request_timeout
        )
