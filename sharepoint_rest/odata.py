"""Parsers that turn SharePoint OData responses into Python values."""

from __future__ import annotations

from typing import Any, Protocol

from .client import HttpResponseProtocol, ParsingError, raise_for_response


class ODataParser(Protocol):
    def parse(self, response: HttpResponseProtocol) -> Any:  # pragma: no cover - protocol definition
        ...


def _has_body(response: HttpResponseProtocol) -> bool:
    if response.status_code == 204:
        return False
    if response.headers.get("content-length") == "0":
        return False
    return bool(response.content)


def unwrap(payload: Any) -> Any:
    """Strip the verbose ``d``/``d.results`` or minimal ``value`` envelope."""

    if not isinstance(payload, dict):
        return payload
    if "d" in payload:
        inner = payload["d"]
        if isinstance(inner, dict) and "results" in inner:
            return inner["results"]
        return inner
    if "value" in payload and isinstance(payload["value"], list):
        return payload["value"]
    return payload


class ODataDefaultParser:
    def parse(self, response: HttpResponseProtocol) -> Any:
        raise_for_response(response)
        if not _has_body(response):
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParsingError("Response body is not valid JSON") from exc
        return unwrap(payload)


class ODataValueParser(ODataDefaultParser):
    """Return the single property of entities such as ``{"d": {"Name": "Docs"}}``."""

    def parse(self, response: HttpResponseProtocol) -> Any:
        data = super().parse(response)
        if not isinstance(data, dict):
            return data
        if "value" in data and len(data) == 1:
            return data["value"]
        fields = {k: v for k, v in data.items() if k != "__metadata" and not k.startswith("odata.")}
        if len(fields) == 1:
            return next(iter(fields.values()))
        return data


class ODataRawParser:
    """Decoded JSON with no envelope handling."""

    def parse(self, response: HttpResponseProtocol) -> Any:
        raise_for_response(response)
        if not _has_body(response):
            return None
        return response.json()


class TextParser:
    def parse(self, response: HttpResponseProtocol) -> str:
        raise_for_response(response)
        return response.text


class BytesParser:
    def parse(self, response: HttpResponseProtocol) -> bytes:
        raise_for_response(response)
        return response.content


def next_link(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    inner = payload.get("d")
    if isinstance(inner, dict) and inner.get("__next"):
        return str(inner["__next"])
    link = payload.get("odata.nextLink") or payload.get("@odata.nextLink")
    return str(link) if link else None


DEFAULT_PARSER = ODataDefaultParser()
