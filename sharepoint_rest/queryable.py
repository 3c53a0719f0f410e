"""Fluent URL builders that can issue requests against the URL they hold."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from .client import SharePointError, SharePointHttpClient
from .odata import DEFAULT_PARSER, ODataParser
from .util import combine_paths, split_parent_url

Q = TypeVar("Q", bound="Queryable")


class Queryable:
    """A resource URL plus the HTTP client used to reach it.

    Built either from a URL string or from another queryable. In the second
    case the new object extends the parent's URL by ``path`` and inherits
    its client and ``@target`` query parameter.
    """

    def __init__(
        self,
        base_url: str | Queryable,
        path: str | None = None,
        *,
        client: SharePointHttpClient | None = None,
    ) -> None:
        self._query: dict[str, str] = {}
        if isinstance(base_url, Queryable):
            self._parent_url = base_url._url
            self._url = combine_paths(self._parent_url, path)
            self._client = client or base_url._client
            target = base_url._query.get("@target")
            if target is not None:
                self._query["@target"] = target
        else:
            self._parent_url = split_parent_url(base_url)
            self._url = combine_paths(base_url, path)
            self._client = client

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_url_and_query()!r})"

    @property
    def parent_url(self) -> str:
        return self._parent_url

    @property
    def query(self) -> dict[str, str]:
        return self._query

    @property
    def client(self) -> SharePointHttpClient | None:
        return self._client

    def concat(self: Q, path_part: str) -> Q:
        """Append ``path_part`` to the URL verbatim, e.g. ``('name')``."""
        self._url += path_part
        return self

    def append(self: Q, path_part: str) -> Q:
        self._url = combine_paths(self._url, path_part)
        return self

    def to_url(self) -> str:
        return self._url

    def to_url_and_query(self) -> str:
        if not self._query:
            return self._url
        query = "&".join(f"{key}={value}" for key, value in self._query.items())
        return f"{self._url}?{query}"

    def get_parent(
        self,
        factory: type[Q],
        base_url: str | None = None,
        path: str | None = None,
    ) -> Q:
        """Build a ``factory`` object for this object's parent resource."""
        root = self._parent_url if base_url is None else base_url
        if path is None:
            parent = factory(root, client=self._client)
        else:
            parent = factory(root, path, client=self._client)
        target = self._query.get("@target")
        if target is not None:
            parent.query["@target"] = target
        return parent

    def get(
        self,
        parser: ODataParser | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        response = self._require_client().get(self.to_url_and_query(), headers=headers)
        return (parser or DEFAULT_PARSER).parse(response)

    def get_as(self, parser: ODataParser, headers: Mapping[str, str] | None = None) -> Any:
        return self.get(parser, headers)

    def post(
        self,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        parser: ODataParser | None = None,
    ) -> Any:
        response = self._require_client().post(
            self.to_url_and_query(), headers=headers, body=body
        )
        return (parser or DEFAULT_PARSER).parse(response)

    def _require_client(self) -> SharePointHttpClient:
        if self._client is None:
            raise SharePointError(f"No HTTP client configured for {self._url}")
        return self._client


class QueryableCollection(Queryable):
    """Queryable over a collection; supports the OData query options."""

    def filter(self: Q, expression: str) -> Q:
        self._query["$filter"] = expression
        return self

    def select(self: Q, *fields: str) -> Q:
        self._query["$select"] = ",".join(fields)
        return self

    def expand(self: Q, *fields: str) -> Q:
        self._query["$expand"] = ",".join(fields)
        return self

    def order_by(self: Q, field: str, ascending: bool = True) -> Q:
        clauses = [c for c in self._query.get("$orderby", "").split(",") if c]
        clauses.append(f"{field} {'asc' if ascending else 'desc'}")
        self._query["$orderby"] = ",".join(clauses)
        return self

    def skip(self: Q, count: int) -> Q:
        self._query["$skip"] = str(count)
        return self

    def top(self: Q, count: int) -> Q:
        self._query["$top"] = str(count)
        return self


class QueryableInstance(Queryable):
    """Queryable over a single entity."""

    def select(self: Q, *fields: str) -> Q:
        self._query["$select"] = ",".join(fields)
        return self

    def expand(self: Q, *fields: str) -> Q:
        self._query["$expand"] = ",".join(fields)
        return self
