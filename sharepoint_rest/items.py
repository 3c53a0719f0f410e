"""List item collections, list items, and paging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import quote

from .client import HttpResponseProtocol, ParsingError, SharePointHttpClient, raise_for_response
from .models import ItemAddResult, ItemUpdateResult
from .odata import ODataValueParser, next_link, unwrap
from .queryable import Queryable, QueryableCollection, QueryableInstance

if TYPE_CHECKING:
    from .files import File
    from .folders import Folder
    from .web import List

logger = logging.getLogger(__name__)


@dataclass
class PagedItemCollection:
    """One page of list items plus the link to the next page, if any."""

    results: list[dict[str, Any]]
    next_url: Optional[str] = None
    client: Optional[SharePointHttpClient] = field(default=None, repr=False)

    @property
    def has_next(self) -> bool:
        return bool(self.next_url)

    def get_next(self) -> Optional[PagedItemCollection]:
        if not self.next_url:
            return None
        return Items(self.next_url, None, client=self.client).get_paged()


class PagedItemCollectionParser:
    def __init__(self, client: Optional[SharePointHttpClient] = None) -> None:
        self.client = client

    def parse(self, response: HttpResponseProtocol) -> PagedItemCollection:
        raise_for_response(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParsingError("Paged response is not valid JSON") from exc
        results = unwrap(payload)
        if not isinstance(results, list):
            raise ParsingError("Paged response does not contain a result list")
        return PagedItemCollection(results=results, next_url=next_link(payload), client=self.client)


class Items(QueryableCollection):
    """The items of a list."""

    def __init__(self, base_url: str | Queryable, path: str | None = "items", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    def get_by_id(self, item_id: int) -> Item:
        return Item(self).concat(f"({int(item_id)})")

    def skip(self, count: int) -> Items:
        """List items page with a skip token; ``$skip`` is not supported."""
        self._query["$skiptoken"] = quote(f"Paged=TRUE&p_ID={int(count)}", safe="")
        return self

    def get_paged(self) -> PagedItemCollection:
        return self.get(PagedItemCollectionParser(self.client))

    def add(
        self,
        properties: Optional[dict[str, Any]] = None,
        list_item_entity_type_full_name: Optional[str] = None,
    ) -> ItemAddResult:
        from .web import List

        entity_type = (
            list_item_entity_type_full_name
            or self.get_parent(List).get_list_item_entity_type_full_name()
        )
        body = {"__metadata": {"type": entity_type}, **(properties or {})}
        # Post to the bare collection url; query options do not apply to inserts
        data = Items(self, None).post(body)
        try:
            item_id = int(data["Id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ParsingError("Add item response is missing Id") from exc
        logger.info("Added list item %s", item_id)
        return ItemAddResult(data=data, item=self.get_by_id(item_id))


class Item(QueryableInstance):
    """A single list item."""

    @property
    def attachment_files(self) -> QueryableCollection:
        return QueryableCollection(self, "AttachmentFiles")

    @property
    def content_type(self) -> QueryableInstance:
        return QueryableInstance(self, "ContentType")

    @property
    def effective_base_permissions(self) -> Queryable:
        return Queryable(self, "EffectiveBasePermissions")

    @property
    def field_values_as_html(self) -> QueryableInstance:
        return QueryableInstance(self, "FieldValuesAsHTML")

    @property
    def field_values_as_text(self) -> QueryableInstance:
        return QueryableInstance(self, "FieldValuesAsText")

    @property
    def field_values_for_edit(self) -> QueryableInstance:
        return QueryableInstance(self, "FieldValuesForEdit")

    @property
    def file(self) -> File:
        from .files import File

        return File(self, "File")

    @property
    def folder(self) -> Folder:
        from .folders import Folder

        return Folder(self, "Folder")

    def update(
        self,
        properties: dict[str, Any],
        etag: str = "*",
        list_item_entity_type_full_name: Optional[str] = None,
    ) -> ItemUpdateResult:
        entity_type = (
            list_item_entity_type_full_name
            or self.parent_list().get_list_item_entity_type_full_name()
        )
        body = {"__metadata": {"type": entity_type}, **properties}
        data = self.post(body, headers={"IF-Match": etag, "X-HTTP-Method": "MERGE"})
        return ItemUpdateResult(data=data, item=self)

    def delete(self, etag: str = "*") -> None:
        self.post(headers={"IF-Match": etag, "X-HTTP-Method": "DELETE"})

    def recycle(self) -> str:
        return Item(self, "recycle").post(parser=ODataValueParser())

    def parent_list(self) -> List:
        """The list owning this item.

        Items reached through ``<list>/items`` resolve to that list directly;
        anything else, such as ``ListItemAllFields`` of a file or folder, goes
        through the ``ParentList`` navigation property.
        """
        from .web import List

        parent = self.parent_url.rstrip("/")
        if parent.lower().endswith("/items"):
            return self.get_parent(List, parent[: parent.rfind("/")])
        return List(self, "ParentList")
