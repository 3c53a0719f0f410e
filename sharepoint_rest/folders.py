"""Folder collections and folder instances."""

from __future__ import annotations

import logging
from typing import Any

from .files import Files
from .items import Item
from .models import FolderAddResult, FolderInfo, FolderUpdateResult
from .odata import ODataValueParser
from .queryable import Queryable, QueryableCollection, QueryableInstance
from .util import combine_paths, extract_web_url, odata_quote

logger = logging.getLogger(__name__)


class Folders(QueryableCollection):
    """A collection of folders, e.g. ``web/folders`` or ``<folder>/folders``."""

    def __init__(self, base_url: str | Queryable, path: str | None = "folders", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    def get_by_name(self, name: str) -> Folder:
        return Folder(self).concat(f"('{odata_quote(name)}')")

    def get_by_url(self, url: str) -> Folder:
        """Get a folder by a relative or absolute url.

        Urls starting with a forward slash are absolute (server relative).
        """
        return Folder(self, f"getByUrl('{odata_quote(url)}')")

    def add(self, url: str) -> FolderAddResult:
        """Create a folder.

        Args:
            url: Relative url (under this collection's folder) or a server
                relative url starting with a forward slash.

        Returns:
            FolderAddResult with the raw response data and a ``Folder``
            addressing the new folder by its server relative url.
        """
        data = Folders(self, f"add('{odata_quote(url)}')").post({})
        server_relative_url = data.get("ServerRelativeUrl") if isinstance(data, dict) else None
        if server_relative_url:
            folder = folder_by_server_relative_url(self, server_relative_url)
        else:
            folder = self.get_by_url(url)
        logger.info("Created folder %s", server_relative_url or url)
        return FolderAddResult(data=data, folder=folder)


class Folder(QueryableInstance):
    """A single folder."""

    @property
    def content_type_order(self) -> QueryableCollection:
        """Specifies the sequence in which content types are displayed."""
        return QueryableCollection(self, "ContentTypeOrder")

    @property
    def files(self) -> Files:
        return Files(self)

    @property
    def folders(self) -> Folders:
        return Folders(self)

    @property
    def item_count(self) -> Queryable:
        return Queryable(self, "ItemCount")

    @property
    def list_item_all_fields(self) -> Item:
        return Item(self, "ListItemAllFields")

    @property
    def name(self) -> Queryable:
        return Queryable(self, "Name")

    @property
    def parent_folder(self) -> Folder:
        return Folder(self, "ParentFolder")

    @property
    def properties(self) -> QueryableInstance:
        return QueryableInstance(self, "Properties")

    @property
    def server_relative_url(self) -> Queryable:
        return Queryable(self, "ServerRelativeUrl")

    @property
    def unique_content_type_order(self) -> QueryableCollection:
        return QueryableCollection(self, "UniqueContentTypeOrder")

    @property
    def welcome_page(self) -> Queryable:
        return Queryable(self, "WelcomePage")

    def get_info(self) -> FolderInfo:
        return FolderInfo.from_payload(self.get())

    def update(self, properties: dict[str, Any], etag: str = "*") -> FolderUpdateResult:
        """Merge ``properties`` (e.g. ``WelcomePage``) into the folder."""
        body = {"__metadata": {"type": "SP.Folder"}, **properties}
        data = self.post(body, headers={"IF-Match": etag, "X-HTTP-Method": "MERGE"})
        return FolderUpdateResult(data=data, folder=self)

    def delete(self, etag: str = "*") -> None:
        """Delete this folder.

        Args:
            etag: Value used in the IF-Match header, by default "*".
        """
        self.post(headers={"IF-Match": etag, "X-HTTP-Method": "DELETE"})

    def recycle(self) -> str:
        """Move the folder to the recycle bin and return the recycle bin item id."""
        return Folder(self, "recycle").post(parser=ODataValueParser())


def folder_by_server_relative_url(source: Queryable, server_relative_url: str) -> Folder:
    """Address a folder through the web that ``source`` belongs to."""
    web_url = combine_paths(extract_web_url(source.to_url()), "_api/web")
    return Folder(
        web_url,
        f"getFolderByServerRelativeUrl('{odata_quote(server_relative_url)}')",
        client=source.client,
    )
