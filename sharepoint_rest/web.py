"""Entry points: the site root, its web, and its lists."""

from __future__ import annotations

from typing import Any, Optional

from .client import HttpClientProtocol, SharePointError, SharePointHttpClient
from .config import Settings, settings as default_settings
from .files import File
from .folders import Folder, Folders
from .items import Items
from .odata import ODataValueParser
from .queryable import Queryable, QueryableCollection, QueryableInstance
from .util import combine_paths, odata_quote


class Web(QueryableInstance):
    def __init__(self, base_url: str | Queryable, path: str | None = "web", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    @property
    def folders(self) -> Folders:
        return Folders(self)

    @property
    def root_folder(self) -> Folder:
        return Folder(self, "rootFolder")

    @property
    def lists(self) -> Lists:
        return Lists(self)

    def get_folder_by_server_relative_url(self, url: str) -> Folder:
        return Folder(self, f"getFolderByServerRelativeUrl('{odata_quote(url)}')")

    def get_file_by_server_relative_url(self, url: str) -> File:
        return File(self, f"getFileByServerRelativeUrl('{odata_quote(url)}')")


class Lists(QueryableCollection):
    def __init__(self, base_url: str | Queryable, path: str | None = "lists", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    def get_by_title(self, title: str) -> List:
        return List(self, f"getByTitle('{odata_quote(title)}')")

    def get_by_id(self, list_id: str) -> List:
        return List(self).concat(f"('{odata_quote(list_id)}')")


class List(QueryableInstance):
    @property
    def items(self) -> Items:
        return Items(self)

    @property
    def root_folder(self) -> Folder:
        return Folder(self, "RootFolder")

    def get_list_item_entity_type_full_name(self) -> str:
        """Return the OData type name used in ``__metadata`` for new items."""
        return Queryable(self, "ListItemEntityTypeFullName").get(ODataValueParser())


class SharePointRest:
    """Root of the fluent API for one site.

    ``SharePointRest("https://contoso.sharepoint.com/sites/dev").web.lists``
    """

    def __init__(
        self,
        site_url: Optional[str] = None,
        *,
        client: Optional[SharePointHttpClient] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[HttpClientProtocol] = None,
    ) -> None:
        self.settings = settings or (client.settings if client else default_settings)
        url = (site_url or self.settings.site_url).rstrip("/")
        if not url:
            raise SharePointError("A site url is required (set SHAREPOINT_SITE_URL)")
        self.site_url = url
        self.client = client or SharePointHttpClient(self.settings, http_client)

    @property
    def web(self) -> Web:
        return Web(combine_paths(self.site_url, "_api"), client=self.client)

    def folder(self, server_relative_url: str) -> Folder:
        return self.web.get_folder_by_server_relative_url(server_relative_url)

    def file(self, server_relative_url: str) -> File:
        return self.web.get_file_by_server_relative_url(server_relative_url)
