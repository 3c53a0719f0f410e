"""Fluent client for the SharePoint REST API: folders, files and list items."""

__all__ = [
    "CheckinType",
    "File",
    "FileAddResult",
    "FileInfo",
    "Files",
    "Folder",
    "FolderAddResult",
    "FolderInfo",
    "FolderUpdateResult",
    "Folders",
    "HttpxHttpClient",
    "Item",
    "ItemAddResult",
    "ItemUpdateResult",
    "Items",
    "List",
    "Lists",
    "MoveOperations",
    "PagedItemCollection",
    "ParsingError",
    "Queryable",
    "QueryableCollection",
    "QueryableInstance",
    "RequestsHttpClient",
    "Settings",
    "SharePointError",
    "SharePointHttpClient",
    "SharePointRequestError",
    "SharePointRest",
    "TemplateFileType",
    "Web",
]

from .client import (
    HttpxHttpClient,
    ParsingError,
    RequestsHttpClient,
    SharePointError,
    SharePointHttpClient,
    SharePointRequestError,
)
from .config import Settings
from .files import CheckinType, File, Files, MoveOperations, TemplateFileType
from .folders import Folder, Folders
from .items import Item, Items, PagedItemCollection
from .models import (
    FileAddResult,
    FileInfo,
    FolderAddResult,
    FolderInfo,
    FolderUpdateResult,
    ItemAddResult,
    ItemUpdateResult,
)
from .queryable import Queryable, QueryableCollection, QueryableInstance
from .web import List, Lists, SharePointRest, Web
