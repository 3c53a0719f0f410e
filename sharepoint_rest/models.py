"""Typed results returned by SharePoint operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .client import ParsingError

if TYPE_CHECKING:
    from .files import File
    from .folders import Folder
    from .items import Item


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ParsingError(f"Invalid timestamp: {value!r}") from exc


def _require(payload: Mapping[str, Any], key: str) -> Any:
    try:
        return payload[key]
    except KeyError as exc:
        raise ParsingError(f"Payload missing required field {key}") from exc


@dataclass
class FolderAddResult:
    data: Any
    folder: Folder


@dataclass
class FolderUpdateResult:
    data: Any
    folder: Folder


@dataclass
class FileAddResult:
    data: Any
    file: File


@dataclass
class ItemAddResult:
    data: Any
    item: Item


@dataclass
class ItemUpdateResult:
    data: Any
    item: Item


@dataclass
class FolderInfo:
    """Represents the properties of a SharePoint folder."""

    name: str
    server_relative_url: str
    item_count: int = 0
    unique_id: str = ""
    exists: bool = True
    welcome_page: str = ""
    time_created: Optional[datetime] = None
    time_last_modified: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> FolderInfo:
        if not isinstance(payload, Mapping):
            raise ParsingError("Folder payload must be an object")
        try:
            item_count = int(payload.get("ItemCount") or 0)
        except (TypeError, ValueError) as exc:
            raise ParsingError("ItemCount is not a number") from exc
        return cls(
            name=str(_require(payload, "Name")),
            server_relative_url=str(_require(payload, "ServerRelativeUrl")),
            item_count=item_count,
            unique_id=str(payload.get("UniqueId") or ""),
            exists=bool(payload.get("Exists", True)),
            welcome_page=str(payload.get("WelcomePage") or ""),
            time_created=_parse_timestamp(payload.get("TimeCreated")),
            time_last_modified=_parse_timestamp(payload.get("TimeLastModified")),
        )


@dataclass
class FileInfo:
    """Represents the properties of a SharePoint file."""

    name: str
    server_relative_url: str
    length: int = 0
    unique_id: str = ""
    etag: str = ""
    major_version: int = 0
    minor_version: int = 0
    check_out_type: int = 2
    time_created: Optional[datetime] = None
    time_last_modified: Optional[datetime] = None

    @property
    def version_label(self) -> str:
        return f"{self.major_version}.{self.minor_version}"

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> FileInfo:
        if not isinstance(payload, Mapping):
            raise ParsingError("File payload must be an object")
        try:
            # Length is serialised as a string in verbose OData
            length = int(payload.get("Length") or 0)
            major = int(payload.get("MajorVersion") or 0)
            minor = int(payload.get("MinorVersion") or 0)
            check_out_type = int(payload.get("CheckOutType", 2))
        except (TypeError, ValueError) as exc:
            raise ParsingError("File payload has non-numeric fields") from exc
        return cls(
            name=str(_require(payload, "Name")),
            server_relative_url=str(_require(payload, "ServerRelativeUrl")),
            length=length,
            unique_id=str(payload.get("UniqueId") or ""),
            etag=str(payload.get("ETag") or ""),
            major_version=major,
            minor_version=minor,
            check_out_type=check_out_type,
            time_created=_parse_timestamp(payload.get("TimeCreated")),
            time_last_modified=_parse_timestamp(payload.get("TimeLastModified")),
        )
