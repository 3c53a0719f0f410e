"""File collections, file instances, and file versions."""

from __future__ import annotations

import logging
from enum import IntEnum, IntFlag
from typing import Any

from .items import Item
from .models import FileAddResult, FileInfo
from .odata import BytesParser, ODataRawParser, ODataValueParser, TextParser
from .queryable import Queryable, QueryableCollection, QueryableInstance
from .util import odata_quote

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 1023


class CheckinType(IntEnum):
    MINOR = 0
    MAJOR = 1
    OVERWRITE = 2


class MoveOperations(IntFlag):
    OVERWRITE = 1
    ALLOW_BROKEN_THICKETS = 8


class TemplateFileType(IntEnum):
    STANDARD_PAGE = 0
    WIKI_PAGE = 1
    FORM_PAGE = 2


def _bool_literal(value: bool) -> str:
    return "true" if value else "false"


class Files(QueryableCollection):
    """The files of a folder."""

    def __init__(self, base_url: str | Queryable, path: str | None = "files", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    def get_by_name(self, name: str) -> File:
        return File(self).concat(f"('{odata_quote(name)}')")

    def add(self, url: str, content: bytes | str, should_overwrite: bool = True) -> FileAddResult:
        """Upload ``content`` as a new file named ``url`` in this folder."""
        path = f"add(overwrite={_bool_literal(should_overwrite)},url='{odata_quote(url)}')"
        data = Files(self, path).post(body=content)
        logger.info("Uploaded %s (%d bytes)", url, len(content))
        return FileAddResult(data=data, file=self.get_by_name(url))

    def add_template_file(self, url: str, template_type: TemplateFileType) -> FileAddResult:
        path = (
            f"addTemplateFile(urloffile='{odata_quote(url)}',"
            f"templatefiletype={int(template_type)})"
        )
        data = Files(self, path).post()
        return FileAddResult(data=data, file=self.get_by_name(url))


class File(QueryableInstance):
    """A single file."""

    @property
    def author(self) -> QueryableInstance:
        return QueryableInstance(self, "Author")

    @property
    def checked_out_by_user(self) -> QueryableInstance:
        return QueryableInstance(self, "CheckedOutByUser")

    @property
    def locked_by_user(self) -> QueryableInstance:
        return QueryableInstance(self, "LockedByUser")

    @property
    def modified_by(self) -> QueryableInstance:
        return QueryableInstance(self, "ModifiedBy")

    @property
    def list_item_all_fields(self) -> Item:
        return Item(self, "ListItemAllFields")

    @property
    def versions(self) -> Versions:
        return Versions(self)

    @property
    def name(self) -> Queryable:
        return Queryable(self, "Name")

    @property
    def server_relative_url(self) -> Queryable:
        return Queryable(self, "ServerRelativeUrl")

    @property
    def length(self) -> Queryable:
        return Queryable(self, "Length")

    def get_info(self) -> FileInfo:
        return FileInfo.from_payload(self.get())

    def approve(self, comment: str) -> None:
        self._comment_verb("approve", comment)

    def deny(self, comment: str = "") -> None:
        self._comment_verb("deny", comment)

    def publish(self, comment: str = "") -> None:
        self._comment_verb("publish", comment)

    def unpublish(self, comment: str = "") -> None:
        self._comment_verb("unpublish", comment)

    def check_in(self, comment: str = "", checkin_type: CheckinType = CheckinType.MAJOR) -> None:
        _check_comment(comment)
        File(self, f"checkin(comment='{odata_quote(comment)}',checkintype={int(checkin_type)})").post()

    def check_out(self) -> None:
        File(self, "checkout").post()

    def undo_check_out(self) -> None:
        File(self, "undoCheckout").post()

    def copy_to(self, url: str, should_overwrite: bool = True) -> None:
        """Copy the file to ``url`` (server relative)."""
        File(
            self,
            f"copyTo(strnewurl='{odata_quote(url)}',boverwrite={_bool_literal(should_overwrite)})",
        ).post()

    def move_to(self, url: str, move_operations: MoveOperations = MoveOperations.OVERWRITE) -> None:
        File(self, f"moveTo(newurl='{odata_quote(url)}',flags={int(move_operations)})").post()

    def delete(self, etag: str = "*") -> None:
        self.post(headers={"IF-Match": etag, "X-HTTP-Method": "DELETE"})

    def recycle(self) -> str:
        """Move the file to the recycle bin and return the recycle bin item id."""
        return File(self, "recycle").post(parser=ODataValueParser())

    def get_text(self) -> str:
        return File(self, "$value").get(TextParser())

    def get_bytes(self) -> bytes:
        return File(self, "$value").get(BytesParser())

    def get_json(self) -> Any:
        return File(self, "$value").get(ODataRawParser())

    def set_content(self, content: bytes | str) -> File:
        """Overwrite the file body; returns this file."""
        File(self, "$value").post(body=content, headers={"X-HTTP-Method": "PUT"})
        return self

    def _comment_verb(self, verb: str, comment: str) -> None:
        File(self, f"{verb}(comment='{odata_quote(comment)}')").post()


class Versions(QueryableCollection):
    """The version history of a file."""

    def __init__(self, base_url: str | Queryable, path: str | None = "versions", **kwargs: Any) -> None:
        super().__init__(base_url, path, **kwargs)

    def get_by_id(self, version_id: int) -> Version:
        return Version(self).concat(f"({int(version_id)})")

    def delete_all(self) -> None:
        Versions(self, "deleteAll").post()

    def delete_by_id(self, version_id: int) -> None:
        Versions(self, f"deleteById(vid={int(version_id)})").post()

    def delete_by_label(self, label: str) -> None:
        Versions(self, f"deleteByLabel(versionlabel='{odata_quote(label)}')").post()

    def restore_by_label(self, label: str) -> None:
        Versions(self, f"restoreByLabel(versionlabel='{odata_quote(label)}')").post()


class Version(QueryableInstance):
    def delete(self, etag: str = "*") -> None:
        self.post(headers={"IF-Match": etag, "X-HTTP-Method": "DELETE"})


def _check_comment(comment: str) -> None:
    if len(comment) > MAX_COMMENT_LENGTH:
        raise ValueError(f"The maximum comment length is {MAX_COMMENT_LENGTH} characters.")
