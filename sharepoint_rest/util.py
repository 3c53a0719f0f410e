"""URL helpers shared by the queryable classes."""

from __future__ import annotations

import re

_EDGE_SLASHES = re.compile(r"^[\\/]|[\\/]$")


def combine_paths(*parts: str | None) -> str:
    """Join URL parts with single slashes.

    One leading and one trailing slash (or backslash) is stripped from each
    part. ``None`` and empty parts are skipped.
    """

    cleaned = [_EDGE_SLASHES.sub("", part) for part in parts if part]
    return "/".join(part for part in cleaned if part).replace("\\", "/")


def odata_quote(value: object) -> str:
    """Escape a value for use inside an OData string literal."""

    return str(value).replace("'", "''")


def extract_web_url(url: str) -> str:
    index = url.lower().find("/_api")
    if index < 0:
        return url
    return url[:index]


def split_parent_url(url: str) -> str:
    """Return the part of ``url`` before its last top-level ``/`` or ``(``.

    Separators inside an argument list or a quoted literal are skipped, so
    ``getByUrl('a/b')`` is treated as a single segment.
    """

    depth = 0
    in_quote = False
    cut = -1
    for index, char in enumerate(url):
        if char == "'":
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char == "(":
            if depth == 0:
                cut = index
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "/" and depth == 0:
            cut = index

    if cut < 0:
        return url
    return url[:cut]
