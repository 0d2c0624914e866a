"""Represents a file or directory returned by a filesystem listing."""

from collections.abc import Callable
from typing import Any, Literal, NotRequired, TypedDict

EntryType = Literal["file", "dir"]
ListMetadata = Literal["mimetype", "path", "size"]
ProgressCallback = Callable[[dict[str, Any]], None]


class Entry(TypedDict):
    """
    Represents one item of a directory listing.

    ``path`` is always relative to the backend root. ``mimetype`` and ``size``
    are only present for files, and only when they were requested.
    """

    path: str
    type: EntryType
    mimetype: NotRequired[str]
    size: NotRequired[int]
