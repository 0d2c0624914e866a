"""Methods for filesystem-like operations."""

from __future__ import annotations

import json
import mimetypes
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx

from ..classes import Entry, ListMetadata
from ..utils import split_path
from ._remote_methods import ArtifactMethod
from ._utils import (
    check_errors,
    get_headers,
    get_method_url,
    params_list_files,
    parent_and_name,
    prepare_params,
)

if TYPE_CHECKING:
    from . import ArtifactFileSystem


def ls(
    self: "ArtifactFileSystem",
    path: str,
    metadata: Sequence[ListMetadata] | None = None,
    version: str | None = None,
) -> list[Entry]:
    """List contents of path

    Parameters
    ----------
    path: str
        Path to list contents of
    metadata: Sequence[str] | None
        Extra fields to fill in for files. The service does not report mime
        types, so ``"mimetype"`` is guessed from the file name.
    version: str | None
        The version of the artifact to list contents from.
        By default, it lists from the latest version.
        If you want to list from a staged version, you can set it to "stage".

    Returns
    -------
    list[Entry]
        Entries in service order, paths relative to the artifact root
    """
    parts = split_path(path)
    dir_path = "/".join(parts) or "."
    params: dict[str, Any] = prepare_params(
        self,
        params_list_files(dir_path, version=version),
    )

    response = self.get_client().get(
        get_method_url(self, ArtifactMethod.LIST_FILES),
        params=params,
        headers=get_headers(self),
        timeout=20,
    )

    check_errors(response)

    requested = set(metadata or ())
    entries: list[Entry] = []
    for item in json.loads(response.content):
        name = str(item["name"]).rstrip("/")
        item_path = "/".join((*parts, name))
        if item["type"] == "directory":
            entries.append({"path": item_path, "type": "dir"})
            continue

        entry: Entry = {"path": item_path, "type": "file"}
        if "mimetype" in requested:
            mimetype, _ = mimetypes.guess_type(name)
            if mimetype is not None:
                entry["mimetype"] = mimetype
        if "size" in requested and item.get("size") is not None:
            entry["size"] = int(item["size"])
        entries.append(entry)

    return entries


def exists(
    self: "ArtifactFileSystem", path: str, version: str | None = None
) -> bool:
    """Check if a file or directory exists

    Parameters
    ----------
    path: str
        Path to check

    Returns
    -------
    bool
        True if the path exists, False otherwise
    """
    if not split_path(path):
        return True

    return _find_entry(self, path, version=version) is not None


def isdir(
    self: "ArtifactFileSystem", path: str, version: str | None = None
) -> bool:
    """Check if a path is a directory of the artifact"""
    if not split_path(path):
        return True

    entry = _find_entry(self, path, version=version)
    return entry is not None and entry["type"] == "dir"


def isfile(
    self: "ArtifactFileSystem", path: str, version: str | None = None
) -> bool:
    """Check if a path is a file of the artifact"""
    if not split_path(path):
        return False

    entry = _find_entry(self, path, version=version)
    return entry is not None and entry["type"] == "file"


def _find_entry(
    self: "ArtifactFileSystem", path: str, version: str | None = None
) -> Entry | None:
    """Look a path up in the listing of its parent directory.

    Request failures read as a missing path.
    """
    parent, name = parent_and_name(path)
    try:
        entries = self.ls(parent, version=version)
    except (FileNotFoundError, httpx.HTTPStatusError, httpx.RequestError):
        return None

    for entry in entries:
        if entry["path"].rpartition("/")[2] == name:
            return entry
    return None
