"""Methods for file I/O operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..utils import split_path, to_bytes
from ._utils import get_read_url, get_write_url, params_get_file_url

if TYPE_CHECKING:
    from . import ArtifactFileSystem

logger = logging.getLogger(__name__)


def cat(
    self: ArtifactFileSystem,
    path: str,
    version: str | None = None,
) -> bytes:
    """Get a file's full content.

    Parameters
    ----------
    self: ArtifactFileSystem
        The ArtifactFileSystem instance
    path: str
        File path to read
    version: str | None = None
        The version of the artifact to read from.
        By default, it uses the latest version.
        If you want to use a staged version, you can set it to "stage".

    Returns
    -------
    bytes
        The file content
    """
    file_path = "/".join(split_path(path))
    url = get_read_url(
        self,
        params_get_file_url(file_path, version=version, use_proxy=self.use_proxy),
    )

    response = self.get_client().get(url, follow_redirects=True, timeout=60)
    response.raise_for_status()

    return response.content


def pipe(
    self: ArtifactFileSystem,
    path: str,
    value: bytes,
) -> None:
    """Upload a file's full content through a presigned URL.

    The artifact must be in staging mode (see ``edit(stage=True)``) and the
    upload only becomes visible after ``commit()``.
    """
    file_path = "/".join(split_path(path))
    url = get_write_url(
        self,
        params_get_file_url(file_path, use_proxy=self.use_proxy),
    )

    content = to_bytes(value)
    response = self.get_client().put(url, content=content, timeout=60)
    response.raise_for_status()

    logger.debug("Uploaded %d bytes to %s", len(content), file_path)
