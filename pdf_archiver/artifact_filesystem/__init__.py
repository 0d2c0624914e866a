"""Implements the archiver's storage interface on top of a Hypha artifact.

This module lets the archiver use a remote Hypha artifact as its remote
backend: listing, existence checks, and whole-file reads and writes go through
the artifact manager HTTP service and presigned URLs.
"""

import os
from typing import Self

import httpx

from .._filesystem_base import FileSystemBase
from ._fs import exists, isdir, isfile, ls
from ._io import cat, pipe
from ._state import commit, discard, edit


class ArtifactFileSystem(FileSystemBase):
    """Provides the archiver's filesystem interface for a Hypha artifact."""

    protocol = "artifact"

    token: str | None
    workspace: str
    artifact_alias: str
    artifact_url: str
    use_proxy: bool | None = None
    disable_ssl: bool = False
    _client: httpx.Client | None

    def __init__(
        self: Self,
        artifact_id: str,
        workspace: str | None = None,
        token: str | None = None,
        server_url: str | None = None,
        *,
        use_proxy: bool | None = None,
        disable_ssl: bool = False,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize an ArtifactFileSystem instance.

        Parameters
        ----------
        artifact_id: str
            The ID of the artifact, either ``alias`` or ``workspace/alias``.
        workspace: str | None
            The workspace the artifact belongs to (optional).
        token: str | None
            The authentication token to use (optional).
        server_url: str | None
            The URL of the Hypha server, e.g. https://hypha.aicell.io
        use_proxy: bool | None
            Whether to ask the server for proxied file URLs (optional).
        disable_ssl: bool
            Whether to disable SSL verification (optional).
        client: httpx.Client | None
            A preconfigured client to send requests with (optional).

        """
        if "/" in artifact_id:
            self.workspace, self.artifact_alias = artifact_id.split("/")
            if workspace and workspace != self.workspace:
                error_msg = f"Workspace mismatch: {workspace} != {self.workspace}"
                raise ValueError(error_msg)
        else:
            if not workspace:
                error_msg = (
                    "Workspace must be provided if artifact_id does not include it"
                )
                raise ValueError(error_msg)
            self.workspace = workspace
            self.artifact_alias = artifact_id
        self.artifact_id = f"{self.workspace}/{self.artifact_alias}"
        self.token = token
        if server_url:
            server_url = server_url.removesuffix("/")
            self.artifact_url = f"{server_url}/public/services/artifact-manager"
        else:
            error_msg = "Server URL must be provided, e.g. https://hypha.aicell.io"
            raise ValueError(error_msg)
        self.disable_ssl = disable_ssl
        self._client = client

        env_proxy = os.getenv("HYPHA_USE_PROXY")
        if use_proxy is not None:
            self.use_proxy = use_proxy
        elif env_proxy is not None:
            self.use_proxy = env_proxy.lower() == "true"
        else:
            self.use_proxy = None

    def __repr__(self: Self) -> str:
        return f"{type(self).__name__}({self.artifact_id!r})"

    def __enter__(self: Self) -> Self:
        """Context manager entry."""
        self.get_client()
        return self

    def __exit__(
        self: Self,
        exc_type: object,
        exc_val: object,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()

    def close(self: Self) -> None:
        """Explicitly close the httpx client and clean up resources."""
        if self._client:
            self._client.close()
            self._client = None

    def get_client(self: Self) -> httpx.Client:
        """Get or create httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(verify=not self.disable_ssl, timeout=60.0)
        return self._client

    ls = ls
    exists = exists
    isdir = isdir
    isfile = isfile
    cat = cat
    pipe = pipe
    edit = edit
    commit = commit
    discard = discard


__all__ = ["ArtifactFileSystem"]
