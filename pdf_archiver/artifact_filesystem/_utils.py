"""Utility functions for the artifact filesystem."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, TypedDict

import httpx

from ._remote_methods import ArtifactMethod

if TYPE_CHECKING:
    from collections.abc import Mapping

    from . import ArtifactFileSystem


class ListFilesParams(TypedDict, total=False):
    dir_path: str
    version: str


class GetFileUrlParams(TypedDict, total=False):
    file_path: str
    version: str
    use_proxy: bool


def params_list_files(
    dir_path: str = ".",
    version: str | None = None,
) -> ListFilesParams:
    """Typed builder for List Files parameters."""
    p: ListFilesParams = {"dir_path": dir_path}
    if version is not None:
        p["version"] = version
    return p


def params_get_file_url(
    file_path: str,
    *,
    version: str | None = None,
    use_proxy: bool | None = None,
) -> GetFileUrlParams:
    """Typed builder for GET/PUT file URL params."""
    p: GetFileUrlParams = {"file_path": file_path}
    if version is not None:
        p["version"] = version
    if use_proxy is not None:
        p["use_proxy"] = use_proxy
    return p


def params_edit(
    *,
    version: str | None = None,
    comment: str | None = None,
    stage: bool = False,
) -> dict[str, object]:
    return {
        k: v
        for k, v in {
            "version": version,
            "comment": comment,
            "stage": stage,
        }.items()
        if v is not None
    }


def params_commit(
    *,
    version: str | None = None,
    comment: str | None = None,
) -> dict[str, object]:
    return {
        k: v
        for k, v in {"version": version, "comment": comment}.items()
        if v is not None
    }


def prepare_params(
    self: ArtifactFileSystem,
    params: Mapping[str, object] | None = None,
) -> dict[str, Any]:
    """Extend parameters with artifact_id."""
    cleaned_params: dict[str, object] = {
        k: v for k, v in (dict(params or {})).items() if v is not None
    }
    cleaned_params["artifact_id"] = self.artifact_id
    return cleaned_params


def get_method_url(self: ArtifactFileSystem, method: ArtifactMethod) -> str:
    """Get the URL for a specific artifact method."""
    return f"{self.artifact_url}/{method}"


def get_headers(self: ArtifactFileSystem) -> dict[str, str]:
    """Get headers for HTTP requests.

    Returns:
        dict[str, str]: Headers to include in the request.

    """
    return {"Authorization": f"Bearer {self.token}"} if self.token else {}


def check_errors(response: httpx.Response) -> None:
    """Handle errors in HTTP responses."""
    if response.status_code != HTTPStatus.OK:
        error_msg = f"Unexpected error: {response.text}"
        raise httpx.RequestError(error_msg, request=response.request)

    response.raise_for_status()


def get_read_url(self: ArtifactFileSystem, params: Mapping[str, object]) -> str:
    response = self.get_client().get(
        get_method_url(self, ArtifactMethod.GET_FILE),
        params=prepare_params(self, params),
        headers=get_headers(self),
        timeout=60,
    )

    check_errors(response)

    return response.content.decode().strip('"')


def get_write_url(self: ArtifactFileSystem, params: Mapping[str, object]) -> str:
    response = self.get_client().post(
        get_method_url(self, ArtifactMethod.PUT_FILE),
        json=prepare_params(self, params),
        headers=get_headers(self),
        timeout=60,
    )

    check_errors(response)

    return response.content.decode().strip('"')


def parent_and_name(path: str) -> tuple[str, str]:
    """Split a remote path into its parent directory and base name."""
    parent, _, name = path.strip("/").rpartition("/")
    return parent or ".", name
