"""Methods for managing the artifact's staging state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._remote_methods import ArtifactMethod
from ._utils import (
    check_errors,
    get_headers,
    get_method_url,
    params_commit,
    params_edit,
    prepare_params,
)

if TYPE_CHECKING:
    from . import ArtifactFileSystem


def edit(
    self: ArtifactFileSystem,
    version: str | None = None,
    comment: str | None = None,
    stage: bool = False,
) -> None:
    """Edits the artifact and optionally puts it in staging mode.

    Files can only be uploaded to a staged artifact.

    Args:
        version (str | None): The version to edit or create.
            Can be "new" for a new version, "stage", or a specific version string.
        comment (str | None): A comment for this version or edit.
        stage (bool): If True, edits are made to a staging version.
    """
    params: dict[str, Any] = prepare_params(
        self,
        params_edit(version=version, comment=comment, stage=stage),
    )

    response = self.get_client().post(
        get_method_url(self, ArtifactMethod.EDIT),
        headers=get_headers(self),
        json=params,
    )

    check_errors(response)


def commit(
    self: ArtifactFileSystem,
    version: str | None = None,
    comment: str | None = None,
) -> None:
    """Commits the staged changes to the artifact.

    Args:
        version (str | None): The version string for the commit.
            If None, a new version is typically created. Cannot be "stage".
        comment (str | None): A comment describing the commit.
    """
    params: dict[str, Any] = prepare_params(
        self,
        params_commit(version=version, comment=comment),
    )

    response = self.get_client().post(
        get_method_url(self, ArtifactMethod.COMMIT),
        headers=get_headers(self),
        json=params,
    )

    check_errors(response)


def discard(
    self: ArtifactFileSystem,
) -> None:
    """Discards all staged changes for an artifact, reverting to the last committed state."""
    response = self.get_client().post(
        get_method_url(self, ArtifactMethod.DISCARD),
        headers=get_headers(self),
        json=prepare_params(self),
    )

    check_errors(response)
