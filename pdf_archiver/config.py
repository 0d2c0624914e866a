"""Configuration of an archiver run, read from the environment."""

import logging
import os
import shlex
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

from .archiver import DEFAULT_BUILD_COMMAND, DEFAULT_BUILD_FILE
from .artifact_filesystem import ArtifactFileSystem
from .local_filesystem import LocalFileSystem
from .mounts import MountManager

logger = logging.getLogger(__name__)

ENV_NAMES: dict[str, str] = {
    "local_root": "PDF_ARCHIVER_LOCAL_ROOT",
    "remote_root": "PDF_ARCHIVER_REMOTE_ROOT",
    "artifact_id": "PDF_ARCHIVER_ARTIFACT_ID",
    "build_file": "PDF_ARCHIVER_BUILD_FILE",
    "build_command": "PDF_ARCHIVER_BUILD_COMMAND",
    "server_url": "HYPHA_SERVER_URL",
    "token": "HYPHA_TOKEN",
    "workspace": "HYPHA_WORKSPACE",
}


@dataclass
class ArchiverConfig:
    """
    Settings for one archiver run.

    The remote backend is either a local directory (``remote_root``) or a
    Hypha artifact (``artifact_id`` plus the ``HYPHA_*`` connection settings).
    """

    local_root: str = "."
    remote_root: str | None = None
    artifact_id: str | None = None
    build_file: str = DEFAULT_BUILD_FILE
    build_command: str = shlex.join(DEFAULT_BUILD_COMMAND)
    server_url: str | None = None
    token: str | None = None
    workspace: str | None = None

    @classmethod
    def from_env(cls, **overrides: Any) -> Self:
        """Build a config from environment variables.

        Keyword arguments that are not None take precedence over the
        environment.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            value = overrides.get(f.name)
            if value is None:
                value = os.getenv(ENV_NAMES[f.name])
            if isinstance(value, (list, tuple)):
                value = shlex.join(str(v) for v in value)
            if value is not None:
                values[f.name] = value

        config = cls(**values)
        config.validate()
        return config

    def validate(self: Self) -> None:
        if bool(self.remote_root) == bool(self.artifact_id):
            error_msg = (
                f"Exactly one of {ENV_NAMES['remote_root']} and "
                f"{ENV_NAMES['artifact_id']} must be set"
            )
            raise ValueError(error_msg)

        if self.artifact_id and not self.server_url:
            error_msg = f"Missing {ENV_NAMES['server_url']} environment variable"
            raise ValueError(error_msg)

        if not self.build_command_args:
            error_msg = "Build command must not be empty"
            raise ValueError(error_msg)

        if not Path(self.local_root).expanduser().is_dir():
            error_msg = f"Local root is not a directory: {self.local_root}"
            raise ValueError(error_msg)

    @property
    def build_command_args(self: Self) -> list[str]:
        return shlex.split(self.build_command)

    def create_mounts(self: Self) -> MountManager:
        """Create the local and remote backends described by this config."""
        local = LocalFileSystem(self.local_root)
        if self.remote_root:
            remote = LocalFileSystem(self.remote_root)
        else:
            remote = ArtifactFileSystem(
                str(self.artifact_id),
                workspace=self.workspace,
                token=self.token,
                server_url=self.server_url,
            )
        logger.debug("Mounted local=%r remote=%r", local, remote)
        return MountManager(local=local, remote=remote)
