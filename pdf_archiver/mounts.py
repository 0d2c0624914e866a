"""Named storage backends for one archiver run."""

from collections.abc import Iterator
from typing import Self

from ._filesystem_base import FileSystemBase

LOCAL = "local"
REMOTE = "remote"
SEPARATOR = "://"


class MountManager:
    """
    Holds the ``local`` and ``remote`` backends of a run.

    Callers pick a backend explicitly through :attr:`local` and
    :attr:`remote`. URL-style addresses such as ``remote://a/b.pdf`` are only
    resolved by :meth:`resolve`, for command line use.
    """

    def __init__(self: Self, local: FileSystemBase, remote: FileSystemBase):
        self._filesystems: dict[str, FileSystemBase] = {
            LOCAL: local,
            REMOTE: remote,
        }

    @property
    def local(self: Self) -> FileSystemBase:
        return self._filesystems[LOCAL]

    @property
    def remote(self: Self) -> FileSystemBase:
        return self._filesystems[REMOTE]

    def __getitem__(self: Self, name: str) -> FileSystemBase:
        try:
            return self._filesystems[name]
        except KeyError:
            error_msg = (
                f"Unknown backend '{name}', expected one of {sorted(self._filesystems)}"
            )
            raise ValueError(error_msg) from None

    def __iter__(self: Self) -> Iterator[str]:
        return iter(self._filesystems)

    def __len__(self: Self) -> int:
        return len(self._filesystems)

    def resolve(self: Self, url: str) -> tuple[FileSystemBase, str]:
        """Split ``name://path`` into its backend and backend-relative path."""
        name, separator, path = url.partition(SEPARATOR)
        if not separator:
            error_msg = f"Missing backend prefix in '{url}', e.g. local://{url}"
            raise ValueError(error_msg)
        return self[name], path
