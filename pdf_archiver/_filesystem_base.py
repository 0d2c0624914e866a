"""
Provides the abstract base class for archiver storage backends.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import Self

from .classes import Entry, ListMetadata


class FileSystemBase(ABC):
    """Abstract base class for the local and remote storage backends.

    All paths are relative to the backend root.
    """

    protocol: str = "abstract"

    @abstractmethod
    def exists(self: Self, path: str) -> bool:
        """Check if a file or directory exists"""
        raise NotImplementedError

    @abstractmethod
    def isdir(self: Self, path: str) -> bool:
        """Check if a path is a directory"""
        raise NotImplementedError

    @abstractmethod
    def isfile(self: Self, path: str) -> bool:
        """Check if a path is a regular file"""
        raise NotImplementedError

    @abstractmethod
    def ls(
        self: Self,
        path: str,
        metadata: Sequence[ListMetadata] | None = None,
    ) -> list[Entry]:
        """List the direct contents of a directory"""
        raise NotImplementedError

    @abstractmethod
    def cat(self: Self, path: str) -> bytes:
        """Read the full content of a file"""
        raise NotImplementedError

    @abstractmethod
    def pipe(self: Self, path: str, value: bytes) -> None:
        """Write the full content of a file, replacing it if present"""
        raise NotImplementedError

    def local_path(self: Self, path: str) -> Path:
        """Absolute on-disk location of a backend path.

        Only backends that live on the local disk can answer this.
        """
        error_msg = f"{type(self).__name__} has no on-disk location for {path}"
        raise NotImplementedError(error_msg)
