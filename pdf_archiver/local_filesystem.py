"""
LocalFileSystem exposes a directory on disk through the backend interface.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Self

from ._filesystem_base import FileSystemBase
from .classes import Entry, ListMetadata
from .utils import guess_mimetype, split_path, to_bytes

logger = logging.getLogger(__name__)


class LocalFileSystem(FileSystemBase):
    """
    A storage backend rooted at a local directory.

    Attributes
    ----------
    root : Path
        Absolute path of the directory every backend path is relative to.
    follow_symlinks : bool
        Whether symbolic links show up in listings. They are hidden by
        default, which keeps any walk over the tree free of loops.

    Examples
    --------
    >>> fs = LocalFileSystem("/srv/papers")
    >>> fs.exists("thesis/makefile")
    True
    >>> fs.ls("thesis/pdf", metadata=["mimetype"])
    [{'path': 'thesis/pdf/thesis.pdf', 'type': 'file', 'mimetype': 'application/pdf'}]
    """

    protocol = "local"

    def __init__(self: Self, root: str | Path, *, follow_symlinks: bool = False):
        self.root = Path(root).expanduser().resolve()
        self.follow_symlinks = follow_symlinks

    def __repr__(self: Self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"

    def _full_path(self: Self, path: str) -> Path:
        return self.root.joinpath(*split_path(path))

    def local_path(self: Self, path: str) -> Path:
        return self._full_path(path)

    def exists(self: Self, path: str) -> bool:
        return self._full_path(path).exists()

    def isdir(self: Self, path: str) -> bool:
        return self._full_path(path).is_dir()

    def isfile(self: Self, path: str) -> bool:
        return self._full_path(path).is_file()

    def ls(
        self: Self,
        path: str,
        metadata: Sequence[ListMetadata] | None = None,
    ) -> list[Entry]:
        """List the direct contents of a directory, sorted by name.

        Parameters
        ----------
        path: str
            Directory to list, relative to the root. ``"."`` and ``""`` both
            mean the root itself.
        metadata: Sequence[str] | None
            Extra fields to fill in for files: ``"mimetype"`` and/or
            ``"size"``. ``"path"`` and ``"type"`` are always present.

        Returns
        -------
        list[Entry]
            One entry per child, paths relative to the root.
        """
        directory = self._full_path(path)
        if not directory.exists():
            raise FileNotFoundError(path)
        if not directory.is_dir():
            raise NotADirectoryError(path)

        requested = set(metadata or ())
        entries: list[Entry] = []
        for child in sorted(directory.iterdir(), key=lambda p: p.name):
            if child.is_symlink() and not self.follow_symlinks:
                logger.debug("Skipping symbolic link %s", child)
                continue

            rel_path = child.relative_to(self.root).as_posix()
            if child.is_dir():
                entries.append({"path": rel_path, "type": "dir"})
                continue

            entry: Entry = {"path": rel_path, "type": "file"}
            if "mimetype" in requested:
                mimetype = guess_mimetype(child)
                if mimetype is not None:
                    entry["mimetype"] = mimetype
            if "size" in requested:
                entry["size"] = child.stat().st_size
            entries.append(entry)

        return entries

    def cat(self: Self, path: str) -> bytes:
        return self._full_path(path).read_bytes()

    def pipe(self: Self, path: str, value: bytes) -> None:
        target = self._full_path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(to_bytes(value))
