"""
The archiver walks a local tree, builds every directory that has a build file
and a ``pdf`` folder, and copies the resulting PDFs to the remote backend.
"""

import logging
import subprocess
from collections.abc import Sequence
from typing import Self

from .classes import Entry, ProgressCallback
from .dataclasses import ArchiveStats, BuildResult, DirectoryPath
from .mounts import MountManager
from .utils import PDF_MARKER, is_pdf, normalize_remote_path

logger = logging.getLogger(__name__)

DEFAULT_BUILD_FILE = "makefile"
DEFAULT_BUILD_COMMAND = ("make",)


class Archiver:
    """
    Builds and archives PDF folders found in a local tree.

    Attributes
    ----------
    local : FileSystemBase
        The backend that is walked and built. It must be able to resolve
        paths to on-disk locations.
    remote : FileSystemBase
        The backend PDFs are written to.
    build_file : str
        Name of the build description file that marks a directory.
    build_command : tuple[str, ...]
        Command run in each marked directory.

    Examples
    --------
    >>> mounts = MountManager(LocalFileSystem("~/papers"), LocalFileSystem("/mnt/archive"))
    >>> Archiver(mounts).run()
    Processing directory thesis
    """

    def __init__(
        self: Self,
        mounts: MountManager,
        *,
        build_file: str = DEFAULT_BUILD_FILE,
        build_command: Sequence[str] = DEFAULT_BUILD_COMMAND,
        callback: ProgressCallback | None = None,
    ):
        self.local = mounts.local
        self.remote = mounts.remote
        self.build_file = build_file
        self.build_command = tuple(build_command)
        self.callback = callback
        self.stats = ArchiveStats()

    def run(self: Self, start_path: str | DirectoryPath = ".") -> ArchiveStats:
        """Run the archiver from the given path of the local filesystem."""
        self.stats = ArchiveStats()
        self.process_directory(DirectoryPath.parse(start_path))
        return self.stats

    def process_directory(self: Self, path: DirectoryPath) -> None:
        """Process a directory and all of its descendants, parents first.

        Children are visited in the order the local backend lists them.
        """
        pending = [path]
        visited: set[object] = set()

        while pending:
            current = pending.pop()
            identity = self.directory_identity(current)
            if identity in visited:
                logger.warning("Directory %s was already processed", current)
                continue
            visited.add(identity)
            self.stats.directories += 1

            if self.should_process(current):
                print(f"Processing directory {current}")  # noqa: T201
                self.stats.triggered += 1

                result = self.run_build(current)
                if not result.ok:
                    self.stats.builds_failed += 1
                self.move_pdf_files_to_remote(current.join(PDF_MARKER))

            # Reversed so that the first listed child is popped first
            pending.extend(reversed(self.get_directories(current)))

    def directory_identity(self: Self, path: DirectoryPath) -> object:
        """Key under which a directory counts as visited.

        On-disk backends key on the resolved location, so a directory reached
        again through a symbolic link is recognised. Other backends key on
        the path itself.
        """
        try:
            return self.local.local_path(str(path)).resolve()
        except NotImplementedError:
            return path

    def should_process(self: Self, path: DirectoryPath) -> bool:
        """Tell if a directory has both a build file and a ``pdf`` folder."""
        return self.has_build_file(path) and self.has_pdf_folder(path)

    def has_build_file(self: Self, path: DirectoryPath) -> bool:
        return self.local.isfile(path.join(self.build_file))

    def has_pdf_folder(self: Self, path: DirectoryPath) -> bool:
        return self.local.isdir(path.join(PDF_MARKER))

    def run_build(self: Self, path: DirectoryPath) -> BuildResult:
        """Run the build command inside a local directory.

        The call blocks until the command exits. Failures are logged and
        returned, never raised.
        """
        result = BuildResult(path=path, command=self.build_command)
        cwd = self.local.local_path(str(path))

        logger.debug("Running %s in %s", " ".join(self.build_command), cwd)
        try:
            completed = subprocess.run(self.build_command, cwd=cwd, check=False)
        except OSError as e:
            result.error = str(e)
            logger.warning("Could not start build in %s: %s", path, e)
            return result

        result.returncode = completed.returncode
        if completed.returncode != 0:
            logger.warning(
                "Build in %s exited with status %d", path, completed.returncode
            )
        return result

    def move_pdf_files_to_remote(self: Self, path: str) -> list[str]:
        """Copy the PDF files found directly in a local folder to the remote.

        Parameters
        ----------
        path: str
            The ``pdf`` folder, relative to the local root.

        Returns
        -------
        list[str]
            The remote paths that were written, in listing order.
        """
        contents = self.local.ls(path, metadata=["mimetype", "path"])

        written: list[str] = []
        for content in contents:
            if not self.content_is_pdf(content):
                continue

            remote_path = normalize_remote_path(content["path"])
            self.remote.pipe(remote_path, self.local.cat(content["path"]))
            logger.info("Archived %s to %s", content["path"], remote_path)

            written.append(remote_path)
            self.stats.files_transferred += 1
            self.stats.remote_paths.append(remote_path)
            if self.callback is not None:
                self.callback(
                    {"type": "success", "file": content["path"], "target": remote_path}
                )

        return written

    @staticmethod
    def content_is_pdf(content: Entry) -> bool:
        return content["type"] == "file" and is_pdf(content.get("mimetype"))

    def get_directories(self: Self, path: DirectoryPath) -> list[DirectoryPath]:
        """Get the direct subdirectories of a local directory."""
        return [
            DirectoryPath.parse(content["path"])
            for content in self.local.ls(str(path))
            if content["type"] == "dir"
        ]
