"""PDF Archiver Command Line Interface."""

import logging
import sys
from dataclasses import asdict
from typing import Any

import fire
from dotenv import find_dotenv, load_dotenv
from tqdm import tqdm

from .archiver import Archiver
from .artifact_filesystem import ArtifactFileSystem
from .config import ArchiverConfig
from .dataclasses import DirectoryPath
from .utils import normalize_remote_path

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


class _CLIProgress:
    """Counts archived files on a tqdm bar."""

    def __init__(self) -> None:
        self.completed = 0
        self.pbar: Any | None = None

    def __call__(self, event: dict[str, Any]) -> None:
        if event.get("type") != "success":
            return
        if self.pbar is None:
            self.pbar = tqdm(desc="Archiving", unit="file", dynamic_ncols=True)
        self.completed += 1
        self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None


class ArchiverCLI:
    """Build PDF folders of a local tree and archive them remotely."""

    def __init__(
        self,
        local_root: str | None = None,
        remote_root: str | None = None,
        artifact_id: str | None = None,
        build_file: str | None = None,
        build_command: str | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        """Initialize the CLI from flags, falling back to the environment.

        Args:
            local_root (str | None, optional): Directory to walk.
                Defaults to $PDF_ARCHIVER_LOCAL_ROOT or the current directory.
            remote_root (str | None, optional): Directory to archive to.
                Defaults to $PDF_ARCHIVER_REMOTE_ROOT.
            artifact_id (str | None, optional): Hypha artifact to archive to,
                instead of a directory. Defaults to $PDF_ARCHIVER_ARTIFACT_ID.
            build_file (str | None, optional): Name of the build file.
                Defaults to "makefile".
            build_command (str | None, optional): Command run in each
                directory that gets archived. Defaults to "make".
            verbose (bool, optional): Log debug messages. Defaults to False.

        """
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        try:
            self.config = ArchiverConfig.from_env(
                local_root=local_root,
                remote_root=remote_root,
                artifact_id=artifact_id,
                build_file=build_file,
                build_command=build_command,
            )
        except ValueError as e:
            logger.error(str(e))
            sys.exit(1)

        self.mounts = self.config.create_mounts()

    def _parse_path(self, path: str) -> DirectoryPath:
        try:
            return DirectoryPath.parse(path)
        except ValueError as e:
            logger.error(str(e))
            sys.exit(1)

    def _archiver(self, callback: Any = None) -> Archiver:
        return Archiver(
            self.mounts,
            build_file=self.config.build_file,
            build_command=self.config.build_command_args,
            callback=callback,
        )

    def run(
        self,
        path: str = ".",
        comment: str | None = None,
        *,
        commit: bool = True,
    ) -> dict[str, Any]:
        """Build and archive every matching directory below a path.

        Args:
            path (str, optional): Local directory to start from. Defaults to the
                local root.
            comment (str | None, optional): Comment recorded on the artifact
                version. Only used with an artifact remote.
            commit (bool, optional): Commit the staged artifact once the run
                is done. Only used with an artifact remote. Defaults to True.

        Returns:
            dict[str, Any]: Counters of the run.

        """
        start_path = self._parse_path(path)
        remote = self.mounts.remote
        staged = isinstance(remote, ArtifactFileSystem)
        if staged:
            remote.edit(stage=True, comment=comment)

        progress = _CLIProgress()
        try:
            stats = self._archiver(callback=progress).run(start_path)
        finally:
            progress.close()

        if staged and commit:
            remote.commit(comment=comment)

        logger.info(
            "Visited %d directories, archived %d files",
            stats.directories,
            stats.files_transferred,
        )
        return asdict(stats)

    def check(self, path: str = ".") -> bool:
        """Tell whether a local directory would be built and archived."""
        return self._archiver().should_process(self._parse_path(path))

    def ls(self, url: str = "local://") -> list[str]:
        """List a mounted directory, e.g. ``remote://thesis``."""
        try:
            filesystem, path = self.mounts.resolve(url)
            entries = filesystem.ls(path)
        except ValueError as e:
            logger.error(str(e))
            sys.exit(1)

        return [
            entry["path"] + ("/" if entry["type"] == "dir" else "")
            for entry in entries
        ]

    def normalize(self, path: str) -> str:
        """Show where a local PDF path would be written remotely."""
        return normalize_remote_path(path)


def main() -> None:
    """Run main CLI entry point."""
    load_dotenv(dotenv_path=find_dotenv(usecwd=True))
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%H:%M:%S")
    fire.Fire(ArchiverCLI)


if __name__ == "__main__":
    main()
