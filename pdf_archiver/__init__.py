"""
PDF Archiver builds PDF folders of a local tree and archives them remotely.
"""

from .archiver import Archiver
from .artifact_filesystem import ArtifactFileSystem
from .classes import Entry
from .config import ArchiverConfig
from .dataclasses import ArchiveStats, BuildResult, DirectoryPath
from .local_filesystem import LocalFileSystem
from .mounts import MountManager
from .utils import normalize_remote_path

__all__ = [
    "Archiver",
    "ArchiverConfig",
    "ArchiveStats",
    "ArtifactFileSystem",
    "BuildResult",
    "DirectoryPath",
    "Entry",
    "LocalFileSystem",
    "MountManager",
    "normalize_remote_path",
]
