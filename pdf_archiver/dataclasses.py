from dataclasses import dataclass, field
from typing import Self

from .utils import split_path

ROOT_NAME = "."


@dataclass(frozen=True)
class DirectoryPath:
    """
    A directory of the local tree, relative to the backend root.

    The root is the path with no parts and renders as ``"."``. Child paths are
    built with :meth:`join` and :meth:`child`, which never produce a ``./``
    prefix.

    Attributes:
        parts (tuple[str, ...]): The path segments, outermost first.
    """

    parts: tuple[str, ...] = ()

    @classmethod
    def root(cls) -> Self:
        return cls()

    @classmethod
    def parse(cls, path: "str | DirectoryPath") -> "DirectoryPath":
        if isinstance(path, DirectoryPath):
            return path
        return cls(split_path(path))

    @property
    def is_root(self) -> bool:
        return not self.parts

    @property
    def name(self) -> str:
        return self.parts[-1] if self.parts else ROOT_NAME

    def join(self, name: str) -> str:
        """Backend path of a direct child of this directory."""
        return "/".join((*self.parts, name))

    def child(self, name: str) -> "DirectoryPath":
        return DirectoryPath((*self.parts, *split_path(name)))

    def __str__(self) -> str:
        return "/".join(self.parts) if self.parts else ROOT_NAME


@dataclass
class BuildResult:
    """
    Outcome of one build invocation.

    Attributes:
        path (DirectoryPath): The directory the build ran in.
        command (tuple[str, ...]): The command that was launched.
        returncode (int | None): Exit status, or None when the launch failed.
        error (str | None): Launch error message, if any.
    """

    path: DirectoryPath
    command: tuple[str, ...]
    returncode: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0


@dataclass
class ArchiveStats:
    """Counters collected over one archiver run."""

    directories: int = 0
    triggered: int = 0
    builds_failed: int = 0
    files_transferred: int = 0
    remote_paths: list[str] = field(default_factory=list)
