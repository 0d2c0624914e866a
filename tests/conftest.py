"""Shared test fixtures and utilities for the PDF archiver tests.

Trees are built on disk under ``tmp_path``; the build command is replaced by a
recorder so no real ``make`` ever runs.
"""

import subprocess
from pathlib import Path
from typing import Any

import pytest

from pdf_archiver import Archiver, LocalFileSystem, MountManager
from pdf_archiver import archiver as archiver_module

PDF_CONTENT = b"%PDF-1.7\n% test document\n"


class RecordingFileSystem(LocalFileSystem):
    """A local filesystem that remembers every write."""

    def __init__(self, root: str | Path) -> None:
        super().__init__(root)
        self.writes: list[tuple[str, bytes]] = []

    def pipe(self, path: str, value: bytes) -> None:
        self.writes.append((path, value))
        super().pipe(path, value)


class BuildRecorder:
    """Stands in for ``subprocess.run`` and records each build."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.returncode = 0
        self.launch_error: OSError | None = None

    def __call__(self, args: Any, **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        self.calls.append({"args": tuple(args), **kwargs})
        if self.launch_error is not None:
            raise self.launch_error
        return subprocess.CompletedProcess(args, self.returncode)

    @property
    def directories(self) -> list[Path]:
        return [Path(call["cwd"]) for call in self.calls]


def make_tree(root: Path, files: dict[str, bytes | None]) -> None:
    """Create files (bytes) and empty directories (None) below root."""
    for rel_path, content in files.items():
        target = root / rel_path
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)


@pytest.fixture(name="local_root")
def get_local_root(tmp_path: Path) -> Path:
    root = tmp_path / "local"
    root.mkdir()
    return root.resolve()


@pytest.fixture(name="remote_root")
def get_remote_root(tmp_path: Path) -> Path:
    root = tmp_path / "remote"
    root.mkdir()
    return root.resolve()


@pytest.fixture(name="remote")
def get_remote(remote_root: Path) -> RecordingFileSystem:
    return RecordingFileSystem(remote_root)


@pytest.fixture(name="mounts")
def get_mounts(local_root: Path, remote: RecordingFileSystem) -> MountManager:
    return MountManager(local=LocalFileSystem(local_root), remote=remote)


@pytest.fixture(name="build_recorder")
def get_build_recorder(monkeypatch: pytest.MonkeyPatch) -> BuildRecorder:
    recorder = BuildRecorder()
    monkeypatch.setattr(archiver_module.subprocess, "run", recorder)
    return recorder


@pytest.fixture(name="archiver")
def get_archiver(mounts: MountManager, build_recorder: BuildRecorder) -> Archiver:
    return Archiver(mounts)
