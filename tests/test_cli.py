# pylint: disable=protected-access
"""
Tests for the configuration layer and the command line interface.

Environment variables are cleared for every test so a developer's .env or
shell never leaks in.
"""

from pathlib import Path

import pytest

from pdf_archiver import ArtifactFileSystem, LocalFileSystem
from pdf_archiver.cli import ArchiverCLI, _CLIProgress
from pdf_archiver.config import ENV_NAMES, ArchiverConfig

from .conftest import PDF_CONTENT, BuildRecorder, make_tree


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for env_name in ENV_NAMES.values():
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.delenv("HYPHA_USE_PROXY", raising=False)


class TestArchiverConfig:
    """Tests for ArchiverConfig."""

    def test_from_env(
        self, monkeypatch: pytest.MonkeyPatch, local_root: Path, remote_root: Path
    ):
        monkeypatch.setenv("PDF_ARCHIVER_LOCAL_ROOT", str(local_root))
        monkeypatch.setenv("PDF_ARCHIVER_REMOTE_ROOT", str(remote_root))
        monkeypatch.setenv("PDF_ARCHIVER_BUILD_COMMAND", "latexmk -pdf")

        config = ArchiverConfig.from_env()

        assert config.local_root == str(local_root)
        assert config.build_file == "makefile"
        assert config.build_command_args == ["latexmk", "-pdf"]

        mounts = config.create_mounts()
        assert isinstance(mounts.local, LocalFileSystem)
        assert isinstance(mounts.remote, LocalFileSystem)
        assert mounts.remote.local_path(".") == remote_root

    def test_overrides_win(
        self, monkeypatch: pytest.MonkeyPatch, local_root: Path, remote_root: Path
    ):
        monkeypatch.setenv("PDF_ARCHIVER_BUILD_FILE", "Makefile")

        config = ArchiverConfig.from_env(
            local_root=str(local_root),
            remote_root=str(remote_root),
            build_file="build.mk",
            build_command=["make", "-j2"],
        )

        assert config.build_file == "build.mk"
        assert config.build_command_args == ["make", "-j2"]

    def test_artifact_remote(self, monkeypatch: pytest.MonkeyPatch, local_root: Path):
        monkeypatch.setenv("HYPHA_SERVER_URL", "https://hypha.test")
        monkeypatch.setenv("HYPHA_WORKSPACE", "ws")
        monkeypatch.setenv("HYPHA_TOKEN", "tok")

        config = ArchiverConfig.from_env(
            local_root=str(local_root), artifact_id="papers"
        )
        remote = config.create_mounts().remote

        assert isinstance(remote, ArtifactFileSystem)
        assert remote.artifact_id == "ws/papers"
        assert remote.token == "tok"

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"remote_root": "out", "artifact_id": "papers"},
            {"artifact_id": "ws/papers"},
            {"remote_root": "out", "build_command": "   "},
            {"remote_root": "out", "local_root": "/definitely/not/here"},
        ],
    )
    def test_invalid(self, overrides: dict[str, str]):
        with pytest.raises(ValueError):
            ArchiverConfig.from_env(**overrides)


class TestArchiverCLI:
    """Tests for the fire command object."""

    def test_missing_configuration_exits(self, caplog: pytest.LogCaptureFixture):
        with pytest.raises(SystemExit) as exc_info:
            ArchiverCLI()

        assert exc_info.value.code == 1
        assert "PDF_ARCHIVER_REMOTE_ROOT" in caplog.text

    def test_run(
        self,
        local_root: Path,
        remote_root: Path,
        build_recorder: BuildRecorder,
        capsys: pytest.CaptureFixture[str],
    ):
        make_tree(
            local_root,
            {
                "talk/makefile": b"all:\n",
                "talk/pdf/slides.pdf": PDF_CONTENT,
                "talk/pdf/slides.tex": b"\\documentclass{beamer}",
            },
        )
        cli = ArchiverCLI(
            local_root=str(local_root),
            remote_root=str(remote_root),
            build_command="make pdf",
        )

        summary = cli.run()

        assert "Processing directory talk" in capsys.readouterr().out
        assert summary["files_transferred"] == 1
        assert summary["remote_paths"] == ["talk/slides.pdf"]
        assert build_recorder.calls[0]["args"] == ("make", "pdf")
        assert (remote_root / "talk" / "slides.pdf").read_bytes() == PDF_CONTENT

    def test_run_stages_and_commits_artifact(
        self,
        monkeypatch: pytest.MonkeyPatch,
        local_root: Path,
        build_recorder: BuildRecorder,
    ):
        monkeypatch.setenv("HYPHA_SERVER_URL", "https://hypha.test")
        calls: list[tuple[str, dict[str, object]]] = []
        monkeypatch.setattr(
            ArtifactFileSystem, "edit", lambda self, **kw: calls.append(("edit", kw))
        )
        monkeypatch.setattr(
            ArtifactFileSystem, "commit", lambda self, **kw: calls.append(("commit", kw))
        )
        cli = ArchiverCLI(local_root=str(local_root), artifact_id="ws/papers")

        cli.run(comment="weekly")

        assert calls == [
            ("edit", {"stage": True, "comment": "weekly"}),
            ("commit", {"comment": "weekly"}),
        ]

    def test_check_ls_and_normalize(self, local_root: Path, remote_root: Path):
        make_tree(local_root, {"talk/makefile": b"all:\n", "talk/pdf": None})
        cli = ArchiverCLI(local_root=str(local_root), remote_root=str(remote_root))

        assert cli.check("talk") is True
        assert cli.check(".") is False
        assert cli.ls("local://talk") == ["talk/makefile", "talk/pdf/"]
        assert cli.ls("remote://") == []
        assert cli.normalize("talk/pdf/slides.pdf") == "talk/slides.pdf"

    @pytest.mark.parametrize("command", ["run", "check", "ls"])
    def test_path_outside_root_exits(
        self,
        command: str,
        local_root: Path,
        remote_root: Path,
        build_recorder: BuildRecorder,
        caplog: pytest.LogCaptureFixture,
    ):
        cli = ArchiverCLI(local_root=str(local_root), remote_root=str(remote_root))
        arg = "local://../elsewhere" if command == "ls" else "../elsewhere"

        with pytest.raises(SystemExit) as exc_info:
            getattr(cli, command)(arg)

        assert exc_info.value.code == 1
        assert "inside the backend root" in caplog.text
        assert build_recorder.calls == []


def test_progress_counts_successes():
    progress = _CLIProgress()

    progress({"type": "success", "file": "a/pdf/x.pdf", "target": "a/x.pdf"})
    progress({"type": "info"})
    progress({"type": "success", "file": "a/pdf/y.pdf", "target": "a/y.pdf"})
    progress.close()

    assert progress.completed == 2
    assert progress.pbar is None
