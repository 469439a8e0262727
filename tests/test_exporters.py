"""
tests/test_exporters.py
Tests for crudgen.exporters.FileEmitter: writing, overwrite confirmation,
and per-file failure handling. Real files in tmp_path throughout.
"""

from __future__ import annotations

import pathlib

import pytest

from crudgen.exporters import FileEmitter
from crudgen.models import EmittedFile
from crudgen.utils import sha256_hex


def _file(base: pathlib.Path, key: str, sub: str, name: str, content: str) -> EmittedFile:
    return EmittedFile(key=key, path=base / sub, file_name=name, content=content)


class TestFileEmitter:

    def test_writes_new_files_and_creates_directories(
        self, make_console, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture
    ) -> None:
        console = make_console([])
        files = [
            _file(tmp_path, "api", "apis", "FooController.php", "<?php // api\n"),
            _file(tmp_path, "model", "models", "Foo.php", "<?php // model\n"),
        ]
        result = FileEmitter(console).emit(files)

        assert result.success
        assert [r.key for r in result.written] == ["api", "model"]
        assert (tmp_path / "apis" / "FooController.php").read_text() == "<?php // api\n"
        assert (tmp_path / "models" / "Foo.php").read_text() == "<?php // model\n"
        assert console.confirms == []
        assert "Wrote file 'FooController.php'." in capsys.readouterr().out

    def test_record_details(self, make_console, tmp_path: pathlib.Path) -> None:
        content = "line one\nline two\n"
        result = FileEmitter(make_console([])).emit(
            [_file(tmp_path, "model", "models", "Foo.php", content)]
        )
        record = result.written[0]
        assert record.line_count == 2
        assert record.size_bytes == len(content.encode("utf-8"))
        assert record.sha256 == sha256_hex(content)
        assert record.absolute_path == str((tmp_path / "models" / "Foo.php").resolve())

    def test_declined_overwrite_leaves_file_unchanged(
        self, make_console, tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "models" / "Foo.php"
        target.parent.mkdir(parents=True)
        target.write_text("original")

        console = make_console([False])
        result = FileEmitter(console).emit(
            [_file(tmp_path, "model", "models", "Foo.php", "replacement")]
        )

        assert target.read_text() == "original"
        assert result.skipped == ["model"]
        assert result.written == []
        assert result.success
        assert console.confirms == [
            "The File 'Foo.php' already exists, do you want to override the existing file?"
        ]

    def test_accepted_overwrite_replaces_file(
        self, make_console, tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "models" / "Foo.php"
        target.parent.mkdir(parents=True)
        target.write_text("original")

        result = FileEmitter(make_console([True])).emit(
            [_file(tmp_path, "model", "models", "Foo.php", "replacement")]
        )
        assert target.read_text() == "replacement"
        assert [r.key for r in result.written] == ["model"]

    def test_failure_does_not_stop_remaining_files(
        self, make_console, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture
    ) -> None:
        # A regular file where the "apis" directory should be
        (tmp_path / "apis").write_text("in the way")
        files = [
            _file(tmp_path, "api", "apis", "FooController.php", "api"),
            _file(tmp_path, "controller", "controllers", "FooController.php", "ctrl"),
        ]
        result = FileEmitter(make_console([])).emit(files)

        assert not result.success
        assert result.failed == ["api"]
        assert len(result.errors) == 1
        assert [r.key for r in result.written] == ["controller"]
        assert (tmp_path / "controllers" / "FooController.php").read_text() == "ctrl"
        assert "Error while writing file 'FooController.php'." in capsys.readouterr().err

    def test_earlier_files_are_not_rolled_back(
        self, make_console, tmp_path: pathlib.Path
    ) -> None:
        (tmp_path / "models").write_text("in the way")
        files = [
            _file(tmp_path, "api", "apis", "FooController.php", "api"),
            _file(tmp_path, "model", "models", "Foo.php", "model"),
        ]
        result = FileEmitter(make_console([])).emit(files)
        assert result.failed == ["model"]
        assert (tmp_path / "apis" / "FooController.php").read_text() == "api"

    def test_unencodable_content_fails_only_that_file(
        self, make_console, tmp_path: pathlib.Path
    ) -> None:
        files = [
            _file(tmp_path, "api", "apis", "FooController.php", "größe 名"),
            _file(tmp_path, "model", "models", "Foo.php", "ok"),
        ]
        result = FileEmitter(make_console([]), encoding="latin-1").emit(files)

        assert result.failed == ["api"]
        assert "UnicodeEncodeError" in result.errors[0]
        assert not (tmp_path / "apis" / "FooController.php").exists()
        assert list((tmp_path / "apis").iterdir()) == []
        assert (tmp_path / "models" / "Foo.php").read_text(encoding="latin-1") == "ok"

    def test_unknown_codec_fails_per_file(
        self, make_console, tmp_path: pathlib.Path
    ) -> None:
        files = [
            _file(tmp_path, "api", "apis", "FooController.php", "api"),
            _file(tmp_path, "model", "models", "Foo.php", "model"),
        ]
        result = FileEmitter(make_console([]), encoding="no-such-codec").emit(files)
        assert result.failed == ["api", "model"]
        assert result.written == []
