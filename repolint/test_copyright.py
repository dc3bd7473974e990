import logging
from pathlib import Path

import pytest

from repolint import io
from repolint.checks import copyright
from repolint.checks.base import CheckContext, CheckFailed
from repolint.checks.copyright import (
    CopyrightCheck, HeaderClass, classify_file, classify_header, read_header, source_files,
)


def write(root: Path, name: str, content: bytes) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


def test_classify_header():
    assert classify_header(b"// some code\n") == HeaderClass.MISSING_COPYRIGHT
    assert classify_header(b"// Code generated by tool; DO NOT EDIT.\n") == HeaderClass.GENERATED
    assert classify_header(b"// Copyright 2024 Example Inc.\n") == HeaderClass.HAS_COPYRIGHT


def test_generated_markers_win_over_copyright():
    for marker in (b"AUTOGENERATED", b"Code generated", b"Autogenerated"):
        assert classify_header(b"// " + marker + b"\n") == HeaderClass.GENERATED
        assert classify_header(b"// Copyright 2024\n// " + marker + b"\n") == HeaderClass.GENERATED


def test_markers_are_literal():
    assert classify_header(b"// Copyright(C) 2024\n") == HeaderClass.MISSING_COPYRIGHT
    assert classify_header(b"// copyright 2024\n") == HeaderClass.MISSING_COPYRIGHT
    assert classify_header(b"// autogenerated\n") == HeaderClass.MISSING_COPYRIGHT
    assert classify_header(b"// code generated\n") == HeaderClass.MISSING_COPYRIGHT
    assert classify_header(b"") == HeaderClass.MISSING_COPYRIGHT


def test_only_first_256_bytes_are_read(tmp_path):
    late = write(tmp_path, "late.go", b"x" * 256 + b"// Copyright 2024\n")
    assert read_header(late) == b"x" * 256
    assert classify_file(late) == HeaderClass.MISSING_COPYRIGHT

    straddling = write(tmp_path, "straddling.go", b"x" * 250 + b"Copyright 2024\n")
    assert classify_file(straddling) == HeaderClass.MISSING_COPYRIGHT

    just_fits = write(tmp_path, "fits.go", b"x" * 246 + b"Copyright 2024\n")
    assert classify_file(just_fits) == HeaderClass.HAS_COPYRIGHT


def test_short_files(tmp_path):
    assert read_header(write(tmp_path, "empty.go", b"")) == b""
    assert classify_file(write(tmp_path, "empty.go", b"")) == HeaderClass.MISSING_COPYRIGHT
    assert classify_file(write(tmp_path, "tiny.go", b"Copyright ")) == HeaderClass.HAS_COPYRIGHT


def test_unreadable_file_is_reported_once(tmp_path, capsys):
    assert classify_file(tmp_path / "gone.go") == HeaderClass.UNREADABLE
    out = capsys.readouterr().out
    assert out.count("gone.go") == 1
    assert "failed to read" in out


def test_source_files_filters_extensions(tmp_path):
    for name in ("a.go", "b.ts", "c.js", "d.vue", "e.py", "f.go.txt", "README.md", "Makefile", ".go", "go"):
        write(tmp_path, name, b"")
    names = sorted(p.name for p in source_files(tmp_path))
    assert names == [".go", "a.go", "b.ts", "c.js", "d.vue"]


def test_source_files_prunes_ignored_directories_at_any_depth(tmp_path):
    write(tmp_path, "main.go", b"")
    write(tmp_path, ".git/hooks/hook.js", b"")
    write(tmp_path, "web/node_modules/lib/index.js", b"")
    write(tmp_path, "web/coverage/report.js", b"")
    write(tmp_path, "web/dist/deep/bundle.js", b"")
    write(tmp_path, "web/src/app.vue", b"")
    write(tmp_path, "distribution/keep.ts", b"")

    found = sorted(p.relative_to(tmp_path).as_posix() for p in source_files(tmp_path))
    assert found == ["distribution/keep.ts", "main.go", "web/src/app.vue"]


def test_check_passes(tmp_path, capsys):
    write(tmp_path, "main.go", b"// Copyright (C) 2019 Example, Inc.\n\npackage main\n")
    write(tmp_path, "gen.pb.go", b"// Code generated by protoc-gen-go. DO NOT EDIT.\n")
    write(tmp_path, "web/app.ts", b"// Copyright (C) 2019 Example, Inc.\n")
    write(tmp_path, "notes.txt", b"no header here\n")

    CopyrightCheck().run(CheckContext(root=tmp_path))
    assert "missing copyright" not in capsys.readouterr().out


def test_check_fails_and_reports_every_missing_file(tmp_path, capsys):
    write(tmp_path, "ok.go", b"// Copyright 2024 Example Inc.\n")
    write(tmp_path, "bad.go", b"// some code\n")
    write(tmp_path, "web/bad.vue", b"<template></template>\n")

    with pytest.raises(CheckFailed) as excinfo:
        CopyrightCheck().run(CheckContext(root=tmp_path))

    assert excinfo.value.reason == "One or more file has wrong copyright"
    out = capsys.readouterr().out
    assert out.count("missing copyright") == 2
    assert "bad.go" in out
    assert "bad.vue" in out
    assert "ok.go" not in out


def test_unreadable_file_fails_without_stopping_the_walk(tmp_path, monkeypatch):
    write(tmp_path, "a.go", b"// Copyright 2024\n")
    write(tmp_path, "b.go", b"// Copyright 2024\n")
    write(tmp_path, "c.go", b"// Copyright 2024\n")

    seen = []
    real_read_header = copyright.read_header

    def flaky_read_header(path, size=256):
        seen.append(path.name)
        if path.name == "b.go":
            raise PermissionError(13, "Permission denied")
        return real_read_header(path, size)

    monkeypatch.setattr(copyright, "read_header", flaky_read_header)

    with pytest.raises(CheckFailed):
        CopyrightCheck().run(CheckContext(root=tmp_path))
    assert seen == ["a.go", "b.go", "c.go"]


def test_files_outside_scope_are_never_opened(tmp_path, monkeypatch):
    write(tmp_path, "main.go", b"// Copyright 2024\n")
    write(tmp_path, "script.py", b"print()\n")
    write(tmp_path, "node_modules/pkg/index.js", b"")
    write(tmp_path, "sub/dist/out.js", b"")

    opened = []
    real_read_header = copyright.read_header

    def recording_read_header(path, size=256):
        opened.append(path.relative_to(tmp_path).as_posix())
        return real_read_header(path, size)

    monkeypatch.setattr(copyright, "read_header", recording_read_header)

    CopyrightCheck().run(CheckContext(root=tmp_path))
    assert opened == ["main.go"]


def test_check_is_configurable(tmp_path):
    write(tmp_path, "main.go", b"package main\n")
    write(tmp_path, "lib.rs", b"// Copyright 2024\n")

    CopyrightCheck(extensions={".rs"}).run(CheckContext(root=tmp_path))


def test_dotfile_named_like_an_extension_is_checked(tmp_path):
    write(tmp_path, ".go", b"package x\n")
    with pytest.raises(CheckFailed):
        CopyrightCheck().run(CheckContext(root=tmp_path))


def test_walk_errors_are_logged_and_not_counted(tmp_path, monkeypatch, caplog):
    write(tmp_path, "ok.go", b"// Copyright 2024\n")
    write(tmp_path, "bad/x.go", b"package x\n")
    write(tmp_path, "later/y.go", b"// Copyright 2024\n")

    real_listdir = io.os.listdir

    def failing_listdir(path):
        if Path(path).name == "bad":
            raise PermissionError(13, "Permission denied")
        return real_listdir(path)

    monkeypatch.setattr(io.os, "listdir", failing_listdir)

    opened = []
    real_read_header = copyright.read_header

    def recording_read_header(path, size=256):
        opened.append(path.relative_to(tmp_path).as_posix())
        return real_read_header(path, size)

    monkeypatch.setattr(copyright, "read_header", recording_read_header)

    with caplog.at_level(logging.WARNING):
        CopyrightCheck().run(CheckContext(root=tmp_path))

    assert opened == ["later/y.go", "ok.go"]
    assert "bad" in caplog.text
