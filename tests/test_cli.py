from __future__ import annotations

from pathlib import Path

import pytest

from file_viewer.adapters.textual.app import load_session, main, normalize_key


def test_headless_prints_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("first\nsecond")

    assert main([str(target), "--headless"]) == 0

    assert capsys.readouterr().out == "first\nsecond\n"


def test_missing_path_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        main(["--headless"])

    assert "usage: file-viewer" in capsys.readouterr().err


def test_unreadable_file_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "absent.txt"), "--headless"])

    assert excinfo.value.code == 1


def test_load_session_applies_matching_annotations(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "code.py"
    target.write_text("a = 1\nb = 2\n")
    notes = tmp_path / "notes.txt"
    notes.write_text("code.py:1\nreview me\nother.py:1\nignored\n")

    session = load_session(target, annotations=notes)

    assert session.view.texts() == (b"a = 1", b"review me", b"b = 2")
    assert session.name == "code.py"


def test_normalize_key() -> None:
    assert normalize_key("escape", None) == ("ESC", None, ())
    assert normalize_key("ctrl+d", None) == ("d", None, ("ctrl",))
    assert normalize_key("G", "G") == ("G", "G", ())
    assert normalize_key("question_mark", "?") == ("?", "?", ())
    assert normalize_key("space", " ") == (" ", " ", ())
    assert normalize_key("f5", None) == ("F5", None, ())
    assert normalize_key("shift+g", "G") == ("G", "G", ())
    assert normalize_key("ctrl+c", "\x03") == ("c", None, ("ctrl",))


def test_bad_command_spec_from_environment_prints_usage(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    target = tmp_path / "notes.txt"
    target.write_text("first\n")
    monkeypatch.setenv("FILE_VIEWER_COMMANDS", "nocolon")

    with pytest.raises(SystemExit) as excinfo:
        main([str(target)])

    assert excinfo.value.code == 2
    assert "nocolon" in capsys.readouterr().err
