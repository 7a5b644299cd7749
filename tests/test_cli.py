"""CLI integration tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from headnum.cli import main

DOC = "# Title\n## Sub\n"


def _write_doc(root: Path, name: str = "doc.md", text: str = DOC) -> Path:
    path = root / name
    path.write_text(text, encoding="utf-8")
    return path


def test_generate_to_stdout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["doc.md"]) == 0
    assert capsys.readouterr().out == "# 1 Title\n## 1a Sub\n"


def test_generate_with_level_flags(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--depth", "2", "--style", "2=arabic", "--separator", "1=.", "doc.md"]) == 0
    assert capsys.readouterr().out == "# 1 Title\n## 1.1 Sub\n"


def test_generate_without_parent_numbers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--no-prepend-parent", "--format", "2=({})", "doc.md"]) == 0
    assert capsys.readouterr().out == "# 1 Title\n## (a) Sub\n"


def test_remove(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path, text="# 1 Title\n## 1.1 Sub\nBody text.\n")
    monkeypatch.chdir(tmp_path)
    assert main(["--remove", "doc.md"]) == 0
    assert capsys.readouterr().out == "# Title\n## Sub\nBody text.\n"


def test_keep_existing(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path, text="# 1 Title\n")
    monkeypatch.chdir(tmp_path)
    assert main(["--keep-existing", "doc.md"]) == 0
    assert capsys.readouterr().out == "# 1 1 Title\n"


def test_inplace_with_backup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    doc = _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-i", "doc.md"]) == 0
    assert doc.read_text(encoding="utf-8") == "# 1 Title\n## 1a Sub\n"
    assert (tmp_path / "doc.md.orig").read_text(encoding="utf-8") == DOC


def test_inplace_nobackup(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    doc = _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["-i", "--nobackup", "doc.md"]) == 0
    assert doc.read_text(encoding="utf-8") == "# 1 Title\n## 1a Sub\n"
    assert not (tmp_path / "doc.md.orig").exists()


def test_inplace_unchanged_file_not_rewritten(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path, text="No headings here.\n")
    monkeypatch.chdir(tmp_path)
    assert main(["-i", "doc.md"]) == 0
    assert not (tmp_path / "doc.md.orig").exists()


def test_inplace_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    first = _write_doc(docs, "a.md")
    second = _write_doc(docs, "b.md", "## Only\n")
    monkeypatch.chdir(tmp_path)
    assert main(["-i", "--nobackup", "docs"]) == 0
    assert first.read_text(encoding="utf-8") == "# 1 Title\n## 1a Sub\n"
    assert second.read_text(encoding="utf-8") == "## a Only\n"


def test_output_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["doc.md", "-o", "out/numbered.md"]) == 0
    assert (tmp_path / "out" / "numbered.md").read_text(encoding="utf-8") == (
        "# 1 Title\n## 1a Sub\n"
    )


def test_stdin(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("# A title\n"))
    assert main(["-"]) == 0
    assert capsys.readouterr().out == "# 1 A title\n"


def test_inplace_with_stdin_is_an_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("# Title\n"))
    assert main(["-i", "-"]) == 1
    assert "Cannot use --inplace with stdin" in capsys.readouterr().err


def test_preview(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["--preview", "--depth", "2"]) == 0
    assert capsys.readouterr().out == "H1: 1   2   3 ...\nH2: 1a   2b   3c ...\n"


def test_no_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "No input specified" in capsys.readouterr().err


def test_unknown_style(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--style", "1=greek", "doc.md"]) == 1
    assert "Unknown numeral style" in capsys.readouterr().err


def test_level_outside_numbered_range(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--depth", "2", "--style", "3=I", "doc.md"]) == 1
    assert "outside the numbered levels 1-2" in capsys.readouterr().err


def test_malformed_level_assignment(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--style", "roman_upper", "doc.md"]) == 1
    assert "--style expects LEVEL=VALUE" in capsys.readouterr().err


def test_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert main(["missing.md"]) == 2
    assert "Path not found" in capsys.readouterr().err


def test_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / "headnum.toml").write_text(
        "depth = 2\n"
        "prepend-parent-number = false\n"
        "\n"
        "[[levels]]\n"
        'style = "I"\n'
        "\n"
        "[[levels]]\n"
        'style = "a"\n'
        'display-format = "({})"\n'
    )
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["doc.md"]) == 0
    assert capsys.readouterr().out == "# I Title\n## (a) Sub\n"

    # Explicit flags take precedence over the config file.
    assert main(["--depth", "1", "doc.md"]) == 0
    assert capsys.readouterr().out == "# I Title\n## Sub\n"


def test_explicit_config_path(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    settings = tmp_path / "settings"
    settings.mkdir()
    (settings / "numbering.toml").write_text("start-level = 2\n")
    _write_doc(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["--config", "settings/numbering.toml", "doc.md"]) == 0
    assert capsys.readouterr().out == "# Title\n## 1 Sub\n"


def test_list_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_doc(tmp_path, "README.md")
    nm = tmp_path / "node_modules" / "pkg"
    nm.mkdir(parents=True)
    _write_doc(nm, "README.md")
    monkeypatch.chdir(tmp_path)
    assert main(["--list-files", "."]) == 0
    out = capsys.readouterr().out
    assert [Path(line).name for line in out.splitlines()] == ["README.md"]


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("v") or out.startswith("unknown")


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "headnum: Automatic multi-level heading numbers for Markdown" in out
    assert "Common usage:" in out
    assert "--style LEVEL=STYLE" in out
