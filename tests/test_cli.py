"""Tests for the funcdoc command line."""

import json

import pytest

from funcdoc.cli import main

SOURCE = '''def add(a: int, b: int = 5) -> int:
    return a + b


def greet(name):
    """Say hello."""
    return "hello " + name
'''


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "FUNCDOC_REMOTE",
        "FUNCDOC_API_KEY",
        "FUNCDOC_API_URL",
        "FUNCDOC_MODEL",
        "FUNCDOC_TEMPERATURE",
        "FUNCDOC_TIMEOUT",
        "FUNCDOC_LOG_LEVEL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "mod.py"
    path.write_text(SOURCE)
    return path


class TestMarkdownOutput:
    def test_prints_batch(self, source_file, capsys):
        assert main([str(source_file)]) == 0

        out, err = capsys.readouterr()
        assert "# Function Reference" in out
        assert "# Add Function Documentation" in out
        assert "# Greet Function Documentation" in out
        assert f"✓ {source_file}: 2 functions" in err
        assert "Docstring coverage: 50%" in err

    def test_writes_output_directory(self, source_file, tmp_path, capsys):
        out_dir = tmp_path / "docs"

        assert main([str(source_file), "-o", str(out_dir)]) == 0

        assert sorted(p.name for p in out_dir.iterdir()) == ["README.md", "add.md", "greet.md"]
        assert "[`greet`]" in (out_dir / "README.md").read_text()
        assert (out_dir / "greet.md").read_text().startswith("# Greet Function Documentation")
        assert capsys.readouterr().out == ""

    def test_repeated_names_get_suffix(self, tmp_path, capsys):
        (tmp_path / "a.py").write_text("def run():\n    pass\n")
        (tmp_path / "b.py").write_text("def run():\n    return 1\n")
        out_dir = tmp_path / "docs"

        main([str(tmp_path / "a.py"), str(tmp_path / "b.py"), "-o", str(out_dir)])

        assert sorted(p.name for p in out_dir.iterdir()) == ["README.md", "run.md", "run_2.md"]


class TestJsonOutput:
    def test_prints_json(self, source_file, capsys):
        assert main([str(source_file), "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [item["function"]["name"] for item in data] == ["add", "greet"]
        assert data[1]["documentation"]["description"] == "Say hello."

    def test_writes_json_file(self, source_file, tmp_path):
        out_dir = tmp_path / "docs"

        main([str(source_file), "--format", "json", "-o", str(out_dir)])

        data = json.loads((out_dir / "functions.json").read_text())
        assert len(data) == 2


class TestOptions:
    def test_function_filter(self, source_file, capsys):
        main([str(source_file), "--format", "json", "--function", "greet"])

        data = json.loads(capsys.readouterr().out)
        assert [item["function"]["name"] for item in data] == ["greet"]

    def test_strict_fails_on_missing_docstring(self, source_file, capsys):
        assert main([str(source_file), "--strict"]) == 1

        err = capsys.readouterr().err
        assert "Validation errors:" in err
        assert "mod.py:add: missing docstring" in err

    def test_remote_without_key_uses_heuristics(self, source_file, capsys):
        assert main([str(source_file), "--remote", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]["documentation"]["title"] == "Add Function Documentation"


class TestFailures:
    def test_no_readable_files(self, tmp_path, capsys):
        bad = tmp_path / "bad.py"
        bad.write_bytes(b"\xff\xfe\xfa")

        assert main([str(bad)]) == 1
        assert "No readable source files." in capsys.readouterr().err

    def test_unreadable_file_is_skipped(self, source_file, tmp_path, capsys):
        missing = tmp_path / "missing.py"

        assert main([str(source_file), str(missing)]) == 0

        out, err = capsys.readouterr()
        assert "✗" in err
        assert "# Add Function Documentation" in out

    def test_invalid_config(self, source_file, monkeypatch, capsys):
        monkeypatch.setenv("FUNCDOC_TIMEOUT", "soon")

        assert main([str(source_file)]) == 2
        assert "FUNCDOC_TIMEOUT" in capsys.readouterr().err
