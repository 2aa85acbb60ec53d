"""Tests for the command-line interface."""

import logging
import os

import openpyxl
import pytest

from sheet_translator import cli


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHEET_TRANSLATOR_LATENCY", "0")
    yield
    for handler in logging.getLogger().handlers[:]:
        handler.close()
        logging.getLogger().removeHandler(handler)


def write_csv(tmp_path, text, name="input.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestCli:
    """Test CLI entry point."""

    def test_list_languages(self, capsys):
        assert cli.main(["--list-languages"]) == 0
        out = capsys.readouterr().out
        assert "chinese" in out and "Português" in out

    def test_missing_input(self):
        with pytest.raises(SystemExit):
            cli.main([])

    def test_nonexistent_input(self, capsys):
        assert cli.main(["nope.xlsx", "--no-progress"]) == 1
        assert "does not exist" in capsys.readouterr().out

    def test_translates_to_default_output(self, tmp_path, capsys):
        path = write_csv(tmp_path, "word\nhello\nworld\n")

        assert cli.main([path, "--no-progress", "--export-groups"]) == 0

        output = tmp_path / "input_translated_chinese.xlsx"
        assert output.exists()
        rows = list(openpyxl.load_workbook(output)["Sheet1"].iter_rows(values_only=True))
        assert rows == [("word", "word_chinese"), ("hello", "你好"), ("world", "世界")]
        out = capsys.readouterr().out
        assert "[word]" in out
        assert '"1": "你好",\n"2": "世界"' in out

    def test_custom_output_directory(self, tmp_path):
        path = write_csv(tmp_path, "word\nfile\n")
        output = os.path.join(tmp_path, "out", "result.xlsx")
        assert cli.main([path, "-o", output, "-t", "french", "--no-progress"]) == 0
        assert os.path.exists(output)

    def test_rejected_extension(self, tmp_path, capsys):
        path = write_csv(tmp_path, "word\nhello\n", name="input.txt")
        assert cli.main([path, "--no-progress"]) == 1
        assert "Please upload a valid Excel file" in capsys.readouterr().out

    def test_parse_failure(self, tmp_path, capsys):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"PK\x03\x04 broken")
        assert cli.main([str(path), "--no-progress"]) == 1
        assert "Failed to read Excel file" in capsys.readouterr().out

    def test_openai_requires_key(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        path = write_csv(tmp_path, "word\nhello\n")
        with pytest.raises(SystemExit):
            cli.main([path, "--translator", "openai", "--no-progress"])
