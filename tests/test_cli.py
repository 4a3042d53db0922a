"""Tests for the stylesync command-line entry point."""

import sys
from pathlib import Path

import pytest

import stylesync


@pytest.fixture
def run_cli(monkeypatch, tmp_path: Path, capsys):
    """Run main() with the given arguments; return (exit code, stdout)."""
    monkeypatch.setenv("STYLESYNC_LOG_PATH", str(tmp_path / "logs"))

    def _run(*args: str):
        monkeypatch.setattr(sys, "argv", ["stylesync", *args])
        code = stylesync.main()
        return code, capsys.readouterr().out

    return _run


class TestCli:
    """End-to-end CLI runs in demo mode."""

    def test_version(self, run_cli):
        code, out = run_cli("--version")
        assert code == 0
        assert "StyleSync v" in out

    def test_status_reports_demo_mode(self, run_cli):
        code, out = run_cli("--status")
        assert code == 0
        assert "Mode: DEMO" in out
        assert "CLAUDE_API_KEY not set" in out

    def test_bad_numeric_config(self, run_cli, monkeypatch):
        monkeypatch.setenv("STYLESYNC_HISTORY_WINDOW", "lots")
        code, _ = run_cli("--status")
        assert code == 1

    def test_import_requires_name(self, run_cli, tmp_path: Path):
        transcript = tmp_path / "chat.txt"
        transcript.write_text("Me: hi\n", encoding="utf-8")
        code, _ = run_cli("--import", str(transcript))
        assert code == 2

    def test_import_and_reply(self, run_cli, tmp_path: Path):
        transcript = tmp_path / "chat.txt"
        transcript.write_text("Me: omg hi\nJessica: hey!\nMe: lol same\n", encoding="utf-8")
        code, out = run_cli(
            "--import", str(transcript), "--name", "Jessica", "--reply", "Dinner tonight?"
        )
        assert code == 0
        assert "Jessica (4 messages)" in out
        assert "Draft: Idk tbh, lemme check!" in out

    def test_contact_reply(self, run_cli):
        code, out = run_cli("--contact", "2", "--reply", "Can we meet at 3?")
        assert code == 0
        assert "Mr. Johnson (Boss)" in out
        assert "Draft: I will look into that and get back to you shortly." in out

    def test_unknown_contact(self, run_cli):
        code, out = run_cli("--contact", "99")
        assert code == 2
        assert "Unknown contact" in out

    def test_list(self, run_cli):
        code, out = run_cli("--list")
        assert code == 0
        assert "[1] Sarah (Bestie)" in out
        assert "[3] Mom" in out
        assert "Formality 85" in out
