from __future__ import annotations

import json
from pathlib import Path

import pytest

from tribuna import cli


@pytest.fixture(autouse=True)
def _local_environment(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("TRIBUNA_AI_API_KEY", raising=False)
    monkeypatch.delenv("TRIBUNA_CATEGORY_WEIGHTS", raising=False)


def test_parse_args_highlight_options():
    args = cli.parse_args(["highlight", "article.txt", "--json", "--threshold", "8", "--local-only"])

    assert args.command == "highlight"
    assert args.path == Path("article.txt")
    assert args.json is True
    assert args.threshold == 8.0
    assert args.local_only is True
    assert args.paragraphs is False


def test_normalize_command_prints_clean_text(tmp_path: Path, capsys):
    source = tmp_path / "article.html"
    source.write_text("<p>Congress didn&#8217;t vote.</p>", encoding="utf-8")

    assert cli.main(["normalize", str(source), "--log-level", "WARNING"]) == 0
    assert capsys.readouterr().out.strip() == "Congress didn't vote."


def test_highlight_command_prints_json(tmp_path: Path, capsys):
    source = tmp_path / "article.txt"
    source.write_text("The EPA sued.", encoding="utf-8")

    exit_code = cli.main(
        ["highlight", str(source), "--json", "--local-only", "--log-level", "WARNING"]
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["text"] == "The EPA sued."
    [span] = payload["spans"]
    assert span["term"] == "Environmental Protection Agency"
    assert span["startIndex"] == 4


def test_highlight_command_per_paragraph(tmp_path: Path, capsys):
    source = tmp_path / "article.txt"
    source.write_text("The EPA sued.\n\nThe Senate voted.", encoding="utf-8")

    cli.main(
        [
            "highlight",
            str(source),
            "--json",
            "--local-only",
            "--paragraphs",
            "--log-level",
            "WARNING",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert [item["text"] for item in payload] == ["The EPA sued.", "The Senate voted."]
    assert [item["spans"][0]["category"] for item in payload] == [
        "government_agency",
        "political_institution",
    ]


def test_highlight_threshold_override(tmp_path: Path, capsys):
    source = tmp_path / "article.txt"
    source.write_text("The EPA sued.", encoding="utf-8")

    cli.main(
        [
            "highlight",
            str(source),
            "--json",
            "--local-only",
            "--threshold",
            "9.5",
            "--log-level",
            "WARNING",
        ]
    )

    assert json.loads(capsys.readouterr().out)["spans"] == []


def test_missing_input_file_returns_error(tmp_path: Path):
    assert cli.main(["normalize", str(tmp_path / "missing.txt")]) == 1
