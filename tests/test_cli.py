import json

import pytest

from address_finder.cli import main


def test_cli_extracts_from_text(capsys) -> None:
    rc = main(["--text", "123 Main St, Austin, TX\n456 Oak Ave, Austin, TX", "--jsonl"])
    assert rc == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {
        "addresses": ["123 Main St, Austin, TX", "456 Oak Ave, Austin, TX"],
        "mode": "list",
    }


def test_cli_reads_file_and_normalizes(tmp_path, capsys) -> None:
    path = tmp_path / "pasted.txt"
    path.write_text("123  Main St ,Austin,TX\n456 Oak Ave\n", encoding="utf-8")

    rc = main(["--text-file", str(path), "--normalize"])
    assert rc == 0

    out = json.loads(capsys.readouterr().out)
    assert out["addresses"] == ["123 Main St, Austin, TX", "456 Oak Ave"]


def test_cli_start_without_api_key_exits() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--text", "123 Main St", "--start", "1 Congress Ave, Austin, TX"])
    assert "Google Maps API key not configured." in str(exc_info.value.code)


def test_cli_rejects_bad_threshold() -> None:
    with pytest.raises(SystemExit):
        main(["--text", "123 Main St", "--list-threshold", "1.5"])


def test_cli_rejects_oversized_text(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS_FINDER_MAX_INPUT_CHARS", "10")
    with pytest.raises(SystemExit) as exc_info:
        main(["--text", "123 Main St, Austin, TX"])
    assert "too long" in str(exc_info.value.code)
