"""Tests for the command line front end."""
from __future__ import annotations

import json

import httpx
import pytest

from ecoscan.client import cli
from ecoscan.client.api import EcoScanClient


def run_offline(tmp_path, *args: str) -> int:
    return cli.main(["--offline", "--cache", str(tmp_path / "state.json"), *args])


def test_offline_classify_and_profile(tmp_path, capsys) -> None:
    image = tmp_path / "bottle.jpg"
    image.write_bytes(b"fake-image")

    assert run_offline(tmp_path, "username", "dana") == 0
    assert run_offline(tmp_path, "classify", str(image)) == 0
    out = capsys.readouterr().out
    assert "Username saved: dana" in out
    assert "Total:" in out

    saved = json.loads((tmp_path / "state.json").read_text())
    assert len(saved["history"]) == 1
    assert saved["points"] > 0
    assert saved["pending_sync"] is True

    assert run_offline(tmp_path, "profile") == 0
    out = capsys.readouterr().out
    assert "Username: dana" in out
    assert f"Points: {saved['points']}" in out


def test_guide_and_tutorial(tmp_path, capsys) -> None:
    assert run_offline(tmp_path, "guide", "glass") == 0
    assert capsys.readouterr().out.strip() == "Glass: Recycle in designated glass bins."

    assert run_offline(tmp_path, "tutorial") == 0
    assert capsys.readouterr().out.startswith("1. Welcome to EcoScan!")


@pytest.mark.parametrize("command", [["leaderboard"], ["challenges"], ["feedback", "Nice"]])
def test_online_commands_fail_offline(tmp_path, capsys, command) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_offline(tmp_path, *command)

    assert excinfo.value.code == 1
    assert "needs the backend" in capsys.readouterr().err


def test_backend_error_exits_with_message(client, tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.setattr(cli, "EcoScanClient", lambda url: EcoScanClient(http=client))
    cache = str(tmp_path / "state.json")

    assert cli.main(["--cache", cache, "username", "erin"]) == 0
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--cache", cache, "complete", "9999"])

    assert excinfo.value.code == 1
    assert "Error: Challenge not found or already completed." in capsys.readouterr().err


def test_unreachable_backend_exits(tmp_path, capsys, monkeypatch) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://backend", transport=httpx.MockTransport(refuse))
    monkeypatch.setattr(cli, "EcoScanClient", lambda url: EcoScanClient(http=http))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--cache", str(tmp_path / "state.json"), "feedback", "Nice"])

    assert excinfo.value.code == 1
    assert "backend unreachable" in capsys.readouterr().err
