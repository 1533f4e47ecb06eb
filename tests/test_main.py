"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest

from component_checker import main as cli
from component_checker.errors import NetworkError
from component_checker.models import Metadata
from component_checker.sources import SourceRegistry
from tests.fakes import FakeRequest, FakeSource, make_id


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> SourceRegistry:
    registry = SourceRegistry([
        FakeSource(make_id(1), version="1.0", name="Widget",
                   request=FakeRequest(Metadata(version="1.1", download_url="https://example.com/w.zip"))),
        FakeSource(make_id(2), version="2.0", name="Gadget",
                   request=FakeRequest(Metadata(version="2.0"))),
    ])
    monkeypatch.setattr(cli, "load_registry", lambda path: registry)
    return registry


def test_list_json(registry: SourceRegistry, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["list", "--json"]) == 0

    rows = json.loads(capsys.readouterr().out)
    assert [row["name"] for row in rows] == ["Widget", "Gadget"]
    assert rows[0]["version"] == "1.0"


def test_check_text_output(registry: SourceRegistry, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["check"]) == 0

    out = capsys.readouterr().out
    assert "[UPDATE] Widget: 1.0 -> 1.1  https://example.com/w.zip" in out
    assert "[OK    ] Gadget: 2.0 -> 2.0" in out
    assert "1 update(s) available." in out


def test_check_json_for_one_component(registry: SourceRegistry, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["check", "--json", "--id", str(make_id(2))]) == 0

    (report,) = json.loads(capsys.readouterr().out)
    assert report["name"] == "Gadget"
    assert report["status"] == "ok"


def test_check_exit_code_on_error(registry: SourceRegistry, capsys: pytest.CaptureFixture[str]) -> None:
    registry.register(FakeSource(make_id(3), name="Broken", request=FakeRequest(error=NetworkError("down"))))

    assert cli.main(["check"]) == 1
    assert "[ERROR ] Broken: NetworkError: down" in capsys.readouterr().out


def test_invalid_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["--config", str(tmp_path / "missing.json"), "list"]) == 2
    assert "cannot read components file" in capsys.readouterr().err


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 2
    assert "usage:" in capsys.readouterr().out
