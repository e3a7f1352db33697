"""Tests for the command-line entry point and logging setup."""

import logging
from pathlib import Path

import pytest

from bonsaigotchi.__main__ import main
from bonsaigotchi.logging_config import configure_logging
from bonsaigotchi.simulation.snapshot import from_snapshot, read_snapshot


class TestLogging:
    """configure_logging wires the root logger."""

    def test_sets_level(self) -> None:
        configure_logging("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        configure_logging("nonsense")
        assert logging.getLogger().level == logging.INFO


class TestMain:
    """Headless run from the command line."""

    def test_runs_and_saves(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        save = tmp_path / "bonsai.json"
        monkeypatch.setattr(
            "sys.argv",
            ["bonsaigotchi", "--ticks", "5", "--snapshot", str(save), "-a", "water"],
        )
        main()
        pet, environment = from_snapshot(read_snapshot(save))
        assert pet.experience > 0
        assert environment.minute == 5

    def test_resumes_from_snapshot(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        save = tmp_path / "bonsai.json"
        argv = ["bonsaigotchi", "--ticks", "5", "--snapshot", str(save)]
        monkeypatch.setattr("sys.argv", argv)
        main()
        first_id = read_snapshot(save)["id"]
        main()
        data = read_snapshot(save)
        assert data["id"] == first_id
        assert data["minute"] == 10

    def test_unknown_action_exits(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr("sys.argv", ["bonsaigotchi", "-a", "juggle"])
        with pytest.raises(SystemExit):
            main()

    def test_buys_before_acting(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        save = tmp_path / "bonsai.json"
        monkeypatch.setattr(
            "sys.argv",
            [
                "bonsaigotchi", "--ticks", "1", "--snapshot", str(save),
                "-b", "vegetables", "-a", "feed:vegetables",
            ],
        )
        main()
        data = read_snapshot(save)
        assert data["bills"] == 0
        assert data["inventory"]["vegetables"] == 5
        assert data["activity"] == "eating"
