"""Integration tests for the command line entry point."""

import json
import logging
from pathlib import Path

import pytest

from traffic_analytics.__main__ import main, parse_args
from traffic_analytics.analytics.colors import assign_color

DUMP = {
    "categories": ["Combat", "Racing"],
    "records": [
        {
            "instance_name": "eu-1",
            "category_name": "Combat",
            "start_time": "2024-05-01T12:00:00+00:00",
            "end_time": "2024-05-01T13:00:00+00:00",
        },
    ],
    "weekly_records": [
        {
            "instance_name": "eu-1",
            "category_name": "Racing",
            "start_time": "2024-05-05T12:00:00+00:00",
            "end_time": None,
        },
    ],
}


@pytest.fixture
def dump_file(tmp_path: Path) -> Path:
    path = tmp_path / "sessions.json"
    path.write_text(json.dumps(DUMP))
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRAFFIC_PROFILE", raising=False)
    monkeypatch.delenv("TRAFFIC_BACKEND_URL", raising=False)


@pytest.mark.integration
class TestCli:
    """Tests for python -m traffic_analytics."""

    def test_dry_run(self) -> None:
        """Dry run loads config and exits cleanly."""
        assert main(["--profile", "test", "--dry-run"]) == 0

    def test_profile_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Without --config or --profile the profile comes from TRAFFIC_PROFILE."""
        monkeypatch.setenv("TRAFFIC_PROFILE", "test")

        with caplog.at_level(logging.INFO):
            assert main(["--dry-run"]) == 0

        assert "Profile: test" in caplog.text
        assert "Backend: http://testserver/api" in caplog.text

    def test_missing_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Missing config file is reported with exit code 1."""
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_missing_records_file(self, tmp_path: Path) -> None:
        """Missing dump file is reported with exit code 1."""
        assert main(["--profile", "test", "--records", str(tmp_path / "nope.json")]) == 1

    def test_custom_date_from_dump(
        self, dump_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A dump and a custom date produce both chart payloads."""
        exit_code = main(
            ["--profile", "test", "--records", str(dump_file), "--date", "2024-05-01"]
        )

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["date"] == "2024-05-01"
        assert output["weekly"]["labels"][6] == "Sun"
        assert output["weekly"]["series"] == [
            {"name": "Racing", "data": [0, 0, 0, 0, 0, 0, 1]}
        ]
        assert output["weekly"]["colors"] == [assign_color("Racing")]

    def test_invalid_date_argument(self) -> None:
        """Malformed dates are rejected by the parser."""
        with pytest.raises(SystemExit):
            parse_args(["--date", "05/01/2024"])
