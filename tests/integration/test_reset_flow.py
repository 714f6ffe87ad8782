"""
Integration tests for the up / down / reset procedures.

docker compose and the MySQL server are replaced by doubles; the tracker
SQLite file is reset for real inside the temporary project directory.
"""

import json

import pytest
from unittest.mock import AsyncMock, Mock, patch
from core.exceptions import ComposeDownError, ContainerNotRunningError
from environment.health import HealthChecker
from environment.runner import EnvironmentRunner, get_environment


def compose_args(mock_run):
    """Compose sub-command of each subprocess call, e.g. 'up -d'"""
    return [" ".join(c.args[0][2:]) for c in mock_run.call_args_list]


def test_reset_sequence(test_settings, completed):
    """down, wipe databases, build, up - in that order"""
    order = Mock()
    runner = EnvironmentRunner(get_environment("mysql", test_settings))
    tracker_db = test_settings.resolve_path(test_settings.E2E_TRACKER_DATABASE_PATH)

    def fake_run(cmd, **kwargs):
        order.compose(" ".join(cmd[2:]))
        return completed()

    with patch("environment.compose.subprocess.run", side_effect=fake_run) as mock_run, \
            patch("environment.mysql.MySQLDatabaseResetter") as mock_mysql:
        mock_mysql.return_value.reset = AsyncMock(side_effect=lambda: order.mysql_reset())

        result = runner.reset()

    assert [c.args[0] if c.args else c[0] for c in order.mock_calls] == [
        "down", "mysql_reset", "build", "up -d"
    ]
    assert result == {
        "status": "success",
        "variant": "mysql",
        "steps": ["down", "reset_databases", "build", "up"],
    }
    assert tracker_db.exists()

    up_env = mock_run.call_args_list[-1].kwargs["env"]
    assert up_env["TORRUST_IDX_BACK_MYSQL_DATABASE"] == "torrust_index_backend_e2e_testing"
    assert up_env["TORRUST_TRACKER_API_TOKEN"] == "MyAccessToken"


def test_reset_stops_when_down_fails(test_settings, completed):
    runner = EnvironmentRunner(get_environment("mysql", test_settings))
    tracker_db = test_settings.resolve_path(test_settings.E2E_TRACKER_DATABASE_PATH)

    with patch("environment.compose.subprocess.run", return_value=completed(returncode=1)) as mock_run, \
            patch("environment.mysql.MySQLDatabaseResetter") as mock_mysql:
        with pytest.raises(ComposeDownError):
            runner.reset()

    assert compose_args(mock_run) == ["down"]
    mock_mysql.assert_not_called()
    assert not tracker_db.exists()


def test_sqlite_up(test_settings, completed):
    runner = EnvironmentRunner(get_environment("sqlite", test_settings))

    with patch("environment.compose.subprocess.run", return_value=completed()) as mock_run:
        result = runner.up()

    assert compose_args(mock_run) == ["build", "up -d"]
    assert "TORRUST_INDEX_CONFIG" in mock_run.call_args_list[1].kwargs["env"]
    assert result["steps"] == ["build", "up"]


def test_up_and_wait(test_settings, completed):
    """Readiness is checked over HTTP, then container states"""
    ps_output = "\n".join(
        json.dumps({"Name": name, "Service": name, "State": "running"})
        for name in ("mysql", "tracker", "index")
    )
    checker = HealthChecker({"tracker": "http://tracker/health"}, timeout=1, interval=0.01)
    runner = EnvironmentRunner(get_environment("mysql", test_settings), health_checker=checker)

    def fake_run(cmd, **kwargs):
        return completed(stdout=ps_output if "ps" in cmd else "")

    with patch("environment.compose.subprocess.run", side_effect=fake_run), \
            patch.object(checker, "wait_until_ready", new=AsyncMock()) as mock_wait:
        result = runner.up(wait=True)

    mock_wait.assert_awaited_once()
    assert result["steps"] == ["build", "up", "wait"]
    assert [c["name"] for c in result["containers"]] == ["mysql", "tracker", "index"]


def test_up_and_wait_with_exited_container(test_settings, completed):
    ps_output = json.dumps([
        {"Name": "tracker", "State": "running"},
        {"Name": "index", "State": "exited", "ExitCode": 1},
    ])
    checker = HealthChecker({}, timeout=1, interval=0.01)
    runner = EnvironmentRunner(get_environment("mysql", test_settings), health_checker=checker)

    def fake_run(cmd, **kwargs):
        return completed(stdout=ps_output if "ps" in cmd else "")

    with patch("environment.compose.subprocess.run", side_effect=fake_run):
        with pytest.raises(ContainerNotRunningError):
            runner.up(wait=True)


def test_status(test_settings, completed):
    runner = EnvironmentRunner(get_environment("sqlite", test_settings))
    output = json.dumps({"Name": "tracker", "Service": "tracker", "State": "running"})

    with patch("environment.compose.subprocess.run", return_value=completed(stdout=output)):
        result = runner.status()

    assert result["containers"][0]["name"] == "tracker"
    assert result["containers"][0]["state"] == "running"
