"""Tests for td db commands."""

from td_client.cli.app import app


DATABASES = {
    "databases": [
        {
            "name": "sample_db",
            "count": 10,
            "created_at": "2015-01-01 00:00:00 UTC",
            "updated_at": "2015-01-02 00:00:00 UTC",
            "permission": "owner",
        }
    ]
}


def test_db_list(runner, cli_api):
    cli_api.add("GET", "/v3/database/list", json=DATABASES)
    result = runner.invoke(app, ["db", "list"])
    assert result.exit_code == 0
    assert "sample_db" in result.output
    assert "owner" in result.output


def test_db_create(runner, cli_api):
    cli_api.add("POST", "/v3/database/create/new_db", json={})
    result = runner.invoke(app, ["db", "create", "new_db"])
    assert result.exit_code == 0
    assert "Database 'new_db' created" in result.output


def test_db_create_conflict(runner, cli_api):
    cli_api.add("POST", "/v3/database/create/new_db", 409, json={"error": "already exists"})
    result = runner.invoke(app, ["db", "create", "new_db"])
    assert result.exit_code == 1
    assert "Error creating database" in result.output


def test_db_delete_with_confirmation(runner, cli_api):
    cli_api.add("POST", "/v3/database/delete/old_db", json={})
    result = runner.invoke(app, ["db", "delete", "old_db"], input="y\n")
    assert result.exit_code == 0
    assert "Database 'old_db' deleted" in result.output


def test_db_delete_aborted(runner, cli_api):
    result = runner.invoke(app, ["db", "delete", "old_db"], input="n\n")
    assert result.exit_code == 1
    assert cli_api.requests == []


def test_db_delete_yes(runner, cli_api):
    cli_api.add("POST", "/v3/database/delete/old_db", json={})
    result = runner.invoke(app, ["db", "delete", "old_db", "--yes"])
    assert result.exit_code == 0
    assert cli_api.last_request.url.path == "/v3/database/delete/old_db"
