"""
Unit tests for the database resetters
"""

import sqlite3

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from core.database import mysql_server_url, quote_identifier, sqlite_url
from core.exceptions import ConfigurationError, MySQLResetError, SQLiteResetError
from environment.databases import MySQLDatabaseResetter, SQLiteDatabaseResetter


def mock_engine(execute=None):
    """Async engine double whose connection records executed statements"""
    conn = AsyncMock()
    conn.execute = execute or AsyncMock()

    engine = MagicMock()
    engine.connect.return_value.__aenter__.return_value = conn
    engine.dispose = AsyncMock()
    return engine, conn


class TestMySQLDatabaseResetter:
    """Test the index database drop and recreate"""

    @pytest.mark.asyncio
    async def test_drop_then_create(self, test_settings):
        engine, conn = mock_engine()

        with patch("environment.databases.create_engine_for", return_value=engine) as mock_create:
            await MySQLDatabaseResetter(test_settings).reset()

        statements = [str(c.args[0]) for c in conn.execute.call_args_list]
        assert statements == [
            "DROP DATABASE IF EXISTS `torrust_index_e2e_testing`",
            "CREATE DATABASE `torrust_index_e2e_testing`",
        ]
        url = mock_create.call_args.args[0]
        assert url.database is None
        engine.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_server_error_wrapped(self, test_settings):
        engine, conn = mock_engine(AsyncMock(side_effect=[None, RuntimeError("access denied")]))

        with patch("environment.databases.create_engine_for", return_value=engine):
            with pytest.raises(MySQLResetError) as exc_info:
                await MySQLDatabaseResetter(test_settings).reset()

        assert exc_info.value.context["operation"] == "create"
        assert exc_info.value.context["database"] == "torrust_index_e2e_testing"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        engine.dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unsafe_name_rejected(self, test_settings):
        test_settings.E2E_MYSQL_DATABASE = "e2e; DROP DATABASE mysql"

        with patch("environment.databases.create_engine_for") as mock_create:
            with pytest.raises(ConfigurationError):
                await MySQLDatabaseResetter(test_settings).reset()

        mock_create.assert_not_called()


class TestSQLiteDatabaseResetter:
    """Test the tracker database file recreation against real files"""

    @pytest.mark.asyncio
    async def test_creates_missing_directory_and_file(self, tmp_path):
        path = tmp_path / "storage" / "tracker" / "lib" / "database" / "tracker.db"

        await SQLiteDatabaseResetter(path).reset()

        assert path.exists()
        with sqlite3.connect(path) as conn:
            assert conn.execute("SELECT count(*) FROM sqlite_master").fetchone() == (0,)

    @pytest.mark.asyncio
    async def test_existing_database_emptied(self, tmp_path):
        path = tmp_path / "tracker.db"
        with sqlite3.connect(path) as conn:
            conn.execute("CREATE TABLE torrents (info_hash TEXT)")
        conn.close()

        await SQLiteDatabaseResetter(path).reset()

        with sqlite3.connect(path) as conn:
            tables = conn.execute("SELECT name FROM sqlite_master").fetchall()
        conn.close()
        assert tables == []

    def test_remove_missing_file_is_noop(self, tmp_path):
        SQLiteDatabaseResetter(tmp_path / "absent.db").remove()

    @pytest.mark.asyncio
    async def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "storage"
        blocker.write_text("a file where a directory should be")

        with pytest.raises(SQLiteResetError) as exc_info:
            await SQLiteDatabaseResetter(blocker / "tracker.db").reset()

        assert exc_info.value.context["operation"] in ("delete", "mkdir")


class TestDatabaseHelpers:
    """Test URL and identifier helpers"""

    def test_mysql_server_url(self, test_settings):
        url = mysql_server_url(test_settings)

        assert url.drivername == "mysql+aiomysql"
        assert url.username == "root"
        assert url.password == "root_secret_password"
        assert url.host == "localhost"
        assert url.port == 3306

    def test_sqlite_url(self):
        assert sqlite_url("/tmp/t.db") == "sqlite+aiosqlite:////tmp/t.db"

    @pytest.mark.parametrize("name", ["", "db-name", "db name", "`db`", "db;"])
    def test_quote_identifier_rejects(self, name):
        with pytest.raises(ConfigurationError):
            quote_identifier(name)

    def test_quote_identifier(self):
        assert quote_identifier("torrust_index_e2e_testing") == "`torrust_index_e2e_testing`"
