"""
Database resetters for the E2E environment.

- MySQLDatabaseResetter drops and recreates the index database.
- SQLiteDatabaseResetter deletes a SQLite file and recreates it empty.

Both run through async SQLAlchemy engines that are disposed after use.
"""

from pathlib import Path
from typing import Union

from sqlalchemy import text

from core.config import Settings
from core.database import create_engine_for, mysql_server_url, quote_identifier, sqlite_url
from core.exceptions import MySQLResetError, SQLiteResetError
import logging

logger = logging.getLogger(__name__)


class MySQLDatabaseResetter:
    """
    Drop and recreate the index MySQL database.

    The server must be reachable from the host (the E2E compose file
    publishes MySQL on localhost).
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.database = settings.E2E_MYSQL_DATABASE

    async def reset(self):
        """
        Run DROP DATABASE IF EXISTS followed by CREATE DATABASE.

        Raises:
            ConfigurationError: If the database name is not a plain identifier
            MySQLResetError: If the server rejects either statement
        """
        quoted = quote_identifier(self.database)
        logger.info(f"Creating MySQL database {self.database} for E2E testing ...")

        engine = create_engine_for(mysql_server_url(self.settings))
        operation = "connect"
        try:
            async with engine.connect() as conn:
                operation = "drop"
                await conn.execute(text(f"DROP DATABASE IF EXISTS {quoted}"))
                operation = "create"
                await conn.execute(text(f"CREATE DATABASE {quoted}"))
        except Exception as e:
            raise MySQLResetError(
                f"Failed to reset MySQL database {self.database}",
                context={
                    "database": self.database,
                    "host": self.settings.E2E_MYSQL_HOST,
                    "operation": operation
                },
                original_exception=e
            )
        finally:
            await engine.dispose()

        logger.info(f"MySQL database {self.database} recreated")


class SQLiteDatabaseResetter:
    """Delete a SQLite database file and recreate it empty."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def remove(self):
        """Delete the file if present."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise SQLiteResetError(
                f"Cannot delete SQLite database {self.path}",
                context={"database": str(self.path), "operation": "delete"},
                original_exception=e
            )
        logger.info(f"Deleted SQLite database {self.path}")

    async def reset(self):
        """
        Delete the file, make sure its directory exists, then recreate it.

        Raises:
            SQLiteResetError: If any filesystem or SQLite step fails
        """
        self.remove()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SQLiteResetError(
                f"Cannot create directory {self.path.parent}",
                context={"database": str(self.path), "operation": "mkdir"},
                original_exception=e
            )

        if not self.path.exists():
            await self._create()

    async def _create(self):
        engine = create_engine_for(sqlite_url(self.path))
        try:
            async with engine.connect() as conn:
                await conn.execute(text("VACUUM"))
        except Exception as e:
            raise SQLiteResetError(
                f"Cannot create SQLite database {self.path}",
                context={"database": str(self.path), "operation": "vacuum"},
                original_exception=e
            )
        finally:
            await engine.dispose()

        logger.info(f"Created SQLite database {self.path}")
