"""
Async SQLAlchemy engines for the E2E databases
"""

import re
from pathlib import Path
from typing import Union

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.pool import NullPool

from core.config import Settings
from core.exceptions import ConfigurationError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_$]+$")


def mysql_server_url(settings: Settings) -> URL:
    """URL of the MySQL server itself, without selecting a database."""
    return URL.create(
        "mysql+aiomysql",
        username=settings.E2E_MYSQL_USER,
        password=settings.E2E_MYSQL_PASSWORD,
        host=settings.E2E_MYSQL_HOST,
        port=settings.E2E_MYSQL_PORT,
    )


def sqlite_url(path: Union[str, Path]) -> str:
    return f"sqlite+aiosqlite:///{path}"


def create_engine_for(url: Union[str, URL]) -> AsyncEngine:
    """
    Create a throwaway async engine.

    DROP/CREATE DATABASE and VACUUM cannot run inside a transaction, so
    connections are opened in autocommit mode.
    """
    return create_async_engine(
        url,
        echo=False,
        poolclass=NullPool,
        isolation_level="AUTOCOMMIT",
    )


def quote_identifier(name: str) -> str:
    """Backtick-quote a MySQL identifier after checking it is a plain name."""
    if not IDENTIFIER_PATTERN.match(name or ""):
        raise ConfigurationError(
            f"Invalid database name: {name!r}",
            context={"database": name}
        )
    return f"`{name}`"
