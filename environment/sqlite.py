"""
E2E environment backed by a SQLite index database
"""

from pathlib import Path
from typing import Dict

from environment.base import E2EEnvironment
from environment.databases import SQLiteDatabaseResetter
import logging

logger = logging.getLogger(__name__)


class SQLiteEnvironment(E2EEnvironment):
    """Index and tracker both on SQLite files."""

    variant = "sqlite"

    def build_environment(self) -> Dict[str, str]:
        return {}

    def run_environment(self) -> Dict[str, str]:
        env = {
            "TORRUST_INDEX_CONFIG": self.settings.read_config_file(self.settings.E2E_INDEX_SQLITE_CONFIG_FILE),
        }
        env.update(self.tracker_environment())
        return env

    def index_database_path(self) -> Path:
        """
        Host path of the index database file.

        The index config's ``connect_url`` names a path inside the container,
        so the host side comes from settings and must stay in the project.
        """
        return self.settings.resolve_project_path(self.settings.E2E_INDEX_DATABASE_PATH)

    async def reset_databases(self):
        index_path = self.index_database_path()
        # The index recreates its own file on start (mode=rwc)
        SQLiteDatabaseResetter(index_path).remove()
        await self.reset_tracker_database()
