"""
E2E environment backed by a MySQL index database
"""

from typing import Dict

from environment.base import E2EEnvironment
from environment.databases import MySQLDatabaseResetter
import logging

logger = logging.getLogger(__name__)


class MySQLEnvironment(E2EEnvironment):
    """
    Index on MySQL, tracker on SQLite.

    The index image is built for the host user's UID so files written to the
    mounted storage stay owned by that user.
    """

    variant = "mysql"

    def build_environment(self) -> Dict[str, str]:
        return {
            "TORRUST_IDX_BACK_USER_UID": str(self.settings.TORRUST_IDX_BACK_USER_UID),
        }

    def run_environment(self) -> Dict[str, str]:
        env = {
            "TORRUST_IDX_BACK_USER_UID": str(self.settings.TORRUST_IDX_BACK_USER_UID),
            "TORRUST_IDX_BACK_CONFIG": self.settings.read_config_file(self.settings.E2E_INDEX_MYSQL_CONFIG_FILE),
            "TORRUST_IDX_BACK_MYSQL_DATABASE": self.settings.TORRUST_IDX_BACK_MYSQL_DATABASE,
        }
        env.update(self.tracker_environment())
        return env

    async def reset_databases(self):
        await MySQLDatabaseResetter(self.settings).reset()
        await self.reset_tracker_database()
