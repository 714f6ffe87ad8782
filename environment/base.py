"""
Abstract base class for E2E environment variants
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from core.config import Settings
from environment.compose import DockerCompose
from environment.databases import SQLiteDatabaseResetter
import logging

logger = logging.getLogger(__name__)


class E2EEnvironment(ABC):
    """
    Abstract base class for the index + tracker environments.

    Responsibilities:
    - Environment variables injected at build time and at run time
    - Bringing the container set up and down
    - Wiping the databases the variant owns
    """

    variant: str = ""

    def __init__(self, settings: Settings, compose: Optional[DockerCompose] = None):
        self.settings = settings
        self.compose = compose or DockerCompose(
            settings.E2E_COMPOSE_COMMAND,
            settings.project_dir
        )

    @abstractmethod
    def build_environment(self) -> Dict[str, str]:
        """Variables passed to the image build"""
        pass

    @abstractmethod
    def run_environment(self) -> Dict[str, str]:
        """Variables passed when starting the containers"""
        pass

    @abstractmethod
    async def reset_databases(self):
        """Delete and recreate the databases this variant uses"""
        pass

    def up(self):
        """Build the images, then start the containers detached."""
        logger.info(f"Starting {self.variant} E2E environment")
        self.compose.build(self.build_environment())
        self.compose.up(self.run_environment())
        logger.info(f"{self.variant} E2E environment started")

    def down(self):
        """Stop and remove the containers."""
        logger.info(f"Stopping {self.variant} E2E environment")
        self.compose.down()

    def status(self):
        return self.compose.ps()

    def tracker_environment(self) -> Dict[str, str]:
        """Tracker variables shared by every variant"""
        return {
            "TORRUST_TRACKER_CONFIG": self.settings.read_config_file(self.settings.E2E_TRACKER_CONFIG_FILE),
            "TORRUST_TRACKER_API_TOKEN": self.settings.TORRUST_TRACKER_API_TOKEN,
        }

    async def reset_tracker_database(self):
        path = self.settings.resolve_project_path(self.settings.E2E_TRACKER_DATABASE_PATH)
        await SQLiteDatabaseResetter(path).reset()
