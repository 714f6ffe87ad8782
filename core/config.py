"""
E2E environment configuration using Pydantic Settings
"""

import tomllib
from pathlib import Path
from typing import Dict, Mapping

from pydantic_settings import BaseSettings

from core.exceptions import ConfigFileError, ConfigurationError

REDACTED = "***"

# Variables whose values must never reach the logs
SECRET_MARKERS = ("TOKEN", "PASSWORD", "SECRET")


class Settings(BaseSettings):
    """E2E environment settings with environment variable support"""

    # Values injected into the containers
    TORRUST_IDX_BACK_USER_UID: int = 1000
    TORRUST_TRACKER_API_TOKEN: str = "MyAccessToken"
    TORRUST_IDX_BACK_MYSQL_DATABASE: str = "torrust_index_backend_e2e_testing"

    # Orchestration
    E2E_PROJECT_DIR: str = "."
    E2E_COMPOSE_COMMAND: str = "docker compose"

    # Config files read into the container environment
    E2E_INDEX_MYSQL_CONFIG_FILE: str = "config-index.mysql.local.toml"
    E2E_INDEX_SQLITE_CONFIG_FILE: str = "config-index.sqlite.local.toml"
    E2E_TRACKER_CONFIG_FILE: str = "config-tracker.local.toml"

    # Index database reset
    E2E_MYSQL_USER: str = "root"
    E2E_MYSQL_PASSWORD: str = "root_secret_password"
    E2E_MYSQL_HOST: str = "localhost"
    E2E_MYSQL_PORT: int = 3306
    E2E_MYSQL_DATABASE: str = "torrust_index_e2e_testing"

    # Tracker database reset
    E2E_TRACKER_DATABASE_PATH: str = "./storage/tracker/lib/database/torrust_tracker_e2e_testing.db"

    # Index database file removed by the SQLite variant reset
    E2E_INDEX_DATABASE_PATH: str = "./storage/index/lib/database/sqlite3.db"

    # Readiness probes (only used with --wait)
    E2E_INDEX_HEALTH_URL: str = "http://localhost:3001/health_check"
    E2E_TRACKER_HEALTH_URL: str = "http://localhost:1313/health_check"
    E2E_WAIT_TIMEOUT: float = 120.0
    E2E_WAIT_INTERVAL: float = 2.0

    # off, error, warn, info, debug, trace
    LOG_LEVEL: str = "info"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def project_dir(self) -> Path:
        return Path(self.E2E_PROJECT_DIR)

    def resolve_path(self, path: str) -> Path:
        """Resolve a path relative to the project directory."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.project_dir / candidate

    def resolve_project_path(self, path: str) -> Path:
        """
        Resolve a path that must stay inside the project directory.

        Raises:
            ConfigurationError: If the path resolves outside the project
        """
        project_dir = self.project_dir.resolve()
        resolved = self.resolve_path(path).resolve()

        if not resolved.is_relative_to(project_dir):
            raise ConfigurationError(
                f"Database path {resolved} is outside the project directory {project_dir}",
                context={"path": path, "project_dir": str(project_dir)}
            )
        return resolved

    def read_config_file(self, path: str) -> str:
        """
        Read a TOML config file to be injected into a container.

        The content is returned the way shell command substitution would
        return it: verbatim, minus trailing newlines.

        Raises:
            ConfigFileError: If the file is missing, unreadable or not TOML
        """
        file_path = self.resolve_path(path)

        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(
                f"Cannot read config file {file_path}",
                context={"file_path": str(file_path)},
                original_exception=e
            )

        try:
            tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ConfigFileError(
                f"Config file {file_path} is not valid TOML",
                context={"file_path": str(file_path)},
                original_exception=e
            )

        return content.rstrip("\n")


def redact(env: Mapping[str, str]) -> Dict[str, str]:
    """Copy of an environment mapping with secret values masked."""
    redacted = {}
    for key, value in env.items():
        if any(marker in key.upper() for marker in SECRET_MARKERS):
            redacted[key] = REDACTED
        elif key.upper().endswith("_CONFIG"):
            # Whole TOML documents, which embed their own credentials
            redacted[key] = f"<{len(value)} chars>"
        else:
            redacted[key] = value
    return redacted


settings = Settings()
