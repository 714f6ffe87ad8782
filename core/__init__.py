"""
Core utilities and configuration for the Torrust E2E environment tooling.

This package provides foundational components used by every environment command:

Modules:
    config: Settings and environment variable management
    database: Async engines for the index and tracker databases
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import create_engine_for, mysql_server_url
    from core.exceptions import ComposeError, DatabaseResetError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Read a config file the way the containers receive it
    tracker_config = settings.read_config_file(settings.E2E_TRACKER_CONFIG_FILE)
"""

__all__ = [
    "settings",
    "setup_logging",
    "create_engine_for",
    "mysql_server_url",
    "sqlite_url",
    # Exceptions
    "E2EException",
    "ConfigurationError",
    "ConfigFileError",
    "ComposeError",
    "ComposeBuildError",
    "ComposeUpError",
    "ComposeDownError",
    "ComposeStatusError",
    "DatabaseResetError",
    "MySQLResetError",
    "SQLiteResetError",
    "HealthCheckError",
    "ServiceNotReadyError",
    "ContainerNotRunningError",
    "RetryableError",
    "NonRetryableError",
]
