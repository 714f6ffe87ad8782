"""
E2E environment management for the Torrust index and tracker.

Modules:
    base: Abstract environment with up/down and variable injection
    mysql: Index on MySQL, tracker on SQLite
    sqlite: Index and tracker on SQLite
    compose: docker compose command wrapper
    databases: MySQL and SQLite database resetters
    health: Container state and HTTP readiness checks
    runner: Orchestrator for up, down, reset and status
    cli: ``e2e-env`` command line

Usage:
    from core.config import settings
    from environment.runner import EnvironmentRunner, get_environment

Example:
    runner = EnvironmentRunner(get_environment("mysql", settings))

    # Down, wipe both databases, up
    result = runner.reset()
    print(result["steps"])
"""

__all__ = [
    "E2EEnvironment",
    "MySQLEnvironment",
    "SQLiteEnvironment",
    "DockerCompose",
    "MySQLDatabaseResetter",
    "SQLiteDatabaseResetter",
    "HealthChecker",
    "EnvironmentRunner",
    "get_environment",
]
