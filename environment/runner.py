# ============================================================================
# File: environment/runner.py
# Description: Orchestrates E2E environment up, down, reset and status
# ============================================================================
"""
Environment Runner - sequences the environment procedures.

- up: build images, start containers, optionally wait for readiness
- down: stop and remove containers
- reset: down, wipe databases, up
- status: list containers

Steps run strictly in order. The first failure stops the sequence and
propagates as an E2EException.
"""

import asyncio
from typing import Any, Dict, List, Optional

from core.config import Settings
from core.exceptions import ConfigurationError
from environment.base import E2EEnvironment
from environment.health import HealthChecker
from environment.mysql import MySQLEnvironment
from environment.sqlite import SQLiteEnvironment
import logging

logger = logging.getLogger(__name__)

ENVIRONMENTS = {
    MySQLEnvironment.variant: MySQLEnvironment,
    SQLiteEnvironment.variant: SQLiteEnvironment,
}


def get_environment(variant: str, settings: Settings) -> E2EEnvironment:
    """Instantiate the environment for a variant name."""
    try:
        environment_class = ENVIRONMENTS[variant]
    except KeyError:
        raise ConfigurationError(
            f"Unknown environment variant: {variant}",
            context={"variant": variant, "available": sorted(ENVIRONMENTS)}
        )
    return environment_class(settings)


def default_health_checker(settings: Settings) -> HealthChecker:
    return HealthChecker(
        urls={
            "tracker": settings.E2E_TRACKER_HEALTH_URL,
            "index": settings.E2E_INDEX_HEALTH_URL,
        },
        timeout=settings.E2E_WAIT_TIMEOUT,
        interval=settings.E2E_WAIT_INTERVAL
    )


class EnvironmentRunner:
    """
    E2E environment orchestrator

    Responsibilities:
    - Run the up / down / reset procedures in order
    - Wait for readiness when asked to
    - Report which steps ran
    """

    def __init__(self, environment: E2EEnvironment, health_checker: Optional[HealthChecker] = None):
        self.environment = environment
        self.health_checker = health_checker or default_health_checker(environment.settings)

    def up(self, wait: bool = False) -> Dict[str, Any]:
        steps: List[str] = []

        self.environment.up()
        steps.extend(["build", "up"])

        result = self._result(steps)
        if wait:
            result["containers"] = self._wait()
            steps.append("wait")

        return result

    def down(self) -> Dict[str, Any]:
        self.environment.down()
        return self._result(["down"])

    def reset(self, wait: bool = False) -> Dict[str, Any]:
        """
        Delete the databases and recreate them.

        Pipeline phases:
        1. Down - stop containers so nothing holds the databases open
        2. Reset - drop/recreate the index database, recreate the tracker file
        3. Up - build and start containers again

        Returns:
            Dictionary with run statistics:
            - status: "success"
            - variant: Environment variant name
            - steps: Steps in the order they ran
        """
        logger.info(f"Resetting {self.environment.variant} E2E environment")

        self.environment.down()
        asyncio.run(self.environment.reset_databases())

        result = self.up(wait=wait)
        result["steps"] = ["down", "reset_databases"] + result["steps"]

        logger.info(f"{self.environment.variant} E2E environment reset")
        return result

    def status(self) -> Dict[str, Any]:
        containers = self.environment.status()
        result = self._result(["status"])
        result["containers"] = [c.model_dump() for c in containers]
        return result

    def _wait(self) -> List[Dict[str, Any]]:
        logger.info("Waiting for the E2E environment to become ready")
        asyncio.run(self.health_checker.wait_until_ready())
        containers = self.health_checker.check_containers(self.environment.status())
        return [c.model_dump() for c in containers]

    def _result(self, steps: List[str]) -> Dict[str, Any]:
        return {
            "status": "success",
            "variant": self.environment.variant,
            "steps": steps,
        }
