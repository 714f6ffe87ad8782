"""
Thin wrapper around the ``docker compose`` command line.

Every call is blocking and sequential. Output of build/up/down goes straight
to the terminal; a non-zero exit status is raised as a ComposeError carrying
the tool's own return code.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Type, Union

from core.config import redact
from core.exceptions import (
    ComposeError,
    ComposeBuildError,
    ComposeUpError,
    ComposeDownError,
    ComposeStatusError,
)
from schemas.environment import ContainerStatus, parse_container_statuses
import logging

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


class DockerCompose:
    """Run compose sub-commands in the project directory."""

    def __init__(self, command: Union[str, List[str]] = "docker compose", project_dir: Union[str, Path] = "."):
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.project_dir = Path(project_dir)

    def build(self, env: Optional[Mapping[str, str]] = None):
        """Build the images."""
        self._run(["build"], env, ComposeBuildError)

    def up(self, env: Optional[Mapping[str, str]] = None, detach: bool = True):
        """Create and start the containers."""
        args = ["up", "-d"] if detach else ["up"]
        self._run(args, env, ComposeUpError)

    def down(self, env: Optional[Mapping[str, str]] = None, volumes: bool = False):
        """Stop and remove the containers."""
        args = ["down", "--volumes"] if volumes else ["down"]
        self._run(args, env, ComposeDownError)

    def ps(self, env: Optional[Mapping[str, str]] = None) -> List[ContainerStatus]:
        """List the project's containers, stopped ones included."""
        result = self._run(["ps", "--all", "--format", "json"], env, ComposeStatusError, capture=True)

        try:
            return parse_container_statuses(result.stdout)
        except ValueError as e:
            raise ComposeStatusError(
                "Cannot parse container status output",
                context={"output": result.stdout[:500]},
                original_exception=e
            )

    def _run(
        self,
        args: List[str],
        env: Optional[Mapping[str, str]],
        error_class: Type[ComposeError],
        capture: bool = False
    ) -> subprocess.CompletedProcess:
        cmd = self.command + args
        overrides: Dict[str, str] = dict(env or {})

        logger.info(f"Running: {' '.join(cmd)}")
        if overrides:
            logger.debug(f"Environment overrides: {redact(overrides)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.project_dir,
                env={**os.environ, **overrides},
                capture_output=capture,
                text=True,
                check=False
            )
        except FileNotFoundError as e:
            raise error_class(
                f"Command not found: {cmd[0]}",
                context={"command": " ".join(cmd)},
                original_exception=e,
                returncode=COMMAND_NOT_FOUND
            )

        if result.returncode != 0:
            context = {"command": " ".join(cmd)}
            if capture and result.stderr:
                context["stderr"] = result.stderr.strip()[:500]
            raise error_class(
                f"'{' '.join(cmd)}' exited with status {result.returncode}",
                context=context,
                returncode=result.returncode
            )

        return result
