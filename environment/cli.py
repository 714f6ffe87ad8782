"""
E2E environment CLI entry point.

Usage:
    e2e-env up [--variant {mysql,sqlite}] [--wait]
    e2e-env down [--variant {mysql,sqlite}]
    e2e-env reset [--variant {mysql,sqlite}] [--wait]
    e2e-env status [--variant {mysql,sqlite}]
"""

import argparse
import json
import sys
from typing import List, Optional

from core.config import Settings, settings as default_settings
from core.exceptions import E2EException
from core.logging import setup_logging
from environment.runner import ENVIRONMENTS, EnvironmentRunner, get_environment
import logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="e2e-env",
        description="Build, start, stop and reset the Torrust E2E testing environment"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--variant",
        choices=sorted(ENVIRONMENTS),
        default="mysql",
        help="Index database backing the environment (default: mysql)",
    )
    common.add_argument(
        "--log-level",
        default=None,
        help="off, error, warn, info, debug or trace (default: LOG_LEVEL setting)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    up_parser = subparsers.add_parser("up", parents=[common], help="Build images and start containers")
    up_parser.add_argument("--wait", action="store_true", help="Wait until services answer health checks")

    subparsers.add_parser("down", parents=[common], help="Stop and remove containers")

    reset_parser = subparsers.add_parser(
        "reset", parents=[common], help="Stop containers, recreate the databases, start containers"
    )
    reset_parser.add_argument("--wait", action="store_true", help="Wait until services answer health checks")

    subparsers.add_parser("status", parents=[common], help="Show container states")

    return parser


def run(command: str, variant: str, wait: bool = False, settings: Optional[Settings] = None) -> int:
    """Run one command and return the process exit status."""
    settings = settings or default_settings

    try:
        runner = EnvironmentRunner(get_environment(variant, settings))

        if command == "up":
            result = runner.up(wait=wait)
        elif command == "down":
            result = runner.down()
        elif command == "reset":
            result = runner.reset(wait=wait)
        else:
            result = runner.status()
            print(json.dumps(result["containers"], indent=2))

    except E2EException as e:
        logger.error(str(e))
        return e.exit_code

    logger.info(f"{command} completed: {', '.join(result['steps'])}")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    setup_logging(args.log_level)
    sys.exit(run(args.command, args.variant, wait=getattr(args, "wait", False)))


if __name__ == "__main__":
    main()
