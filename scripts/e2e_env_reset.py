"""
Delete the E2E databases and recreate them.

Stops the environment, drops and recreates the index MySQL database (or
removes the index SQLite file), recreates the tracker SQLite file, then
starts the environment again.

Usage: python scripts/e2e_env_reset.py [mysql|sqlite]
"""

import sys
from pathlib import Path

# Allow imports from core, environment, etc. when run from a checkout
sys.path.append(str(Path(__file__).resolve().parent.parent))

from core.logging import setup_logging
from environment.cli import run


if __name__ == "__main__":
    setup_logging()
    variant = sys.argv[1] if len(sys.argv) > 1 else "mysql"
    sys.exit(run("reset", variant))
