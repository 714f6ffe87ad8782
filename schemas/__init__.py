"""
Pydantic schemas for data the E2E tooling reads from external tools.

Schemas:
    environment: Container status rows from the orchestration tool

Usage:
    from schemas.environment import ContainerStatus, parse_container_statuses

Example:
    statuses = parse_container_statuses('{"Name": "tracker", "State": "running"}')
    assert statuses[0].is_running
"""

__all__ = [
    "ContainerStatus",
    "parse_container_statuses",
]
