"""
Database connectors for qbench.
"""

from qbench.connectors.postgres_pool import (
    PostgresConnectionPool,
    create_pool_from_settings,
)

__all__ = ["PostgresConnectionPool", "create_pool_from_settings"]
