"""
qbench - benchmark alternative formulations of SQL queries.

Each revision of a query runs inside its own always-rolled-back transaction,
so benchmarking never leaves persistent changes behind.
"""

__version__ = "0.2.0"
