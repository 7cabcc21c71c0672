"""Database ports for the cashflow planner.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the planner database engine.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_planner_engine(self) -> Engine:
        """Get the engine for the planner database.

        Returns:
            Engine: SQLAlchemy engine holding projection snapshots.
        """


__all__ = ["DatabaseEnginePort"]
