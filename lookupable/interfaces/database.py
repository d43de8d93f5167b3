"""
Storage interfaces - connection lifecycle and full-collection reads.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Type
from sqlalchemy.orm import Session


class IConnectionManager(ABC):
    """
    Owns the engine and hands out sessions.

    Kept apart from IRecordSource so the lookup cache can run against
    anything that returns rows, database or not.
    """

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def get_session(self) -> Session:
        """
        Open a new session.

        Returns:
            SQLAlchemy Session; the caller closes it
        """
        pass


class IRecordSource(ABC):
    """
    Interface for reading whole collections of mapped records.

    The lookup cache only ever needs "every row of this model", so this
    is the whole storage contract it depends on.
    """

    @abstractmethod
    def fetch_all(self, model: Type[Any], include_trashed: bool = False) -> List[Any]:
        """
        Fetch every record of a mapped model.

        Args:
            model: SQLAlchemy-mapped class
            include_trashed: Include soft-deleted rows for models that support it

        Returns:
            Records in the order the database returned them
        """
        pass
