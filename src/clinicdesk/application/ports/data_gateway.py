"""
Data gateway interface for persistence and authentication.

Every record is a plain dict. Inserted records come back with an ``id``
and a ``created_at`` assigned by the backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from ...domain.enums.clinic import Table

Record = Dict[str, Any]
Filters = Dict[str, Any]


class DataGateway(ABC):
    """Abstract gateway over the clinic tables.

    Implementations raise ``UniqueConstraintError`` for constraint
    violations, ``RecordNotFoundError``/``MultipleRecordsError`` from
    ``select_one`` and ``DatabaseError`` for any other backend failure.
    """

    @abstractmethod
    async def insert(self, table: Table, record: Record) -> Record:
        """Insert one record and return it as stored."""
        pass

    @abstractmethod
    async def insert_with_items(
        self,
        table: Table,
        record: Record,
        item_table: Table,
        items: Sequence[Record],
        link_field: str,
    ) -> Record:
        """Insert a parent record and its children atomically.

        Each child gets ``link_field`` set to the parent's id. Either all
        rows are written or none are. The returned parent record carries the
        stored children under ``items``; a failure writing the children raises
        ``ChildInsertError``.
        """
        pass

    @abstractmethod
    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        projection: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Record]:
        """Return every record matching the equality filters."""
        pass

    @abstractmethod
    async def select_one(self, table: Table, filters: Filters) -> Record:
        """Return the single record matching the filters."""
        pass

    @abstractmethod
    async def update(self, table: Table, patch: Record, filters: Filters) -> int:
        """Apply ``patch`` to matching records and return the matched count."""
        pass

    @abstractmethod
    async def authenticate(self, user_id: str, password: str) -> Record:
        """Check a user's credential and return the user record without its password.

        Raises ``RecordNotFoundError`` for an unknown user and
        ``AuthenticationError`` for a wrong password.
        """
        pass

    async def ping(self) -> None:
        """Raise ``DatabaseError`` when the backend is unreachable."""
        return None

    async def close(self) -> None:
        """Release backend resources."""
        return None
