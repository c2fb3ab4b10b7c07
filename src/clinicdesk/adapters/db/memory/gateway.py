"""
In-memory implementation of DataGateway.

Used by the test suite and for local demos (``MONGO_BACKEND=memory``). It
enforces the same uniqueness rules as the MongoDB indexes, and every write
runs under one asyncio lock so check-and-insert is atomic.
"""

import asyncio
import copy
import logging
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from clinicdesk.application.ports.data_gateway import DataGateway, Filters, Record
from clinicdesk.core.exceptions import (
    AuthenticationError,
    MultipleRecordsError,
    RecordNotFoundError,
    UniqueConstraintError,
)
from clinicdesk.core.utils.crypto_utils import verify_password
from clinicdesk.domain.enums.clinic import Role, Table

logger = logging.getLogger(__name__)

# (field, predicate deciding whether a record takes part in the constraint)
UniqueRule = Tuple[str, Callable[[Record], bool]]

_ALWAYS: Callable[[Record], bool] = lambda record: True

UNIQUE_RULES: Dict[Table, List[UniqueRule]] = {
    Table.PATIENTS: [("patient_id", _ALWAYS)],
    Table.DOCTORS: [("doctor_id", _ALWAYS)],
    Table.BILLS: [("bill_number", _ALWAYS)],
    Table.USERS: [
        ("user_id", _ALWAYS),
        ("role", lambda record: record.get("role") == Role.RECEPTIONIST.value),
    ],
}


def _matches(record: Record, filters: Optional[Filters]) -> bool:
    return all(record.get(key) == value for key, value in (filters or {}).items())


def _sort_key(field: str) -> Callable[[Record], Tuple[bool, Any]]:
    def key(record: Record) -> Tuple[bool, Any]:
        value = record.get(field)
        return (value is None, value if value is not None else 0)

    return key


class InMemoryDataGateway(DataGateway):
    """DataGateway keeping every table in process memory."""

    def __init__(self) -> None:
        self._tables: Dict[Table, List[Record]] = defaultdict(list)
        self._lock = asyncio.Lock()
        self._last_created_at: Optional[datetime] = None

    def _next_created_at(self) -> datetime:
        # strictly increasing so newest-first ordering is deterministic
        now = datetime.now(timezone.utc)
        if self._last_created_at is not None and now <= self._last_created_at:
            now = self._last_created_at + timedelta(microseconds=1)
        self._last_created_at = now
        return now

    def _check_unique(self, table: Table, record: Record, pending: Sequence[Record] = ()) -> None:
        rows = list(self._tables[table]) + list(pending)
        for field, applies in UNIQUE_RULES.get(table, []):
            if not applies(record):
                continue
            value = record.get(field)
            for row in rows:
                if row.get("id") != record.get("id") and applies(row) and row.get(field) == value:
                    raise UniqueConstraintError(table.value, field, value)

    def _build(self, record: Record) -> Record:
        stored = copy.deepcopy(dict(record))
        stored["id"] = uuid.uuid4().hex
        stored["created_at"] = self._next_created_at()
        return stored

    async def insert(self, table: Table, record: Record) -> Record:
        table = Table(table)
        async with self._lock:
            stored = self._build(record)
            self._check_unique(table, stored)
            self._tables[table].append(stored)
        return copy.deepcopy(stored)

    async def insert_with_items(
        self,
        table: Table,
        record: Record,
        item_table: Table,
        items: Sequence[Record],
        link_field: str,
    ) -> Record:
        table, item_table = Table(table), Table(item_table)
        async with self._lock:
            parent = self._build(record)
            self._check_unique(table, parent)
            children: List[Record] = []
            for item in items:
                child = self._build({**item, link_field: parent["id"]})
                self._check_unique(item_table, child, children)
                children.append(child)
            # nothing is written until every row has passed its checks
            self._tables[table].append(parent)
            self._tables[item_table].extend(children)

        stored = copy.deepcopy(parent)
        stored["items"] = copy.deepcopy(children)
        return stored

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        projection: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Record]:
        rows = [row for row in self._tables[Table(table)] if _matches(row, filters)]
        if order_by:
            rows = sorted(rows, key=_sort_key(order_by), reverse=descending)
        if projection:
            rows = [{key: value for key, value in row.items() if key in projection} for row in rows]
        return copy.deepcopy(rows)

    async def select_one(self, table: Table, filters: Filters) -> Record:
        rows = await self.select(table, filters)
        if not rows:
            raise RecordNotFoundError(Table(table).value, filters)
        if len(rows) > 1:
            raise MultipleRecordsError(Table(table).value, len(rows))
        return rows[0]

    async def update(self, table: Table, patch: Record, filters: Filters) -> int:
        table = Table(table)
        async with self._lock:
            matched = [row for row in self._tables[table] if _matches(row, filters)]
            for row in matched:
                self._check_unique(table, {**row, **patch})
            for row in matched:
                row.update(copy.deepcopy(patch))
        return len(matched)

    async def authenticate(self, user_id: str, password: str) -> Record:
        user = await self.select_one(Table.USERS, {"user_id": user_id})
        if not verify_password(password, user.get("password", "")):
            raise AuthenticationError("Invalid password", {"user_id": user_id})
        user.pop("password", None)
        return user
