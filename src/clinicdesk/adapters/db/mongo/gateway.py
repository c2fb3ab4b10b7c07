"""
MongoDB implementation of DataGateway (motor + Beanie).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import certifi
from beanie import Document, init_beanie
from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from clinicdesk.application.ports.data_gateway import DataGateway, Filters, Record
from clinicdesk.core.config import DatabaseSettings
from clinicdesk.core.exceptions import (
    AuthenticationError,
    ChildInsertError,
    DatabaseError,
    MultipleRecordsError,
    RecordNotFoundError,
    UniqueConstraintError,
)
from clinicdesk.core.utils.crypto_utils import verify_password
from clinicdesk.domain.enums.clinic import Table

from .models.clinic_m import TABLE_MODELS, UserMongo

logger = logging.getLogger(__name__)

_INTERNAL_FIELDS = {"id", "revision_id"}


def _to_record(doc: Document, projection: Optional[Sequence[str]] = None) -> Record:
    """Plain dict view of a document with a string ``id``."""
    record = doc.model_dump(exclude=_INTERNAL_FIELDS)
    record["id"] = str(doc.id)
    if projection:
        record = {key: value for key, value in record.items() if key in projection}
    return record


def _to_query(filters: Optional[Filters]) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    for key, value in (filters or {}).items():
        if key == "id":
            try:
                query["_id"] = ObjectId(str(value))
            except InvalidId:
                # no document can carry a malformed id
                query["_id"] = None
        else:
            query[key] = value
    return query


def _duplicate_field(error: DuplicateKeyError) -> str:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    return next(iter(key_pattern), "unknown")


class MongoDataGateway(DataGateway):
    """DataGateway backed by MongoDB collections."""

    def __init__(self, client: AsyncIOMotorClient):
        self._client = client

    def _model(self, table: Table):
        return TABLE_MODELS[Table(table)]

    async def insert(self, table: Table, record: Record) -> Record:
        model = self._model(table)
        try:
            doc = model(**record)
            await doc.insert()
        except DuplicateKeyError as e:
            raise UniqueConstraintError(Table(table).value, _duplicate_field(e), None)
        except PyMongoError as e:
            raise DatabaseError(f"Insert into {Table(table).value} failed: {e}")
        return _to_record(doc)

    async def insert_with_items(
        self,
        table: Table,
        record: Record,
        item_table: Table,
        items: Sequence[Record],
        link_field: str,
    ) -> Record:
        """Parent and children in one multi-document transaction (needs a replica set)."""
        model = self._model(table)
        item_model = self._model(item_table)
        try:
            async with await self._client.start_session() as session:
                async with session.start_transaction():
                    doc = model(**record)
                    try:
                        await doc.insert(session=session)
                    except DuplicateKeyError as e:
                        raise UniqueConstraintError(Table(table).value, _duplicate_field(e), None)

                    stored_items: List[Record] = []
                    try:
                        for item in items:
                            child = item_model(**{**item, link_field: str(doc.id)})
                            await child.insert(session=session)
                            stored_items.append(_to_record(child))
                    except PyMongoError as e:
                        raise ChildInsertError(Table(item_table).value, {"error": str(e)})
        except PyMongoError as e:
            raise DatabaseError(f"Insert into {Table(table).value} failed: {e}")

        stored = _to_record(doc)
        stored["items"] = stored_items
        return stored

    async def select(
        self,
        table: Table,
        filters: Optional[Filters] = None,
        projection: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Record]:
        model = self._model(table)
        try:
            query = model.find(_to_query(filters))
            if order_by:
                sort_field = "_id" if order_by == "id" else order_by
                query = query.sort(f"{'-' if descending else '+'}{sort_field}")
            docs = await query.to_list()
        except PyMongoError as e:
            raise DatabaseError(f"Select from {Table(table).value} failed: {e}")
        return [_to_record(doc, projection) for doc in docs]

    async def select_one(self, table: Table, filters: Filters) -> Record:
        model = self._model(table)
        try:
            docs = await model.find(_to_query(filters)).limit(2).to_list()
        except PyMongoError as e:
            raise DatabaseError(f"Select from {Table(table).value} failed: {e}")
        if not docs:
            raise RecordNotFoundError(Table(table).value, filters)
        if len(docs) > 1:
            count = await model.find(_to_query(filters)).count()
            raise MultipleRecordsError(Table(table).value, count)
        return _to_record(docs[0])

    async def update(self, table: Table, patch: Record, filters: Filters) -> int:
        model = self._model(table)
        try:
            result = await model.get_motor_collection().update_many(
                _to_query(filters), {"$set": patch}
            )
        except DuplicateKeyError as e:
            raise UniqueConstraintError(Table(table).value, _duplicate_field(e), None)
        except PyMongoError as e:
            raise DatabaseError(f"Update of {Table(table).value} failed: {e}")
        return result.matched_count

    async def authenticate(self, user_id: str, password: str) -> Record:
        try:
            user = await UserMongo.find_one(UserMongo.user_id == user_id)
        except PyMongoError as e:
            raise DatabaseError(f"User lookup failed: {e}")
        if user is None:
            raise RecordNotFoundError(Table.USERS.value, {"user_id": user_id})
        if not verify_password(password, user.password):
            raise AuthenticationError("Invalid password", {"user_id": user_id})
        record = _to_record(user)
        record.pop("password", None)
        return record

    async def ping(self) -> None:
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise DatabaseError(f"MongoDB ping failed: {e}")

    async def close(self) -> None:
        self._client.close()


async def connect_mongo_gateway(settings: DatabaseSettings) -> MongoDataGateway:
    """Open the motor client, register the Beanie models and build the indexes."""
    # Enable TLS only for Atlas SRV URIs
    if settings.uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            settings.uri,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        # Local/standard connection (no TLS)
        client = AsyncIOMotorClient(
            settings.uri,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        )

    await init_beanie(
        database=client[settings.db_name],
        document_models=list(TABLE_MODELS.values()),
    )
    logger.info(f"MongoDB gateway ready (db={settings.db_name})")
    return MongoDataGateway(client)
