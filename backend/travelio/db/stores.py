"""
Collection access helpers for bookings, payments and users
"""

import logging
from datetime import datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)


def to_object_id(raw: str | ObjectId | None) -> ObjectId | None:
    """Parse a client-supplied id; malformed ids are treated as unknown ids."""
    if isinstance(raw, ObjectId):
        return raw
    if not raw:
        return None
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        return None


class BookingStore:
    def __init__(self, collection):
        self.collection = collection

    async def find(self, query: dict[str, Any] | None = None, limit: int = 0) -> list[dict]:
        cursor = self.collection.find(query or {}).sort("createdAt", DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def get(self, booking_id: str | ObjectId) -> dict | None:
        oid = to_object_id(booking_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def insert(self, document: dict) -> ObjectId:
        result = await self.collection.insert_one(document)
        return result.inserted_id

    async def update(self, booking_id: str | ObjectId, fields: dict[str, Any]) -> dict | None:
        """
        $set the given fields plus updatedAt. Returns the updated document,
        or None when no booking matched.
        """
        oid = to_object_id(booking_id)
        if oid is None:
            return None
        return await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, booking_id: str | ObjectId) -> bool:
        oid = to_object_id(booking_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def count(self, query: dict[str, Any] | None = None) -> int:
        return await self.collection.count_documents(query or {})

    async def creation_dates(self) -> list[Any]:
        docs = await self.collection.find({}, {"createdAt": 1}).to_list(length=None)
        return [doc.get("createdAt") for doc in docs]


class PaymentStore:
    def __init__(self, collection):
        self.collection = collection

    async def find_by_transaction(self, transaction_id: str) -> dict | None:
        return await self.collection.find_one({"transactionId": transaction_id})

    async def insert_once(self, document: dict) -> tuple[dict, bool]:
        """
        Insert a payment unless one already exists for its transactionId.

        Returns (document, created). The unique index on transactionId
        decides between concurrent inserts; the loser gets the stored record
        back with created=False.
        """
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            existing = await self.find_by_transaction(document["transactionId"])
            logger.info("Payment %s already recorded by a concurrent request", document["transactionId"])
            return existing, False
        return {**document, "_id": result.inserted_id}, True

    async def total_amount(self) -> int:
        cursor = self.collection.aggregate([{"$group": {"_id": None, "total": {"$sum": "$amount"}}}])
        rows = await cursor.to_list(length=None)
        return rows[0]["total"] if rows else 0


class UserStore:
    def __init__(self, collection):
        self.collection = collection

    async def upsert(self, email: str, fields: dict[str, Any], on_insert: dict[str, Any]):
        """
        Single conditional write: update the user with this email, or insert
        it with the on_insert fields as well.
        """
        now = datetime.utcnow()
        return await self.collection.update_one(
            {"email": email},
            {
                "$set": {**fields, "email": email, "updatedAt": now},
                "$setOnInsert": {**on_insert, "createdAt": now},
            },
            upsert=True,
        )

    async def find(self, query: dict[str, Any] | None = None) -> list[dict]:
        cursor = self.collection.find(query or {}).sort("updatedAt", DESCENDING)
        return await cursor.to_list(length=None)

    async def get_by_email(self, email: str) -> dict | None:
        return await self.collection.find_one({"email": email})

    async def update_by_email(self, email: str, fields: dict[str, Any]) -> dict | None:
        return await self.collection.find_one_and_update(
            {"email": email},
            {"$set": {**fields, "updatedAt": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def update_by_id(self, user_id: str, fields: dict[str, Any]) -> dict | None:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**fields, "updatedAt": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, user_id: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def count(self) -> int:
        return await self.collection.count_documents({})


class Stores:
    """
    The three collections the application works with, bundled for injection.
    """

    def __init__(self, bookings: BookingStore, payments: PaymentStore, users: UserStore):
        self.bookings = bookings
        self.payments = payments
        self.users = users

    @classmethod
    def from_database(cls, database) -> "Stores":
        return cls(
            bookings=BookingStore(database.bookings),
            payments=PaymentStore(database.payments),
            users=UserStore(database.users),
        )
