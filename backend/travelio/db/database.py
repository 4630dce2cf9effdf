"""
MongoDB Database Configuration and Connection
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.server_api import ServerApi

logger = logging.getLogger(__name__)


class MongoDatabase:
    """
    Owns the MongoDB client for the lifetime of the application.

    A client can be handed in directly (tests pass an in-memory one);
    otherwise one is created from the URI on connect().
    """

    def __init__(self, uri: str | None = None, name: str = "travelio_user", client=None):
        self._uri = uri
        self._name = name
        self._client = client
        self._database = client[name] if client is not None else None

    def connect(self):
        """
        Get MongoDB database instance
        Creates a new connection if one doesn't exist
        """
        if self._database is None:
            if not self._uri:
                raise ValueError("MONGODB_URI environment variable is not set")

            self._client = AsyncIOMotorClient(self._uri, server_api=ServerApi("1"))
            self._database = self._client[self._name]
            logger.info("Connected to MongoDB database: %s", self._name)

        return self._database

    @property
    def bookings(self):
        return self.connect().bookings

    @property
    def payments(self):
        return self.connect().payments

    @property
    def users(self):
        return self.connect().users

    async def ping(self) -> bool:
        try:
            await self.connect().command("ping")
            logger.info("MongoDB connection successful")
            return True
        except Exception as e:
            logger.error("MongoDB connection failed: %s", e)
            return False

    async def init_indexes(self):
        """
        Create the indexes the application relies on.

        payments.transactionId is unique: it is what keeps a checkout
        session from being recorded twice when confirmations race.
        """
        await self.payments.create_index("transactionId", unique=True, name="uniq_transaction")
        await self.payments.create_index("bookingId")

        await self.users.create_index("email", unique=True, name="uniq_email")
        await self.users.create_index([("updatedAt", DESCENDING)])

        await self.bookings.create_index([("createdAt", DESCENDING)])
        await self.bookings.create_index([("userEmail", ASCENDING), ("createdAt", DESCENDING)])
        await self.bookings.create_index("status")

        logger.info("Database indexes created successfully")

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None
            self._database = None
            logger.info("Closed MongoDB connection")
