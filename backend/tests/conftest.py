"""
Shared fixtures: in-memory stores plus fake payment provider and identity
verifier, injected through create_app.
"""

import itertools
from datetime import datetime
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from travelio.core.errors import UnauthorizedError, UpstreamError
from travelio.db.stores import Stores, to_object_id
from travelio.main import create_app
from travelio.services.payment_provider import CheckoutSession


def _matches(doc: dict, query: dict | None) -> bool:
    return all(doc.get(key) == value for key, value in (query or {}).items())


class InMemoryBookingStore:
    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}
        self.update_calls = 0

    async def find(self, query=None, limit=0):
        rows = [dict(d) for d in self.docs.values() if _matches(d, query)]
        rows.sort(key=lambda d: d.get("createdAt") or datetime.min, reverse=True)
        return rows[:limit] if limit else rows

    async def get(self, booking_id):
        oid = to_object_id(booking_id)
        doc = self.docs.get(oid)
        return dict(doc) if doc is not None else None

    async def insert(self, document):
        oid = ObjectId()
        self.docs[oid] = {**document, "_id": oid}
        return oid

    async def update(self, booking_id, fields):
        self.update_calls += 1
        oid = to_object_id(booking_id)
        if oid not in self.docs:
            return None
        self.docs[oid].update(fields, updatedAt=datetime.utcnow())
        return dict(self.docs[oid])

    async def delete(self, booking_id):
        oid = to_object_id(booking_id)
        return self.docs.pop(oid, None) is not None

    async def count(self, query=None):
        return sum(1 for d in self.docs.values() if _matches(d, query))

    async def creation_dates(self):
        return [d.get("createdAt") for d in self.docs.values()]


class InMemoryPaymentStore:
    def __init__(self):
        self.docs: list[dict] = []

    async def find_by_transaction(self, transaction_id):
        for doc in self.docs:
            if doc["transactionId"] == transaction_id:
                return dict(doc)
        return None

    async def insert_once(self, document):
        # stands in for the unique index on transactionId
        existing = await self.find_by_transaction(document["transactionId"])
        if existing is not None:
            return existing, False
        stored = {**document, "_id": ObjectId()}
        self.docs.append(stored)
        return dict(stored), True

    async def total_amount(self):
        return sum(d.get("amount") or 0 for d in self.docs)


class InMemoryUserStore:
    def __init__(self):
        self.docs: dict[ObjectId, dict] = {}

    def _by_email(self, email):
        return next((d for d in self.docs.values() if d["email"] == email), None)

    async def upsert(self, email, fields, on_insert):
        now = datetime.utcnow()
        doc = self._by_email(email)
        if doc is not None:
            doc.update(fields, email=email, updatedAt=now)
            return SimpleNamespace(upserted_id=None, matched_count=1)
        oid = ObjectId()
        self.docs[oid] = {**on_insert, **fields, "_id": oid, "email": email, "createdAt": now, "updatedAt": now}
        return SimpleNamespace(upserted_id=oid, matched_count=0)

    async def find(self, query=None):
        rows = [dict(d) for d in self.docs.values() if _matches(d, query)]
        rows.sort(key=lambda d: d["updatedAt"], reverse=True)
        return rows

    async def get_by_email(self, email):
        doc = self._by_email(email)
        return dict(doc) if doc is not None else None

    async def update_by_email(self, email, fields):
        doc = self._by_email(email)
        if doc is None:
            return None
        doc.update(fields, updatedAt=datetime.utcnow())
        return dict(doc)

    async def update_by_id(self, user_id, fields):
        doc = self.docs.get(to_object_id(user_id))
        if doc is None:
            return None
        doc.update(fields, updatedAt=datetime.utcnow())
        return dict(doc)

    async def delete(self, user_id):
        return self.docs.pop(to_object_id(user_id), None) is not None

    async def count(self):
        return len(self.docs)


class FakePaymentProvider:
    def __init__(self):
        self.sessions: dict[str, CheckoutSession] = {}
        self.created: list[dict] = []
        self._ids = itertools.count(1)

    def add_session(self, session_id="cs_test_1", **fields) -> CheckoutSession:
        session = CheckoutSession(id=session_id, **fields)
        self.sessions[session_id] = session
        return session

    async def create_session(self, line_item, customer_email, metadata, success_url, cancel_url):
        session_id = f"cs_test_{next(self._ids)}"
        self.created.append(
            {
                "line_item": line_item,
                "customer_email": customer_email,
                "metadata": metadata,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        return self.add_session(session_id, url=f"https://checkout.stripe.test/pay/{session_id}")

    async def retrieve_session(self, session_id):
        if session_id not in self.sessions:
            raise UpstreamError("Failed to retrieve checkout session")
        return self.sessions[session_id]


class FakeIdentityVerifier:
    def __init__(self, tokens=None):
        self.tokens = tokens or {}
        self.closed = False

    async def verify(self, token):
        if token not in self.tokens:
            raise UnauthorizedError()
        return self.tokens[token]

    async def close(self):
        self.closed = True


@pytest.fixture
def stores():
    return Stores(
        bookings=InMemoryBookingStore(),
        payments=InMemoryPaymentStore(),
        users=InMemoryUserStore(),
    )


@pytest.fixture
def provider():
    return FakePaymentProvider()


@pytest.fixture
def verifier():
    return FakeIdentityVerifier(tokens={"admin-token": "admin@travelio.test"})


@pytest.fixture
def client(stores, provider, verifier):
    app = create_app(stores=stores, payment_provider=provider, identity_verifier=verifier)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_booking(stores):
    """Insert a booking document directly and return its id as a string."""

    def _make(**fields):
        doc = {
            "tourId": "tour-1",
            "tourTitle": "Cox's Bazar Beach Escape",
            "userEmail": "traveler@example.com",
            "travelDate": "2025-12-20",
            "status": "pending",
            "paymentStatus": "unpaid",
            "createdAt": datetime.utcnow(),
            **fields,
        }
        oid = ObjectId()
        stores.bookings.docs[oid] = {**doc, "_id": oid}
        return str(oid)

    return _make
