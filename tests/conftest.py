"""
Shared fixtures: a seeded stub backend served over ``httpx.ASGITransport``
and API clients or stores signed in as the seeded users.
"""
from typing import List

import httpx
import pytest

from nirapoth.core.feedback import FeedbackChannel
from nirapoth.core.security import Credentials
from nirapoth.services.api_client import ApiClient
from nirapoth.store import Store
from nirapoth.testing import InMemoryDatabase, create_app, token_for

BASE_URL = "http://testserver/api"


class RecordingTransport(httpx.AsyncBaseTransport):
    """Forwards to the app and keeps every request it saw."""

    def __init__(self, inner: httpx.AsyncBaseTransport, sent: List[httpx.Request]):
        self.inner = inner
        self.sent = sent

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.sent.append(request)
        return await self.inner.handle_async_request(request)


@pytest.fixture
def db():
    return InMemoryDatabase().seed()


@pytest.fixture
def app(db):
    return create_app(db)


@pytest.fixture
def sent() -> List[httpx.Request]:
    return []


@pytest.fixture
async def make_client(app, sent):
    clients = []

    def factory(user_id: str) -> ApiClient:
        user = app.state.db.users[user_id]
        client = ApiClient(
            Credentials(token_for(user)),
            base_url=BASE_URL,
            transport=RecordingTransport(httpx.ASGITransport(app=app), sent),
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def feedback():
    return FeedbackChannel()


@pytest.fixture
def make_store(make_client, feedback):
    def factory(user_id: str, **kwargs) -> Store:
        return Store(make_client(user_id), feedback, **kwargs)

    return factory
