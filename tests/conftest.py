"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from tasknote.app import App
from tasknote.config import Config
from tasknote.core.core import Core
from tests.fakes import FakeMongoClient

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def config() -> Config:
    """Config with a fixed secret and the cheapest bcrypt cost."""
    return Config(
        database_url="mongodb://localhost:27017/tasknote_test",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def mongo_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest_asyncio.fixture
async def core(config, mongo_client) -> AsyncGenerator[Core]:
    """Started Core backed by the in-memory database."""
    core = Core(config, mongo_client)
    async with core.lifespan():
        yield core


@pytest_asyncio.fixture
async def app(config, mongo_client) -> AsyncGenerator[App]:
    app = App(config, mongo_client)
    async with app.lifespan():
        yield app


@pytest_asyncio.fixture
async def alice(core):
    """Registered user alice@example.com."""
    return await core.services.user.create_user("alice@example.com", "secret1")


@pytest_asyncio.fixture
async def bob(core):
    """Registered user bob@example.com."""
    return await core.services.user.create_user("bob@example.com", "secret2")
