"""
Pytest configuration for Mongo DB Facade tests.

Provides environment fixtures and an in-memory stand-in for the Motor
client that records every call made to it, so tests can tell whether the
facade reached the driver at all.
"""

import os
from typing import Any, Generator

import pytest

from mongo_dbfacade.config import MongoFacadeConfig
from mongo_dbfacade.db.mongodb import MongoDBClient


class FakeCursor:
    """Cursor returned by ``FakeCollection.find``."""

    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return list(self._documents if length is None else self._documents[:length])


class FakeCollection:
    """Collection handle backed by a list of documents."""

    def __init__(self, database: "FakeDatabase", name: str) -> None:
        self.database = database
        self.name = name
        self.full_name = f"{database.name}.{name}"
        self.documents: list[dict[str, Any]] = []

    def find(self, filter: Any = None) -> FakeCursor:
        self.database.client.record("find", self.full_name, filter)
        if not isinstance(filter, dict):
            raise TypeError("filter must be an instance of dict")
        matching = [
            document for document in self.documents
            if all(document.get(key) == value for key, value in filter.items())
        ]
        return FakeCursor(matching)

    async def insert_many(self, documents: list[Any]) -> None:
        self.database.client.record("insert_many", self.full_name, list(documents))
        self.documents.extend(documents)


class FakeDatabase:
    """Database handle tracking which collections exist on the "server"."""

    def __init__(self, client: "FakeMotorClient", name: str) -> None:
        self.client = client
        self.name = name
        self.collection_names: list[str] = []
        self._handles: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection | None:
        self.client.record("get_collection", self.name, name)
        if (self.name, name) in self.client.unavailable_handles:
            return None
        return self._handles.setdefault(name, FakeCollection(self, name))

    async def list_collection_names(self, filter: dict[str, Any] | None = None) -> list[str]:
        self.client.record("list_collection_names", self.name, filter)
        if filter and "name" in filter:
            return [name for name in self.collection_names if name == filter["name"]]
        return list(self.collection_names)

    async def create_collection(self, name: str) -> FakeCollection:
        self.client.record("create_collection", self.name, name)
        self.collection_names.append(name)
        self.client.unavailable_handles.discard((self.name, name))
        return self.get_collection(name)


class FakeMotorClient:
    """
    In-memory stand-in for ``AsyncIOMotorClient``.

    Every driver call is appended to ``calls``. ``fail_on`` makes the
    named operation raise a given exception.
    """

    def __init__(self, connection_string: str = "mongodb://fake:27017") -> None:
        self.connection_string = connection_string
        self.calls: list[tuple[Any, ...]] = []
        self.failures: dict[str, BaseException] = {}
        self.database_names: list[str] = []
        self.unavailable_handles: set[tuple[str, str]] = set()
        self.closed = False
        self._databases: dict[str, FakeDatabase] = {}

    def fail_on(self, operation: str, error: BaseException) -> None:
        self.failures[operation] = error

    def record(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, *args))
        if operation in self.failures:
            raise self.failures[operation]

    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]

    async def list_database_names(self) -> list[str]:
        self.record("list_database_names")
        return list(self.database_names)

    def get_database(self, name: str) -> FakeDatabase:
        self.record("get_database", name)
        return self._databases.setdefault(name, FakeDatabase(self, name))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> FakeMotorClient:
    """A fresh fake driver client."""
    return FakeMotorClient()


@pytest.fixture
def facade(fake_client: FakeMotorClient) -> MongoDBClient:
    """A facade wired to the fake driver client."""
    return MongoDBClient("mongodb://fake:27017", client_factory=lambda _: fake_client)


@pytest.fixture
def clean_config() -> Generator[None, None, None]:
    """
    Reset the configuration and the environment variables it reads.

    Restores the original environment afterward.
    """
    keys = [
        "MONGO_FACADE_MODE",
        "MONGO_FACADE_CONNECTION_STRING",
        "MONGO_FACADE_DEFAULT_DATABASE",
        "MONGO_FACADE_DOCUMENT_FILTER",
        "MONGO_FACADE_LOG_LEVEL",
        "MONGO_FACADE_CONFIG",
        "MONGO_FACADE_SECRETS_FILE",
    ]
    original_env = {key: os.environ.pop(key, None) for key in keys}
    MongoFacadeConfig._config = {}
    MongoFacadeConfig._initialized = False

    yield

    for key, value in original_env.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)
    MongoFacadeConfig._config = {}
    MongoFacadeConfig._initialized = False


@pytest.fixture
def dev_mode_env(clean_config: None) -> Generator[None, None, None]:
    """
    Set up environment for development mode testing.

    This fixture ensures that the MONGO_FACADE_MODE environment variable
    is set to 'DEV' during the test.
    """
    os.environ["MONGO_FACADE_MODE"] = "DEV"
    MongoFacadeConfig.initialize()
    yield


@pytest.fixture
def prod_mode_env(clean_config: None) -> Generator[None, None, None]:
    """
    Set up environment for production mode testing.

    This fixture ensures that the MONGO_FACADE_MODE environment variable
    is set to 'PROD' during the test.
    """
    os.environ["MONGO_FACADE_MODE"] = "PROD"
    MongoFacadeConfig.initialize()
    yield
