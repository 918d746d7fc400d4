"""
MongoDB client facade.

This module provides a narrow asynchronous interface over the Motor
driver. Every operation delegates to the driver and rewraps whatever the
driver raises into a single ``ClientOperationFailed`` type, keeping the
original exception as its cause. Argument checks run before any I/O and
raise ``InvalidArgument`` directly.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import CollectionInvalid

from ..config import MongoFacadeConfig
from ..errors import ClientOperationFailed
from ..validation import require_document_type, require_not_empty, require_not_none
from .collection import TypedCollection


logger = logging.getLogger(__name__)

T = TypeVar("T")

LIST_DATABASES_FAILED = "Failed to get the database names due to exception."
CREATE_COLLECTION_FAILED = "Failed to create mongoDB collection in database {database}"


class MongoDBClient:
    """
    Asynchronous facade over a MongoDB client.

    One instance owns one driver client, created eagerly from the
    connection string. No connectivity check is made at construction;
    connection problems surface on the first real call. The facade holds
    no other state, so concurrent calls on one instance are safe as far
    as the driver's own client is.
    """

    def __init__(
        self,
        connection_string: str,
        client_factory: Callable[[str], object] | None = None,
        match_all_by_name: bool = False
    ) -> None:
        """
        Initialize the facade.

        Args:
            connection_string: MongoDB connection string
            client_factory: Callable building the driver client from the
                connection string. Defaults to ``AsyncIOMotorClient``.
            match_all_by_name: Use an empty filter in ``list_documents``
                instead of passing the collection name through as the filter

        Raises:
            InvalidArgument: If the connection string is missing or empty
        """
        require_not_empty(connection_string, "connection_string")

        factory = client_factory or AsyncIOMotorClient
        self._client = factory(connection_string)
        self.match_all_by_name = match_all_by_name

    @classmethod
    def from_config(cls, client_factory: Callable[[str], object] | None = None) -> "MongoDBClient":
        """
        Build a facade from ``MongoFacadeConfig``.

        Args:
            client_factory: Optional driver client factory

        Returns:
            A new facade bound to the configured connection string
        """
        return cls(
            MongoFacadeConfig.get_connection_string(),
            client_factory=client_factory,
            match_all_by_name=MongoFacadeConfig.is_match_all_by_name()
        )

    @property
    def client(self) -> object:
        """The underlying driver client."""
        return self._client

    def _wrap(self, error: Exception, message: str | None = None) -> ClientOperationFailed:
        """Build the wrapper exception for a driver fault."""
        logger.debug("MongoDB operation failed: %s", message or type(error).__name__, exc_info=error)
        return ClientOperationFailed(message, error)

    async def list_databases(self) -> list[str]:
        """
        Get the names of the databases on the server.

        Returns:
            Database names in the order the server reports them

        Raises:
            ClientOperationFailed: If the driver raises
        """
        try:
            names = await self._client.list_database_names()
            return list(names)
        except Exception as e:
            raise self._wrap(e, LIST_DATABASES_FAILED) from e

    async def list_collections(self, database_name: str) -> list[str]:
        """
        Get the names of the collections in a database.

        Args:
            database_name: The database name

        Returns:
            Collection names in the order the server reports them

        Raises:
            InvalidArgument: If the database name is empty
            ClientOperationFailed: If the driver raises
        """
        require_not_empty(database_name, "database_name")

        try:
            names = await self._client.get_database(database_name).list_collection_names()
            return list(names)
        except Exception as e:
            raise self._wrap(e) from e

    def get_collection(
        self,
        database: str,
        collection: str,
        document_type: type[T] = dict
    ) -> TypedCollection[T]:
        """
        Get a typed handle for a collection.

        Deriving the handle is local; nothing is sent to the server.

        Args:
            database: The database name
            collection: The collection name
            document_type: ``dict`` or a pydantic model class

        Returns:
            The collection handle

        Raises:
            InvalidArgument: If either name is empty or the document
                type is unsupported
            ClientOperationFailed: If the handle cannot be built
        """
        require_not_empty(database, "database")
        require_not_empty(collection, "collection")
        require_document_type(document_type)

        try:
            driver_collection = self._client.get_database(database).get_collection(collection)
            return TypedCollection(driver_collection, document_type)
        except Exception as e:
            raise self._wrap(e) from e

    async def list_documents(
        self,
        database: str,
        collection: str,
        document_type: type[T] = dict
    ) -> list[T]:
        """
        Get the documents of a collection addressed by name.

        Unless the facade was built with ``match_all_by_name``, the
        collection name itself is passed to the driver as the query
        filter.

        Args:
            database: The database name
            collection: The collection name
            document_type: ``dict`` or a pydantic model class

        Returns:
            The matching documents

        Raises:
            InvalidArgument: If either name is empty or the document
                type is unsupported
            ClientOperationFailed: If the driver raises
        """
        require_not_empty(database, "database")
        require_not_empty(collection, "collection")
        require_document_type(document_type)

        try:
            handle = TypedCollection(
                self._client.get_database(database).get_collection(collection),
                document_type
            )
            query = {} if self.match_all_by_name else collection
            raw_documents = await handle.collection.find(query).to_list(length=None)
            return [handle.decode(document) for document in raw_documents]
        except Exception as e:
            raise self._wrap(e) from e

    async def find_documents(
        self,
        collection: TypedCollection[T],
        filter: Mapping[str, object]
    ) -> list[T]:
        """
        Get the documents of a collection matching a filter.

        Args:
            collection: A handle from ``get_collection``. A bare driver
                collection is accepted and read as dicts.
            filter: The query filter, passed to the driver unchanged

        Returns:
            The matching documents

        Raises:
            InvalidArgument: If the collection or the filter is None
            ClientOperationFailed: If the driver raises
        """
        require_not_none(collection, "collection")
        require_not_none(filter, "filter")

        try:
            handle = collection if isinstance(collection, TypedCollection) else TypedCollection(collection)
            raw_documents = await handle.collection.find(filter).to_list(length=None)
            return [handle.decode(document) for document in raw_documents]
        except Exception as e:
            raise self._wrap(e) from e

    async def add_documents(self, collection: TypedCollection[T], documents: Iterable[T]) -> int:
        """
        Insert documents into a collection in one bulk call.

        The driver is called even for an empty list. No atomicity is added:
        if the driver fails part way, some documents may already be stored.

        Args:
            collection: A handle from ``get_collection``, or a bare driver
                collection
            documents: The documents to insert

        Returns:
            The number of documents submitted for insertion

        Raises:
            InvalidArgument: If the collection or the documents are None
            ClientOperationFailed: If the driver raises
        """
        require_not_none(collection, "collection")
        require_not_none(documents, "documents")

        try:
            handle = collection if isinstance(collection, TypedCollection) else TypedCollection(collection)
            encoded = [handle.encode(document) for document in documents]
            await handle.collection.insert_many(encoded)
            return len(encoded)
        except Exception as e:
            raise self._wrap(e) from e

    async def create_collection_if_not_exists(
        self,
        collection_name: str,
        database_name: str,
        document_type: type[T] = dict,
        check_server: bool = False
    ) -> TypedCollection[T]:
        """
        Get a collection handle, creating the collection when needed.

        By default the database reference is asked for a handle and the
        collection is only created on the server when none is returned.
        With ``check_server`` the server's collection list decides instead.

        Args:
            collection_name: The collection name
            database_name: The database name
            document_type: ``dict`` or a pydantic model class
            check_server: Ask the server whether the collection exists

        Returns:
            The existing or newly created collection handle

        Raises:
            InvalidArgument: If either name is empty or the document
                type is unsupported
            ClientOperationFailed: If the driver raises
        """
        require_not_empty(collection_name, "collection_name")
        require_not_empty(database_name, "database_name")
        require_document_type(document_type)

        try:
            database = self._client.get_database(database_name)

            if check_server:
                existing = await database.list_collection_names(filter={"name": collection_name})
                if collection_name not in existing:
                    logger.info("Creating collection %s.%s", database_name, collection_name)
                    try:
                        await database.create_collection(collection_name)
                    except CollectionInvalid:
                        # Created by a concurrent caller since the listing
                        logger.debug("Collection %s.%s already exists", database_name, collection_name)
                return TypedCollection(database.get_collection(collection_name), document_type)

            collection = database.get_collection(collection_name)
            if collection is not None:
                return TypedCollection(collection, document_type)

            await database.create_collection(collection_name)
            return TypedCollection(database.get_collection(collection_name), document_type)
        except Exception as e:
            raise self._wrap(e, CREATE_COLLECTION_FAILED.format(database=database_name)) from e

    def close(self) -> None:
        """
        Close the driver client and its connection pool.
        """
        self._client.close()
