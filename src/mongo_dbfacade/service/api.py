"""
Mongo DB Facade Service API implementation.

This module provides a REST API over the facade, exposing database and
collection enumeration, document queries, bulk inserts and
create-if-absent for collections.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Dict, List, NoReturn, Optional

import uvicorn
from bson import ObjectId
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field

from ..config import MongoFacadeConfig
from ..db.mongodb import MongoDBClient
from ..errors import ClientOperationFailed, InvalidArgument


logger = logging.getLogger(__name__)


# API models for requests and responses
class QueryPayload(BaseModel):
    """Payload for querying documents."""

    filter: Dict[str, Any] = Field(default_factory=dict)


class InsertPayload(BaseModel):
    """Payload for a bulk insert."""

    documents: List[Dict[str, Any]]


class InsertResult(BaseModel):
    """Result of a bulk insert."""

    inserted: int


class CollectionInfo(BaseModel):
    """Description of a collection handle."""

    database: str
    collection: str
    full_name: str


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Close the shared facade when the app shuts down.

    The facade itself is created lazily by ``get_db``.
    """
    yield

    db = getattr(app.state, "db", None)
    if db is not None:
        logger.info("Closing MongoDB client")
        db.close()
        del app.state.db


# Initialize the FastAPI app
app = FastAPI(
    title="Mongo DB Facade Service",
    description="A narrow REST interface over a MongoDB server",
    version="0.1.0",
    lifespan=lifespan,
)


def get_db(request: Request) -> MongoDBClient:
    """
    Get the facade shared by all requests to this app.

    The facade is built from configuration on first use and kept on the
    app state, so one driver connection pool serves the whole process.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        db = MongoDBClient.from_config()
        request.app.state.db = db
    return db


def _encode_documents(documents: list) -> list:
    """Make BSON values JSON safe."""
    return jsonable_encoder(documents, custom_encoder={ObjectId: str})


def _raise_http_error(error: Exception, action: str) -> NoReturn:
    """
    Translate a facade error into an HTTP error.

    Args:
        error: The error raised by the facade
        action: What was being attempted, for the generic message
    """
    if isinstance(error, InvalidArgument):
        raise HTTPException(status_code=400, detail=str(error))

    logger.error("Failed to %s: %s", action, error)

    # In development mode, include the error details
    if MongoFacadeConfig.is_dev_mode():
        raise HTTPException(status_code=500, detail=str(error))
    raise HTTPException(status_code=500, detail=f"Failed to {action}")


# API endpoints
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """
    Check the health of the service.

    Returns:
        Health status
    """
    return {"status": "ok", "mode": MongoFacadeConfig.get("mode")}


@app.get("/databases")
async def list_databases(db: MongoDBClient = Depends(get_db)) -> Dict[str, List[str]]:
    """List the databases on the server."""
    try:
        return {"databases": await db.list_databases()}
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "list databases")


@app.get("/databases/{database}/collections")
async def list_collections(database: str, db: MongoDBClient = Depends(get_db)) -> Dict[str, Any]:
    """
    List the collections in a database.

    Args:
        database: The database name
        db: The facade

    Returns:
        The database name and its collection names
    """
    try:
        collections = await db.list_collections(database)
        return {"database": database, "collections": collections}
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "list collections")


@app.put("/databases/{database}/collections/{collection}", response_model=CollectionInfo)
async def create_collection(
    database: str,
    collection: str,
    db: MongoDBClient = Depends(get_db)
) -> CollectionInfo:
    """
    Create a collection unless it already exists.

    Args:
        database: The database name
        collection: The collection name
        db: The facade

    Returns:
        Description of the collection handle
    """
    try:
        handle = await db.create_collection_if_not_exists(collection, database)
        return CollectionInfo(database=database, collection=collection, full_name=handle.full_name)
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "create collection")


@app.get("/databases/{database}/collections/{collection}/documents")
async def list_documents(
    database: str,
    collection: str,
    db: MongoDBClient = Depends(get_db)
) -> Dict[str, Any]:
    """List the documents of a collection addressed by name."""
    try:
        documents = await db.list_documents(database, collection)
        return {"documents": _encode_documents(documents)}
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "list documents")


@app.post("/databases/{database}/collections/{collection}/query")
async def run_query(
    database: str,
    collection: str,
    payload: Optional[QueryPayload] = None,
    db: MongoDBClient = Depends(get_db)
) -> Dict[str, Any]:
    """
    Run a query against a collection.

    Args:
        database: The database name
        collection: The collection name
        payload: Query payload containing the filter
        db: The facade

    Returns:
        The matching documents
    """
    try:
        handle = db.get_collection(database, collection)
        documents = await db.find_documents(handle, payload.filter if payload else {})
        return {"documents": _encode_documents(documents)}
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "run query")


@app.post("/databases/{database}/collections/{collection}/documents", response_model=InsertResult)
async def add_documents(
    database: str,
    collection: str,
    payload: InsertPayload,
    db: MongoDBClient = Depends(get_db)
) -> InsertResult:
    """
    Insert documents into a collection.

    Args:
        database: The database name
        collection: The collection name
        payload: The documents to insert
        db: The facade

    Returns:
        The number of documents submitted
    """
    try:
        handle = db.get_collection(database, collection)
        inserted = await db.add_documents(handle, payload.documents)
        return InsertResult(inserted=inserted)
    except (InvalidArgument, ClientOperationFailed) as e:
        _raise_http_error(e, "insert documents")


def start_api(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
    """
    Start the API server.

    Args:
        host: Host to bind to
        port: Port to bind to
        reload: Whether to enable auto-reload
    """
    uvicorn.run(
        "mongo_dbfacade.service.api:app",
        host=host,
        port=port,
        reload=reload,
    )
