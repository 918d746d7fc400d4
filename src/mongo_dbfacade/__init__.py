"""
Mongo DB Facade - a narrow asynchronous interface over MongoDB.

This package exposes the core operations of the Motor driver behind a
small facade that turns every driver failure into one exception type.
"""

from .config import MongoFacadeConfig
from .db import MongoDBClient, TypedCollection
from .errors import ClientOperationFailed, InvalidArgument
from .models import MongoDocument

__version__ = "0.1.0"

__all__ = [
    "MongoDBClient",
    "TypedCollection",
    "MongoDocument",
    "MongoFacadeConfig",
    "ClientOperationFailed",
    "InvalidArgument",
]
