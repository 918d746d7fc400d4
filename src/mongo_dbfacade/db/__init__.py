"""
Database integration for the Mongo DB Facade.

This module provides the asynchronous MongoDB client facade and the
typed collection handles it hands out.
"""

from .collection import TypedCollection
from .mongodb import MongoDBClient

__all__ = ["MongoDBClient", "TypedCollection"]
