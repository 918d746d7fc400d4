"""
Mongo DB Facade Service API.

This module provides the REST API for the facade, allowing HTTP clients
to enumerate, query and insert into a MongoDB server.
"""

from .api import app, start_api, get_db

__all__ = ["app", "start_api", "get_db"]
