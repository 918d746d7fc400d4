"""
Document models for the Mongo DB Facade.
"""

from .document import MongoDocument

__all__ = ["MongoDocument"]
