"""
Typed collection handle.

A ``TypedCollection`` pairs a driver collection with the document type
the caller wants to read and write. It holds no state of its own beyond
those two references, so it is cheap to recreate on every call.
"""

from collections.abc import Mapping
from typing import Generic, TypeVar

from pydantic import BaseModel

from ..models.document import MongoDocument
from ..validation import require_document_type


T = TypeVar("T")


class TypedCollection(Generic[T]):
    """
    A collection handle bound to a document type.

    The document type is either ``dict``, in which case documents are
    passed through exactly as the driver returns them, or a pydantic
    model class, in which case each raw document is validated into an
    instance of it.
    """

    def __init__(self, collection: object, document_type: type[T] = dict) -> None:
        """
        Initialize the handle.

        Args:
            collection: The driver's collection object
            document_type: ``dict`` or a pydantic ``BaseModel`` subclass

        Raises:
            InvalidArgument: If the document type is neither
        """
        self.collection = collection
        self.document_type = require_document_type(document_type)

    @property
    def name(self) -> str:
        return self.collection.name

    @property
    def database_name(self) -> str:
        return self.collection.database.name

    @property
    def full_name(self) -> str:
        """The ``database.collection`` namespace."""
        return self.collection.full_name

    def decode(self, raw: Mapping[str, object]) -> T:
        """
        Convert a raw document into the handle's document type.

        Args:
            raw: A document as returned by the driver

        Returns:
            The raw document itself for ``dict`` handles, otherwise a
            validated model instance
        """
        if self.document_type is dict:
            return raw
        return self.document_type.model_validate(raw)

    def encode(self, document: object) -> object:
        """
        Convert a document into what the driver inserts.

        Models are dumped by alias; anything else is handed over as is.
        """
        if isinstance(document, MongoDocument):
            return document.to_document()
        if isinstance(document, BaseModel):
            return document.model_dump(by_alias=True)
        return document

    def __repr__(self) -> str:
        return f"TypedCollection({self.full_name!r}, document_type={self.document_type.__name__})"
