"""
Base model for typed MongoDB documents.

Documents read through the facade are returned as plain dicts unless the
caller names a pydantic model as the document type. ``MongoDocument`` is a
convenient base for such models: it maps the server's ``_id`` onto an
``id`` field and renders ObjectIds as strings.
"""

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MongoDocument(BaseModel):
    """
    Base class for documents stored in a MongoDB collection.

    Subclasses declare their fields as ordinary pydantic fields. Fields
    present in the stored document but not declared on the model are
    ignored when reading.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Any BSON value is a valid _id; only ObjectIds are rendered as strings
    id: Any = Field(default=None, alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_object_id(cls, value: object) -> object:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def to_document(self) -> dict[str, object]:
        """
        Convert the model into a document ready for insertion.

        An unset id is dropped so the server assigns one. A string id that is a
        valid ObjectId hex string is stored as an ObjectId again; any other
        id is stored as is.

        Returns:
            The document keyed by field alias
        """
        document = self.model_dump(by_alias=True)

        object_id = document.get("_id")
        if object_id is None:
            document.pop("_id", None)
        elif isinstance(object_id, str) and ObjectId.is_valid(object_id):
            document["_id"] = ObjectId(object_id)

        return document
