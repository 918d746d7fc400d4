"""
Tests for the typed collection handle.
"""

import pytest
from bson import ObjectId
from pydantic import BaseModel

from mongo_dbfacade.db.collection import TypedCollection
from mongo_dbfacade.errors import InvalidArgument
from mongo_dbfacade.models import MongoDocument


class _Author(MongoDocument):
    """Typed document for handle tests."""

    name: str
    born: int | None = None


class _Plain(BaseModel):
    """A pydantic model that does not derive from MongoDocument."""

    name: str


@pytest.fixture
def authors(fake_client):
    return fake_client.get_database("library").get_collection("authors")


def test_names(authors) -> None:
    handle = TypedCollection(authors)

    assert handle.name == "authors"
    assert handle.database_name == "library"
    assert handle.full_name == "library.authors"
    assert "library.authors" in repr(handle)


def test_rejects_unsupported_document_type(authors) -> None:
    with pytest.raises(InvalidArgument) as excinfo:
        TypedCollection(authors, list)

    assert excinfo.value.argument == "document_type"


def test_dict_documents_pass_through(authors) -> None:
    handle = TypedCollection(authors)
    raw = {"_id": ObjectId(), "name": "Le Guin"}

    assert handle.decode(raw) is raw
    assert handle.encode(raw) is raw


def test_decode_model(authors) -> None:
    handle = TypedCollection(authors, _Author)
    object_id = ObjectId()

    author = handle.decode({"_id": object_id, "name": "Lem", "born": 1921})

    assert author.id == str(object_id)
    assert author.name == "Lem"
    assert author.born == 1921


def test_encode_plain_model(authors) -> None:
    handle = TypedCollection(authors, _Plain)

    assert handle.encode(_Plain(name="Austen")) == {"name": "Austen"}
