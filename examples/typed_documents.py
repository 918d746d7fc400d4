"""
Example usage of the facade with typed documents.

This example shows how to define a document model and read and write it
through the facade. It needs a MongoDB server at the configured
connection string (``MONGO_FACADE_CONNECTION_STRING``).
"""

import asyncio
from typing import List, Optional

from pydantic import Field

from mongo_dbfacade import ClientOperationFailed, MongoDBClient, MongoDocument


class User(MongoDocument):
    """
    User document.

    The ``id`` field inherited from MongoDocument maps to ``_id``.
    """

    name: str
    email: str
    bio: Optional[str] = None
    roles: List[str] = Field(default_factory=list)


async def main() -> None:
    """Example usage of the User model."""
    db = MongoDBClient.from_config()
    try:
        users = await db.create_collection_if_not_exists("users", "examples", User, check_server=True)

        await db.add_documents(users, [
            User(name="John Doe", email="john@example.com", roles=["admin"]),
            User(name="Jane Roe", email="jane@example.com"),
        ])

        for user in await db.find_documents(users, {"roles": "admin"}):
            print(f"{user.id}: {user.name} <{user.email}> roles={user.roles}")
    except ClientOperationFailed as e:
        print(f"Operation failed: {e}")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(main())
