#!/usr/bin/env python3
"""
Mongo DB Facade Service entry point.

This script starts the Mongo DB Facade Service API server or demonstrates
the facade against a live MongoDB server based on command line arguments.
"""

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime

from pydantic import Field

from mongo_dbfacade.config import MongoFacadeConfig
from mongo_dbfacade.db.mongodb import MongoDBClient
from mongo_dbfacade.errors import ClientOperationFailed
from mongo_dbfacade.logging_config import configure_logging
from mongo_dbfacade.models import MongoDocument
from mongo_dbfacade.service import start_api


logger = logging.getLogger("mongo_dbfacade.main")


# Example model for demonstration
class UserProfile(MongoDocument):
    """Example user profile model for demonstration."""

    username: str
    email: str
    full_name: str
    age: int
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)


def parse_args() -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="Mongo DB Facade Service")

    # API server options
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: service.host from config)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: service.port from config)"
    )

    parser.add_argument(
        "--config",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--mode",
        choices=["DEV", "PROD"],
        help="Override operation mode (DEV or PROD)"
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )

    # Demo options
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run a demonstration of the facade against the configured server"
    )

    parser.add_argument(
        "--demo-database",
        default=None,
        help="Database used by the demo (default: database.default_database)"
    )

    parser.add_argument(
        "--demo-collection",
        default="user_profiles",
        help="Collection used by the demo (default: user_profiles)"
    )

    return parser.parse_args()


async def run_demo(database: str, collection: str) -> None:
    """
    Run a demonstration of the facade.

    Args:
        database: Database to use
        collection: Collection to create, fill and query
    """
    print("Running Mongo DB Facade demo...")

    db = MongoDBClient.from_config()
    try:
        print(f"Databases: {', '.join(await db.list_databases())}")

        users = await db.create_collection_if_not_exists(
            collection, database, UserProfile, check_server=True
        )
        print(f"Using collection {users.full_name}")

        profiles = [
            UserProfile(username="jdoe", email="john.doe@example.com", full_name="John Doe", age=32),
            UserProfile(username="asmith", email="alice@example.com", full_name="Alice Smith", age=41),
        ]
        inserted = await db.add_documents(users, profiles)
        print(f"Inserted {inserted} user profiles")

        found = await db.find_documents(users, {"username": "jdoe"})
        print(f"Found {len(found)} user profiles for 'jdoe':")
        for i, user in enumerate(found):
            print(f"  User {i + 1}: {user.full_name} <{user.email}> id={user.id}")

        print(f"Collections in {database}: {', '.join(await db.list_collections(database))}")
    finally:
        db.close()

    print("Demo completed!")


def main() -> None:
    """Main entry point for the Mongo DB Facade Service."""
    args = parse_args()

    # Set environment variables from command line; the reloader's worker
    # process rebuilds its configuration from these
    if args.mode:
        os.environ["MONGO_FACADE_MODE"] = args.mode
    if args.config:
        os.environ["MONGO_FACADE_CONFIG"] = os.path.abspath(args.config)

    # Look for secrets file in standard location
    secrets_file = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".secrets", "db_config.yaml")
    if os.path.exists(secrets_file):
        os.environ["MONGO_FACADE_SECRETS_FILE"] = secrets_file

    MongoFacadeConfig.initialize()

    configure_logging()

    logger.info("Mongo DB Facade Service - %s mode", MongoFacadeConfig.get("mode"))

    if args.demo:
        database = args.demo_database or MongoFacadeConfig.get_default_database()
        try:
            asyncio.run(run_demo(database, args.demo_collection))
        except ClientOperationFailed as e:
            print(f"Demo failed: {e}", file=sys.stderr)
            sys.exit(1)
        return

    host = args.host or MongoFacadeConfig.get("service.host", "0.0.0.0")
    port = args.port or int(MongoFacadeConfig.get("service.port", 8000))
    logger.info("Starting API server on %s:%s", host, port)

    try:
        start_api(host=host, port=port, reload=args.reload)
    except KeyboardInterrupt:
        print("Service stopped")
        sys.exit(0)


if __name__ == "__main__":
    main()
