import logging
import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from pymongo import MongoClient

# Load environment variables from .env file
load_dotenv(find_dotenv())

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "warmhome"

_client: Optional[MongoClient] = None


def get_client(uri: Optional[str] = None) -> MongoClient:
    """
    Shared MongoClient, created on first use.
    Raises ValueError when no connection string is configured.
    """
    global _client
    if _client is None:
        uri = uri or os.environ.get("MONGODB_URI")
        if not uri:
            raise ValueError("MONGODB_URI environment variable is not set")

        _client = MongoClient(
            uri,
            serverSelectionTimeoutMS=5000,  # 5 second timeout
            connectTimeoutMS=5000
        )
        logger.info("MongoDB client created")
    return _client


def get_database(uri: Optional[str] = None, db_name: Optional[str] = None):
    client = get_client(uri)
    name = db_name or os.environ.get("MONGODB_DB_NAME")
    if name:
        return client[name]
    return client.get_default_database(default=DEFAULT_DB_NAME)


def ping(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error(f"Failed to reach MongoDB: {e}")
        return False
