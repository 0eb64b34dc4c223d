import os
from typing import Optional

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.database import Database

DEFAULT_DB_NAME = 'event-planner'


def get_database(dbname: Optional[str] = None) -> Database:
    # MONGODB_URI is required, MONGODB_DB picks the database
    load_dotenv()

    connection_string = os.getenv("MONGODB_URI")
    if not connection_string:
        raise ValueError("MongoDB URI not found in .env file")

    client = MongoClient(connection_string)
    return client[dbname or os.getenv("MONGODB_DB", DEFAULT_DB_NAME)]


def get_optional_database(dbname: Optional[str] = None) -> Optional[Database]:
    """The audit log is optional: None when MONGODB_URI is not configured."""
    load_dotenv()
    if not os.getenv("MONGODB_URI"):
        return None
    return get_database(dbname)
