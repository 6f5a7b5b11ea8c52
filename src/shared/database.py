"""MongoDB connection handling and schema (index) management.

The application holds one ``pymongo.database.Database`` for the lifetime of
the process. Tests install an in-memory client through ``init_database``.
"""

import pymongo
from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database

from shared.config import get_settings

USERS = "users"
PRODUCTS = "products"
CATEGORIES = "categories"
CARTS = "carts"
ORDERS = "orders"
COUNTERS = "counters"

ALL_COLLECTIONS = (USERS, PRODUCTS, CATEGORIES, CARTS, ORDERS, COUNTERS)

_database: Database | None = None


def new_id() -> str:
    """Generate a document identifier (a stringified ObjectId)."""
    return str(ObjectId())


def is_object_id(value) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value) and len(value) == 24


def init_database(client=None, name=None) -> Database:
    """Bind the process-wide database handle, connecting if no client is given."""
    global _database
    settings = get_settings()
    if client is None:
        client = MongoClient(settings.mongo_uri, tz_aware=True)
    _database = client[name or settings.mongo_db_name]
    return _database


def get_database() -> Database:
    """Return the bound database; usable as a FastAPI dependency."""
    if _database is None:
        return init_database()
    return _database


def close_database() -> None:
    global _database
    if _database is not None:
        _database.client.close()
    _database = None


def setup_db(database: Database) -> None:
    """Create the indexes backing every uniqueness and lookup rule."""
    database[USERS].create_index("email", unique=True)

    database[PRODUCTS].create_index("sku", unique=True)
    database[PRODUCTS].create_index("slug", unique=True)
    database[PRODUCTS].create_index("category_id")
    database[PRODUCTS].create_index([("status", pymongo.ASCENDING), ("featured", pymongo.ASCENDING)])
    database[PRODUCTS].create_index("price")
    database[PRODUCTS].create_index([("created_at", pymongo.DESCENDING)])
    database[PRODUCTS].create_index([("name", pymongo.TEXT), ("description", pymongo.TEXT)], name="product_text")

    database[CATEGORIES].create_index("slug", unique=True)

    database[CARTS].create_index("user_id", unique=True)
    database[CARTS].create_index("session_token", unique=True, sparse=True)
    database[CARTS].create_index("expires_at", expireAfterSeconds=0)

    database[ORDERS].create_index("order_number", unique=True)
    database[ORDERS].create_index("user_id")
    database[ORDERS].create_index("status")
    database[ORDERS].create_index([("created_at", pymongo.DESCENDING)])


def drop_db(database: Database) -> None:
    """Drop every collection owned by the application."""
    for name in ALL_COLLECTIONS:
        database.drop_collection(name)
