"""Storefront database management CLI.

Provides commands to create indexes, drop collections and seed the default
admin account and categories.

Usage:
    python src/manage.py setup-db   # Create all indexes
    python src/manage.py drop-db    # Drop all collections
    python src/manage.py seed       # Create the admin user and default categories
"""

import argparse
import sys

from catalogue.category.category import Category
from catalogue.category.repository import CategoryRepository
from identity.security import hash_password
from identity.user.repository import UserRepository
from identity.user.user import User, UserRole
from shared.config import get_settings
from shared.database import drop_db, get_database, setup_db
from shared.logging import configure_logging, get_logger

logger = get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Electronics", "slug": "electronics", "description": "Electronic devices and accessories"},
    {"name": "Clothing", "slug": "clothing", "description": "Fashion and apparel"},
    {"name": "Books", "slug": "books", "description": "Books and educational materials"},
    {"name": "Home & Garden", "slug": "home-garden", "description": "Home improvement and garden supplies"},
]


def setup_database(database=None):
    """Create every index the application relies on."""
    database = database if database is not None else get_database()
    print(f"Creating indexes in {database.name}...")
    setup_db(database)
    print("Done.")


def drop_database(database=None):
    database = database if database is not None else get_database()
    print(f"Dropping collections in {database.name}...")
    drop_db(database)
    print("Done.")


def seed_database(database=None):
    """Create the admin account and default categories. Existing records are left alone."""
    database = database if database is not None else get_database()
    settings = get_settings()

    users = UserRepository(database)
    if users.by_email(settings.admin_email) is None:
        admin = User.register(
            first_name="Admin",
            last_name="User",
            email=settings.admin_email,
            password_hash=hash_password(settings.admin_password),
            role=UserRole.ADMIN,
        )
        admin.email_verified = True
        users.add(admin)
        print(f"  Created admin user {admin.email}")

    categories = CategoryRepository(database)
    for sort_order, data in enumerate(DEFAULT_CATEGORIES, start=1):
        if categories.find_one_by(slug=data["slug"]) is None:
            categories.add(Category.create(sort_order=sort_order, **data))
            print(f"  Created category {data['name']}")

    logger.info("Database seeded", database=database.name)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database indexes")
    subparsers.add_parser("drop-db", help="Drop all collections")
    subparsers.add_parser("seed", help="Create the admin user and default categories")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
