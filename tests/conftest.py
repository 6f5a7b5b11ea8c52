import os
from pathlib import Path

import mongomock
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration environment and configure logging once, before
    any application module reads the settings.
    """
    os.environ["STOREFRONT_ENV"] = session.config.option.env
    os.environ["JWT_SECRET"] = "test-secret"
    os.environ.pop("LOG_DIR", None)

    from shared.config import reset_settings
    from shared.logging import configure_logging

    reset_settings()
    configure_logging()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def mongo_client():
    return mongomock.MongoClient(tz_aware=True)


@pytest.fixture(autouse=True)
def database(mongo_client):
    """Every test starts from empty collections with all indexes in place."""
    from shared.database import drop_db, init_database, setup_db

    db = init_database(client=mongo_client, name="storefront_test")
    setup_db(db)

    yield db

    drop_db(db)


# ---------------------------------------------------------------------------
# Factories shared by the bounded context suites
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user(database):
    from identity.security import hash_password
    from identity.user.repository import UserRepository
    from identity.user.user import User, UserRole

    counter = {"n": 0}

    def _make_user(role=UserRole.CUSTOMER, email=None, password="secret123", is_active=True):
        counter["n"] += 1
        user = User.register(
            first_name="Test",
            last_name=f"User{counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(password),
            role=role,
        )
        user.is_active = is_active
        UserRepository(database).add(user)
        return user

    return _make_user


@pytest.fixture()
def customer(make_user):
    return make_user()


@pytest.fixture()
def admin(make_user):
    from identity.user.user import UserRole

    return make_user(role=UserRole.ADMIN, email="admin@example.com")


@pytest.fixture()
def category(database):
    from catalogue.category.category import Category
    from catalogue.category.repository import CategoryRepository

    category = Category.create(name="Electronics", description="Electronic devices and accessories")
    CategoryRepository(database).add(category)
    return category


@pytest.fixture()
def make_product(database, category):
    from catalogue.product.product import Product
    from catalogue.product.repository import ProductRepository

    counter = {"n": 0}

    def _make_product(**overrides):
        counter["n"] += 1
        data = {
            "name": f"Product {counter['n']}",
            "description": "A product used in tests",
            "price": 10.0,
            "sku": f"SKU-{counter['n']:03d}",
            "quantity": 50,
            "category_id": category.id,
        }
        data.update(overrides)
        product = Product.create(**data)
        ProductRepository(database).add(product)
        return product

    return _make_product


@pytest.fixture()
def app():
    from app import create_app

    return create_app()


@pytest.fixture()
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture()
def auth_headers():
    from identity.security import create_access_token

    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
