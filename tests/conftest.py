import os

# Cheap hashing for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.config import settings
from app.db import mongo
from app.main import app


@pytest.fixture
def database():
    """
    Installs an in-memory Motor database in place of the real connection.
    """
    client = AsyncMongoMockClient()
    mongo._client = client
    mongo._database = client[settings.MONGODB_DB_NAME]
    yield mongo._database
    mongo._client = None
    mongo._database = None


@pytest.fixture
def users(database):
    return database[settings.USERS_COLLECTION]


@pytest.fixture
def client(database):
    # No context manager: the lifespan would connect to a real MongoDB
    return TestClient(app)


@pytest.fixture
def alice():
    return {
        "name": "Alice Doe",
        "email": "a@b.com",
        "address": "123 Main Street",
        "password": "Secret1!",
        "mobile_number": "9876543210",
    }
