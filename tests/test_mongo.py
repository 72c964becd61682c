import pytest
from pymongo.errors import ServerSelectionTimeoutError

from app.core.config import settings
from app.db import mongo


class UnreachableAdmin:
    async def command(self, name):
        raise ServerSelectionTimeoutError("no servers")


class UnreachableClient:
    instances = []

    def __init__(self, url, **options):
        self.options = options
        self.admin = UnreachableAdmin()
        self.closed = False
        UnreachableClient.instances.append(self)

    def close(self):
        self.closed = True


@pytest.mark.asyncio
async def test_connect_gives_up_after_configured_retries(monkeypatch):
    UnreachableClient.instances = []
    delays = []

    async def no_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(mongo, "AsyncIOMotorClient", UnreachableClient)
    monkeypatch.setattr(mongo.asyncio, "sleep", no_sleep)
    monkeypatch.setattr(settings, "MONGODB_CONNECT_RETRIES", 3)

    with pytest.raises(ConnectionError):
        await mongo.connect_to_mongo()

    assert len(UnreachableClient.instances) == 3
    assert all(client.closed for client in UnreachableClient.instances)
    assert delays == [1, 2]
    assert mongo._client is None


def test_collection_access_requires_connection():
    with pytest.raises(RuntimeError):
        mongo.get_users_collection()
