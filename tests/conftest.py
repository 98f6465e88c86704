"""
Shared fixtures: a fresh SQLite database per test, sessions, and an HTTP client
"""
import os

# Must be set before chaifi.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOGLEVEL", "WARNING")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from chaifi.database.models.menu_item import MenuItem
from chaifi.database.session import Store
from chaifi.main import create_app


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'chaifi-test.db'}"


# ─── Database ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def store(tmp_path):
    """Connected store on an empty database (no seeding)"""
    store = Store(sqlite_url(tmp_path), seed=False)
    await store.connect()
    yield store
    await store.disconnect()


@pytest_asyncio.fixture
async def db(store):
    async with store.session() as session:
        yield session


@pytest_asyncio.fixture
async def tea(db):
    item = MenuItem(name="Tea", price_cents=1000, category="Tea", stock_quantity=10, available=True)
    db.add(item)
    await db.commit()
    return item


@pytest_asyncio.fixture
async def samosa(db):
    item = MenuItem(name="Samosa", price_cents=2000, category="Snacks", stock_quantity=5, available=True)
    db.add(item)
    await db.commit()
    return item


# ─── HTTP ──────────────────────────────────────────────────────────────────────
@pytest.fixture
def client(tmp_path):
    """TestClient on a seeded database; the lifespan connects and disconnects the store"""
    app = create_app(Store(sqlite_url(tmp_path)))
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, username: str, password: str) -> dict:
    r = client.post("/api/v1/auth/token", data={"username": username, "password": password})
    assert r.status_code == 200, f"Login failed: {r.text}"
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin@2020")


@pytest.fixture
def staff_headers(client):
    return login(client, "Chai-fi", "Chai-fi@2025")
