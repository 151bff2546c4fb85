"""
Pytest configuration and shared fixtures.

Environment variables are set before any turfbook import so settings load
with test values: no demo data, no scheduler, no LLM key.
"""

import os
from datetime import timedelta

import httpx
import pytest

os.environ["SEED_DEMO_DATA"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["DEBUG"] = "false"
os.environ["LLM_API_KEY"] = ""

from turfbook.core.clock import local_today  # noqa: E402
from turfbook.core.database import AsyncSessionLocal, close_db, init_db  # noqa: E402
from turfbook.main import app  # noqa: E402
from turfbook.models.slot import Slot  # noqa: E402
from turfbook.models.user import User  # noqa: E402
from turfbook.schemas.turf import TurfCreate  # noqa: E402
from turfbook.services.turf_service import turf_service  # noqa: E402

TOMORROW = local_today() + timedelta(days=1)

TURF_PAYLOAD = {
    "name": "Riverside Five",
    "location": "Jayanagar, Bangalore",
    "price_per_hour": 1000,
    "images": ["https://placehold.co/600x400.png?text=Riverside"],
    "amenities": ["parking", "floodlights"],
    "description": "Floodlit five-a-side pitch next to the lake.",
}


@pytest.fixture
async def store():
    """Fresh, empty in-memory store for each test."""
    await init_db()
    yield
    await close_db()


@pytest.fixture
async def db(store):
    """A plain session for service-level tests."""
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def owner(db):
    user = User(id="owner-1", name="Olive Owner", email="olive@example.com", role="owner")
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def player(db):
    user = User(id="player-1", name="Priya Player", email="priya@example.com", role="player")
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def other_player(db):
    user = User(id="player-2", name="Rahul Runner", email="rahul@example.com", role="player")
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def turf(db, owner):
    return await turf_service.create_turf(db, TurfCreate(**TURF_PAYLOAD), owner.id)


@pytest.fixture
async def slots(db, turf):
    """Three available hourly slots tomorrow."""
    created = [
        Slot(turf_id=turf.id, date=TOMORROW, time_range=time_range, status="available")
        for time_range in (
            "06:00 PM - 07:00 PM",
            "07:00 PM - 08:00 PM",
            "08:00 PM - 09:00 PM",
        )
    ]
    db.add_all(created)
    await db.commit()
    return created


@pytest.fixture
async def client(store):
    """HTTP client bound to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def login(client, role: str, email: str = None) -> dict:
    """Log in as the demo user for a role and return auth headers."""
    response = await client.post(
        "/auth/login",
        json={"email": email or f"{role}@example.com", "password": "secret123", "role": role},
    )
    assert response.status_code == 200
    return {"X-User-Id": response.json()["id"]}


async def signup(client, name: str, role: str) -> dict:
    response = await client.post(
        "/auth/signup",
        json={
            "name": name,
            "email": f"{name.lower().replace(' ', '.')}@example.com",
            "password": "secret123",
            "role": role,
        },
    )
    assert response.status_code == 201
    return {"X-User-Id": response.json()["id"]}
