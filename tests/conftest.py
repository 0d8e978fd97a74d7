import uuid
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from civiceye.database import init_db
from civiceye.models.admin import Admin
from civiceye.models.announcement import Announcement
from civiceye.models.citizen import Citizen
from civiceye.models.issue import Issue, IssueLocation
from civiceye.api.routes.auth import ADMIN_ROLE, CITIZEN_ROLE, create_access_token, get_password_hash
from civiceye.utils.dates import utcnow


@pytest.fixture()
async def db():
    """Fresh in-memory database with every document model registered"""
    client = AsyncMongoMockClient()
    database = client[f"civiceye_test_{uuid.uuid4().hex}"]
    await init_db(database)
    yield database


@pytest.fixture()
async def client(db):
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
async def admin(db):
    account = Admin(
        name="Ward Officer",
        email="officer@civiceye.in",
        password_hash=get_password_hash("admin123"),
    )
    await account.insert()
    return account


@pytest.fixture()
async def citizen(db):
    account = Citizen(
        full_name="Asha Rao",
        email="asha@civiceye.in",
        password_hash=get_password_hash("citizen123"),
    )
    await account.insert()
    return account


@pytest.fixture()
def admin_headers(admin):
    token = create_access_token({"sub": str(admin.id), "role": ADMIN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def citizen_headers(citizen):
    token = create_access_token({"sub": str(citizen.id), "role": CITIZEN_ROLE})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_announcement(db, admin):
    """Insert an announcement; created_at is staggered so ordering is predictable"""
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        fields = {
            "title": f"Notice {counter['n']}",
            "description": "Scheduled works in the ward",
            "location": "Sector 5",
            "pincode": "560021",
            "created_by": admin.id,
            "created_at": utcnow() - timedelta(minutes=100 - counter["n"]),
        }
        fields.update(overrides)
        announcement = Announcement(**fields)
        await announcement.insert()
        return announcement

    return _make


@pytest.fixture()
async def issue(db):
    doc = Issue(
        title="Pothole on 4th Main",
        description="Deep pothole near the bus stop",
        issue_type="Road",
        location=IssueLocation(latitude=12.97, longitude=77.59),
    )
    await doc.insert()
    return doc
