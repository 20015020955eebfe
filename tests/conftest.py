import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api import app
from auth.auth import create_user
from auth.database import Base, get_db
from auth.schemas import RegisterModel
from categories.models import Categories
from unit_works.models import UnitWorks

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client):
    """Create a user with the given role directly in the store and log them in."""
    counter = {"n": 0}

    def _make(role="user", name=None, unit_work_id=None):
        counter["n"] += 1
        email = f"{role}{counter['n']}@lapor.id"
        session = TestingSessionLocal()
        try:
            user = create_user(
                session,
                RegisterModel(name=name or f"{role.title()} {counter['n']}", email=email, password="rahasia123"),
                role=role,
                unit_work_id=uuid.UUID(unit_work_id) if unit_work_id else None,
            )
            user_id = user.id
        finally:
            session.close()

        res = client.post("/login", json={"email": email, "password": "rahasia123"})
        assert res.status_code == 200, res.text
        token = res.json()["data"]["access_token"]
        return {"id": str(user_id), "email": email, "token": token, "headers": auth_header(token)}

    return _make


@pytest.fixture
def category_id():
    session = TestingSessionLocal()
    try:
        category = Categories(name="Jalan Rusak", image="https://cdn.lapor.id/jalan.png")
        session.add(category)
        session.commit()
        return str(category.id)
    finally:
        session.close()


@pytest.fixture
def make_unit():
    def _make(name="Dinas PU"):
        session = TestingSessionLocal()
        try:
            unit = UnitWorks(name=name, image=[], detail="Pekerjaan umum")
            session.add(unit)
            session.commit()
            return str(unit.id)
        finally:
            session.close()

    return _make


@pytest.fixture
def report_payload(category_id):
    def _payload(**overrides):
        payload = {
            "title": "Jalan berlubang",
            "description": "Lubang besar di depan pasar",
            "address": "Jl. Merdeka 10",
            "latitude": "-6.200000",
            "longitude": "106.816666",
            "category": category_id,
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def create_report(client, report_payload):
    def _create(headers, **overrides):
        res = client.post("/reports", json=report_payload(**overrides), headers=headers)
        assert res.status_code == 200, res.text
        return res.json()["data"]["reports"]

    return _create
