"""Shared pytest fixtures for the gallery API tests."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["PAYMENT_SIMULATION_DELAY_SECONDS"] = "0"

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from gallery.core.auth import ADMIN_ROLE, USER_ROLE, create_access_token  # noqa: E402
from gallery.core.payment_gateway import ChargeResult, get_payment_gateway  # noqa: E402
from gallery.core.security import hash_password  # noqa: E402
from gallery.database import get_session  # noqa: E402
from gallery.main import app  # noqa: E402
from gallery.models.artwork import Artwork, Series  # noqa: E402
from gallery.models.user import User  # noqa: E402

API_BASE_URL = "http://testserver/api"


class FakeGateway:
    """Deterministic stand-in for the STK-push gateway."""

    def __init__(self, succeed: bool = True, error_code: str = "INSUFFICIENT_FUNDS"):
        self.succeed = succeed
        self.error_code = error_code
        self.calls = []

    def charge(self, reference, phone_number, amount):
        self.calls.append((reference, phone_number, amount))
        if self.succeed:
            return ChargeResult(success=True, reference=reference)
        return ChargeResult(success=False, reference=reference, error_code=self.error_code)


@pytest.fixture
def session():
    """In-memory SQLite session shared with the app under test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def gateway():
    """Gateway that accepts every charge."""
    return FakeGateway()


@pytest.fixture
def client(session, gateway):
    """TestClient rooted at the API prefix, wired to the test session."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    yield TestClient(app, base_url=API_BASE_URL, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def _create_user(session, username, email, password, role):
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    """A customer account (password: buyerpass)."""
    return _create_user(session, "buyer", "buyer@example.com", "buyerpass", USER_ROLE)


@pytest.fixture
def admin(session):
    """An admin account (password: adminpass)."""
    return _create_user(session, "curator", "curator@example.com", "adminpass", ADMIN_ROLE)


@pytest.fixture
def user_token(user):
    token, _ = create_access_token(user)
    return token


@pytest.fixture
def admin_token(admin):
    token, _ = create_access_token(admin)
    return token


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def series(session):
    """A series named 'Coastal Light'."""
    series = Series(name="Coastal Light", slug="coastal-light", description="Sea studies")
    session.add(series)
    session.commit()
    session.refresh(series)
    return series


@pytest.fixture
def artworks(session, series):
    """
    Four artworks:
      - 0: Harbour at Dawn, 100, available, in series
      - 1: Salt Marsh, 250, available, in series
      - 2: City Nocturne, 400, available
      - 3: Old Pier, 300, already sold
    """
    rows = [
        Artwork(
            title="Harbour at Dawn",
            artist="Ana Mwangi",
            category="Painting",
            price=Decimal("100.00"),
            image_url="https://cdn.example.com/harbour.jpg",
            medium="Oil",
            year=2021,
            in_gallery=True,
            series_id=series.id,
        ),
        Artwork(
            title="Salt Marsh",
            artist="Ana Mwangi",
            category="Painting",
            price=Decimal("250.00"),
            image_url="https://cdn.example.com/marsh.jpg",
            medium="Watercolor",
            year=2022,
            series_id=series.id,
        ),
        Artwork(
            title="City Nocturne",
            artist="Joseph Otieno",
            category="Photography",
            price=Decimal("400.00"),
            image_url="https://cdn.example.com/nocturne.jpg",
            medium="Print",
            year=2023,
        ),
        Artwork(
            title="Old Pier",
            artist="Joseph Otieno",
            category="Photography",
            price=Decimal("300.00"),
            image_url="https://cdn.example.com/pier.jpg",
            medium="Print",
            year=2020,
            is_available=False,
        ),
    ]
    for row in rows:
        session.add(row)
        session.commit()
        session.refresh(row)
    return rows
