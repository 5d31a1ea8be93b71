"""
Pytest Fixtures für die Raumbuchung.

Jeder Test bekommt eine frische SQLite-In-Memory-Datenbank.
"""
import pytest
from datetime import date, datetime, time, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from uuid import uuid4

from raumbuchung.main import app
from raumbuchung.database import Base, get_db
from raumbuchung.models import Restaurant, Space, Reservation, ReservationStatus
from raumbuchung.core.time_blocks import DATETIME_FORMAT


# ============ DATENBANK SETUP ============

SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============ BASIS FIXTURES ============

@pytest.fixture(scope="function")
def db():
    """Tabellen anlegen, Session liefern, danach alles wieder löschen."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    FastAPI TestClient mit überschriebener Datenbank.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============ STAMMDATEN FIXTURES ============

@pytest.fixture
def restaurant(db):
    """Restaurant 10:00 - 23:00 mit einem Raum (2 - 8 Personen)"""
    rest = Restaurant(
        id=uuid4(),
        name="Zur Linde",
        address="Hauptstraße 1, Kiel",
        cuisine_type="Deutsch",
        capacity=120,
        start_time=time(10, 0),
        end_time=time(23, 0),
    )
    rest.spaces.append(Space(id=uuid4(), name="Kaminzimmer", min_capacity=2, max_capacity=8))
    db.add(rest)
    db.commit()
    db.refresh(rest)
    return rest


@pytest.fixture
def space(restaurant):
    return restaurant.spaces[0]


@pytest.fixture
def night_restaurant(db):
    """Restaurant mit Öffnungszeiten über Mitternacht (18:00 - 02:00)"""
    rest = Restaurant(
        id=uuid4(),
        name="Nachteule",
        cuisine_type="Bar",
        capacity=60,
        start_time=time(18, 0),
        end_time=time(2, 0),
    )
    rest.spaces.append(Space(id=uuid4(), name="Lounge", min_capacity=1, max_capacity=20))
    db.add(rest)
    db.commit()
    db.refresh(rest)
    return rest


@pytest.fixture
def two_space_restaurant(db):
    """Restaurant mit zwei Räumen (max 100 und 300)"""
    rest = Restaurant(
        id=uuid4(),
        name="Großer Saal",
        capacity=400,
        start_time=time(10, 0),
        end_time=time(23, 0),
    )
    rest.spaces.append(Space(id=uuid4(), name="Saal A", min_capacity=0, max_capacity=100))
    rest.spaces.append(Space(id=uuid4(), name="Saal B", min_capacity=0, max_capacity=300))
    db.add(rest)
    db.commit()
    db.refresh(rest)
    return rest


# ============ HELPER FUNKTIONEN ============

def future_day(days: int = 7) -> date:
    return date.today() + timedelta(days=days)


def at(hour: int, minute: int = 0, day: date | None = None) -> datetime:
    """Lokale Zeit an einem Tag in der Zukunft"""
    return datetime.combine(day or future_day(), time(hour, minute))


def fmt(value: datetime) -> str:
    """Anzeigeformat der API (TT-MM-JJJJ HH:MM)"""
    return value.strftime(DATETIME_FORMAT)


def add_reservation(db, restaurant, space, start, end, party_size, status=ReservationStatus.CONFIRMED):
    """Legt eine Reservierung direkt in der DB an (ohne Prüfung)"""
    reservation = Reservation(
        restaurant_id=restaurant.id,
        space_id=space.id,
        customer_email="gast@test.de",
        start_time=start,
        end_time=end,
        party_size=party_size,
        status=status,
    )
    db.add(reservation)
    db.commit()
    db.refresh(reservation)
    return reservation
