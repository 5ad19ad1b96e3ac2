import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-tripdesk-suite"
os.environ["RESOURCE_REFERENCE_POLICY"] = "lenient"
os.environ["COST_TOTAL_MUST_MATCH"] = "false"
os.environ["INQUIRY_TERMINAL_GUARD"] = "false"

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tripdesk.core.security import create_access_token
from tripdesk.db.init_db import drop_db, init_db
from tripdesk.db.session import get_db
from tripdesk.main import app
from tripdesk.models.catalog import Driver, Place, TourGuide, Vehicle
from tripdesk.repositories import CustomInquiryRepository
from tripdesk.services.custom_inquiry import CustomInquiryService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    init_db(engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_db(engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def service(db):
    return CustomInquiryService(CustomInquiryRepository(db), db)


# ------------------------------------------------------------------ #
# Identities
# ------------------------------------------------------------------ #
@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def other_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def admin_id():
    return str(uuid.uuid4())


def auth_header(user_id, role="user"):
    return {"Authorization": f"Bearer {create_access_token(user_id, role=role)}"}


@pytest.fixture
def user_headers(user_id):
    return auth_header(user_id)


@pytest.fixture
def other_user_headers(other_user_id):
    return auth_header(other_user_id)


@pytest.fixture
def admin_headers(admin_id):
    return auth_header(admin_id, role="admin")


# ------------------------------------------------------------------ #
# Catalog
# ------------------------------------------------------------------ #
@pytest.fixture
def places(db):
    sigiriya = Place(name="Sigiriya", location="Central Province")
    galle = Place(name="Galle Fort", location="Southern Province")
    db.add_all([sigiriya, galle])
    db.commit()
    return [sigiriya, galle]


@pytest.fixture
def vehicle(db):
    van = Vehicle(name="Toyota KDH Van", type="van", passenger_capacity=9, price_per_day=65.0)
    db.add(van)
    db.commit()
    return van


@pytest.fixture
def tour_guide(db):
    guide = TourGuide(name="Ruwan Silva", languages=["English", "German"], rating=4.8, price_per_day=40.0)
    db.add(guide)
    db.commit()
    return guide


@pytest.fixture
def driver(db):
    chauffeur = Driver(name="Kamal Fernando", license_type="heavy", rating=4.6, price_per_day=25.0)
    db.add(chauffeur)
    db.commit()
    return chauffeur


# ------------------------------------------------------------------ #
# Payloads
# ------------------------------------------------------------------ #
def future_start(days=1):
    start = datetime.now(timezone.utc).date() + timedelta(days=days)
    return f"{start.isoformat()}T09:00:00Z"


@pytest.fixture
def inquiry_payload(places):
    return {
        "contactInfo": {
            "name": "Nimali Perera",
            "email": "Nimali.Perera@Mailbox.org",
            "phone": "+94771234567",
            "country": "Sri Lanka",
        },
        "tripDetails": {
            "startDate": future_start(),
            "travellers": 2,
            "totalDays": 5,
            "totalNights": 4,
        },
        "itinerary": [
            {"place": places[0].id, "day": 1, "timeOfDay": "day", "nights": 1},
            {"place": places[1].id, "day": 2, "timeOfDay": "night", "nights": 1},
        ],
        "costBreakdown": {"totalCost": 500},
    }


@pytest.fixture
def make_headers():
    return auth_header


@pytest.fixture
def start_in():
    return future_start
