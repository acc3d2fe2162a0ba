import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Must be set before the engine is created on import
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient  # noqa: E402

from campus_seating.db.database import Base, SessionLocal, engine  # noqa: E402
from campus_seating.main import app  # noqa: E402
from campus_seating.models.attendanceRecord import AttendanceRecord  # noqa: E402,F401
from campus_seating.models.person import Person  # noqa: E402
from campus_seating.models.route import Route  # noqa: E402


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


def make_person(id, role, gender=None, name=None, **kwargs):
    return Person(
        id=id,
        name=name or f"Rider {id}",
        email=kwargs.pop("email", f"{id.lower()}@campus.edu"),
        date_of_birth=kwargs.pop("date_of_birth", "2000-01-01"),
        role=role,
        gender=gender,
        **kwargs,
    )


def make_route(number, capacity, roster=(), bus_number=None, driver="Ravi"):
    route = Route(
        number=number,
        bus_number=bus_number or f"TN-{number:02d}",
        driver=driver,
        capacity=capacity,
    )
    route.roster = list(roster)
    return route
