import os
from datetime import datetime, timedelta

# Must be set before parkit.db.session is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest
from fastapi.testclient import TestClient

from parkit.db.init_db import seed_parking_spots
from parkit.db.repository import ParkingRepository
from parkit.db.session import SessionLocal, engine
from parkit.main import app
from parkit.models.base import Base
from parkit.services.parking_service import ParkingService

T0 = datetime(2026, 10, 19, 8, 0, 0)


class FakeClock:
    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture(autouse=True)
def clean_database():
    # Fresh schema and the default lot for every test: spots 1-3 CAR, 4-5 BIKE
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_parking_spots(db, car_spots=3, bike_spots=2)
    finally:
        db.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db):
    return ParkingRepository(db)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(repo, clock):
    return ParkingService(repo, clock=clock)


@pytest.fixture
def client():
    return TestClient(app)
