from sqlalchemy import select

from parkit.db.session import engine, SessionLocal
from parkit.models import parking_spot  # noqa: F401
from parkit.models import ticket  # noqa: F401
from parkit.models.base import Base
from parkit.models.parking_spot import ParkingSpot
from parkit.core.config import settings
from parkit.core.constants import ParkingType

def create_tables():
    Base.metadata.create_all(bind=engine)

def seed_parking_spots(db=None, car_spots: int | None = None, bike_spots: int | None = None) -> int:
    """Provision the spot inventory: numbers 1..car_spots are cars, the following ones bikes.

    Idempotent: spot numbers that already exist are left untouched. Returns the
    number of spots created.
    """
    car_spots = settings.seed_car_spots if car_spots is None else car_spots
    bike_spots = settings.seed_bike_spots if bike_spots is None else bike_spots
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        existing = set(db.scalars(select(ParkingSpot.id)))
        layout = [ParkingType.CAR] * car_spots + [ParkingType.BIKE] * bike_spots
        created = 0
        for number, parking_type in enumerate(layout, start=1):
            if number in existing:
                continue
            db.add(ParkingSpot(id=number, parking_type=parking_type, available=True))
            created += 1
        db.commit()
        return created
    finally:
        if own_session:
            db.close()
