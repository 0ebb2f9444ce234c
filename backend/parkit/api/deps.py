from fastapi import Depends
from sqlalchemy.orm import Session

from parkit.db.repository import ParkingRepository
from parkit.db.session import get_db
from parkit.services.parking_service import ParkingService

def get_repository(db: Session = Depends(get_db)) -> ParkingRepository:
    return ParkingRepository(db)

def get_parking_service(repo: ParkingRepository = Depends(get_repository)) -> ParkingService:
    return ParkingService(repo)
