from datetime import datetime
from pydantic import BaseModel, Field

from parkit.core.constants import ParkingType

class IncomingVehicleIn(BaseModel):
    parking_type: str | int = Field(..., description="CAR / BIKE, or the terminal menu selection (1 = CAR, 2 = BIKE)")
    vehicle_reg_number: str = Field(..., min_length=1, max_length=10)

class ExitingVehicleIn(BaseModel):
    vehicle_reg_number: str = Field(..., min_length=1, max_length=10)

class ParkingSpotOut(BaseModel):
    id: int
    parking_type: ParkingType
    available: bool

    class Config:
        from_attributes = True

class TicketOut(BaseModel):
    id: int
    parking_number: int
    vehicle_reg_number: str
    price: float
    in_time: datetime
    out_time: datetime | None
    is_returning_user: bool

    class Config:
        from_attributes = True

class IncomingVehicleOut(BaseModel):
    ticket_id: int
    parking_number: int
    parking_type: ParkingType
    vehicle_reg_number: str
    in_time: datetime
    welcome_back: bool
    messages: list[str]

class ExitingVehicleOut(BaseModel):
    ticket_id: int
    parking_number: int
    parking_type: ParkingType
    vehicle_reg_number: str
    in_time: datetime
    out_time: datetime
    price: float
    is_returning_user: bool
    messages: list[str]

class ReturningUserOut(BaseModel):
    vehicle_reg_number: str
    returning_user: bool
    message: str | None
