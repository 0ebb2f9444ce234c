from sqlalchemy import String, Integer, ForeignKey, DateTime, Boolean, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import datetime

from parkit.models.base import Base
from parkit.models.parking_spot import ParkingSpot

class Ticket(Base):
    __tablename__ = "ticket"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parking_number: Mapped[int] = mapped_column(Integer, ForeignKey("parking.parking_number"))
    # Case-sensitive, used as the session key
    vehicle_reg_number: Mapped[str] = mapped_column(String(10), index=True)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    in_time: Mapped[datetime] = mapped_column(DateTime)
    out_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)  # None while the session is open
    is_returning_user: Mapped[bool] = mapped_column(Boolean, default=False)

    parking_spot: Mapped[ParkingSpot] = relationship(lazy="joined")

    @property
    def is_open(self) -> bool:
        return self.out_time is None
