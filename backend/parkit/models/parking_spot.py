from sqlalchemy import Integer, Boolean, Enum
from sqlalchemy.orm import Mapped, mapped_column

from parkit.core.constants import ParkingType
from parkit.models.base import Base

class ParkingSpot(Base):
    __tablename__ = "parking"

    # Spot number painted on the ground, assigned at provisioning time
    id: Mapped[int] = mapped_column("parking_number", Integer, primary_key=True, autoincrement=False)
    parking_type: Mapped[ParkingType] = mapped_column("type", Enum(ParkingType, native_enum=False, length=10), index=True)
    # False exactly while an open ticket references the spot
    available: Mapped[bool] = mapped_column(Boolean, default=True)
