from enum import Enum

from parkit.core.errors import InvalidCategory


class ParkingType(str, Enum):
    CAR = "CAR"
    BIKE = "BIKE"


# Menu order of the entry terminal: 1 -> CAR, 2 -> BIKE
SELECTION_TO_TYPE = {1: ParkingType.CAR, 2: ParkingType.BIKE}


def parse_parking_type(value) -> ParkingType:
    """Normalize a category given as enum, name ("car", "BIKE") or menu selection (1, 2)."""
    if isinstance(value, ParkingType):
        return value
    if isinstance(value, bool):
        raise InvalidCategory(value)
    if isinstance(value, int):
        try:
            return SELECTION_TO_TYPE[value]
        except KeyError:
            raise InvalidCategory(value) from None
    if isinstance(value, str):
        try:
            return ParkingType(value.strip().upper())
        except ValueError:
            raise InvalidCategory(value) from None
    raise InvalidCategory(value)
