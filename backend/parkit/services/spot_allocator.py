from parkit.core.constants import ParkingType, parse_parking_type
from parkit.core.errors import NoSpotAvailable
from parkit.db.repository import ParkingRepository


def allocate_spot(repo: ParkingRepository, parking_type: ParkingType | str | int) -> int:
    """Pick the lowest-numbered free spot of ``parking_type``.

    Does not reserve the spot: the caller flips the availability flag in the
    same transaction that creates the ticket.
    """
    parking_type = parse_parking_type(parking_type)
    spot_id = repo.find_available_spot(parking_type)
    if spot_id is None:
        raise NoSpotAvailable(parking_type)
    return spot_id
