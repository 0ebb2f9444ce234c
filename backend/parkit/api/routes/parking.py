import logging
from fastapi import APIRouter, Depends, HTTPException, status

from parkit.api.deps import get_parking_service, get_repository
from parkit.core.errors import (
    InvalidCategory,
    InvalidDuration,
    NoOpenSession,
    NoSpotAvailable,
    ParkingError,
    PersistenceError,
    SessionAlreadyOpen,
)
from parkit.db.repository import ParkingRepository
from parkit.schemas.parking import (
    ExitingVehicleIn,
    ExitingVehicleOut,
    IncomingVehicleIn,
    IncomingVehicleOut,
    ParkingSpotOut,
    ReturningUserOut,
    TicketOut,
)
from parkit.services import messages
from parkit.services.parking_service import ParkingService

router = APIRouter()
logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    InvalidCategory: status.HTTP_400_BAD_REQUEST,
    InvalidDuration: status.HTTP_400_BAD_REQUEST,
    NoSpotAvailable: status.HTTP_409_CONFLICT,
    SessionAlreadyOpen: status.HTTP_409_CONFLICT,
    NoOpenSession: status.HTTP_404_NOT_FOUND,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

def _http_error(exc: ParkingError) -> HTTPException:
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure: %s", exc)
        return HTTPException(status_code=code, detail="Unable to update ticket information. Error occurred")
    logger.warning("Request rejected: %s", exc)
    return HTTPException(status_code=code, detail=str(exc))

@router.get("/spots", response_model=list[ParkingSpotOut])
def list_spots(repo: ParkingRepository = Depends(get_repository)):
    try:
        return repo.list_spots()
    except PersistenceError as e:
        raise _http_error(e)

@router.post("/incoming", response_model=IncomingVehicleOut, status_code=201)
def incoming_vehicle(payload: IncomingVehicleIn, service: ParkingService = Depends(get_parking_service)):
    """Park a vehicle: allocate the lowest free spot of the requested type and open a ticket."""
    try:
        result = service.process_incoming_vehicle(payload.parking_type, payload.vehicle_reg_number)
    except ParkingError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return IncomingVehicleOut(
        ticket_id=result.ticket_id,
        parking_number=result.parking_number,
        parking_type=result.parking_type,
        vehicle_reg_number=result.vehicle_reg_number,
        in_time=result.in_time,
        welcome_back=result.welcome_back,
        messages=messages.incoming_messages(result),
    )

@router.post("/exiting", response_model=ExitingVehicleOut)
def exiting_vehicle(payload: ExitingVehicleIn, service: ParkingService = Depends(get_parking_service)):
    """Close the open ticket of a vehicle, charge the fare and free its spot."""
    try:
        result = service.process_exiting_vehicle(payload.vehicle_reg_number)
    except ParkingError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ExitingVehicleOut(
        ticket_id=result.ticket_id,
        parking_number=result.parking_number,
        parking_type=result.parking_type,
        vehicle_reg_number=result.vehicle_reg_number,
        in_time=result.in_time,
        out_time=result.out_time,
        price=result.price,
        is_returning_user=result.is_returning_user,
        messages=messages.exiting_messages(result),
    )

@router.get("/tickets/{vehicle_reg_number}", response_model=TicketOut)
def get_ticket(vehicle_reg_number: str, repo: ParkingRepository = Depends(get_repository)):
    try:
        t = repo.get_ticket(vehicle_reg_number)
    except PersistenceError as e:
        raise _http_error(e)
    if not t:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return t

@router.get("/returning/{vehicle_reg_number}", response_model=ReturningUserOut)
def returning_user(vehicle_reg_number: str, service: ParkingService = Depends(get_parking_service)):
    try:
        returning = service.is_returning_user(vehicle_reg_number)
    except ParkingError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {
        "vehicle_reg_number": vehicle_reg_number,
        "returning_user": returning,
        "message": messages.welcome_back_message(returning),
    }
