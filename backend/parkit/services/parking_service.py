"""Parking session lifecycle.

A vehicle registration number is either unknown, OPEN (a ticket without
out-time) or CLOSED (every ticket priced and timed out). Arrivals open a
session on the lowest free spot of the requested type, departures close it and
charge the fare. Each transition is committed as a single database
transaction: the spot flag and the ticket change together or not at all.

The service returns structured results; turning them into the terminal
messages is the job of ``parkit.services.messages``.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Callable

from parkit.core.constants import ParkingType, parse_parking_type
from parkit.core.errors import NoOpenSession, PersistenceError, SessionAlreadyOpen
from parkit.db.repository import ParkingRepository
from parkit.models.ticket import Ticket
from parkit.services.fare_calculator import compute_fare
from parkit.services.spot_allocator import allocate_spot

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    # Naive UTC, the way ticket timestamps are stored
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class IncomingVehicleResult:
    ticket_id: int
    parking_number: int
    parking_type: ParkingType
    vehicle_reg_number: str
    in_time: datetime
    # Pre-arrival history check; the new ticket itself always starts non-returning
    welcome_back: bool


@dataclass(frozen=True)
class ExitingVehicleResult:
    ticket_id: int
    parking_number: int
    parking_type: ParkingType
    vehicle_reg_number: str
    in_time: datetime
    out_time: datetime
    price: float
    is_returning_user: bool


def _clean_reg_number(vehicle_reg_number: str) -> str:
    # Used verbatim as the session key: no case folding, no trimming
    if not isinstance(vehicle_reg_number, str) or not vehicle_reg_number.strip():
        raise ValueError("Invalid input provided")
    if vehicle_reg_number != vehicle_reg_number.strip():
        raise ValueError("Invalid input provided")
    return vehicle_reg_number


class ParkingService:
    def __init__(self, repo: ParkingRepository, clock: Callable[[], datetime] = utcnow):
        self.repo = repo
        self.clock = clock

    def is_returning_user(self, vehicle_reg_number: str) -> bool:
        """True when the vehicle already completed at least one parking session."""
        vehicle_reg_number = _clean_reg_number(vehicle_reg_number)
        return self.repo.count_closed_tickets(vehicle_reg_number) > 0

    def process_incoming_vehicle(self, parking_type, vehicle_reg_number: str) -> IncomingVehicleResult:
        parking_type = parse_parking_type(parking_type)
        vehicle_reg_number = _clean_reg_number(vehicle_reg_number)
        try:
            welcome_back = self.is_returning_user(vehicle_reg_number)
            current = self.repo.get_open_ticket(vehicle_reg_number)
            if current is not None:
                raise SessionAlreadyOpen(vehicle_reg_number, current.parking_number)

            while True:
                spot_id = allocate_spot(self.repo, parking_type)
                # Only succeeds if nobody took the spot since it was read
                if self.repo.update_spot_availability(spot_id, False, expected=True):
                    break
                logger.info("Parking spot %s was taken concurrently, looking for another one", spot_id)

            ticket = Ticket(
                parking_number=spot_id,
                vehicle_reg_number=vehicle_reg_number,
                price=0.0,
                in_time=self.clock(),
                out_time=None,
                is_returning_user=False,
            )
            self.repo.save_ticket(ticket)
            result = IncomingVehicleResult(
                ticket_id=ticket.id,
                parking_number=spot_id,
                parking_type=parking_type,
                vehicle_reg_number=vehicle_reg_number,
                in_time=ticket.in_time,
                welcome_back=welcome_back,
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info("Vehicle %s parked in spot %s (ticket %s)", vehicle_reg_number, spot_id, result.ticket_id)
        return result

    def process_exiting_vehicle(self, vehicle_reg_number: str) -> ExitingVehicleResult:
        vehicle_reg_number = _clean_reg_number(vehicle_reg_number)

        try:
            ticket = self.repo.get_open_ticket(vehicle_reg_number)
            if ticket is None:
                raise NoOpenSession(vehicle_reg_number)

            out_time = self.clock()
            # The ticket being closed is still open, so any closed one is a previous visit
            returning = self.repo.count_closed_tickets(vehicle_reg_number) > 0
            parking_type = ticket.parking_spot.parking_type
            price = compute_fare(ticket.in_time, out_time, parking_type, returning)

            ticket.out_time = out_time
            ticket.price = price
            ticket.is_returning_user = returning
            ticket = self.repo.update_ticket(ticket)
            if not self.repo.update_spot_availability(ticket.parking_number, True):
                raise PersistenceError(f"Unable to release parking spot {ticket.parking_number}")
            result = ExitingVehicleResult(
                ticket_id=ticket.id,
                parking_number=ticket.parking_number,
                parking_type=parking_type,
                vehicle_reg_number=vehicle_reg_number,
                in_time=ticket.in_time,
                out_time=out_time,
                price=price,
                is_returning_user=returning,
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info("Vehicle %s left spot %s, fare %.2f", vehicle_reg_number, result.parking_number, price)
        return result
