"""SQLAlchemy-backed data access for parking spots and tickets.

Every method translates ``SQLAlchemyError`` into ``PersistenceError`` and leaves
transaction boundaries to the caller (``commit`` / ``rollback``), so the session
service can group a spot update and a ticket insert into one transaction.
"""
from contextlib import contextmanager
import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from parkit.core.constants import ParkingType
from parkit.core.errors import PersistenceError
from parkit.models.parking_spot import ParkingSpot
from parkit.models.ticket import Ticket

logger = logging.getLogger(__name__)


class ParkingRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("Database error while trying to %s: %s", action, e)
            raise PersistenceError(f"Error while trying to {action}") from e

    # --- parking spots -------------------------------------------------

    def find_available_spot(self, parking_type: ParkingType) -> int | None:
        """Lowest-numbered available spot of the given type, or None when the lot is full."""
        with self._guard("fetch next available slot"):
            return self.db.execute(
                select(ParkingSpot.id)
                .where(ParkingSpot.parking_type == parking_type, ParkingSpot.available.is_(True))
                .order_by(ParkingSpot.id)
                .limit(1)
            ).scalar_one_or_none()

    def update_spot_availability(self, spot_id: int, available: bool, expected: bool | None = None) -> bool:
        """Set the availability flag of a spot.

        With ``expected`` the update is a compare-and-swap: it only applies if the
        row still holds ``expected``, and returns False otherwise (another request
        took or released the spot first). Returns False for an unknown spot.
        """
        spots = ParkingSpot.__table__
        stmt = update(spots).where(spots.c.parking_number == spot_id)
        if expected is not None:
            stmt = stmt.where(spots.c.available == expected)
        with self._guard(f"update parking spot {spot_id}"):
            result = self.db.execute(stmt.values(available=available))
            if result.rowcount != 1:
                return False
            # Plain UPDATE bypasses the identity map; drop any stale copy
            loaded = self.db.identity_map.get(self.db.identity_key(ParkingSpot, spot_id))
            if loaded is not None:
                self.db.expire(loaded)
            return True

    def get_spot(self, spot_id: int) -> ParkingSpot | None:
        with self._guard(f"fetch parking spot {spot_id}"):
            return self.db.get(ParkingSpot, spot_id)

    def list_spots(self) -> list[ParkingSpot]:
        with self._guard("list parking spots"):
            return list(self.db.scalars(select(ParkingSpot).order_by(ParkingSpot.id)))

    # --- tickets -------------------------------------------------------

    def save_ticket(self, ticket: Ticket) -> Ticket:
        with self._guard(f"save ticket for {ticket.vehicle_reg_number}"):
            self.db.add(ticket)
            self.db.flush()
            return ticket

    def update_ticket(self, ticket: Ticket) -> Ticket:
        with self._guard(f"update ticket {ticket.id}"):
            merged = self.db.merge(ticket)
            self.db.flush()
            return merged

    def get_open_ticket(self, vehicle_reg_number: str) -> Ticket | None:
        with self._guard(f"fetch open ticket for {vehicle_reg_number}"):
            return self.db.execute(
                select(Ticket)
                .where(Ticket.vehicle_reg_number == vehicle_reg_number, Ticket.out_time.is_(None))
                .order_by(Ticket.in_time.desc(), Ticket.id.desc())
                .limit(1)
            ).scalar_one_or_none()

    def get_ticket(self, vehicle_reg_number: str) -> Ticket | None:
        """Most recent ticket for a vehicle, open or closed."""
        with self._guard(f"fetch ticket for {vehicle_reg_number}"):
            return self.db.execute(
                select(Ticket)
                .where(Ticket.vehicle_reg_number == vehicle_reg_number)
                .order_by(Ticket.in_time.desc(), Ticket.id.desc())
                .limit(1)
            ).scalar_one_or_none()

    def count_closed_tickets(self, vehicle_reg_number: str) -> int:
        with self._guard(f"count tickets for {vehicle_reg_number}"):
            return self.db.execute(
                select(func.count(Ticket.id))
                .where(Ticket.vehicle_reg_number == vehicle_reg_number, Ticket.out_time.is_not(None))
            ).scalar_one()

    # --- transaction boundaries ---------------------------------------

    def commit(self) -> None:
        with self._guard("commit"):
            self.db.commit()

    def rollback(self) -> None:
        with self._guard("rollback"):
            self.db.rollback()
