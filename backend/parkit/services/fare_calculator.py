"""Fare computation.

The fare is a flat hourly rate per parking type, charged on the exact elapsed
time (no rounding to whole hours). Stays shorter than the free grace period
cost nothing and returning users get a fixed percentage off.
"""
from datetime import datetime
from typing import Mapping

from parkit.core.config import settings
from parkit.core.constants import ParkingType, parse_parking_type
from parkit.core.errors import InvalidDuration


def compute_fare(
    in_time: datetime,
    out_time: datetime | None,
    parking_type: ParkingType | str,
    is_returning_user: bool = False,
    rates: Mapping[ParkingType, float] | None = None,
    free_minutes: int | None = None,
    discount: float | None = None,
) -> float:
    if out_time is None or out_time < in_time:
        raise InvalidDuration(in_time, out_time)
    parking_type = parse_parking_type(parking_type)
    rates = settings.hourly_rates if rates is None else rates
    free_minutes = settings.free_minutes if free_minutes is None else free_minutes
    discount = settings.returning_user_discount if discount is None else discount

    duration_hours = (out_time - in_time).total_seconds() / 3600
    if duration_hours < free_minutes / 60:
        return 0.0

    fare = duration_hours * rates[parking_type]
    if is_returning_user:
        fare *= 1 - discount
    return fare
