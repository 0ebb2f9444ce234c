"""User-facing wording of the parking terminal.

Front ends and tests match these strings literally, keep them stable.
"""
from parkit.services.parking_service import ExitingVehicleResult, IncomingVehicleResult

WELCOME_BACK = "Welcome back! As a recurring user of our parking lot, you'll benefit from a 5% discount."
TICKET_SAVED = "Generated Ticket and saved in DB"


def welcome_back_message(returning_user: bool) -> str | None:
    return WELCOME_BACK if returning_user else None


def incoming_messages(result: IncomingVehicleResult) -> list[str]:
    messages = []
    if result.welcome_back:
        messages.append(WELCOME_BACK)
    messages.append(TICKET_SAVED)
    messages.append(f"Please park your vehicle in spot number:{result.parking_number}")
    messages.append(f"Recorded in-time for vehicle number:{result.vehicle_reg_number} is:{result.in_time}")
    return messages


def exiting_messages(result: ExitingVehicleResult) -> list[str]:
    return [
        f"Please pay the parking fare:{result.price}",
        f"Recorded out-time for vehicle number:{result.vehicle_reg_number} is:{result.out_time}",
    ]
