class ParkingError(Exception):
    """Base class for every failure the parking core reports to its caller."""


class InvalidCategory(ParkingError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown parking type: {value!r}")


class NoSpotAvailable(ParkingError):
    def __init__(self, parking_type):
        self.parking_type = parking_type
        super().__init__(f"No {getattr(parking_type, 'value', parking_type)} parking slot available, parking lot is full")


class InvalidDuration(ParkingError):
    def __init__(self, in_time, out_time):
        self.in_time = in_time
        self.out_time = out_time
        super().__init__(f"Out time provided is incorrect: {out_time} (in time {in_time})")


class NoOpenSession(ParkingError):
    def __init__(self, vehicle_reg_number: str):
        self.vehicle_reg_number = vehicle_reg_number
        super().__init__(f"No open parking session for vehicle number: {vehicle_reg_number}")


class SessionAlreadyOpen(ParkingError):
    def __init__(self, vehicle_reg_number: str, parking_number: int):
        self.vehicle_reg_number = vehicle_reg_number
        self.parking_number = parking_number
        super().__init__(f"Vehicle number {vehicle_reg_number} is already parked in spot number:{parking_number}")


class PersistenceError(ParkingError):
    """Data-access failure; the original exception is chained as __cause__."""
