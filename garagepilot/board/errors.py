"""Errors raised or recorded by the service board"""

from typing import Optional


class BoardError(Exception):
    """Base class for service board errors"""


class FetchError(BoardError):
    """Loading appointments, vehicles or clients from the store failed"""


class PersistError(BoardError):
    """The store rejected or failed to save a status change"""

    def __init__(self, message: str, appointment_id: Optional[str] = None, status=None):
        super().__init__(message)
        self.appointment_id = appointment_id
        self.status = status


class AppointmentNotFoundError(BoardError, LookupError):
    def __init__(self, appointment_id: str):
        super().__init__(f"Appointment {appointment_id} is not on the board")
        self.appointment_id = appointment_id


class InvalidStatusError(BoardError, ValueError):
    def __init__(self, status):
        super().__init__(f"'{status}' is not a service board column")
        self.status = status


class TransitionNotAllowedError(BoardError, ValueError):
    def __init__(self, appointment_id: str, current, target):
        super().__init__(
            f"Appointment {appointment_id} cannot move from '{current}' to '{target}'"
        )
        self.appointment_id = appointment_id
        self.current = current
        self.target = target
