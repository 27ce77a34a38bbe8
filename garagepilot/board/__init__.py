"""Service status board: column view of appointments with optimistic moves"""

from .engine import ServiceBoard
from .errors import (
    AppointmentNotFoundError,
    BoardError,
    FetchError,
    InvalidStatusError,
    PersistError,
    TransitionNotAllowedError,
)
from .state import BOARD_COLUMNS, BoardCard, BoardState
from .store import AppointmentStore, HttpAppointmentStore, RepositoryAppointmentStore

__all__ = [
    "BOARD_COLUMNS",
    "AppointmentNotFoundError",
    "AppointmentStore",
    "BoardCard",
    "BoardError",
    "BoardState",
    "FetchError",
    "HttpAppointmentStore",
    "InvalidStatusError",
    "PersistError",
    "RepositoryAppointmentStore",
    "ServiceBoard",
    "TransitionNotAllowedError",
]
