"""
Immutable snapshots of the service board.

A BoardState partitions the working set of appointments into the five
workflow columns. Every appointment on the board sits in exactly one column,
chosen by its status alone; within a column cards keep the order the store
returned them in.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from ..domain.appointments.schemas import ACTIVE_STATUSES, AppointmentResponse, AppointmentStatus
from ..domain.clients.schemas import ClientResponse
from ..domain.vehicles.schemas import VehicleResponse
from .errors import InvalidStatusError

BOARD_COLUMNS: tuple[AppointmentStatus, ...] = ACTIVE_STATUSES


def coerce_column(status) -> AppointmentStatus:
    """Return the board column for a status value or raise InvalidStatusError"""
    try:
        column = AppointmentStatus(status)
    except ValueError:
        raise InvalidStatusError(status) from None
    if column not in BOARD_COLUMNS:
        raise InvalidStatusError(status)
    return column


@dataclass(frozen=True)
class BoardCard:
    """What a card on the board shows: the appointment and its lookups"""

    appointment: AppointmentResponse
    vehicle: Optional[VehicleResponse] = None
    client: Optional[ClientResponse] = None

    @property
    def vehicle_label(self) -> str:
        if not self.vehicle:
            return "Unknown vehicle"
        parts = [str(self.vehicle.year) if self.vehicle.year else "", self.vehicle.make, self.vehicle.model]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class BoardState:
    columns: Mapping[AppointmentStatus, tuple[AppointmentResponse, ...]]
    vehicles: Mapping[str, VehicleResponse] = field(default_factory=lambda: MappingProxyType({}))
    clients: Mapping[str, ClientResponse] = field(default_factory=lambda: MappingProxyType({}))
    error: Optional[str] = None

    @classmethod
    def partition(
        cls,
        appointments: Iterable[AppointmentResponse],
        vehicles: Iterable[VehicleResponse] = (),
        clients: Iterable[ClientResponse] = (),
        error: Optional[str] = None,
    ) -> "BoardState":
        """Build a board from appointments in store order.

        Appointments whose status is not a column (Cancelled) are left off.
        """
        buckets: dict[AppointmentStatus, list[AppointmentResponse]] = {s: [] for s in BOARD_COLUMNS}
        for appointment in appointments:
            bucket = buckets.get(appointment.status)
            if bucket is not None:
                bucket.append(appointment)
        return cls(
            columns=MappingProxyType({s: tuple(apps) for s, apps in buckets.items()}),
            vehicles=MappingProxyType({v.id: v for v in vehicles}),
            clients=MappingProxyType({c.id: c for c in clients}),
            error=error,
        )

    @classmethod
    def empty(cls, error: Optional[str] = None) -> "BoardState":
        return cls.partition((), error=error)

    def column(self, status) -> tuple[AppointmentResponse, ...]:
        return self.columns[coerce_column(status)]

    def appointments(self) -> list[AppointmentResponse]:
        """All appointments on the board, column by column"""
        return [a for status in BOARD_COLUMNS for a in self.columns[status]]

    def appointment_ids(self) -> list[str]:
        return [a.id for a in self.appointments()]

    def status_of(self, appointment_id: str) -> Optional[AppointmentStatus]:
        for status in BOARD_COLUMNS:
            if any(a.id == appointment_id for a in self.columns[status]):
                return status
        return None

    def counts(self) -> dict[AppointmentStatus, int]:
        return {status: len(self.columns[status]) for status in BOARD_COLUMNS}

    def cards(self, status) -> list[BoardCard]:
        return [
            BoardCard(
                appointment=a,
                vehicle=self.vehicles.get(a.vehicleId),
                client=self.clients.get(a.clientId),
            )
            for a in self.column(status)
        ]

    def __len__(self) -> int:
        return sum(len(apps) for apps in self.columns.values())
