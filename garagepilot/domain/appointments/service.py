"""Appointment service - Business logic for appointment operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import BOARD_TRANSITION_MODE
from ...models import Appointment
from ..clients.repository import ClientRepository
from ..vehicles.repository import VehicleRepository
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentStatus, AppointmentUpdate
from .workflow import TransitionPolicy

logger = logging.getLogger(__name__)

# API field name -> column name
FIELD_MAP = {
    "clientId": "client_id",
    "vehicleId": "vehicle_id",
    "date": "date",
    "serviceType": "service_type",
    "mechanic": "mechanic",
    "status": "status",
    "notes": "notes",
}
REQUIRED_COLUMNS = {"client_id", "vehicle_id", "date", "service_type", "status"}


def _to_columns(data: dict) -> dict:
    columns = {}
    for field, value in data.items():
        column = FIELD_MAP[field]
        if value is None and column in REQUIRED_COLUMNS:
            continue
        if isinstance(value, AppointmentStatus):
            value = value.value
        columns[column] = value
    return columns


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, policy: Optional[TransitionPolicy] = None):
        self.db = db
        self.repo = AppointmentRepository()
        self.policy = policy or TransitionPolicy.from_mode(BOARD_TRANSITION_MODE)

    def get_appointments(self) -> list[Appointment]:
        return self.repo.get_appointments(self.db)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def _require_references(self, client_id: Optional[str], vehicle_id: Optional[str]) -> None:
        if client_id is not None and not ClientRepository.get_client_by_id(self.db, client_id):
            raise HTTPException(status_code=404, detail="Client not found")
        if vehicle_id is not None and not VehicleRepository.get_vehicle_by_id(self.db, vehicle_id):
            raise HTTPException(status_code=404, detail="Vehicle not found")

    def _check_transition(self, appointment: Appointment, target: AppointmentStatus) -> None:
        if not self.policy.allows(appointment.status, target):
            logger.warning(
                f"⚠️ Rejected transition for appointment {appointment.id}: "
                f"{appointment.status} → {target.value} ({self.policy.name} policy)"
            )
            raise HTTPException(
                status_code=409,
                detail=f"Cannot move appointment from '{appointment.status}' to '{target.value}'",
            )

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        self._require_references(data.clientId, data.vehicleId)
        appointment = self.repo.create_appointment(self.db, **_to_columns(data.model_dump()))
        logger.info(f"📅 Booked appointment {appointment.id} ({appointment.status})")
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        self._require_references(data.clientId, data.vehicleId)
        if data.status is not None:
            self._check_transition(appointment, data.status)
        updates = _to_columns(data.model_dump(exclude_unset=True))
        return self.repo.update_appointment(self.db, appointment, **updates)

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> Appointment:
        """Persist a status change coming from the service board"""
        appointment = self.get_appointment(appointment_id)
        previous = appointment.status
        self._check_transition(appointment, status)

        updated = self.repo.update_status(self.db, appointment_id, status.value)
        if not updated:
            raise HTTPException(status_code=404, detail="Appointment not found")
        logger.info(f"✅ Appointment {appointment_id} transitioned: {previous} → {status.value}")
        return updated

    def delete_appointment(self, appointment_id: str) -> None:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Deleted appointment {appointment_id}")

    def status_summary(self) -> dict:
        """Count appointments per status, including statuses with no appointments"""
        counts = {status.value: 0 for status in AppointmentStatus}
        for status, count in self.repo.count_by_status(self.db).items():
            counts[status] = counts.get(status, 0) + count
        return {"counts": counts, "total": sum(counts.values())}
