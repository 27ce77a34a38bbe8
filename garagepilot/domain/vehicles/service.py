"""Vehicle service - Business logic for vehicle operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Vehicle
from ..clients.repository import ClientRepository
from .repository import VehicleRepository
from .schemas import VehicleCreate, VehicleUpdate

logger = logging.getLogger(__name__)

# API field name -> column name
FIELD_MAP = {
    "make": "make",
    "model": "model",
    "year": "year",
    "vin": "vin",
    "licensePlate": "license_plate",
    "mileage": "mileage",
    "ownerId": "owner_id",
    "status": "status",
}


def _to_columns(data: dict) -> dict:
    columns = {}
    for field, value in data.items():
        if hasattr(value, "value"):
            value = value.value
        columns[FIELD_MAP[field]] = value
    return columns


class VehicleService:
    """Service layer for vehicle business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VehicleRepository()

    def get_vehicles(self) -> list[Vehicle]:
        return self.repo.get_vehicles(self.db)

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self.repo.get_vehicle_by_id(self.db, vehicle_id)
        if not vehicle:
            raise HTTPException(status_code=404, detail="Vehicle not found")
        return vehicle

    def _require_owner(self, owner_id: str) -> None:
        if not ClientRepository.get_client_by_id(self.db, owner_id):
            raise HTTPException(status_code=404, detail="Owner client not found")

    def create_vehicle(self, data: VehicleCreate) -> Vehicle:
        self._require_owner(data.ownerId)
        vehicle = self.repo.create_vehicle(self.db, **_to_columns(data.model_dump()))
        logger.info(f"🚗 Registered vehicle {vehicle.id} for client {vehicle.owner_id}")
        return vehicle

    def update_vehicle(self, vehicle_id: str, data: VehicleUpdate) -> Vehicle:
        vehicle = self.get_vehicle(vehicle_id)
        if data.ownerId is not None:
            self._require_owner(data.ownerId)
        updates = _to_columns(data.model_dump(exclude_unset=True))
        return self.repo.update_vehicle(self.db, vehicle, **updates)

    def delete_vehicle(self, vehicle_id: str) -> None:
        vehicle = self.get_vehicle(vehicle_id)
        self.repo.delete_vehicle(self.db, vehicle)
        logger.info(f"🗑️ Deleted vehicle {vehicle_id}")
