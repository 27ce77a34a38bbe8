"""Vehicle repository - Database operations for vehicles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Vehicle


class VehicleRepository:
    """Repository for vehicle database operations"""

    @staticmethod
    def get_vehicles(db: Session) -> list[Vehicle]:
        """Get all vehicles ordered by make and model"""
        return db.query(Vehicle).order_by(Vehicle.make, Vehicle.model).all()

    @staticmethod
    def get_vehicle_by_id(db: Session, vehicle_id: str) -> Optional[Vehicle]:
        return db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()

    @staticmethod
    def create_vehicle(db: Session, **vehicle_data) -> Vehicle:
        vehicle = Vehicle(**vehicle_data)
        db.add(vehicle)
        db.commit()
        db.refresh(vehicle)
        return vehicle

    @staticmethod
    def update_vehicle(db: Session, vehicle: Vehicle, **updates) -> Vehicle:
        for key, value in updates.items():
            if value is not None and hasattr(vehicle, key):
                setattr(vehicle, key, value)

        db.commit()
        db.refresh(vehicle)
        return vehicle

    @staticmethod
    def delete_vehicle(db: Session, vehicle: Vehicle) -> None:
        db.delete(vehicle)
        db.commit()
