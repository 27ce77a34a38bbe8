"""Vehicle router - FastAPI endpoints for vehicle operations"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Vehicle
from .schemas import VehicleCreate, VehicleResponse, VehicleUpdate
from .service import VehicleService

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


def get_vehicle_service(db: Session = Depends(get_db)) -> VehicleService:
    """Dependency injection for VehicleService"""
    return VehicleService(db)


def to_vehicle_response(v: Vehicle) -> VehicleResponse:
    return VehicleResponse(
        id=v.id,
        make=v.make,
        model=v.model,
        year=v.year,
        vin=v.vin,
        licensePlate=v.license_plate,
        mileage=v.mileage,
        ownerId=v.owner_id,
        status=v.status,
    )


@router.get("", response_model=list[VehicleResponse])
async def get_vehicles(service: VehicleService = Depends(get_vehicle_service)):
    return [to_vehicle_response(v) for v in service.get_vehicles()]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: str, service: VehicleService = Depends(get_vehicle_service)):
    return to_vehicle_response(service.get_vehicle(vehicle_id))


@router.post("", response_model=VehicleResponse, status_code=201)
async def create_vehicle(
    data: VehicleCreate, service: VehicleService = Depends(get_vehicle_service)
):
    return to_vehicle_response(service.create_vehicle(data))


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: str,
    data: VehicleUpdate,
    service: VehicleService = Depends(get_vehicle_service),
):
    return to_vehicle_response(service.update_vehicle(vehicle_id, data))


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: str, service: VehicleService = Depends(get_vehicle_service)):
    service.delete_vehicle(vehicle_id)
    return Response(status_code=204)
