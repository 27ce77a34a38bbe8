"""Appointment router - FastAPI endpoints for appointments and status updates"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Appointment
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AppointmentUpdate,
    StatusSummary,
)
from .service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_appointment_response(a: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=a.id,
        clientId=a.client_id,
        vehicleId=a.vehicle_id,
        date=a.date,
        serviceType=a.service_type,
        mechanic=a.mechanic,
        status=a.status,
        notes=a.notes,
    )


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(service: AppointmentService = Depends(get_appointment_service)):
    """Get all appointments ordered by date"""
    return [to_appointment_response(a) for a in service.get_appointments()]


@router.get("/status-summary", response_model=StatusSummary)
async def get_status_summary(service: AppointmentService = Depends(get_appointment_service)):
    """Count of appointments in each status"""
    return StatusSummary(**service.status_summary())


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    return to_appointment_response(service.get_appointment(appointment_id))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate, service: AppointmentService = Depends(get_appointment_service)
):
    return to_appointment_response(service.create_appointment(data))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: str,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return to_appointment_response(service.update_appointment(appointment_id, data))


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Persist a status change (used by the service board drag and drop)"""
    return to_appointment_response(service.update_status(appointment_id, data.status))


@router.delete("/{appointment_id}", status_code=204)
async def delete_appointment(
    appointment_id: str, service: AppointmentService = Depends(get_appointment_service)
):
    service.delete_appointment(appointment_id)
    return Response(status_code=204)
