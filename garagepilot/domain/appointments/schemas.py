"""Appointment domain schemas"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    WAITING_FOR_PARTS = "Waiting for Parts"
    QUALITY_CHECK = "Quality Check"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# Statuses an appointment moves through on the shop floor, in workflow order.
# Cancelled is a stored status only.
ACTIVE_STATUSES: tuple[AppointmentStatus, ...] = (
    AppointmentStatus.SCHEDULED,
    AppointmentStatus.IN_PROGRESS,
    AppointmentStatus.WAITING_FOR_PARTS,
    AppointmentStatus.QUALITY_CHECK,
    AppointmentStatus.COMPLETED,
)


class AppointmentCreate(BaseModel):
    """Schema for booking a new appointment"""

    clientId: str
    vehicleId: str
    date: datetime
    serviceType: str = Field(..., min_length=1)
    mechanic: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    """Schema for editing an appointment; only provided fields change"""

    clientId: Optional[str] = None
    vehicleId: Optional[str] = None
    date: Optional[datetime] = None
    serviceType: Optional[str] = Field(None, min_length=1)
    mechanic: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentResponse(BaseModel):
    id: str
    clientId: str
    vehicleId: str
    date: datetime
    serviceType: str
    mechanic: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None


class StatusSummary(BaseModel):
    counts: dict[str, int]
    total: int
