"""Vehicle domain schemas"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import normalize_license_plate, validate_vin


class VehicleStatus(str, Enum):
    AVAILABLE = "Available"
    IN_SERVICE = "In Service"
    OUT_OF_SERVICE = "Out of Service"


class VehicleCreate(BaseModel):
    """Schema for registering a vehicle to a client"""

    make: str
    model: str
    year: Optional[int] = Field(None, ge=1886, le=2100)
    vin: Optional[str] = None
    licensePlate: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    ownerId: str
    status: VehicleStatus = VehicleStatus.AVAILABLE

    @field_validator("vin")
    @classmethod
    def check_vin(cls, v):
        return validate_vin(v)

    @field_validator("licensePlate")
    @classmethod
    def check_plate(cls, v):
        return normalize_license_plate(v)


class VehicleUpdate(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = Field(None, ge=1886, le=2100)
    vin: Optional[str] = None
    licensePlate: Optional[str] = None
    mileage: Optional[int] = Field(None, ge=0)
    ownerId: Optional[str] = None
    status: Optional[VehicleStatus] = None

    @field_validator("vin")
    @classmethod
    def check_vin(cls, v):
        return validate_vin(v)

    @field_validator("licensePlate")
    @classmethod
    def check_plate(cls, v):
        return normalize_license_plate(v)


class VehicleResponse(BaseModel):
    id: str
    make: str
    model: str
    year: Optional[int] = None
    vin: Optional[str] = None
    licensePlate: Optional[str] = None
    mileage: Optional[int] = None
    ownerId: str
    status: VehicleStatus = VehicleStatus.AVAILABLE
