import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id(prefix: str) -> str:
    """Generate an opaque record ID such as ``apt-3f9c0a1b2d4e``"""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(32), primary_key=True, index=True, default=lambda: generate_id("cli"))
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    vehicles = relationship("Vehicle", back_populates="owner", cascade="all, delete-orphan")
    appointments = relationship(
        "Appointment", back_populates="client", cascade="all, delete-orphan"
    )


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(32), primary_key=True, index=True, default=lambda: generate_id("veh"))
    owner_id = Column(String(32), ForeignKey("clients.id"), nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=True)
    vin = Column(String(17), nullable=True, index=True)
    license_plate = Column(String(20), nullable=True)
    mileage = Column(Integer, nullable=True)
    # Available, In Service, Out of Service
    status = Column(String(50), default="Available", nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("Client", back_populates="vehicles")
    appointments = relationship(
        "Appointment", back_populates="vehicle", cascade="all, delete-orphan"
    )


class Appointment(Base):
    """A service appointment; its status drives the service board columns"""

    __tablename__ = "appointments"

    id = Column(String(32), primary_key=True, index=True, default=lambda: generate_id("apt"))
    client_id = Column(String(32), ForeignKey("clients.id"), nullable=False, index=True)
    vehicle_id = Column(String(32), ForeignKey("vehicles.id"), nullable=False, index=True)

    date = Column(DateTime, nullable=False, index=True)
    service_type = Column(String(255), nullable=False)
    mechanic = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Scheduled, In Progress, Waiting for Parts, Quality Check, Completed, Cancelled
    status = Column(String(50), default="Scheduled", nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="appointments")
    vehicle = relationship("Vehicle", back_populates="appointments")
