"""
Pytest fixtures for the GaragePilot tests.

The application is pointed at an in-memory SQLite database before any
garagepilot module is imported; tables are recreated for every test.
"""

import asyncio
import os
from datetime import datetime, timedelta
from typing import Optional

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BOARD_TRANSITION_MODE"] = "free"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient

from garagepilot.board.errors import FetchError, PersistError
from garagepilot.database import Base, SessionLocal, engine
from garagepilot.domain.appointments.schemas import AppointmentResponse, AppointmentStatus
from garagepilot.domain.clients.schemas import ClientResponse
from garagepilot.domain.vehicles.schemas import VehicleResponse
from garagepilot.main import app
from garagepilot.models import Appointment, Client, Vehicle

BASE_DATE = datetime(2026, 3, 2, 9, 0)


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate all tables so every test starts from an empty garage"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_garage(db_session):
    """
    One client with one vehicle and three appointments:
    apt-1 and apt-2 Scheduled, apt-3 In Progress, apt-4 Cancelled.
    """
    owner = Client(id="cli-1", name="Dana Reyes", email="dana@example.com", phone="555-0101")
    car = Vehicle(
        id="veh-1",
        owner_id="cli-1",
        make="Toyota",
        model="Corolla",
        year=2019,
        vin="2T1BURHE0KC123456",
        license_plate="ABC 123",
        mileage=48000,
    )
    db_session.add_all([owner, car])
    db_session.add_all(
        [
            Appointment(
                id="apt-1",
                client_id="cli-1",
                vehicle_id="veh-1",
                date=BASE_DATE,
                service_type="Oil change",
                mechanic="Sam",
                status="Scheduled",
            ),
            Appointment(
                id="apt-2",
                client_id="cli-1",
                vehicle_id="veh-1",
                date=BASE_DATE + timedelta(days=1),
                service_type="Brake inspection",
                status="Scheduled",
            ),
            Appointment(
                id="apt-3",
                client_id="cli-1",
                vehicle_id="veh-1",
                date=BASE_DATE + timedelta(days=2),
                service_type="Timing belt",
                mechanic="Alex",
                status="In Progress",
            ),
            Appointment(
                id="apt-4",
                client_id="cli-1",
                vehicle_id="veh-1",
                date=BASE_DATE + timedelta(days=3),
                service_type="Detailing",
                status="Cancelled",
            ),
        ]
    )
    db_session.commit()
    return db_session


def make_appointment(appointment_id: str, status: str = "Scheduled", **fields) -> AppointmentResponse:
    data = {
        "id": appointment_id,
        "clientId": "cli-1",
        "vehicleId": "veh-1",
        "date": BASE_DATE,
        "serviceType": "Oil change",
        "mechanic": "Sam",
        "status": status,
    }
    data.update(fields)
    return AppointmentResponse(**data)


class InMemoryStore:
    """Appointment store fake with switchable failures and per-appointment save gates"""

    def __init__(self, appointments=(), vehicles=(), clients=()):
        self.appointments = {a.id: a for a in appointments}
        self.vehicles = list(vehicles)
        self.clients = list(clients)
        self.fail_reads = False
        self.fail_updates: set[str] = set()
        self.gates: dict[str, asyncio.Event] = {}
        # Each list_appointments call waits on the next gate in line, if any
        self.read_gates: list[asyncio.Event] = []
        self.list_calls = 0
        self.update_calls: list[tuple[str, AppointmentStatus]] = []

    async def list_appointments(self):
        self.list_calls += 1
        if self.read_gates:
            await self.read_gates.pop(0).wait()
        if self.fail_reads:
            raise FetchError("store offline")
        return list(self.appointments.values())

    async def list_vehicles(self):
        return list(self.vehicles)

    async def list_clients(self):
        if self.fail_reads:
            raise FetchError("store offline")
        return list(self.clients)

    async def update_status(self, appointment_id, status):
        self.update_calls.append((appointment_id, status))
        gate: Optional[asyncio.Event] = self.gates.get(appointment_id)
        if gate is not None:
            await gate.wait()
        if appointment_id in self.fail_updates:
            raise PersistError("rejected by store", appointment_id, status)
        updated = self.appointments[appointment_id].model_copy(update={"status": status})
        self.appointments[appointment_id] = updated
        return updated

    def stored_status(self, appointment_id: str) -> AppointmentStatus:
        return self.appointments[appointment_id].status


@pytest.fixture
def store():
    """Scenario garage: app-1 and app-2 Scheduled, app-3 In Progress"""
    return InMemoryStore(
        appointments=[
            make_appointment("app-1", "Scheduled"),
            make_appointment("app-2", "Scheduled", serviceType="Tyre rotation"),
            make_appointment("app-3", "In Progress", serviceType="Clutch"),
        ],
        vehicles=[
            VehicleResponse(id="veh-1", make="Honda", model="Civic", year=2018, ownerId="cli-1")
        ],
        clients=[ClientResponse(id="cli-1", name="Dana Reyes")],
    )


async def run_pending_callbacks(times: int = 25) -> None:
    """Give scheduled tasks a few turns of the event loop"""
    for _ in range(times):
        await asyncio.sleep(0)


@pytest.fixture
def spin():
    return run_pending_callbacks
