"""
Appointment stores the service board reads from and writes to.

The board only needs four calls: list appointments, list vehicles, list
clients, and set the status of one appointment. HttpAppointmentStore talks to
the REST API; RepositoryAppointmentStore reads the database directly and is
what the server-side board endpoint uses.
"""

import logging
from typing import Optional, Protocol

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import GARAGEPILOT_API_TOKEN, GARAGEPILOT_API_URL, HTTP_TIMEOUT
from ..domain.appointments.repository import AppointmentRepository
from ..domain.appointments.router import to_appointment_response
from ..domain.appointments.schemas import AppointmentResponse, AppointmentStatus
from ..domain.clients.repository import ClientRepository
from ..domain.clients.router import to_client_response
from ..domain.clients.schemas import ClientResponse
from ..domain.vehicles.repository import VehicleRepository
from ..domain.vehicles.router import to_vehicle_response
from ..domain.vehicles.schemas import VehicleResponse
from .errors import FetchError, PersistError

logger = logging.getLogger(__name__)


class AppointmentStore(Protocol):
    async def list_appointments(self) -> list[AppointmentResponse]: ...

    async def list_vehicles(self) -> list[VehicleResponse]: ...

    async def list_clients(self) -> list[ClientResponse]: ...

    async def update_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> AppointmentResponse: ...


def _error_message(response: httpx.Response) -> str:
    """Pull the error text out of an API error response"""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("detail", "error", "message"):
            if body.get(key):
                return str(body[key])
    return response.reason_phrase or f"HTTP {response.status_code}"


class HttpAppointmentStore:
    """Appointment store backed by the GaragePilot REST API"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        self.base_url = (base_url or GARAGEPILOT_API_URL).rstrip("/")
        self.token = token if token is not None else GARAGEPILOT_API_TOKEN
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, path: str) -> list[dict]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"❌ GET {url} failed: {e}")
            raise FetchError(f"GET {path} failed: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"❌ GET {url} returned {response.status_code}: {message}")
            raise FetchError(f"GET {path} returned {response.status_code}: {message}")
        return response.json()

    async def list_appointments(self) -> list[AppointmentResponse]:
        return [AppointmentResponse(**row) for row in await self._get("/appointments")]

    async def list_vehicles(self) -> list[VehicleResponse]:
        return [VehicleResponse(**row) for row in await self._get("/vehicles")]

    async def list_clients(self) -> list[ClientResponse]:
        return [ClientResponse(**row) for row in await self._get("/clients")]

    async def update_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> AppointmentResponse:
        status = AppointmentStatus(status)
        url = f"{self.base_url}/appointments/{appointment_id}/status"
        try:
            response = await self._client.patch(
                url, json={"status": status.value}, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.error(f"❌ PATCH {url} failed: {e}")
            raise PersistError(str(e), appointment_id, status) from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"❌ PATCH {url} returned {response.status_code}: {message}")
            raise PersistError(message, appointment_id, status)
        return AppointmentResponse(**response.json())

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpAppointmentStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class RepositoryAppointmentStore:
    """Appointment store reading the database through the domain repositories"""

    def __init__(self, db: Session):
        self.db = db

    async def list_appointments(self) -> list[AppointmentResponse]:
        try:
            rows = AppointmentRepository.get_appointments(self.db)
        except SQLAlchemyError as e:
            raise FetchError(f"Could not load appointments: {e}") from e
        return [to_appointment_response(a) for a in rows]

    async def list_vehicles(self) -> list[VehicleResponse]:
        try:
            rows = VehicleRepository.get_vehicles(self.db)
        except SQLAlchemyError as e:
            raise FetchError(f"Could not load vehicles: {e}") from e
        return [to_vehicle_response(v) for v in rows]

    async def list_clients(self) -> list[ClientResponse]:
        try:
            rows = ClientRepository.get_clients(self.db)
        except SQLAlchemyError as e:
            raise FetchError(f"Could not load clients: {e}") from e
        return [to_client_response(c) for c in rows]

    async def update_status(
        self, appointment_id: str, status: AppointmentStatus
    ) -> AppointmentResponse:
        status = AppointmentStatus(status)
        try:
            appointment = AppointmentRepository.update_status(self.db, appointment_id, status.value)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistError(str(e), appointment_id, status) from e
        if appointment is None:
            raise PersistError("Appointment not found", appointment_id, status)
        return to_appointment_response(appointment)
