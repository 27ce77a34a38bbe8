"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Client
from .schemas import ClientCreate, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


def to_client_response(c: Client) -> ClientResponse:
    return ClientResponse(id=c.id, name=c.name, email=c.email, phone=c.phone, address=c.address)


@router.get("", response_model=list[ClientResponse])
async def get_clients(service: ClientService = Depends(get_client_service)):
    """Get all clients"""
    return [to_client_response(c) for c in service.get_clients()]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, service: ClientService = Depends(get_client_service)):
    return to_client_response(service.get_client(client_id))


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    return to_client_response(service.create_client(data))


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    return to_client_response(service.update_client(client_id, data))


@router.delete("/{client_id}", status_code=204)
async def delete_client(client_id: str, service: ClientService = Depends(get_client_service)):
    """Delete a client (cascades to its vehicles and appointments)"""
    service.delete_client(client_id)
    return Response(status_code=204)
