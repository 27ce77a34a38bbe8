"""Service board endpoint - appointments grouped into workflow columns"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..domain.appointments.schemas import AppointmentResponse, AppointmentStatus
from ..domain.clients.schemas import ClientResponse
from ..domain.vehicles.schemas import VehicleResponse
from .engine import ServiceBoard
from .state import BOARD_COLUMNS
from .store import RepositoryAppointmentStore

router = APIRouter(prefix="/board", tags=["Service Board"])


class BoardCardResponse(BaseModel):
    appointment: AppointmentResponse
    vehicle: Optional[VehicleResponse] = None
    client: Optional[ClientResponse] = None


class BoardColumnResponse(BaseModel):
    status: AppointmentStatus
    count: int
    cards: list[BoardCardResponse]


class BoardResponse(BaseModel):
    columns: list[BoardColumnResponse]
    total: int
    error: Optional[str] = None


@router.get("", response_model=BoardResponse)
async def get_board(db: Session = Depends(get_db)):
    """
    Current service board. A failed load returns empty columns with the error
    message instead of a partial board.
    """
    board = ServiceBoard(RepositoryAppointmentStore(db))
    state = await board.load_board()

    columns = []
    for status in BOARD_COLUMNS:
        cards = [
            BoardCardResponse(appointment=c.appointment, vehicle=c.vehicle, client=c.client)
            for c in state.cards(status)
        ]
        columns.append(BoardColumnResponse(status=status, count=len(cards), cards=cards))

    return BoardResponse(columns=columns, total=len(state), error=state.error)
