"""
Service board engine

Holds the working set of appointments for one board view, applies drag and
drop moves optimistically, and reconciles with the store when a save fails.

    board = ServiceBoard(HttpAppointmentStore())
    state = await board.load_board()
    state = board.move_appointment("apt-1", "Waiting for Parts")  # shown at once
    await board.settle()                                          # save finished

A failed save is never retried or patched up in place: the whole board is
reloaded from the store, which remains the system of record.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Optional

from ..config import BOARD_TRANSITION_MODE
from ..domain.appointments.schemas import AppointmentResponse, AppointmentStatus
from ..domain.appointments.workflow import TransitionPolicy
from ..domain.clients.schemas import ClientResponse
from ..domain.vehicles.schemas import VehicleResponse
from .errors import (
    AppointmentNotFoundError,
    BoardError,
    FetchError,
    PersistError,
    TransitionNotAllowedError,
)
from .state import BOARD_COLUMNS, BoardState, coerce_column
from .store import AppointmentStore

logger = logging.getLogger(__name__)

BoardListener = Callable[[BoardState], None]


class ServiceBoard:
    """
    Column-partitioned view of appointments with optimistic status moves.

    Moves are applied to the working set before the store confirms them. If
    the store rejects a move the board reloads in full. By default the reload
    starts as soon as the failure arrives, even if newer moves are still being
    saved (their optimistic state is then replaced by whatever the store
    holds). With ``defer_reload_until_idle=True`` the reload waits until no
    save is in flight.

    Without an explicit ``policy`` the board follows BOARD_TRANSITION_MODE,
    the same setting the REST API enforces.

    Not thread-safe: use it from one event loop, the way a single board view
    does.
    """

    def __init__(
        self,
        store: AppointmentStore,
        *,
        policy: Optional[TransitionPolicy] = None,
        defer_reload_until_idle: bool = False,
    ):
        self._store = store
        self.policy = policy or TransitionPolicy.from_mode(BOARD_TRANSITION_MODE)
        self.defer_reload_until_idle = defer_reload_until_idle

        # Insertion ordered: keeps the store order within each column
        self._appointments: dict[str, AppointmentResponse] = {}
        self._vehicles: list[VehicleResponse] = []
        self._clients: list[ClientResponse] = []
        self._error: Optional[str] = None

        self._pending: set[asyncio.Task] = set()
        self._in_flight = 0
        self._loads_in_flight = 0
        self._reload_requested = False
        self._move_sequence = 0
        self._listeners: list[BoardListener] = []

        self.last_error: Optional[BoardError] = None

    # -------------------- queries --------------------

    @property
    def state(self) -> BoardState:
        return BoardState.partition(
            self._appointments.values(), self._vehicles, self._clients, error=self._error
        )

    @property
    def is_loading(self) -> bool:
        """True while at least one load is waiting on the store"""
        return self._loads_in_flight > 0

    @property
    def pending_count(self) -> int:
        """Number of saves that have not finished yet"""
        return self._in_flight

    # -------------------- listeners --------------------

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Call ``listener`` with every new board state; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: BoardState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Service board listener failed")

    # -------------------- loading --------------------

    async def load_board(self) -> BoardState:
        """
        Fetch appointments, vehicles and clients concurrently and rebuild the board.

        If any of the three reads fails the board is emptied (no partial data)
        and the returned state carries the error message.
        """
        self._loads_in_flight += 1
        try:
            appointments, vehicles, clients = await asyncio.gather(
                self._store.list_appointments(),
                self._store.list_vehicles(),
                self._store.list_clients(),
            )
        except Exception as e:
            error = e if isinstance(e, FetchError) else FetchError(str(e))
            logger.error(f"❌ Failed to load service board: {error}")
            self.last_error = error
            self._replace_working_set([], [], [], error=str(error))
        else:
            self._replace_working_set(appointments, vehicles, clients)
            logger.info(
                f"📋 Service board loaded: {len(self._appointments)} appointments, "
                f"{len(vehicles)} vehicles, {len(clients)} clients"
            )
        finally:
            self._loads_in_flight -= 1

        state = self.state
        self._notify(state)
        return state

    def _replace_working_set(self, appointments, vehicles, clients, error=None) -> None:
        working_set: dict[str, AppointmentResponse] = {}
        for appointment in appointments:
            if appointment.status not in BOARD_COLUMNS:
                logger.debug(f"Appointment {appointment.id} ({appointment.status}) is not on the board")
                continue
            working_set[appointment.id] = appointment
        self._appointments = working_set
        self._vehicles = list(vehicles)
        self._clients = list(clients)
        self._error = error

    # -------------------- moves --------------------

    def move_appointment(self, appointment_id: str, target_status) -> BoardState:
        """
        Move one appointment to another column.

        The new state is returned straight away; the save runs as a background
        task on the running event loop. Moving a card to the column it is
        already in changes nothing and saves nothing.

        Raises:
            InvalidStatusError: target is not one of the five board columns
            AppointmentNotFoundError: the appointment is not on the board
            TransitionNotAllowedError: the transition policy forbids the move
        """
        target = coerce_column(target_status)
        current = self._appointments.get(appointment_id)
        if current is None:
            logger.warning(f"⚠️ Move ignored: appointment {appointment_id} is not on the board")
            raise AppointmentNotFoundError(appointment_id)

        if current.status == target:
            return self.state

        if not self.policy.allows(current.status, target):
            raise TransitionNotAllowedError(appointment_id, current.status.value, target.value)

        loop = asyncio.get_running_loop()
        self._appointments[appointment_id] = current.model_copy(update={"status": target})
        self._move_sequence += 1
        logger.info(
            f"🔀 Moved appointment {appointment_id}: {current.status.value} → {target.value} "
            f"(move #{self._move_sequence})"
        )

        self._in_flight += 1
        task = loop.create_task(self._persist(appointment_id, target, self._move_sequence))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        state = self.state
        self._notify(state)
        return state

    async def _persist(self, appointment_id: str, status: AppointmentStatus, sequence: int) -> None:
        failed = False
        try:
            await self._store.update_status(appointment_id, status)
        except Exception as e:
            failed = True
            error = (
                e
                if isinstance(e, PersistError)
                else PersistError(str(e), appointment_id=appointment_id, status=status)
            )
            self.last_error = error
            logger.warning(
                f"⚠️ Saving move #{sequence} ({appointment_id} → {status.value}) failed, "
                f"reloading board: {error}"
            )
        else:
            logger.debug(f"Move #{sequence} saved ({appointment_id} → {status.value})")
        finally:
            self._in_flight -= 1

        if failed:
            self._reload_requested = True
        if not self._reload_requested:
            return
        if self.defer_reload_until_idle and self._in_flight > 0:
            logger.info(f"Reload after move #{sequence} deferred: {self._in_flight} save(s) in flight")
            return

        self._reload_requested = False
        await self.load_board()

    async def settle(self) -> None:
        """Wait until every save, and any reload it triggered, has finished"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
