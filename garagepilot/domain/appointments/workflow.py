"""
Appointment status transitions

By default any status may follow any other: the service desk uses the board
as a manual override and the shop has never enforced a direction. Garages that
want a strict flow can switch to "forward_only" with BOARD_TRANSITION_MODE.
"""

from collections.abc import Iterable, Mapping
from typing import Optional

from .schemas import ACTIVE_STATUSES, AppointmentStatus

TRANSITION_MODES = ("free", "forward_only")


class TransitionPolicy:
    """Decides whether an appointment may move from one status to another"""

    def __init__(
        self,
        allowed: Optional[Mapping[AppointmentStatus, Iterable[AppointmentStatus]]] = None,
        name: str = "custom",
    ):
        # None means unrestricted
        self._allowed = (
            None if allowed is None else {k: frozenset(v) for k, v in allowed.items()}
        )
        self.name = name

    @classmethod
    def free(cls) -> "TransitionPolicy":
        return cls(None, name="free")

    @classmethod
    def forward_only(cls) -> "TransitionPolicy":
        """
        Follow the workflow order: Scheduled → In Progress → Waiting for Parts →
        Quality Check → Completed. Steps may be skipped. Cancelled can be reached
        from anything not yet completed. Completed and Cancelled are terminal.
        """
        allowed: dict[AppointmentStatus, list[AppointmentStatus]] = {}
        for index, status in enumerate(ACTIVE_STATUSES):
            targets = list(ACTIVE_STATUSES[index + 1 :])
            if status != AppointmentStatus.COMPLETED:
                targets.append(AppointmentStatus.CANCELLED)
            allowed[status] = targets
        allowed[AppointmentStatus.CANCELLED] = []
        return cls(allowed, name="forward_only")

    @classmethod
    def from_mode(cls, mode: str) -> "TransitionPolicy":
        mode = (mode or "free").strip().lower()
        if mode == "free":
            return cls.free()
        if mode == "forward_only":
            return cls.forward_only()
        raise ValueError(f"Unknown transition mode '{mode}', expected one of {TRANSITION_MODES}")

    @property
    def is_free(self) -> bool:
        return self._allowed is None

    def allows(self, current: AppointmentStatus, target: AppointmentStatus) -> bool:
        """Staying in the same status is always allowed"""
        current = AppointmentStatus(current)
        target = AppointmentStatus(target)
        if current == target or self._allowed is None:
            return True
        return target in self._allowed.get(current, frozenset())

    def __repr__(self) -> str:
        return f"TransitionPolicy({self.name})"
