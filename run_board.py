"""
Service board from the command line
Usage: python run_board.py [--base-url URL] [--token TOKEN] [--move APPOINTMENT_ID STATUS]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from garagepilot.board import BOARD_COLUMNS, BoardError, BoardState, HttpAppointmentStore, ServiceBoard
from garagepilot.config import GARAGEPILOT_API_TOKEN, GARAGEPILOT_API_URL

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def format_board(state: BoardState) -> str:
    lines = []
    for status in BOARD_COLUMNS:
        cards = state.cards(status)
        lines.append(f"{status.value} ({len(cards)})")
        if not cards:
            lines.append("  (empty)")
        for card in cards:
            appointment = card.appointment
            client_name = card.client.name if card.client else "Unknown client"
            mechanic = f" [{appointment.mechanic}]" if appointment.mechanic else ""
            lines.append(
                f"  {appointment.id}  {card.vehicle_label} - {appointment.serviceType}, "
                f"{client_name}, {appointment.date:%Y-%m-%d}{mechanic}"
            )
    return "\n".join(lines)


async def run(
    base_url: str,
    token: str,
    move: list[str] | None,
    client: httpx.AsyncClient | None = None,
) -> int:
    async with HttpAppointmentStore(base_url=base_url, token=token, client=client) as store:
        board = ServiceBoard(store)
        state = await board.load_board()
        if state.error:
            logger.error(f"❌ Could not load the service board: {state.error}")
            return 1

        if move:
            appointment_id, status = move
            try:
                board.move_appointment(appointment_id, status)
            except BoardError as e:
                logger.error(f"❌ {e}")
                return 1
            await board.settle()
            if board.last_error:
                logger.warning(f"⚠️ Move was not saved, board reloaded: {board.last_error}")
            state = board.state

    print(format_board(state))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Show the service board and move appointments")
    parser.add_argument("--base-url", default=GARAGEPILOT_API_URL, help="GaragePilot API URL")
    parser.add_argument("--token", default=GARAGEPILOT_API_TOKEN, help="Bearer token")
    parser.add_argument(
        "--move",
        nargs=2,
        metavar=("APPOINTMENT_ID", "STATUS"),
        help='Move an appointment, e.g. --move apt-1 "Quality Check"',
    )
    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args.base_url, args.token, args.move)))
    except KeyboardInterrupt:
        logger.info("👋 Stopped by user")
