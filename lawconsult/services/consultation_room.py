"""
Simulated consultation room

CONNECTING -> CONNECTED -> ENDED. The connection delay, lawyer replies and
the leave timer all run as tasks owned by the room so close() can stop them.
"""

import asyncio
import logging
import random
from datetime import datetime, timezone
from enum import Enum
from itertools import count
from typing import Callable, Dict, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

LAWYER_REPLY = "I understand your question. Under the applicable law, I suggest that you..."


class RoomStatus(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ENDED = "ended"


class RoomStateError(RuntimeError):
    """Raised when a room operation is not allowed in the current status."""


class RoomMessage(BaseModel):
    id: str
    sender: str = Field(description="user or lawyer")
    content: str
    type: str = "text"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def greeting(lawyer_name: str) -> str:
    return (f"Hello! I am lawyer {lawyer_name}, glad to help with your consultation. "
            "Please describe your legal problem in detail.")


class ConsultationRoom:
    def __init__(
        self,
        consultation_id: str,
        lawyer_name: str,
        connect_delay: float = 2.0,
        reply_delay: tuple[float, float] = (1.0, 3.0),
        leave_delay: float = 2.0,
        on_leave: Optional[Callable[[], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.consultation_id = consultation_id
        self.lawyer_name = lawyer_name
        self.connect_delay = connect_delay
        self.reply_delay = reply_delay
        self.leave_delay = leave_delay
        self.on_leave = on_leave
        self.rng = rng or random.Random()
        self.status = RoomStatus.CONNECTING
        self.messages: list[RoomMessage] = []
        self._ids = count(1)
        self._tasks: set[asyncio.Task] = set()

    def start(self) -> None:
        """Begin connecting; must be called from a running event loop."""
        self._spawn(self._connect())

    async def _connect(self):
        await asyncio.sleep(self.connect_delay)
        if self.status != RoomStatus.CONNECTING:
            return
        self.status = RoomStatus.CONNECTED
        self._append("lawyer", greeting(self.lawyer_name))
        logger.info("Consultation room %s connected", self.consultation_id)

    def send(self, content: str) -> Optional[RoomMessage]:
        """
        Append a user message and schedule the lawyer's reply.

        Blank messages are ignored and return None.

        Raises:
            RoomStateError: If the room is not connected
        """
        if self.status != RoomStatus.CONNECTED:
            raise RoomStateError(f"Room is {self.status.value}")
        if not content.strip():
            return None
        message = self._append("user", content)
        low, high = self.reply_delay
        self._spawn(self._reply_later(low + self.rng.random() * (high - low)))
        return message

    async def _reply_later(self, delay: float):
        await asyncio.sleep(delay)
        if self.status == RoomStatus.CONNECTED:
            self._append("lawyer", LAWYER_REPLY)

    def end(self) -> None:
        """End the consultation and schedule leaving the room."""
        if self.status == RoomStatus.ENDED:
            return
        self._cancel_tasks()
        self.status = RoomStatus.ENDED
        logger.info("Consultation room %s ended", self.consultation_id)
        if self.on_leave is not None:
            self._spawn(self._leave_later())

    async def _leave_later(self):
        await asyncio.sleep(self.leave_delay)
        self.on_leave()

    def close(self) -> None:
        """Cancel every pending timer (connect, replies, leave)."""
        self._cancel_tasks()

    def _append(self, sender: str, content: str) -> RoomMessage:
        message = RoomMessage(id=str(next(self._ids)), sender=sender, content=content)
        self.messages.append(message)
        return message

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_tasks(self):
        for task in list(self._tasks):
            task.cancel()

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())


class RoomRegistry:
    """Open rooms keyed by consultation id."""

    def __init__(self):
        self._rooms: Dict[str, ConsultationRoom] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, consultation_id: str) -> Optional[ConsultationRoom]:
        return self._rooms.get(consultation_id)

    def open(self, room: ConsultationRoom) -> ConsultationRoom:
        existing = self._rooms.get(room.consultation_id)
        if existing is not None and existing.status != RoomStatus.ENDED:
            return existing
        if existing is not None:
            existing.close()
        self._rooms[room.consultation_id] = room
        room.start()
        return room

    def discard(self, consultation_id: str) -> None:
        room = self._rooms.pop(consultation_id, None)
        if room is not None:
            room.close()

    def close_all(self) -> None:
        for consultation_id in list(self._rooms):
            self.discard(consultation_id)


room_registry = RoomRegistry()
