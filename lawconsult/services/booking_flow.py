"""
Booking flow state machine

FORM -> SUBMITTING -> SUCCESS, staying at FORM whenever a guard fails.
Timers are tasks owned by the flow; cancel() stops every pending one.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from lawconsult.models.consultation import PRICING, ConsultationType, consultation_fee
from lawconsult.models.lawyer import Lawyer
from lawconsult.models.payment import PaymentMethod

logger = logging.getLogger(__name__)

BOOKING_WINDOW_DAYS = 7

MSG_LOGIN_REQUIRED = "Please log in first"
MSG_TIME_REQUIRED = "Please choose a consultation time"
MSG_SLOT_UNAVAILABLE = "The selected time slot is not available"
MSG_DATE_OUT_OF_RANGE = f"Please choose a date within the next {BOOKING_WINDOW_DAYS} days"
MSG_DESCRIPTION_REQUIRED = "Please describe your legal problem"


class BookingState(str, Enum):
    FORM = "form"
    SUBMITTING = "submitting"
    SUCCESS = "success"


@dataclass(frozen=True)
class TimeSlot:
    time: str
    available: bool


TIME_SLOTS = [
    TimeSlot("09:00", True),
    TimeSlot("10:00", True),
    TimeSlot("11:00", False),
    TimeSlot("14:00", True),
    TimeSlot("15:00", True),
    TimeSlot("16:00", True),
    TimeSlot("17:00", False),
    TimeSlot("19:00", True),
    TimeSlot("20:00", True),
]


def booking_dates(today: Optional[date] = None) -> list[date]:
    """Dates a consultation can be booked on, starting today."""
    today = today or datetime.now(timezone.utc).date()
    return [today + timedelta(days=i) for i in range(BOOKING_WINDOW_DAYS)]


@dataclass
class BookingRequest:
    consultation_type: ConsultationType
    description: str
    date: Optional[date] = None
    time_slot: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.WECHAT

    def scheduled_at(self, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        if ConsultationType(self.consultation_type) == ConsultationType.TEXT or not self.time_slot:
            return now
        hour, minute = (int(part) for part in self.time_slot.split(":"))
        return datetime.combine(self.date or now.date(), time(hour, minute), tzinfo=timezone.utc)


class BookingFlow:
    """
    Collects consultation parameters for one lawyer and simulates submission.

    ``on_submit`` is awaited once the simulated delay elapses and its return
    value is kept as :attr:`result`. ``on_redirect`` is called
    ``redirect_delay`` seconds after success unless the flow is cancelled.
    """

    def __init__(
        self,
        lawyer: Lawyer,
        user: Optional[Any],
        submit_delay: float = 2.0,
        redirect_delay: float = 3.0,
        on_submit: Optional[Callable[[BookingRequest], Awaitable[Any]]] = None,
        on_redirect: Optional[Callable[[], Any]] = None,
        today: Optional[date] = None,
    ):
        self.lawyer = lawyer
        self.user = user
        self.submit_delay = submit_delay
        self.redirect_delay = redirect_delay
        self.on_submit = on_submit
        self.on_redirect = on_redirect
        self.today = today
        self.state = BookingState.FORM
        self.error: Optional[str] = None
        self.result: Any = None
        self._tasks: set[asyncio.Task] = set()

    def quote(self, consultation_type) -> dict:
        pricing = PRICING[ConsultationType(consultation_type)]
        return {
            "fee": consultation_fee(self.lawyer.hourly_rate, consultation_type),
            "duration": pricing.duration,
            "durationLabel": pricing.duration_label,
        }

    def validate(self, request: BookingRequest) -> Optional[str]:
        """Return the first failing guard's message, or None."""
        if self.user is None:
            return MSG_LOGIN_REQUIRED
        if ConsultationType(request.consultation_type) != ConsultationType.TEXT:
            if not request.time_slot:
                return MSG_TIME_REQUIRED
            slot = next((s for s in TIME_SLOTS if s.time == request.time_slot), None)
            if slot is None or not slot.available:
                return MSG_SLOT_UNAVAILABLE
            if request.date is not None and request.date not in booking_dates(self.today):
                return MSG_DATE_OUT_OF_RANGE
        if not (request.description or "").strip():
            return MSG_DESCRIPTION_REQUIRED
        return None

    async def submit(self, request: BookingRequest) -> bool:
        """
        Leave FORM if every guard passes.

        Returns:
            True when the flow reached SUCCESS, False when a guard kept it at FORM

        Raises:
            RuntimeError: If the flow is not at FORM
        """
        if self.state != BookingState.FORM:
            raise RuntimeError(f"Booking already {self.state.value}")

        self.error = self.validate(request)
        if self.error:
            logger.info("Booking for lawyer %s blocked: %s", self.lawyer.id, self.error)
            return False

        self.state = BookingState.SUBMITTING
        logger.info("Submitting %s booking for lawyer %s",
                    ConsultationType(request.consultation_type).value, self.lawyer.id)
        try:
            await self._run(asyncio.sleep(self.submit_delay))
            if self.on_submit is not None:
                self.result = await self.on_submit(request)
        except Exception:
            self.state = BookingState.FORM
            raise

        self.state = BookingState.SUCCESS
        if self.on_redirect is not None:
            self._spawn(self._redirect_later())
        return True

    async def _redirect_later(self):
        await asyncio.sleep(self.redirect_delay)
        self.on_redirect()

    async def _run(self, coro):
        task = self._spawn(coro)
        return await task

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self) -> None:
        """Cancel the pending submission delay and any scheduled redirect."""
        for task in list(self._tasks):
            task.cancel()
        if self.state == BookingState.SUBMITTING:
            self.state = BookingState.FORM

    @property
    def pending(self) -> bool:
        return any(not task.done() for task in self._tasks)
