import logging
from abc import ABC, abstractmethod
from datetime import datetime, UTC
from typing import Dict
from uuid import uuid4

from lawconsult.models.consultation import (
    Consultation,
    ConsultationStatus,
    consultation_model_to_firestore,
)
from lawconsult.models.payment import (
    PaymentMethod,
    PaymentOrder,
    PaymentStatus,
    payment_model_to_firestore,
)
from lawconsult.services.consultation_room import RoomRegistry, room_registry
from lawconsult.services.firebase_service import firebase_service

logger = logging.getLogger(__name__)


class PaymentError(ValueError):
    """Raised when a payment order cannot make the requested move."""


class PaymentStrategy(ABC):
    @abstractmethod
    async def charge(self, order: PaymentOrder) -> str:
        """Collect the order amount and return the provider reference."""

    @abstractmethod
    async def refund(self, order: PaymentOrder) -> str:
        pass


class SimulatedWalletStrategy(PaymentStrategy):
    """Stand-in for a wallet provider; every charge succeeds."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    async def charge(self, order: PaymentOrder) -> str:
        logger.info("Charging %.2f via %s for order %s", order.amount, self.prefix, order.id)
        return f"{self.prefix}_{order.id}"

    async def refund(self, order: PaymentOrder) -> str:
        logger.info("Refunding %.2f via %s for order %s", order.amount, self.prefix, order.id)
        return f"{self.prefix}_refund_{order.id}"


class PaymentService:
    def __init__(self, rooms: RoomRegistry = room_registry):
        self.rooms = rooms
        self._strategies: Dict[PaymentMethod, PaymentStrategy] = {
            PaymentMethod.WECHAT: SimulatedWalletStrategy("wechat"),
            PaymentMethod.ALIPAY: SimulatedWalletStrategy("alipay"),
            PaymentMethod.CARD: SimulatedWalletStrategy("card"),
        }

    def _get_strategy(self, method: PaymentMethod) -> PaymentStrategy:
        strategy = self._strategies.get(PaymentMethod(method))
        if strategy is None:
            raise PaymentError(f"Payment method {method} not supported")
        return strategy

    async def create_order(self, consultation: Consultation, method: PaymentMethod) -> PaymentOrder:
        """Creates a pending payment order for a consultation"""
        if consultation.status in (ConsultationStatus.CANCELLED, ConsultationStatus.COMPLETED):
            raise PaymentError(f"Consultation is {consultation.status.value}")
        self._get_strategy(method)
        order = PaymentOrder(
            id=uuid4().hex,
            consultation_id=consultation.id,
            client_id=consultation.client_id,
            amount=consultation.amount,
            payment_method=method,
        )
        await firebase_service.set_document(f"payments/{order.id}", payment_model_to_firestore(order))
        return order

    async def pay(self, order: PaymentOrder, consultation: Consultation) -> PaymentOrder:
        """Charge the order; a pending consultation becomes confirmed."""
        if order.status != PaymentStatus.PENDING:
            raise PaymentError(f"Payment is {order.status.value}")
        order.provider_reference = await self._get_strategy(order.payment_method).charge(order)
        order.status = PaymentStatus.PAID
        order.paid_at = datetime.now(UTC)
        await firebase_service.update_document(
            f"payments/{order.id}",
            {"status": order.status.value, "paidAt": order.paid_at,
             "providerReference": order.provider_reference},
        )
        if consultation.status == ConsultationStatus.PENDING:
            consultation.status = ConsultationStatus.CONFIRMED
            consultation.updated_at = datetime.now(UTC)
            await firebase_service.update_document(
                f"consultations/{consultation.id}",
                {"status": consultation.status.value, "updatedAt": consultation.updated_at},
            )
        return order

    async def refund(self, order: PaymentOrder, consultation: Consultation) -> PaymentOrder:
        """Refund a paid order and cancel its consultation unless already completed."""
        if order.status != PaymentStatus.PAID:
            raise PaymentError("Only paid orders can be refunded")
        if consultation.status == ConsultationStatus.COMPLETED:
            raise PaymentError("Completed consultations cannot be refunded")
        await self._get_strategy(order.payment_method).refund(order)
        order.status = PaymentStatus.REFUNDED
        await firebase_service.update_document(f"payments/{order.id}", {"status": order.status.value})
        if consultation.status != ConsultationStatus.CANCELLED:
            consultation.status = ConsultationStatus.CANCELLED
            consultation.updated_at = datetime.now(UTC)
            await firebase_service.set_document(
                f"consultations/{consultation.id}", consultation_model_to_firestore(consultation))
        room = self.rooms.get(consultation.id)
        if room is not None:
            room.end()
        return order


payment_service = PaymentService()
