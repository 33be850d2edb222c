"""Domain entities of the ordering service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from .dto import CreateOrder
from .ulid import new_ulid


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Customer:
    id: str
    name: str
    document_number: str
    email: str
    created_at: datetime
    updated_at: datetime


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    IN_PREPARATION = "IN_PREPARATION"
    READY = "READY"
    FINALIZED = "FINALIZED"
    EXPIRED = "EXPIRED"

    def __str__(self) -> str:
        return self.value


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.RECEIVED, OrderStatus.EXPIRED, OrderStatus.IN_PREPARATION}
    ),
    OrderStatus.RECEIVED: frozenset({OrderStatus.IN_PREPARATION}),
    OrderStatus.IN_PREPARATION: frozenset({OrderStatus.READY}),
    OrderStatus.READY: frozenset({OrderStatus.FINALIZED}),
}


def _as_status(value: Union[OrderStatus, str]) -> Optional[OrderStatus]:
    try:
        return OrderStatus(value)
    except ValueError:
        return None


@dataclass
class Order:
    id: str
    customer_id: Optional[str]
    status: Union[OrderStatus, str]
    total_amount: float
    created_at: datetime
    updated_at: datetime

    def validate_status(
        self, current_status: Union[OrderStatus, str], new_status: Union[OrderStatus, str]
    ) -> bool:
        """Tell whether an order may move from ``current_status`` to ``new_status``."""
        current = _as_status(current_status)
        target = _as_status(new_status)
        if current is None or target is None:
            return False
        return target in _TRANSITIONS.get(current, frozenset())


def new_order(create_order: CreateOrder, customer_present: bool) -> Order:
    """Create a pending order, linked to the customer when one is present."""
    now = _now()
    return Order(
        id=str(new_ulid()),
        customer_id=create_order.customer_id if customer_present else None,
        status=OrderStatus.PENDING,
        total_amount=0.0,
        created_at=now,
        updated_at=now,
    )


@dataclass
class OrderProduct:
    id: str
    order_id: str
    product_id: str
    quantity: int
    amount: float
    total_amount: float
    created_at: Optional[datetime] = None


def new_order_product(order_id: str, product_id: str, quantity: int, amount: float) -> OrderProduct:
    """Create an order line priced at ``quantity * amount``."""
    return OrderProduct(
        id=str(new_ulid()),
        order_id=order_id,
        product_id=product_id,
        quantity=int(quantity),
        amount=amount,
        total_amount=float(quantity) * amount,
        created_at=_now(),
    )


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    AUTHORIZED = "AUTHORIZED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    def __str__(self) -> str:
        return self.value


@dataclass
class Payment:
    id: str
    order_id: str
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime
    qr_data: str = ""
    external_id: str = ""

    def is_finished(self) -> bool:
        return self.status in (PaymentStatus.AUTHORIZED, PaymentStatus.NOT_AUTHORIZED)


def new_payment(order_id: str) -> Payment:
    """Create a pending payment for an order."""
    now = _now()
    return Payment(
        id=str(new_ulid()),
        order_id=order_id,
        status=PaymentStatus.PENDING,
        created_at=now,
        updated_at=now,
    )


@dataclass
class Product:
    id: str
    name: str
    description: str
    category_id: int
    amount: float
    created_at: datetime
    updated_at: datetime