"""Controllers wiring repositories and services into the order use cases."""

from __future__ import annotations

from typing import Any

from . import dto
from .gateway import (
    CustomerService,
    OrderGateway,
    OrderProducerGateway,
    OrderProductGateway,
    PaymentGateway,
    PaymentService,
    ProducerService,
    ProductGateway,
    ProductService,
)
from .presenter import OrderPresenter
from .usecase import UscFindOneOrder, UscFindOrder, UscOrderCheckout, UscUpdateOrder

__all__ = [
    "ConsumerProductionController",
    "CustomerService",
    "FindOneOrderController",
    "FindOrderController",
    "OrderCheckoutController",
    "UpdateOrderController",
]


class OrderCheckoutController:
    """Checks an order out."""

    def __init__(
        self,
        *,
        order_repository: Any,
        order_product_repository: Any,
        product_repository: Any,
        product_service: ProductService,
        payment_service: PaymentService,
        payment_repository: Any,
        producer_service: ProducerService,
    ) -> None:
        self._usc = UscOrderCheckout(
            OrderGateway(order_repository),
            ProductGateway(product_repository, product_service),
            OrderProductGateway(order_product_repository),
            PaymentGateway(payment_service, payment_repository),
            OrderPresenter(),
            OrderProducerGateway(producer_service),
        )

    def execute(self, order_checkout: dto.OrderCheckout) -> dto.Order:
        return self._usc.checkout(order_checkout)


class FindOrderController:
    """Lists the orders in progress."""

    def __init__(self, *, order_repository: Any, order_product_repository: Any) -> None:
        self._usc = UscFindOrder(
            OrderGateway(order_repository), OrderProductGateway(order_product_repository)
        )

    def execute(self) -> dto.OrderContent:
        return self._usc.find()


class FindOneOrderController:
    """Shows one order with its product lines."""

    def __init__(
        self,
        *,
        order_repository: Any,
        order_product_repository: Any,
        payment_service: Any = None,
        payment_repository: Any = None,
    ) -> None:
        self._usc = UscFindOneOrder(
            OrderGateway(order_repository),
            OrderProductGateway(order_product_repository),
            PaymentGateway(payment_service, payment_repository),
        )

    def execute(self, order_id: str) -> dto.OrderDetails:
        return self._usc.find_one(order_id)


class UpdateOrderController:
    """Changes an order's status on request."""

    def __init__(self, *, order_repository: Any) -> None:
        self._usc = UscUpdateOrder(OrderGateway(order_repository))

    def execute(self, order_id: str, new_status: str) -> None:
        self._usc.update(order_id, new_status)


class ConsumerProductionController:
    """Applies status changes received from the production queue."""

    def __init__(self, *, order_repository: Any) -> None:
        self._usc = UscUpdateOrder(OrderGateway(order_repository))

    def execute(self, order_id: str, new_status: str) -> None:
        self._usc.update(order_id, new_status)