"""Application use cases for checking out, listing and updating orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from . import dto, entity
from .gateway import (
    OrderGateway,
    OrderProducerGateway,
    OrderProductGateway,
    PaymentGateway,
    ProductGateway,
)
from .presenter import OrderPresenter
from .ulid import new_ulid
from .xerrors import BusinessError

logger = logging.getLogger(__name__)

ERR_PAYMENT_UNAUTHORIZED = BusinessError("TL-ORDERCKT-001", "Payment unauthorized")
ERROR_CUSTOMER_NOT_FOUND = BusinessError("TL-ORDERCKT-002", "Customer not found")
ERROR_ORDER_NOT_FOUND = BusinessError("TL-ORDERCKT-003", "Order not found")
ERROR_PRODUCT_NOT_FOUND = BusinessError("TL-ORDERCKT-004", "Product not found")
ERROR_STATUS_NOT_ALLOWED_CODE = "TL-ORDERCKT-005"

ERR_CATEGORY_NOT_EXISTS = BusinessError("TL-PRODUCT-001", "Category not exists")
ERR_PRODUCT_NOT_FOUND = BusinessError("TL-PRODUCT-002", "Product not found")


def _fresh(error: BusinessError) -> BusinessError:
    return BusinessError(error.code, error.description)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _load_order(order_gateway: OrderGateway, order_id: str) -> entity.Order:
    """Load an order; any failure to find it is reported as ERROR_ORDER_NOT_FOUND."""
    try:
        order = order_gateway.find_one(order_id)
    except Exception as exc:
        raise _fresh(ERROR_ORDER_NOT_FOUND) from exc
    if order is None:
        raise _fresh(ERROR_ORDER_NOT_FOUND)
    return order


class UscOrderCheckout:
    """Prices an order's products, requests payment and publishes the order."""

    def __init__(
        self,
        order_gateway: OrderGateway,
        product_gateway: ProductGateway,
        order_product_gateway: OrderProductGateway,
        payment_gateway: PaymentGateway,
        order_presenter: OrderPresenter,
        order_producer_gateway: OrderProducerGateway,
    ) -> None:
        self._order_gateway = order_gateway
        self._product_gateway = product_gateway
        self._order_product_gateway = order_product_gateway
        self._payment_gateway = payment_gateway
        self._order_presenter = order_presenter
        self._order_producer_gateway = order_producer_gateway

    def checkout(self, order_checkout: dto.OrderCheckout) -> dto.Order:
        logger.info("Intiating checkout order %s", order_checkout.order_id)

        order = _load_order(self._order_gateway, order_checkout.order_id)
        if not order.validate_status(order.status, entity.OrderStatus.RECEIVED):
            raise BusinessError(
                ERROR_STATUS_NOT_ALLOWED_CODE,
                f"Order status is not {entity.OrderStatus.PENDING} "
                f"current status is {order.status}",
            )

        order_products, total_amount = self._price_products(
            order_checkout.order_id, order_checkout.products or []
        )
        order.total_amount = total_amount

        payment = entity.new_payment(order.id)

        for order_product in order_products:
            try:
                self._order_product_gateway.create(order_product)
            except Exception:
                logger.exception("Error storing order product %s", order_product.id)

        self._payment_gateway.request_payment(order, order_products, order_checkout.metadata)

        try:
            self._order_gateway.update(order)
        except Exception:
            logger.exception("Error updating order %s", order.id)

        try:
            self._order_producer_gateway.publish_message(order)
        except Exception:
            logger.exception("Error publishing order %s", order.id)

        return self._order_presenter.build_order_create_response(order, payment.id)

    def _price_products(
        self, order_id: str, products: list[dto.OrderCheckoutProduct]
    ) -> tuple[list[entity.OrderProduct], float]:
        order_products: list[entity.OrderProduct] = []
        total_amount = 0.0
        for item in products:
            try:
                product = self._product_gateway.find_one(item.product_id)
            except Exception as exc:
                raise _fresh(ERROR_PRODUCT_NOT_FOUND) from exc
            if product is None:
                raise _fresh(ERROR_PRODUCT_NOT_FOUND)
            order_products.append(
                entity.new_order_product(order_id, product.id, item.quantity, product.amount)
            )
            total_amount += float(item.quantity) * product.amount
        return order_products, total_amount


class UscFindOrder:
    """Lists the orders that are still in progress."""

    def __init__(
        self, order_gateway: OrderGateway, order_product_gateway: OrderProductGateway
    ) -> None:
        self._order_gateway = order_gateway
        self._order_product_gateway = order_product_gateway
        self._order_presenter = OrderPresenter()

    def find(self) -> dto.OrderContent:
        return self._order_presenter.build_order_content_response(self._order_gateway.find())


class UscFindOneOrder:
    """Shows one order with its product lines."""

    def __init__(
        self,
        order_gateway: OrderGateway,
        order_product_gateway: OrderProductGateway,
        payment_gateway: Optional[PaymentGateway] = None,
    ) -> None:
        self._order_gateway = order_gateway
        self._order_product_gateway = order_product_gateway
        self._order_presenter = OrderPresenter()

    def find_one(self, order_id: str) -> dto.OrderDetails:
        order = _load_order(self._order_gateway, order_id)
        order_products = self._order_product_gateway.find_by_order_id(order_id)
        return self._order_presenter.build_order_details_create_response(order, order_products)


class UscUpdateOrder:
    """Moves an order to a new status when the transition is allowed."""

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def update(self, order_id: str, new_status: str) -> None:
        logger.info("Updating order status orderId=%s newStatus=%s", order_id, new_status)
        order = _load_order(self._order_gateway, order_id)
        if not order.validate_status(order.status, new_status):
            raise BusinessError(
                ERROR_STATUS_NOT_ALLOWED_CODE,
                f"Order status is not {new_status} current status is {order.status}",
            )
        order.status = entity.OrderStatus(new_status)
        self._order_gateway.update(order)


@dataclass
class CmdCreateProduct:
    name: str
    description: str
    category_id: int
    amount: float

    def to_new_entity(self) -> entity.Product:
        """Build a new product with a fresh identifier and current timestamps."""
        now = _now()
        return entity.Product(
            id=str(new_ulid()),
            name=self.name,
            description=self.description,
            category_id=self.category_id,
            amount=self.amount,
            created_at=now,
            updated_at=now,
        )


@dataclass
class CmdUpdateProduct:
    product_id: str
    name: str
    description: str
    category_id: int
    amount: float
    created_at: datetime

    def to_update_entity(self) -> entity.Product:
        """Build the updated product, keeping its creation time."""
        return entity.Product(
            id=self.product_id,
            name=self.name,
            description=self.description,
            category_id=self.category_id,
            amount=self.amount,
            created_at=self.created_at,
            updated_at=_now(),
        )


@dataclass
class CreateProductOutput:
    product_id: str
    name: str
    description: str
    amount: float
    category_id: int
    category_name: str
    created_at: datetime
    updated_at: datetime