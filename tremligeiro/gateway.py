"""Gateways translating between domain entities and storage or remote services."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Union

from . import dto, entity, models
from .repository import (
    CustomerRepository,
    OrderProductRepository,
    OrderRepository,
    PaymentRepository,
    ProductRepository,
)

logger = logging.getLogger(__name__)

SPONSOR_ID = 96469944


class CustomerService(Protocol):
    def find_one(self, customer_id: str) -> Optional[dto.CustomerContent]: ...


class ProductService(Protocol):
    def find_one(self, product_id: str) -> Optional[dto.Product]: ...


class PaymentService(Protocol):
    def request_payment(self, payment_request: dto.PaymentCheckout) -> Any: ...


class ProducerService(Protocol):
    def publish_message(self, message: Any) -> None: ...


def _status(value: str) -> Union[entity.OrderStatus, str]:
    try:
        return entity.OrderStatus(value)
    except ValueError:
        return value


def _order_from_model(record: models.Order) -> entity.Order:
    return entity.Order(
        id=record.id,
        customer_id=record.customer_id,
        status=_status(record.status),
        total_amount=record.total_amount,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class CustomerGateway:
    """Looks customers up in the local store or the customer service."""

    def __init__(
        self, customer_repository: CustomerRepository, customer_service: CustomerService
    ) -> None:
        self._customer_repository = customer_repository
        self._customer_service = customer_service

    def find_by_document_number(self, document_number: str) -> entity.Customer:
        record = self._customer_repository.find_by_document_number(document_number)
        return entity.Customer(
            id=record.id,
            name=record.name,
            document_number=record.document_number,
            email=record.email,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def find_one(self, customer_id: str) -> Optional[entity.Customer]:
        """Return the customer known to the customer service, or None."""
        response = self._customer_service.find_one(customer_id)
        if response is None:
            return None
        content = response.content
        return entity.Customer(
            id=content.customer_id,
            name=content.name,
            document_number=content.document_number,
            email=content.email,
            created_at=content.created_at,
            updated_at=content.updated_at,
        )


class OrderGateway:
    """Stores and loads orders."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def create(self, order: entity.Order) -> None:
        self._order_repository.create(
            models.Order(
                id=order.id,
                customer_id=order.customer_id,
                status=str(order.status),
                total_amount=order.total_amount,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
        )

    def update(self, order: entity.Order) -> None:
        """Save the order, stamping the stored row with the current time."""
        self._order_repository.update(
            models.Order(
                id=order.id,
                customer_id=order.customer_id,
                status=str(order.status),
                total_amount=order.total_amount,
                created_at=order.created_at,
                updated_at=datetime.now(timezone.utc),
            )
        )

    def find_one(self, order_id: str) -> entity.Order:
        return _order_from_model(self._order_repository.find_one(order_id))

    def find(self) -> list[entity.Order]:
        return [_order_from_model(record) for record in self._order_repository.find()]


class OrderProductGateway:
    """Stores and loads the product lines of orders."""

    def __init__(self, order_product_repository: OrderProductRepository) -> None:
        self._order_product_repository = order_product_repository

    def create(self, order_product: entity.OrderProduct) -> None:
        self._order_product_repository.create(
            models.OrderProduct(
                id=order_product.id,
                order_id=order_product.order_id,
                product_id=order_product.product_id,
                quantity=order_product.quantity,
                amount=order_product.amount,
                total_amount=order_product.total_amount,
                created_at=order_product.created_at,
            )
        )

    def find_by_order_id(self, order_id: str) -> list[entity.OrderProduct]:
        return [
            entity.OrderProduct(
                id=record.id,
                order_id=record.order_id,
                product_id=record.product_id,
                quantity=record.quantity,
                amount=record.amount,
                total_amount=record.total_amount,
            )
            for record in self._order_product_repository.find_by_order_id(order_id)
        ]


class PaymentGateway:
    """Asks the payment service to charge an order."""

    def __init__(
        self, payment_service: PaymentService, payment_repository: PaymentRepository
    ) -> None:
        self._payment_service = payment_service
        self._payment_repository = payment_repository

    def request_payment(
        self,
        order: entity.Order,
        order_products: list[entity.OrderProduct],
        metadata: dto.MetaData,
    ) -> None:
        """Send a payment request for the order; errors of the service propagate."""
        request = dto.PaymentCheckout(
            order_id=order.id,
            total_amount=order.total_amount,
            products=[
                dto.PaymentItemCheckoutProduct(
                    product_id=line.product_id, quantity=int(line.quantity)
                )
                for line in order_products
            ],
        )
        logger.info("Requesting payment...")
        try:
            response = self._payment_service.request_payment(request)
        except Exception:
            logger.exception("Error requesting payment")
            raise
        logger.info("Request payment succesfully: %r", response)


class OrderProducerGateway:
    """Publishes order events."""

    def __init__(self, producer_service: ProducerService) -> None:
        self._producer_service = producer_service

    def publish_message(self, order: entity.Order) -> None:
        self._producer_service.publish_message(
            dto.Order(
                id=order.id,
                customer_id=order.customer_id,
                status=str(order.status),
                total_amount=order.total_amount,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
        )


class ProductGateway:
    """Looks products up in the product service."""

    def __init__(
        self, product_repository: ProductRepository, product_service: ProductService
    ) -> None:
        self._product_repository = product_repository
        self._product_service = product_service

    def find_one(self, product_id: str) -> Optional[entity.Product]:
        """Return the product, or None when the service has none."""
        response = self._product_service.find_one(product_id)
        if response is None:
            return None
        return entity.Product(
            id=response.product_id,
            name=response.name,
            description=response.description,
            category_id=response.category.id,
            amount=response.amount,
            created_at=response.created_at,
            updated_at=response.updated_at,
        )