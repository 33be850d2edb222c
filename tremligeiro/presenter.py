"""Turn domain entities into response DTOs."""

from __future__ import annotations

from typing import Optional

from . import dto, entity


class CustomerPresenter:
    """Builds customer responses."""

    def build_customer_create_response(self, customer: entity.Customer) -> dto.Customer:
        return dto.Customer(
            customer_id=customer.id,
            name=customer.name,
            document_number=customer.document_number,
            email=customer.email,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )

    def build_customer_content_response(self, customer: entity.Customer) -> dto.CustomerContent:
        return dto.CustomerContent(content=self.build_customer_create_response(customer))


class OrderPresenter:
    """Builds order responses."""

    def build_order_create_response(
        self, order: entity.Order, payment_id: Optional[str]
    ) -> dto.Order:
        return dto.Order(
            id=order.id,
            customer_id=order.customer_id,
            status=str(order.status),
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
            metadata=dto.MetaData(payment_id=payment_id),
        )

    def build_order_content_response(self, orders: list[entity.Order]) -> dto.OrderContent:
        """List the orders that are not finalized, oldest first."""
        active = sorted(
            (order for order in orders if order.status != entity.OrderStatus.FINALIZED),
            key=lambda order: order.created_at,
        )
        return dto.OrderContent(
            content=[self.build_order_create_response(order, None) for order in active]
        )

    def build_order_details_create_response(
        self, order: entity.Order, order_products: list[entity.OrderProduct]
    ) -> dto.OrderDetails:
        return dto.OrderDetails(
            id=order.id,
            customer_id=order.customer_id,
            status=str(order.status),
            total_amount=order.total_amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
            order_products=[
                dto.OrderProduct(id=line.id, product_id=line.product_id, quantity=line.quantity)
                for line in order_products
            ],
        )