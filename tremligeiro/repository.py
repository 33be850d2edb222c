"""Persistence of the service's records through SQLAlchemy."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Customer, Order, OrderProduct, Payment, Product


class RecordNotFoundError(LookupError):
    """No row matched the lookup."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class _Repository:
    def __init__(self, engine: Engine) -> None:
        self._sessions = sessionmaker(engine, expire_on_commit=False)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._sessions() as session, session.begin():
            yield session

    def _insert(self, record: object) -> None:
        with self._session() as session:
            session.add(record)

    def _save(self, record: object) -> None:
        with self._session() as session:
            session.merge(record)

    def _first(self, statement) -> Optional[object]:
        with self._session() as session:
            return session.scalars(statement.limit(1)).first()

    def _all(self, statement) -> list:
        with self._session() as session:
            return list(session.scalars(statement))


class CustomerRepository(_Repository):
    def create(self, customer: Customer) -> None:
        self._insert(customer)

    def find_one(self, customer_id: str) -> Optional[Customer]:
        """Return the customer, or None when there is none with that id."""
        return self._first(select(Customer).where(Customer.id == customer_id))

    def find_by_document_number(self, document_number: str) -> Customer:
        customer = self._first(
            select(Customer).where(Customer.document_number == document_number)
        )
        if customer is None:
            raise RecordNotFoundError()
        return customer


class OrderRepository(_Repository):
    def create(self, order: Order) -> None:
        self._insert(order)

    def find(self) -> list[Order]:
        return self._all(select(Order))

    def find_one(self, order_id: str) -> Order:
        order = self._first(select(Order).where(Order.id == order_id))
        if order is None:
            raise RecordNotFoundError()
        return order

    def update(self, order: Order) -> None:
        """Save every column of the order, inserting it if it is new."""
        self._save(order)


class OrderProductRepository(_Repository):
    def create(self, order_product: OrderProduct) -> None:
        self._insert(order_product)

    def find_by_order_id(self, order_id: str) -> list[OrderProduct]:
        return self._all(select(OrderProduct).where(OrderProduct.order_id == order_id))


class PaymentRepository(_Repository):
    def create(self, payment: Payment) -> None:
        self._insert(payment)

    def find_one(self, payment_id: str) -> Payment:
        payment = self._first(select(Payment).where(Payment.id == payment_id))
        if payment is None:
            raise RecordNotFoundError()
        return payment

    def find_by_order_id(self, order_id: str) -> Optional[Payment]:
        """Return the most recently created payment of the order, or None."""
        return self._first(
            select(Payment)
            .where(Payment.order_id == order_id)
            .order_by(Payment.created_at.desc())
        )

    def update(self, payment: Payment) -> None:
        self._save(payment)


class ProductRepository(_Repository):
    def create(self, product: Product) -> None:
        self._insert(product)

    def find_one(self, product_id: str) -> Product:
        product = self._first(select(Product).where(Product.id == product_id))
        if product is None:
            raise RecordNotFoundError()
        return product

    def find_by_category(self, category_id: int) -> list[Product]:
        return self._all(select(Product).where(Product.category_id == category_id))

    def delete_by_id(self, product_id: str) -> Product:
        """Delete the product; raise RecordNotFoundError when nothing was deleted."""
        with self._session() as session:
            result = session.execute(delete(Product).where(Product.id == product_id))
        if result.rowcount < 1:
            raise RecordNotFoundError()
        return Product(id=product_id)

    def update_by_id(self, product: Product) -> None:
        self._save(product)