"""Relational mapping of the service's tables."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base holding the metadata of every table."""


class Customer(Base):
    __tablename__ = "customer"

    id: Mapped[str] = mapped_column("customer_id", String, primary_key=True)
    name: Mapped[str] = mapped_column("name", String, default="")
    document_number: Mapped[str] = mapped_column("document_number", String, default="")
    email: Mapped[str] = mapped_column("email", String, default="")
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "updated_at", DateTime(timezone=True), nullable=True
    )


class Order(Base):
    __tablename__ = "order"

    id: Mapped[str] = mapped_column("order_id", String, primary_key=True)
    customer_id: Mapped[Optional[str]] = mapped_column("customer_id", String, nullable=True)
    status: Mapped[str] = mapped_column("status", String, default="")
    total_amount: Mapped[float] = mapped_column("total_amount", Float, default=0.0)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "updated_at", DateTime(timezone=True), nullable=True
    )


class OrderProduct(Base):
    __tablename__ = "order_product"

    id: Mapped[str] = mapped_column("order_product_id", String, primary_key=True)
    order_id: Mapped[str] = mapped_column("order_id", String, default="")
    product_id: Mapped[str] = mapped_column("product_id", String, default="")
    quantity: Mapped[int] = mapped_column("quantity", BigInteger, default=0)
    amount: Mapped[float] = mapped_column("amount", Float, default=0.0)
    total_amount: Mapped[float] = mapped_column("total_amount", Float, default=0.0)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), nullable=True
    )


class Payment(Base):
    __tablename__ = "payment"

    id: Mapped[str] = mapped_column("payment_id", String, primary_key=True)
    order_id: Mapped[str] = mapped_column("order_id", String, default="")
    status: Mapped[str] = mapped_column("status", String, default="")
    qr_data: Mapped[str] = mapped_column("qr_data", String, default="")
    external_id: Mapped[str] = mapped_column("external_id", String, default="")
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "updated_at", DateTime(timezone=True), nullable=True
    )


class Product(Base):
    __tablename__ = "product"

    id: Mapped[str] = mapped_column("product_id", String, primary_key=True)
    name: Mapped[str] = mapped_column("name", String, default="")
    description: Mapped[str] = mapped_column("description", String, default="")
    category_id: Mapped[int] = mapped_column("category_id", Integer, default=0)
    amount: Mapped[float] = mapped_column("amount", Float, default=0.0)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        "created_at", DateTime(timezone=True), nullable=True
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        "updated_at", DateTime(timezone=True), nullable=True
    )