"""Data transfer objects exchanged over HTTP and messaging, with JSON codecs."""

import dataclasses
import json
import re
import types
import typing
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)
_TRAILING_ZEROS_RE = re.compile(r"(\.\d*?)0+(?=Z|[+-]\d{2}:\d{2}$)")


class DecodeError(ValueError):
    """JSON input does not fit the target type."""


def _field(
    json_name: str,
    default: Any = dataclasses.MISSING,
    *,
    factory: Any = dataclasses.MISSING,
    required: bool = False,
    one_of: tuple = (),
) -> Any:
    metadata = {"json": json_name, "required": required, "one_of": tuple(one_of)}
    if factory is not dataclasses.MISSING:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def _time(json_name: str) -> Any:
    return _field(json_name, ZERO_TIME)


@dataclass
class Category:
    id: int = _field("id", 0)
    name: str = _field("name", "")


@dataclass
class CreateCustomer:
    name: str = _field("name", "", required=True)
    document_number: str = _field("documentNumber", "", required=True)
    email: str = _field("email", "", required=True)


@dataclass
class UpdateCustomer:
    customer_id: str = _field("customerId", "")
    name: str = _field("name", "")
    document_number: str = _field("documentNumber", "")
    email: str = _field("email", "")
    updated_at: datetime = _time("updatedAt")


@dataclass
class FindCustomer:
    document_number: str = _field("documentNumber", "", required=True)


@dataclass
class Customer:
    customer_id: str = _field("id", "")
    name: str = _field("name", "")
    document_number: str = _field("documentNumber", "")
    email: str = _field("email", "")
    created_at: datetime = _time("createdAt")
    updated_at: datetime = _time("updatedAt")


@dataclass
class CustomerContent:
    content: Customer = _field("content", factory=Customer)


@dataclass
class MetaData:
    payment_id: Optional[str] = _field("paymentId", None)
    payment_webhook_url: Optional[str] = _field("paymentWebhookUrl", None)


@dataclass
class MetaDataContent:
    content: MetaData = _field("metadata", factory=MetaData)


@dataclass
class CreateOrder:
    customer_id: str = _field("customerId", "")


@dataclass
class Order:
    id: str = _field("id", "")
    customer_id: Optional[str] = _field("customerId", None)
    status: str = _field("status", "")
    total_amount: float = _field("totalAmount", 0.0)
    created_at: datetime = _time("createdAt")
    updated_at: datetime = _time("updatedAt")
    metadata: MetaData = _field("metadata", factory=MetaData)


@dataclass
class OrderCheckoutProduct:
    product_id: str = _field("productId", "")
    quantity: int = _field("quantity", 0)


@dataclass
class OrderCheckout:
    order_id: str = _field("orderId", "", required=True)
    products: Optional[list[OrderCheckoutProduct]] = _field("products", None, required=True)
    metadata: MetaData = _field("metadata", factory=MetaData)


@dataclass
class OrderContent:
    content: list[Order] = _field("content", factory=list)


@dataclass
class OrderProduct:
    id: str = _field("id", "")
    product_id: str = _field("productId", "")
    quantity: int = _field("quantity", 0)


@dataclass
class OrderDetails:
    id: str = _field("id", "")
    customer_id: Optional[str] = _field("customerId", None)
    status: str = _field("status", "")
    total_amount: float = _field("totalAmount", 0.0)
    created_at: datetime = _time("createdAt")
    updated_at: datetime = _time("updatedAt")
    order_products: list[OrderProduct] = _field("orderProducts", factory=list)


@dataclass
class UpdateOrder:
    status: str = _field("status", "", one_of=("IN_PREPARATION", "READY", "FINALIZED"))


@dataclass
class OrderEvent:
    id: str = _field("id", "")
    status: str = _field("status", "")


@dataclass
class PaymentItemCheckoutProduct:
    product_id: str = _field("productId", "")
    quantity: int = _field("quantity", 0)


@dataclass
class PaymentCheckout:
    order_id: str = _field("orderId", "", required=True)
    total_amount: float = _field("totalAmount", 0.0)
    products: Optional[list[PaymentItemCheckoutProduct]] = _field(
        "products", None, required=True
    )
    metadata: MetaData = _field("metadata", factory=MetaData)


@dataclass
class CreateProduct:
    name: str = _field("name", "", required=True)
    description: str = _field("description", "", required=True)
    category_id: int = _field("categoryId", 0, required=True, one_of=(1, 2, 3, 4))
    amount: float = _field("amount", 0.0, required=True)


@dataclass
class UpdateProduct:
    product_id: str = _field("productId", "")
    name: str = _field("name", "")
    description: str = _field("description", "")
    category_id: int = _field("categoryId", 0)
    amount: float = _field("amount", 0.0)
    created_at: datetime = _time("createdAt")


@dataclass
class Product:
    product_id: str = _field("id", "")
    name: str = _field("name", "")
    description: str = _field("description", "")
    amount: float = _field("amount", 0.0)
    category: Category = _field("category", factory=Category)
    created_at: datetime = _time("createdAt")
    updated_at: datetime = _time("updatedAt")


@dataclass
class ProductContent:
    content: list[Product] = _field("content", factory=list)


def _json_name(f: dataclasses.Field) -> str:
    return f.metadata.get("json", f.name)


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if value.utcoffset() == timezone.utc.utcoffset(None):
        text = text[: -len("+00:00")] + "Z"
    return _TRAILING_ZEROS_RE.sub(r"\1", text)


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.match(text)
    if match is None:
        raise DecodeError(f"cannot parse {text!r} as a timestamp")
    base, fraction, zone = match.groups()
    micros = (fraction or "")[:6].ljust(6, "0")
    offset = "+00:00" if zone == "Z" else zone
    try:
        return datetime.fromisoformat(f"{base}.{micros}{offset}")
    except ValueError as exc:
        raise DecodeError(str(exc)) from exc


def to_json(obj: Any) -> Any:
    """Convert a DTO (or nested value) into plain JSON-ready Python values."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {_json_name(f): to_json(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, datetime):
        return _format_time(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [to_json(item) for item in obj]
    if isinstance(obj, dict):
        return {str(key): to_json(value) for key, value in obj.items()}
    return obj


def from_json(cls: type, data: Any) -> Any:
    """Build an instance of ``cls`` from JSON text, bytes or an already parsed object."""
    if isinstance(data, (str, bytes, bytearray)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise DecodeError(str(exc)) from exc
    return _decode(cls, data)


def _is_union(tp: Any) -> bool:
    origin = typing.get_origin(tp)
    return origin is typing.Union or origin is types.UnionType


def _is_optional(tp: Any) -> bool:
    return _is_union(tp) and type(None) in typing.get_args(tp)


def _lookup(data: dict, name: str) -> Optional[str]:
    if name in data:
        return name
    folded = name.casefold()
    return next((key for key in data if key.casefold() == folded), None)


def _decode(tp: Any, value: Any) -> Any:
    if _is_union(tp):
        if value is None:
            return None
        inner = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        return _decode(inner[0], value)
    if dataclasses.is_dataclass(tp):
        if value is None:
            return tp()
        if not isinstance(value, dict):
            raise DecodeError(f"expected an object for {tp.__name__}")
        kwargs = {}
        for f in dataclasses.fields(tp):
            key = _lookup(value, _json_name(f))
            if key is None:
                continue
            raw = value[key]
            if raw is None:
                if _is_optional(f.type):
                    kwargs[f.name] = None
                continue
            kwargs[f.name] = _decode(f.type, raw)
        return tp(**kwargs)
    if value is None:
        raise DecodeError(f"null is not a valid {tp}")
    if typing.get_origin(tp) is list:
        if not isinstance(value, list):
            raise DecodeError("expected an array")
        (item_type,) = typing.get_args(tp)
        return [_decode(item_type, item) for item in value]
    if tp is datetime:
        if not isinstance(value, str):
            raise DecodeError("expected a timestamp string")
        return _parse_time(value)
    if tp is bool:
        if not isinstance(value, bool):
            raise DecodeError("expected a boolean")
        return value
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError("expected an integer")
        return value
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError("expected a number")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise DecodeError("expected a string")
        return value
    return value