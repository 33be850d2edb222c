import json
from datetime import datetime, timezone

import pytest

from tremligeiro.dto import (
    DecodeError,
    MetaData,
    Order,
    OrderCheckout,
    OrderContent,
    UpdateOrder,
    from_json,
    to_json,
)


def _order():
    return Order(
        id="order-1",
        customer_id="customer-1",
        status="PENDING",
        total_amount=100.0,
        created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 2, 3, 4, 5, 500000, tzinfo=timezone.utc),
        metadata=MetaData(payment_id="pay-1"),
    )


def test_to_json_uses_wire_names():
    data = to_json(_order())
    assert set(data) == {
        "id",
        "customerId",
        "status",
        "totalAmount",
        "createdAt",
        "updatedAt",
        "metadata",
    }
    assert data["metadata"] == {"paymentId": "pay-1", "paymentWebhookUrl": None}


def test_to_json_formats_utc_time_with_z():
    data = to_json(_order())
    assert data["createdAt"] == "2024-01-02T03:04:05Z"
    assert data["updatedAt"].endswith("Z")


def test_round_trip_through_json_text():
    order = _order()
    assert from_json(Order, json.dumps(to_json(order))) == order


def test_round_trip_of_content_list():
    content = OrderContent(content=[_order(), _order()])
    assert from_json(OrderContent, to_json(content)) == content


def test_from_json_nested_products_from_bytes():
    body = b'{"orderId": "o1", "products": [{"productId": "p1", "quantity": 2}]}'
    checkout = from_json(OrderCheckout, body)
    assert checkout.order_id == "o1"
    assert [(p.product_id, p.quantity) for p in checkout.products] == [("p1", 2)]


def test_from_json_missing_keys_keep_defaults():
    checkout = from_json(OrderCheckout, "{}")
    assert checkout.order_id == ""
    assert checkout.products is None
    assert checkout.metadata == MetaData()


def test_from_json_null_optional_is_none():
    order = from_json(Order, {"id": "x", "customerId": None})
    assert order.id == "x"
    assert order.customer_id is None


def test_from_json_matches_keys_case_insensitively():
    update = from_json(UpdateOrder, {"STATUS": "READY"})
    assert update.status == "READY"


def test_from_json_truncates_nanoseconds():
    order = from_json(Order, {"createdAt": "2024-01-02T03:04:05.123456789Z"})
    assert order.created_at.microsecond == 123456
    assert order.created_at.tzinfo is not None


def test_from_json_rejects_wrong_type():
    with pytest.raises(DecodeError):
        from_json(OrderCheckout, {"products": [{"productId": "p1", "quantity": "x"}]})


def test_from_json_rejects_invalid_text():
    with pytest.raises(DecodeError):
        from_json(Order, "{not json")


def test_from_json_rejects_non_object():
    with pytest.raises(DecodeError):
        from_json(Order, "[1, 2]")


def test_decode_error_is_value_error():
    with pytest.raises(ValueError):
        from_json(Order, {"createdAt": "yesterday"})