import pytest

from tremligeiro import dto
from tremligeiro.httpserver import Request
from tremligeiro.rest import (
    LivenessController,
    OrderCheckoutRestController,
    OrderFindController,
    Output,
    UpdateOrderRestController,
)
from tremligeiro.xerrors import BusinessError, NotFoundError


class FakeCheckout:
    def __init__(self, error=None):
        self.received = None
        self.error = error

    def execute(self, order_checkout):
        self.received = order_checkout
        if self.error is not None:
            raise self.error
        return dto.Order(id=order_checkout.order_id, status="RECEIVED")


class FakeFind:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def execute(self):
        if self.error is not None:
            raise self.error
        return self.result


class FakeUpdate:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def execute(self, order_id, new_status):
        self.calls.append((order_id, new_status))
        if self.error is not None:
            raise self.error


def test_liveness_controller_handle():
    resp = LivenessController().handle(Request())
    assert resp.code == 200
    assert isinstance(resp.body, Output)
    assert resp.body.status == "OK"


def test_checkout_takes_order_id_from_path():
    fake = FakeCheckout()
    request = Request(
        params={"orderId": "o1"},
        body=b'{"products":[{"productId":"p1","quantity":2}]}',
    )
    resp = OrderCheckoutRestController(fake).handle(request)
    assert resp.code == 200
    assert resp.body == dto.Order(id="o1", status="RECEIVED")
    assert fake.received.order_id == "o1"
    assert fake.received.products == [dto.OrderCheckoutProduct(product_id="p1", quantity=2)]


def test_checkout_body_order_id_wins():
    fake = FakeCheckout()
    request = Request(params={"orderId": "o1"}, body=b'{"orderId":"o2","products":[]}')
    resp = OrderCheckoutRestController(fake).handle(request)
    assert resp.code == 200
    assert fake.received.order_id == "o2"


def test_checkout_missing_products_is_bad_request():
    fake = FakeCheckout()
    request = Request(params={"orderId": "o1"}, body=b"{}")
    resp = OrderCheckoutRestController(fake).handle(request)
    assert resp.code == 400
    assert resp.body.to_dict() == {
        "error": {
            "description": "Bad Request",
            "code": "400",
            "details": [
                {"attribute": "products", "messages": ["REQUIRED_ATTRIBUTE_MISSING"]}
            ],
        }
    }
    assert fake.received is None


def test_checkout_invalid_json_is_internal_error():
    resp = OrderCheckoutRestController(FakeCheckout()).handle(
        Request(params={"orderId": "o1"}, body=b"not json")
    )
    assert resp.code == 500
    assert resp.body.to_dict() == {
        "error": {"description": "Internal Server Error", "code": "500"}
    }


def test_checkout_business_error_is_unprocessable():
    fake = FakeCheckout(error=BusinessError("TL-ORDERCKT-003", "Order not found"))
    resp = OrderCheckoutRestController(fake).handle(
        Request(params={"orderId": "o1"}, body=b'{"products":[]}')
    )
    assert resp.code == 422
    assert resp.body.to_dict() == {
        "error": {"description": "Order not found", "code": "TL-ORDERCKT-003"}
    }


def test_find_returns_content():
    content = dto.OrderContent(content=[dto.Order(id="a")])
    resp = OrderFindController(FakeFind(result=content)).handle(Request())
    assert resp.code == 200
    assert resp.body == content


def test_find_error_is_internal_error():
    resp = OrderFindController(FakeFind(error=RuntimeError("boom"))).handle(Request())
    assert resp.code == 500


def test_find_not_found_error():
    resp = OrderFindController(FakeFind(error=NotFoundError("404", " missing"))).handle(Request())
    assert resp.code == 404
    assert resp.body.to_dict() == {"error": {"description": " missing", "code": "404"}}


def test_update_returns_no_content():
    fake = FakeUpdate()
    resp = UpdateOrderRestController(fake).handle(
        Request(params={"orderId": "o1"}, body=b'{"status":"READY"}')
    )
    assert resp.code == 204
    assert resp.body is None
    assert fake.calls == [("o1", "READY")]


@pytest.mark.parametrize("body", [b"{}", b'{"status":"PENDING"}'])
def test_update_invalid_status_is_bad_request(body):
    fake = FakeUpdate()
    resp = UpdateOrderRestController(fake).handle(Request(params={"orderId": "o1"}, body=body))
    assert resp.code == 400
    assert resp.body.to_dict()["error"]["details"] == [
        {"attribute": "status", "messages": ["INVALID_VALUE"]}
    ]
    assert fake.calls == []


def test_update_business_error():
    fake = FakeUpdate(error=BusinessError("TL-ORDERCKT-005", "not allowed"))
    resp = UpdateOrderRestController(fake).handle(
        Request(params={"orderId": "o1"}, body=b'{"status":"FINALIZED"}')
    )
    assert resp.code == 422
    assert fake.calls == [("o1", "FINALIZED")]