"""REST controllers exposing the order use cases over HTTP."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from . import dto
from .dto import DecodeError, from_json
from .httpserver import Request, Response, handle_error, no_content, ok
from .validator import validate

logger = logging.getLogger(__name__)


class _CheckoutExecutor(Protocol):
    def execute(self, order_checkout: dto.OrderCheckout) -> dto.Order: ...


class _FindExecutor(Protocol):
    def execute(self) -> dto.OrderContent: ...


class _UpdateExecutor(Protocol):
    def execute(self, order_id: str, new_status: str) -> None: ...


@dataclass
class Output:
    """Body of the liveness response."""

    status: str


class LivenessController:
    """Answers that the service is alive."""

    def handle(self, request: Request) -> Response:
        return ok(Output(status="OK"))


def _load_body(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(str(exc)) from exc


def _parse_checkout(request: Request) -> dto.OrderCheckout:
    """Decode the checkout body, taking the order id from the path unless the body sets one."""
    order_id = request.parse_param_string("orderId")
    data = _load_body(request.body)
    if data is None:
        data = {}
    if isinstance(data, dict):
        key = next((k for k in data if k.casefold() == "orderid"), None)
        if key is None or data[key] is None:
            data = {k: v for k, v in data.items() if k != key}
            data["orderId"] = order_id
    return from_json(dto.OrderCheckout, data)


class OrderCheckoutRestController:
    """POST /order/<orderId>/checkout."""

    def __init__(self, controller: _CheckoutExecutor) -> None:
        self._controller = controller

    def handle(self, request: Request) -> Response:
        try:
            order_checkout = _parse_checkout(request)
            validate(order_checkout)
        except Exception as exc:
            return handle_error(exc)
        try:
            output = self._controller.execute(order_checkout)
        except Exception as exc:
            logger.error("Error on checkout order: %s", exc)
            return handle_error(exc)
        return ok(output)


class OrderFindController:
    """GET /order."""

    def __init__(self, controller: _FindExecutor) -> None:
        self._controller = controller

    def handle(self, request: Request) -> Response:
        try:
            output = self._controller.execute()
        except Exception as exc:
            return handle_error(exc)
        return ok(output)


class UpdateOrderRestController:
    """PUT /order/<orderId>."""

    def __init__(self, controller: _UpdateExecutor) -> None:
        self._controller = controller

    def handle(self, request: Request) -> Response:
        try:
            update = request.parse_body(dto.UpdateOrder)
            validate(update)
            self._controller.execute(request.params.get("orderId", ""), update.status)
        except Exception as exc:
            return handle_error(exc)
        return no_content()