# tremligeiro

The core of the order service of a fast-food point of sale. It keeps orders
and the products on them in a relational database, checks orders out by
asking a payment service to charge them, publishes order events, and follows
the kitchen's production events to move orders through their lifecycle.
Request handling is written against plain `Request`/`Response` objects, so it
can sit behind any web framework.

## Modules

| Module                   | What it holds                                                                 |
|--------------------------|-------------------------------------------------------------------------------|
| `tremligeiro.xerrors`    | `BusinessError`, `NotFoundError`, `ValidationError` (with `Field`s)           |
| `tremligeiro.ulid`       | `new_ulid()` (time-ordered id as a `uuid.UUID`), `ulid_from_string()`          |
| `tremligeiro.dto`        | request/response dataclasses, `to_json()` and `from_json()`                   |
| `tremligeiro.entity`     | `Order`, `OrderStatus`, `OrderProduct`, `Payment`, `Product`, `Customer`      |
| `tremligeiro.validator`  | `validate()`, raising `ValidationError` for broken DTO rules                  |
| `tremligeiro.config`     | `Config` and `load_env_config()`                                              |
| `tremligeiro.models`     | SQLAlchemy tables: `Base`, `Customer`, `Order`, `OrderProduct`, `Payment`, `Product` |
| `tremligeiro.repository` | repositories over an SQLAlchemy `Engine`, `RecordNotFoundError`               |
| `tremligeiro.gateway`    | gateways between entities, repositories and remote services                   |
| `tremligeiro.presenter`  | `OrderPresenter`, `CustomerPresenter`                                         |
| `tremligeiro.usecase`    | `UscOrderCheckout`, `UscFindOrder`, `UscFindOneOrder`, `UscUpdateOrder`       |
| `tremligeiro.controller` | controllers wiring repositories and services into the use cases              |
| `tremligeiro.httpserver` | `Request`, `RequestBuilder`, `Response`, response helpers, `handle_error()`   |
| `tremligeiro.rest`       | `LivenessController`, `OrderFindController`, `UpdateOrderRestController`, `OrderCheckoutRestController` |
| `tremligeiro.event`      | `ProducerService`, `ConsumerService`, `EventServer`, `SNSEnvelope`            |

## Order lifecycle

`Order.validate_status(current, new)` allows only these moves:

| From             | To                                      |
|------------------|-----------------------------------------|
| `PENDING`        | `RECEIVED`, `IN_PREPARATION`, `EXPIRED` |
| `RECEIVED`       | `IN_PREPARATION`                        |
| `IN_PREPARATION` | `READY`                                 |
| `READY`          | `FINALIZED`                             |

`OrderPresenter.build_order_content_response` leaves finalized orders out and
lists the rest oldest first.

Checking out (`UscOrderCheckout.checkout`) requires that the order may move to
`RECEIVED`, prices every product through the product service, stores the order
lines, requests payment, saves the order with its total and publishes it. An
unknown order or product raises `BusinessError` (`TL-ORDERCKT-003`,
`TL-ORDERCKT-004`); a status that may not change raises `TL-ORDERCKT-005`.

## Errors and HTTP responses

`tremligeiro.httpserver.handle_error` maps exceptions to responses:
`ValidationError` → 400 with one detail per field, `BusinessError` → 422,
`NotFoundError` → 404, anything else (including a body that is not valid
JSON) → 500. `ErrorMessage.to_dict()` gives the JSON form, for example
`{"error": {"description": "Order not found", "code": "TL-ORDERCKT-003"}}`.

Status-change bodies accept only `IN_PREPARATION`, `READY` and `FINALIZED`;
`validate` reports anything else with the reason `INVALID_VALUE`, and missing
required fields with `REQUIRED_ATTRIBUTE_MISSING`.

## Configuration

`load_env_config()` loads `../../.env`, `../.env` and `.env` when they exist
(without overriding variables already set) and builds a `Config`:

| Variable                     | Field                        | Default |
|------------------------------|------------------------------|---------|
| `ENV`                        | `env`                        | `local` |
| `PORT`                       | `port`                       | `8080`  |
| `POSTGRES_HOST`              | `db_host`                    |         |
| `POSTGRES_PORT`              | `db_port`                    | `0`     |
| `POSTGRES_USER`              | `db_user`                    |         |
| `POSTGRES_PASS`              | `db_password`                |         |
| `POSTGRES_DB`                | `db_name`                    |         |
| `PAYMENT_URL`                | `payment_url`                |         |
| `PAYMENT_AUTH_TOKEN`         | `payment_auth_token`         |         |
| `CUSTOMER_URL`               | `customer_url`               |         |
| `PRODUCT_URL`                | `product_url`                |         |
| `ORDER_TOPIC_ARN`            | `order_topic_arn`            |         |
| `PRODUCTION_ORDER_QUEUE_URL` | `production_order_queue_url` |         |
| `AWS_ACCESS_KEY_ID`          | `aws_access_key_id`          |         |
| `AWS_SECRET_ACCESS_KEY`      | `aws_secret_access_key`      |         |
| `AWS_SESSION_TOKEN`          | `aws_session_token`          |         |
| `AWS_REGION`                 | `aws_region`                 |         |
| `AWS_USE_CREDENTIALS`        | `aws_use_credentials`        | `false` |

A non-integer `PORT` or `POSTGRES_PORT` raises `ValueError`.

## Example

```python
from sqlalchemy import create_engine

from tremligeiro import dto, entity, httpserver, models, repository, rest, xerrors

order = entity.new_order(dto.CreateOrder(customer_id="customer-1"), True)
assert order.status is entity.OrderStatus.PENDING
assert order.validate_status(order.status, entity.OrderStatus.RECEIVED)
assert not order.validate_status(order.status, entity.OrderStatus.READY)

line = entity.new_order_product(order.id, "product-1", 2, 12.5)
assert line.total_amount == 25.0

response = httpserver.handle_error(
    xerrors.BusinessError("TL-ORDERCKT-003", "Order not found")
)
assert response.code == 422

assert rest.LivenessController().handle(httpserver.Request()).code == 200

request = (
    httpserver.RequestBuilder()
    .method("PUT")
    .path("/api/v1/order/123")
    .params({"orderId": "123"})
    .body(b'{"status": "READY"}')
    .build()
)
assert request.parse_body(dto.UpdateOrder).status == "READY"

engine = create_engine("sqlite://")
models.Base.metadata.create_all(engine)
orders = repository.OrderRepository(engine)
orders.create(models.Order(id=order.id, status="PENDING", total_amount=0.0))
assert orders.find_one(order.id).status == "PENDING"
```

## What the package does not do

- It has no web server, route table or command to start the service. The
  REST controllers in `tremligeiro.rest` turn a `Request` into a `Response`;
  mounting them on paths and serving them is left to the application.
- It has no clients for the payment, customer or product services, nor for
  the notification topic or queue. `PaymentGateway`, `CustomerGateway`,
  `ProductGateway`, `ProducerService` and `ConsumerService` take objects that
  provide `request_payment`, `find_one`, `publish(TopicArn=..., Message=...)`,
  `receive_message(...)` and `delete_message(...)`.
- It runs no schema migrations; `models.Base.metadata` can create the tables.
- `EventServer.consume` handles one message per call; looping over it is up
  to the caller.