"""Publishing order events and consuming production status messages."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from . import dto
from .dto import DecodeError, from_json, to_json

logger = logging.getLogger(__name__)


class SnsClient(Protocol):
    def publish(self, *, TopicArn: str, Message: str) -> Any: ...


class SqsClient(Protocol):
    def receive_message(self, *, QueueUrl: str, MaxNumberOfMessages: int) -> Any: ...

    def delete_message(self, *, QueueUrl: str, ReceiptHandle: str) -> Any: ...


class OrderStatusHandler(Protocol):
    def execute(self, order_id: str, new_status: str) -> None: ...


@dataclass
class SNSEnvelope:
    """The notification wrapper that SNS puts around a queued message."""

    type: str = field(default="", metadata={"json": "Type"})
    message_id: str = field(default="", metadata={"json": "MessageId"})
    topic_arn: str = field(default="", metadata={"json": "TopicArn"})
    message: str = field(default="", metadata={"json": "Message"})


class ProducerService:
    """Publishes messages as JSON to a notification topic."""

    def __init__(self, topic_arn: str, client: SnsClient) -> None:
        self.topic_arn = topic_arn
        self.client = client

    def publish_message(self, message: Any) -> None:
        """Serialize ``message`` to JSON and publish it; client errors propagate."""
        body = json.dumps(to_json(message))
        logger.info("Publishing message order=%s topicArn=%s", body, self.topic_arn)
        output = self.client.publish(TopicArn=self.topic_arn, Message=body)
        message_id = output.get("MessageId") if isinstance(output, dict) else None
        logger.info("Message published receipt=%s", message_id)


class ConsumerService:
    """Reads order messages, one at a time, from a queue."""

    def __init__(self, queue_url: str, client: SqsClient) -> None:
        self.queue_url = queue_url
        self.client = client

    def consume_message(self) -> Optional[dto.Order]:
        """Receive, decode and delete one message; None when the queue is empty.

        Raises DecodeError when the envelope or the order cannot be decoded.
        """
        response = self.client.receive_message(QueueUrl=self.queue_url, MaxNumberOfMessages=1)
        messages = (response or {}).get("Messages") or []
        if not messages:
            return None
        received = messages[0]

        try:
            envelope = from_json(SNSEnvelope, received.get("Body", ""))
        except DecodeError as exc:
            raise DecodeError(f"cannot decode SNS envelope: {exc}") from exc
        try:
            order = from_json(dto.Order, envelope.message)
        except DecodeError as exc:
            raise DecodeError(f"cannot decode Order: {exc}") from exc

        logger.info("Received message MessageId=%s body=%r", received.get("MessageId"), order)

        try:
            self.client.delete_message(
                QueueUrl=self.queue_url, ReceiptHandle=received.get("ReceiptHandle", "")
            )
        except Exception:
            logger.exception("Error deleting message")
        else:
            logger.info("Message deleted")

        return order

    def delete_message(self, receipt_handle: str) -> None:
        self.client.delete_message(QueueUrl=self.queue_url, ReceiptHandle=receipt_handle)


class EventServer:
    """Feeds consumed order messages into the production status controller."""

    def __init__(
        self,
        consumer_service: ConsumerService,
        consumer_production_controller: OrderStatusHandler,
    ) -> None:
        self.consumer_service = consumer_service
        self.consumer_production_controller = consumer_production_controller

    def consume(self) -> None:
        """Handle at most one message; failures are logged, never raised."""
        try:
            order = self.consumer_service.consume_message()
        except Exception:
            logger.exception("Error reading message")
            return
        if order is None:
            return
        try:
            self.consumer_production_controller.execute(order.id, order.status)
        except Exception:
            logger.exception("Error processing message")