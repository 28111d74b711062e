"""
RabbitMQ Event Publisher for order lifecycle events
"""
import json
import logging
from typing import Dict

import pika
from pika.exceptions import AMQPConnectionError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ecommerce_api.config import settings
from ecommerce_api.schemas.events import OrderEvent

logger = logging.getLogger(__name__)

ORDER_CREATED = ("OrderCreated", "order.created")
ORDER_STATUS_CHANGED = ("OrderStatusChanged", "order.status.changed")
ORDER_CANCELLED = ("OrderCancelled", "order.cancelled")


class EventPublisher:
    """Publisher for sending order events to a RabbitMQ topic exchange"""

    def __init__(self, enabled: bool = None):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        self.enabled = settings.EVENTS_ENABLED if enabled is None else enabled

    @retry(
        stop=stop_after_attempt(settings.MAX_RETRIES),
        wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type(AMQPConnectionError),
        reraise=True
    )
    def _send(self, event: OrderEvent, routing_key: str) -> None:
        connection = pika.BlockingConnection(pika.URLParameters(self.rabbitmq_url))
        try:
            channel = connection.channel()
            channel.exchange_declare(
                exchange=self.exchange,
                exchange_type='topic',
                durable=True
            )
            channel.confirm_delivery()
            channel.basic_publish(
                exchange=self.exchange,
                routing_key=routing_key,
                body=json.dumps(event.model_dump(), default=str),
                properties=pika.BasicProperties(
                    delivery_mode=2,  # Persistent message
                    content_type='application/json',
                    correlation_id=event.event_id
                ),
            )
        finally:
            connection.close()

    def publish(self, kind: tuple, data: Dict) -> bool:
        """
        Publish an event; failures are logged, never raised

        Args:
            kind: (event_type, routing_key) pair, e.g. ORDER_CREATED
            data: Event payload

        Returns:
            True if published, False if disabled or publishing failed
        """
        if not self.enabled:
            return False

        event_type, routing_key = kind
        event = OrderEvent(event_type=event_type, source=settings.SERVICE_NAME, data=data)
        try:
            self._send(event, routing_key)
        except Exception as e:
            logger.warning("Failed to publish %s event %s: %s", event_type, event.event_id, e)
            return False

        logger.info("Event published: %s (ID: %s)", event_type, event.event_id)
        return True

    def publish_order_created(self, order_data: Dict) -> bool:
        return self.publish(ORDER_CREATED, order_data)

    def publish_order_status_changed(self, order_data: Dict) -> bool:
        return self.publish(ORDER_STATUS_CHANGED, order_data)

    def publish_order_cancelled(self, order_data: Dict) -> bool:
        return self.publish(ORDER_CANCELLED, order_data)
