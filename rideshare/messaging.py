"""Message queue access over AMQP."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable

import pika
import pika.exceptions

logger = logging.getLogger(__name__)

MessageHandler = Callable[[bytes], None]

_CONTENT_TYPE = "application/json"


class Queue(ABC):
    """A message broker that publishes to exchanges and consumes from queues."""

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the broker."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the broker."""

    @abstractmethod
    def publish(self, exchange: str, message: bytes) -> None:
        """Send a message to an exchange."""

    @abstractmethod
    def consume(self, queue: str, callback: MessageHandler) -> Any:
        """Hand every message arriving on a queue to a callback.

        A message is acknowledged when the callback returns and dropped
        without requeueing when it raises.
        """

    def __enter__(self) -> Queue:
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()


def _deliver(channel: Any, delivery_tag: int, body: bytes, callback: MessageHandler) -> None:
    logger.info("Received a message: %s", body)
    try:
        callback(body)
    except Exception as err:
        logger.error("Error processing message: %s", err)
        channel.basic_nack(delivery_tag=delivery_tag, multiple=False, requeue=False)
    else:
        channel.basic_ack(delivery_tag=delivery_tag)


class RabbitMQAdapter(Queue):
    """A queue backed by a RabbitMQ broker."""

    def __init__(self, uri: str) -> None:
        self._uri = uri
        self._connection: Any = None
        self._channel: Any = None
        self._consumers: list[tuple[Any, Any]] = []
        self._lock = threading.Lock()

    def _open(self) -> Any:
        return pika.BlockingConnection(pika.URLParameters(self._uri))

    def connect(self) -> None:
        self._connection = self._open()
        self._channel = self._connection.channel()

    def disconnect(self) -> None:
        if self._connection is None:
            raise RuntimeError("not connected")
        with self._lock:
            consumers, self._consumers = self._consumers, []
        for connection, channel in consumers:
            if connection.is_open:
                connection.add_callback_threadsafe(channel.stop_consuming)
        self._connection.close()
        self._connection = None
        self._channel = None

    def publish(self, exchange: str, message: bytes) -> None:
        if self._channel is None:
            raise RuntimeError("not connected")
        self._channel.basic_publish(
            exchange=exchange,
            routing_key="",
            body=message,
            properties=pika.BasicProperties(content_type=_CONTENT_TYPE),
        )

    def consume(self, queue: str, callback: MessageHandler) -> threading.Thread:
        """Start consuming in a background thread, which is returned."""
        # A blocking connection must not be shared between threads, so each
        # consumer gets its own.
        connection = self._open()
        channel = connection.channel()

        def on_message(ch: Any, method: Any, properties: Any, body: bytes) -> None:
            _deliver(ch, method.delivery_tag, body, callback)

        try:
            channel.basic_consume(
                queue=queue, on_message_callback=on_message, auto_ack=False
            )
        except Exception:
            connection.close()
            raise

        with self._lock:
            self._consumers.append((connection, channel))
        thread = threading.Thread(
            target=self._run_consumer,
            args=(connection, channel),
            name=f"consumer-{queue}",
            daemon=True,
        )
        thread.start()
        return thread

    @staticmethod
    def _run_consumer(connection: Any, channel: Any) -> None:
        try:
            channel.start_consuming()
        except pika.exceptions.AMQPError as err:
            logger.error("consumer stopped: %s", err)
        finally:
            if connection.is_open:
                connection.close()