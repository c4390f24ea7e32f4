"""Publishing order events to a message topic."""

from __future__ import annotations

import json
import logging
from typing import Callable, Optional, Tuple

from betnow.order import Order

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "match.events"

Sender = Callable[[str, bytes], Tuple[int, int]]


class EventPublisher:
    """Sends orders as JSON messages through ``send(topic, payload)``.

    ``send`` returns the ``(partition, offset)`` the message was stored at.
    Without a sender, publishing only logs that it is unavailable.
    """

    def __init__(self, send: Optional[Sender] = None, topic: str = DEFAULT_TOPIC) -> None:
        self._send = send
        self.topic = topic

    def publish(self, order: Order) -> Optional[Tuple[int, int]]:
        """Publish ``order``; return ``(partition, offset)`` or None on failure."""
        if self._send is None:
            logger.warning("event producer not initialized")
            return None
        payload = json.dumps(order.to_dict()).encode("utf-8")
        logger.info("Publishing event: %s", payload.decode("utf-8"))
        try:
            partition, offset = self._send(self.topic, payload)
        except Exception as exc:
            logger.error("publish failed: %s", exc)
            return None
        logger.info("Message published to partition %d at offset %d", partition, offset)
        return partition, offset

    def close(self) -> None:
        """Release the sender; later publishes are dropped."""
        send, self._send = self._send, None
        closer = getattr(send, "close", None)
        if callable(closer):
            try:
                closer()
            except Exception as exc:
                logger.error("failed to close producer: %s", exc)