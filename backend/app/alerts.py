# backend/app/alerts.py

import asyncio
import time
from typing import Set

from .logging_config import log, inc_metric
from .models import Alert

_subscribers: Set[asyncio.Queue] = set()

QUEUE_SIZE = 100


def make_alert(type: str, message: str) -> Alert:
    return Alert(type=type, message=message, timestamp=int(time.time() * 1000))


def subscribe() -> asyncio.Queue:
    queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
    _subscribers.add(queue)
    return queue


def unsubscribe(queue: asyncio.Queue) -> None:
    _subscribers.discard(queue)


def subscriber_count() -> int:
    return len(_subscribers)


def broadcast_alert(alert: Alert) -> None:
    """
    Fire-and-forget delivery to every subscriber.
    Never raises: a slow or broken subscriber only loses its own copy.
    """
    for queue in list(_subscribers):
        try:
            queue.put_nowait(alert)
        except asyncio.QueueFull:
            inc_metric("alerts_dropped")
            log.warning("⚠️ Alert queue full, dropping %s alert", alert.type)
        except Exception as e:
            inc_metric("alerts_dropped")
            log.error(f"❌ Alert delivery failed: {e}")
