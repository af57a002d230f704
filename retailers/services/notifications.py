# retailers/services/notifications.py
from dataclasses import dataclass
import logging
from typing import Any

from retailers.config import settings
from retailers.utils.queue_client import QueueClient

logger = logging.getLogger(__name__)


@dataclass
class StatusUpdateResult:
    order: Any
    previous_status: str
    new_status: str
    notified: bool


def notify(queue: QueueClient, queue_name: str, payload: dict) -> bool:
    """Send a notification. Returns False, with a warning logged, if it could not be queued."""
    try:
        queue.send(queue_name, payload)
    except Exception as e:
        logger.warning(f"Notification for {queue_name} was not queued: {e}")
        return False
    return True


def notify_order_event(queue: QueueClient, payload: dict) -> bool:
    return notify(queue, settings.QUEUE_ORDER_NOTIFICATIONS, payload)


def notify_stock_update(queue: QueueClient, payload: dict) -> bool:
    return notify(queue, settings.QUEUE_STOCK_UPDATES, payload)
