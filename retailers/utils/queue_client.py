# retailers/utils/queue_client.py
import json
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from retailers.database import SessionLocal
from retailers.models.queue_message import QueueMessage

logger = logging.getLogger(__name__)


class QueueClient:
    """Fire-and-forget producer for notification queues.

    Messages are appended to the ``queue_messages`` table through a session of
    their own, so a failed send never touches the caller's transaction.
    Delivery to consumers is at-least-once and no reply is awaited.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self.session_factory = session_factory

    def send(self, queue_name: str, payload: Any) -> None:
        body = json.dumps(jsonable_encoder(payload))
        db = self.session_factory()
        try:
            db.add(QueueMessage(queue_name=queue_name, payload=body))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to enqueue message on {queue_name}: {e}")
            raise
        finally:
            db.close()
        logger.info(f"Message queued on {queue_name}")


queue_client = QueueClient()


def get_queue() -> QueueClient:
    return queue_client
