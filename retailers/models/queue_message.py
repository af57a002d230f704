# retailers/models/queue_message.py
from sqlalchemy import Column, Integer, String, Text, DateTime
from retailers.database import Base
from retailers.utils.dates import utcnow


# Outbound notification waiting for an external consumer
class QueueMessage(Base):
    __tablename__ = "queue_messages"

    id = Column(Integer, primary_key=True, index=True)
    queue_name = Column(String(63), nullable=False, index=True)
    payload = Column(Text, nullable=False) # JSON document
    enqueued_at = Column(DateTime, nullable=False, default=utcnow)
