"""
Event payload schemas published to RabbitMQ
"""
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class OrderEvent(BaseModel):
    """Envelope shared by all order lifecycle events"""
    event_type: str
    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_version: str = "1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    source: str
    data: dict
