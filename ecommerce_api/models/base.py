"""
Shared column helpers
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def id_column():
    return Column(String(36), primary_key=True, default=generate_id)


def created_at_column():
    return Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)


def updated_at_column():
    return Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
