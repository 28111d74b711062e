"""
Publishers package
"""
from ecommerce_api.publishers.event_publisher import EventPublisher

__all__ = ["EventPublisher"]
