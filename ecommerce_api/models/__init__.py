"""
Models package
"""
from ecommerce_api.models.user import User, Role
from ecommerce_api.models.category import Category
from ecommerce_api.models.product import Product
from ecommerce_api.models.order import Order, OrderItem, OrderStatus
from ecommerce_api.models.review import Review

__all__ = ["User", "Role", "Category", "Product", "Order", "OrderItem", "OrderStatus", "Review"]
