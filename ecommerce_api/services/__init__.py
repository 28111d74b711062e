"""
Services package
"""
from ecommerce_api.services.order_service import OrderService
from ecommerce_api.services.product_service import ProductService
from ecommerce_api.services.category_service import CategoryService
from ecommerce_api.services.review_service import ReviewService
from ecommerce_api.services.user_service import UserService
from ecommerce_api.services.auth_service import AuthService
from ecommerce_api.services.analytics_service import AnalyticsService

__all__ = [
    "OrderService",
    "ProductService",
    "CategoryService",
    "ReviewService",
    "UserService",
    "AuthService",
    "AnalyticsService",
]
