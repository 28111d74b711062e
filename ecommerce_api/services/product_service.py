"""
Product Service - Business Logic Layer
"""
import logging
from sqlalchemy.orm import Session

from ecommerce_api.database import atomic
from ecommerce_api.errors import ConflictError, InsufficientStockError, InvalidStateError, NotFoundError
from ecommerce_api.models.product import Product
from ecommerce_api.policy import Principal, require_admin
from ecommerce_api.repositories.category_repository import CategoryRepository
from ecommerce_api.repositories.product_repository import ProductFilters, ProductRepository
from ecommerce_api.schemas.common import Page, page_window
from ecommerce_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductDetailResponse,
)

logger = logging.getLogger(__name__)


class ProductService:
    """Service layer for product business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)
        self.category_repository = CategoryRepository(db)

    def _get_product(self, product_id: str) -> Product:
        product = self.repository.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product with id={product_id} not found")
        return product

    def _ensure_category(self, category_id: str) -> None:
        if not self.category_repository.get_by_id(category_id):
            raise NotFoundError(f"Category with id={category_id} not found")

    def _ensure_slug_free(self, slug: str) -> None:
        if self.repository.get_by_slug(slug):
            raise ConflictError(f"Product with slug '{slug}' already exists")

    def _with_rating(self, product: Product) -> ProductDetailResponse:
        average_rating, review_count = self.repository.get_rating_summary(product.id)
        return ProductDetailResponse.model_validate(product).model_copy(
            update={"average_rating": average_rating, "review_count": review_count}
        )

    def list_products(
        self,
        filters: ProductFilters,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Page[ProductResponse]:
        """Get products with filtering, sorting and pagination"""
        page, limit = page_window(page, limit)
        window = Page(items=[], total=self.repository.count(filters), page=page, limit=limit)
        products = self.repository.get_all(
            filters, skip=window.skip, limit=limit, sort_by=sort_by, sort_order=sort_order
        )
        window.items = [ProductResponse.model_validate(p) for p in products]
        return window

    def get_product_by_id(self, product_id: str) -> ProductDetailResponse:
        """Get product by ID with its rating summary"""
        return self._with_rating(self._get_product(product_id))

    def get_product_by_slug(self, slug: str) -> ProductDetailResponse:
        """Get product by slug with its rating summary"""
        product = self.repository.get_by_slug(slug)
        if not product:
            raise NotFoundError(f"Product with slug '{slug}' not found")
        return self._with_rating(product)

    def create_product(self, product_data: ProductCreate, requester: Principal) -> ProductResponse:
        """Create new product (admin only)"""
        require_admin(requester)
        self._ensure_slug_free(product_data.slug)
        self._ensure_category(product_data.category_id)

        product = self.repository.create(product_data.model_dump())
        logger.info("Product %s created (%s)", product.id, product.slug)
        return ProductResponse.model_validate(product)

    def update_product(self, product_id: str, product_data: ProductUpdate, requester: Principal) -> ProductResponse:
        """Update existing product (admin only); only provided fields change"""
        require_admin(requester)
        product = self._get_product(product_id)

        update_data = product_data.model_dump(exclude_unset=True)
        if update_data.get("slug") and update_data["slug"] != product.slug:
            self._ensure_slug_free(update_data["slug"])
        if update_data.get("category_id"):
            self._ensure_category(update_data["category_id"])

        product = self.repository.update(product, update_data)
        return ProductResponse.model_validate(product)

    def delete_product(self, product_id: str, requester: Principal) -> None:
        """Delete product (admin only) unless an order references it"""
        require_admin(requester)
        product = self._get_product(product_id)

        if self.repository.has_order_items(product_id):
            raise InvalidStateError("Cannot delete a product that appears in orders")

        self.repository.delete(product)
        logger.info("Product %s deleted", product_id)

    def adjust_stock(self, product_id: str, quantity_change: int, requester: Principal) -> ProductResponse:
        """
        Adjust product stock by a signed delta (admin only)

        Not idempotent: every call applies its delta again.

        Args:
            product_id: Product ID
            quantity_change: Positive to add, negative to subtract

        Raises:
            InsufficientStockError: If resulting stock would be negative
        """
        require_admin(requester)
        product = self._get_product(product_id)
        name = product.name

        with atomic(self.db):
            if quantity_change < 0:
                if not self.repository.decrement_stock(product_id, -quantity_change):
                    raise InsufficientStockError(name, product.stock)
            elif quantity_change > 0:
                self.repository.increment_stock(product_id, quantity_change)

        logger.info("Stock for product %s adjusted by %+d", product_id, quantity_change)
        return ProductResponse.model_validate(self._get_product(product_id))
