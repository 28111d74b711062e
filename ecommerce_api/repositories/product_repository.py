"""
Product Repository - Data Access Layer
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, Query, joinedload
from sqlalchemy import asc, desc, func, or_, update

from ecommerce_api.models.product import Product
from ecommerce_api.models.order import OrderItem
from ecommerce_api.models.review import Review

SORTABLE_FIELDS = {
    "name": Product.name,
    "price": Product.price,
    "created_at": Product.created_at,
    "stock": Product.stock,
}


@dataclass
class ProductFilters:
    search: Optional[str] = None
    category_id: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    is_active: Optional[bool] = None
    in_stock: bool = False


class ProductRepository:
    """Repository for Product CRUD and stock ledger operations"""

    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, filters: ProductFilters) -> Query:
        query = self.db.query(Product)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(or_(
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                Product.slug.ilike(pattern),
            ))
        if filters.category_id:
            query = query.filter(Product.category_id == filters.category_id)
        if filters.min_price is not None:
            query = query.filter(Product.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Product.price <= filters.max_price)
        if filters.is_active is not None:
            query = query.filter(Product.is_active == filters.is_active)
        if filters.in_stock:
            query = query.filter(Product.stock > 0)
        return query

    def get_all(
        self,
        filters: ProductFilters,
        skip: int = 0,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> List[Product]:
        """Get products matching filters with pagination and sorting"""
        column = SORTABLE_FIELDS[sort_by]
        direction = asc if sort_order == "asc" else desc
        return self._filtered(filters).options(
            joinedload(Product.category)
        ).order_by(direction(column), Product.id).offset(skip).limit(limit).all()

    def count(self, filters: ProductFilters) -> int:
        """Get total count of products matching filters"""
        return self._filtered(filters).count()

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product by ID"""
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).filter(Product.id == product_id).first()

    def get_by_slug(self, slug: str) -> Optional[Product]:
        """Get product by slug"""
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).filter(Product.slug == slug).first()

    def get_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """Products keyed by ID; unknown IDs are simply absent"""
        product_ids = list(product_ids)
        if not product_ids:
            return {}
        products = self.db.query(Product).filter(Product.id.in_(product_ids)).all()
        return {product.id: product for product in products}

    def create(self, product_data: dict) -> Product:
        """Create new product"""
        product = Product(**product_data)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update(self, product: Product, update_data: dict) -> Product:
        """Update only the provided fields"""
        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        """Delete product"""
        self.db.delete(product)
        self.db.commit()

    def has_order_items(self, product_id: str) -> bool:
        return self.db.query(OrderItem.id).filter(
            OrderItem.product_id == product_id
        ).first() is not None

    def get_rating_summary(self, product_id: str) -> tuple:
        """Average rating (0 when unrated) and review count"""
        average, count = self.db.query(
            func.avg(Review.rating), func.count(Review.id)
        ).filter(Review.product_id == product_id).one()
        return float(average or 0), int(count or 0)

    # Stock ledger. Neither method commits: both run inside the caller's
    # transaction so stock moves together with the order that caused it.

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """
        Take ``quantity`` units out of stock

        The update only matches while enough stock remains, so a decision
        made on a stale read can never drive stock below zero.

        Returns:
            True if stock was decremented, False if there was not enough
        """
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increment_stock(self, product_id: str, quantity: int) -> bool:
        """Put ``quantity`` units back into stock"""
        result = self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
