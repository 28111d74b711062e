"""
Category Repository - Data Access Layer
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, Query, selectinload
from sqlalchemy import func, or_

from ecommerce_api.models.category import Category
from ecommerce_api.models.product import Product


@dataclass
class CategoryFilters:
    search: Optional[str] = None
    is_active: Optional[bool] = None
    parent_id: Optional[str] = None
    root_only: bool = False


class CategoryRepository:
    """Repository for Category CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def _filtered(self, filters: CategoryFilters) -> Query:
        query = self.db.query(Category)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(or_(
                Category.name.ilike(pattern),
                Category.slug.ilike(pattern),
                Category.description.ilike(pattern),
            ))
        if filters.is_active is not None:
            query = query.filter(Category.is_active == filters.is_active)
        if filters.root_only:
            query = query.filter(Category.parent_id.is_(None))
        elif filters.parent_id:
            query = query.filter(Category.parent_id == filters.parent_id)
        return query

    def get_by_id(self, category_id: str) -> Optional[Category]:
        """Get category by ID"""
        return self.db.get(Category, category_id)

    def get_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        return self.db.query(Category).filter(Category.slug == slug).first()

    def get_all(self, filters: CategoryFilters, skip: int = 0, limit: int = 20) -> List[Category]:
        """Get categories matching filters, ordered by name"""
        return self._filtered(filters).options(
            selectinload(Category.parent),
            selectinload(Category.children),
        ).order_by(Category.name).offset(skip).limit(limit).all()

    def count(self, filters: CategoryFilters) -> int:
        return self._filtered(filters).count()

    def get_tree(self) -> List[Category]:
        """Root categories with two levels of children loaded"""
        return self.db.query(Category).filter(
            Category.parent_id.is_(None)
        ).options(
            selectinload(Category.children).selectinload(Category.children)
        ).order_by(Category.name).all()

    def create(self, category_data: dict) -> Category:
        """Create new category"""
        category = Category(**category_data)
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update(self, category: Category, update_data: dict) -> Category:
        """Update only the provided fields"""
        for field, value in update_data.items():
            setattr(category, field, value)

        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.commit()

    def count_children(self, category_id: str) -> int:
        return self.db.query(Category).filter(Category.parent_id == category_id).count()

    def count_products(self, category_id: str) -> int:
        return self.db.query(Product).filter(Product.category_id == category_id).count()

    def count_products_by_category(self, category_ids: Iterable[str]) -> Dict[str, int]:
        """Product counts keyed by category ID (missing IDs have none)"""
        category_ids = list(category_ids)
        if not category_ids:
            return {}
        rows = self.db.query(
            Product.category_id, func.count(Product.id)
        ).filter(
            Product.category_id.in_(category_ids)
        ).group_by(Product.category_id).all()
        return {category_id: count for category_id, count in rows}
