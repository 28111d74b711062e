"""
Category Service - Business Logic Layer
"""
import logging
from typing import List
from sqlalchemy.orm import Session

from ecommerce_api.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from ecommerce_api.models.category import Category
from ecommerce_api.policy import Principal, require_admin
from ecommerce_api.repositories.category_repository import CategoryFilters, CategoryRepository
from ecommerce_api.schemas.common import Page, page_window
from ecommerce_api.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryTreeNode,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service layer for category business logic"""

    def __init__(self, db: Session):
        self.repository = CategoryRepository(db)

    def _get_category(self, category_id: str) -> Category:
        category = self.repository.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category with id={category_id} not found")
        return category

    def _ensure_slug_free(self, slug: str) -> None:
        if self.repository.get_by_slug(slug):
            raise ConflictError(f"Category with slug '{slug}' already exists")

    def _ensure_parent(self, parent_id: str) -> None:
        if not self.repository.get_by_id(parent_id):
            raise NotFoundError("Parent category not found")

    def _to_response(self, category: Category, product_count: int = None) -> CategoryResponse:
        if product_count is None:
            product_count = self.repository.count_products(category.id)
        return CategoryResponse.model_validate(category).model_copy(update={"product_count": product_count})

    def _to_node(self, category: Category, counts: dict, depth: int) -> CategoryTreeNode:
        children = category.children if depth > 0 else []
        return CategoryTreeNode(
            id=category.id,
            name=category.name,
            slug=category.slug,
            product_count=counts.get(category.id, 0),
            children=[self._to_node(child, counts, depth - 1) for child in children],
        )

    def list_categories(self, filters: CategoryFilters, page: int = 1, limit: int = 20) -> Page[CategoryResponse]:
        """Get categories ordered by name with pagination"""
        page, limit = page_window(page, limit)
        window = Page(items=[], total=self.repository.count(filters), page=page, limit=limit)
        categories = self.repository.get_all(filters, skip=window.skip, limit=limit)
        counts = self.repository.count_products_by_category(c.id for c in categories)
        window.items = [self._to_response(c, counts.get(c.id, 0)) for c in categories]
        return window

    def get_category_tree(self) -> List[CategoryTreeNode]:
        """Root categories with up to two levels of subcategories"""
        roots = self.repository.get_tree()
        ids = set()
        for root in roots:
            ids.add(root.id)
            for child in root.children:
                ids.add(child.id)
                ids.update(grandchild.id for grandchild in child.children)
        counts = self.repository.count_products_by_category(ids)
        return [self._to_node(root, counts, depth=2) for root in roots]

    def get_category_by_id(self, category_id: str) -> CategoryResponse:
        return self._to_response(self._get_category(category_id))

    def get_category_by_slug(self, slug: str) -> CategoryResponse:
        category = self.repository.get_by_slug(slug)
        if not category:
            raise NotFoundError(f"Category with slug '{slug}' not found")
        return self._to_response(category)

    def create_category(self, category_data: CategoryCreate, requester: Principal) -> CategoryResponse:
        """Create new category (admin only)"""
        require_admin(requester)
        self._ensure_slug_free(category_data.slug)
        if category_data.parent_id:
            self._ensure_parent(category_data.parent_id)

        category = self.repository.create(category_data.model_dump())
        logger.info("Category %s created (%s)", category.id, category.slug)
        return self._to_response(category, 0)

    def update_category(self, category_id: str, category_data: CategoryUpdate, requester: Principal) -> CategoryResponse:
        """Update category (admin only); an empty parentId detaches it from its parent"""
        require_admin(requester)
        category = self._get_category(category_id)

        update_data = category_data.model_dump(exclude_unset=True)
        if update_data.get("slug") and update_data["slug"] != category.slug:
            self._ensure_slug_free(update_data["slug"])

        if "parent_id" in update_data:
            parent_id = update_data["parent_id"] or None
            if parent_id == category_id:
                raise ValidationError("A category cannot be its own parent")
            if parent_id:
                self._ensure_parent(parent_id)
            update_data["parent_id"] = parent_id

        category = self.repository.update(category, update_data)
        return self._to_response(category)

    def delete_category(self, category_id: str, requester: Principal) -> None:
        """Delete category (admin only) unless it has products or subcategories"""
        require_admin(requester)
        category = self._get_category(category_id)

        if self.repository.count_products(category_id) > 0:
            raise InvalidStateError("Cannot delete a category that has products")
        if self.repository.count_children(category_id) > 0:
            raise InvalidStateError("Cannot delete a category that has subcategories")

        self.repository.delete(category)
        logger.info("Category %s deleted", category_id)
