"""
Category API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import PageParams, get_current_principal, get_page_params
from ecommerce_api.database import get_db
from ecommerce_api.policy import Principal
from ecommerce_api.repositories.category_repository import CategoryFilters
from ecommerce_api.services.category_service import CategoryService
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ok, paginated
from ecommerce_api.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryTreeNode,
)

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    """Dependency to get CategoryService instance"""
    return CategoryService(db)


@router.get("", response_model=PaginatedResponse[CategoryResponse], summary="List categories")
def list_categories(
    search: Optional[str] = Query(None, description="Search in name, slug and description"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    parent_id: Optional[str] = Query(None, alias="parentId"),
    root_only: bool = Query(False, alias="rootOnly", description="Only top-level categories"),
    paging: PageParams = Depends(get_page_params),
    service: CategoryService = Depends(get_category_service),
):
    filters = CategoryFilters(search=search, is_active=is_active, parent_id=parent_id, root_only=root_only)
    return paginated(service.list_categories(filters, page=paging.page, limit=paging.limit))


@router.get("/tree", response_model=ApiResponse[List[CategoryTreeNode]], summary="Category tree")
def get_category_tree(service: CategoryService = Depends(get_category_service)):
    """Root categories with two levels of subcategories and product counts"""
    return ok(service.get_category_tree())


@router.get("/slug/{slug}", response_model=ApiResponse[CategoryResponse], summary="Get category by slug")
def get_category_by_slug(slug: str, service: CategoryService = Depends(get_category_service)):
    return ok(service.get_category_by_slug(slug))


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse], summary="Get category by ID")
def get_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    return ok(service.get_category_by_id(category_id))


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(
    category_data: CategoryCreate,
    principal: Principal = Depends(get_current_principal),
    service: CategoryService = Depends(get_category_service),
):
    """
    Create a new category (admin only)

    - **slug**: must be unique
    - **parentId**: optional, must reference an existing category
    """
    return ok(service.create_category(category_data, principal), "Category created")


@router.patch("/{category_id}", response_model=ApiResponse[CategoryResponse], summary="Update category")
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    principal: Principal = Depends(get_current_principal),
    service: CategoryService = Depends(get_category_service),
):
    return ok(service.update_category(category_id, category_data, principal), "Category updated")


@router.delete("/{category_id}", response_model=ApiResponse, summary="Delete category")
def delete_category(
    category_id: str,
    principal: Principal = Depends(get_current_principal),
    service: CategoryService = Depends(get_category_service),
):
    """Delete a category that has neither products nor subcategories (admin only)"""
    service.delete_category(category_id, principal)
    return ok(message="Category deleted")
