"""
Product API endpoints
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import PageParams, get_current_principal, get_page_params
from ecommerce_api.database import get_db
from ecommerce_api.policy import Principal
from ecommerce_api.repositories.product_repository import ProductFilters
from ecommerce_api.services.product_service import ProductService
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ok, paginated
from ecommerce_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    StockUpdate,
    ProductResponse,
    ProductDetailResponse,
)

router = APIRouter(prefix="/products", tags=["products"])

# Query value -> repository sort key
SORT_KEYS = {
    "name": "name",
    "price": "price",
    "createdAt": "created_at",
    "stock": "stock",
}


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get ProductService instance"""
    return ProductService(db)


@router.get("", response_model=PaginatedResponse[ProductResponse], summary="List products")
def list_products(
    search: Optional[str] = Query(None, description="Search in name, description and slug"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    in_stock: bool = Query(False, alias="inStock", description="Only products with stock left"),
    sort_by: str = Query("createdAt", alias="sortBy", pattern="^(name|price|createdAt|stock)$"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    paging: PageParams = Depends(get_page_params),
    service: ProductService = Depends(get_product_service),
):
    """
    Retrieve products with filtering, sorting and pagination

    - **sortBy**: name, price, createdAt or stock (default: createdAt)
    - **sortOrder**: asc or desc (default: desc)
    """
    filters = ProductFilters(
        search=search,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        is_active=is_active,
        in_stock=in_stock,
    )
    return paginated(service.list_products(
        filters,
        page=paging.page,
        limit=paging.limit,
        sort_by=SORT_KEYS[sort_by],
        sort_order=sort_order,
    ))


@router.get("/slug/{slug}", response_model=ApiResponse[ProductDetailResponse], summary="Get product by slug")
def get_product_by_slug(slug: str, service: ProductService = Depends(get_product_service)):
    return ok(service.get_product_by_slug(slug))


@router.get("/{product_id}", response_model=ApiResponse[ProductDetailResponse], summary="Get product by ID")
def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    """Retrieve a product with its average rating and review count"""
    return ok(service.get_product_by_id(product_id))


@router.post(
    "",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
def create_product(
    product_data: ProductCreate,
    principal: Principal = Depends(get_current_principal),
    service: ProductService = Depends(get_product_service),
):
    """
    Create a new product (admin only)

    - **slug**: must be unique
    - **price**: non-negative, two decimal places
    - **stock**: non-negative
    - **categoryId**: must reference an existing category
    """
    return ok(service.create_product(product_data, principal), "Product created")


@router.patch("/{product_id}", response_model=ApiResponse[ProductResponse], summary="Update product")
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ProductService = Depends(get_product_service),
):
    return ok(service.update_product(product_id, product_data, principal), "Product updated")


@router.delete("/{product_id}", response_model=ApiResponse, summary="Delete product")
def delete_product(
    product_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id, principal)
    return ok(message="Product deleted")


@router.patch("/{product_id}/stock", response_model=ApiResponse[ProductResponse], summary="Adjust product stock")
def adjust_stock(
    product_id: str,
    stock_update: StockUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ProductService = Depends(get_product_service),
):
    """
    Add a signed quantity to product stock (admin only)

    - **quantity**: positive to add, negative to subtract
    """
    return ok(service.adjust_stock(product_id, stock_update.quantity, principal), "Stock updated")
