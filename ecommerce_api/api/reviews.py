"""
Review API endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ecommerce_api.api.deps import PageParams, get_current_principal, get_page_params
from ecommerce_api.database import get_db
from ecommerce_api.policy import Principal
from ecommerce_api.services.review_service import ReviewService
from ecommerce_api.schemas.common import ApiResponse, PaginatedResponse, ok, paginated
from ecommerce_api.schemas.review import ReviewCreate, ReviewUpdate, ReviewResponse

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency to get ReviewService instance"""
    return ReviewService(db)


@router.post(
    "",
    response_model=ApiResponse[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create review",
)
def create_review(
    review_data: ReviewCreate,
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    """
    Review a product from one of your delivered orders

    - **rating**: 1 to 5
    - one review per product
    """
    return ok(service.create_review(principal.id, review_data), "Review created")


@router.get("/my", response_model=PaginatedResponse[ReviewResponse], summary="List my reviews")
def list_my_reviews(
    paging: PageParams = Depends(get_page_params),
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    return paginated(service.get_user_reviews(principal.id, page=paging.page, limit=paging.limit))


@router.get("/product/{product_id}", response_model=PaginatedResponse[ReviewResponse], summary="List product reviews")
def list_product_reviews(
    product_id: str,
    rating: Optional[int] = Query(None, ge=1, le=5),
    paging: PageParams = Depends(get_page_params),
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    return paginated(service.get_product_reviews(
        product_id, rating=rating, page=paging.page, limit=paging.limit
    ))


@router.get("/{review_id}", response_model=ApiResponse[ReviewResponse], summary="Get review by ID")
def get_review(
    review_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    return ok(service.get_review_by_id(review_id))


@router.patch("/{review_id}", response_model=ApiResponse[ReviewResponse], summary="Update review")
def update_review(
    review_id: str,
    review_data: ReviewUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    return ok(service.update_review(review_id, review_data, principal), "Review updated")


@router.delete("/{review_id}", response_model=ApiResponse, summary="Delete review")
def delete_review(
    review_id: str,
    principal: Principal = Depends(get_current_principal),
    service: ReviewService = Depends(get_review_service),
):
    service.delete_review(review_id, principal)
    return ok(message="Review deleted")
