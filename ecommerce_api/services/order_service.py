"""
Order Service - order workflow and stock consistency
"""
import logging
from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy.orm import Session

from ecommerce_api.database import atomic
from ecommerce_api.errors import (
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from ecommerce_api.models.order import (
    CANCELLABLE_STATUSES,
    LIVE_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
    can_transition,
)
from ecommerce_api.policy import Principal, require_admin, require_owner_or_admin, scope_user_filter
from ecommerce_api.publishers.event_publisher import EventPublisher
from ecommerce_api.repositories.order_repository import OrderFilters, OrderRepository
from ecommerce_api.repositories.product_repository import ProductRepository
from ecommerce_api.schemas.common import Page, page_window
from ecommerce_api.schemas.order import OrderCreate, OrderResponse

logger = logging.getLogger(__name__)


class OrderService:
    """Service layer for the order lifecycle"""

    def __init__(self, db: Session, event_publisher: Optional[EventPublisher] = None):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.event_publisher = event_publisher or EventPublisher()

    def _get_order(self, order_id: str) -> Order:
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        return order

    def _list(self, filters: OrderFilters, page: int, limit: int) -> Page[OrderResponse]:
        page, limit = page_window(page, limit)
        window = Page(items=[], total=self.repository.count(filters), page=page, limit=limit)
        orders = self.repository.get_all(filters, skip=window.skip, limit=limit)
        window.items = [OrderResponse.model_validate(o) for o in orders]
        return window

    def create_order(self, user_id: str, order_data: OrderCreate) -> OrderResponse:
        """
        Place an order and reserve its stock

        Steps:
        1. Validate the item list and read a snapshot of every product
        2. Check availability and freeze unit prices into line items
        3. In one transaction: insert order + items, decrement stock
        4. Publish OrderCreated

        Raises:
            ValidationError: If the item list is empty
            NotFoundError: If a product does not exist
            InvalidStateError: If a product is inactive
            InsufficientStockError: If a product lacks stock, now or at commit time
        """
        if not order_data.items:
            raise ValidationError("Order must contain at least one item")

        # Repeated lines for one product are checked and stored as one
        requested: Dict[str, int] = {}
        for item in order_data.items:
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        products = self.product_repository.get_many(requested)
        line_items = []
        total_price = Decimal("0")

        for product_id, quantity in requested.items():
            product = products.get(product_id)
            if product is None:
                raise NotFoundError(f"Product with id={product_id} not found")
            if not product.is_active:
                raise InvalidStateError(f'Product "{product.name}" is not available')
            if product.stock < quantity:
                raise InsufficientStockError(product.name, product.stock)

            unit_price = Decimal(product.price)
            total_price += unit_price * quantity
            line_items.append(OrderItem(product_id=product_id, quantity=quantity, price=unit_price))

        names = {product_id: product.name for product_id, product in products.items()}

        with atomic(self.db):
            order = self.repository.add(Order(
                user_id=user_id,
                status=OrderStatus.PENDING,
                total_price=total_price,
                notes=order_data.notes,
                items=line_items,
            ))
            # Fixed product order so concurrent orders lock rows the same way
            for item in sorted(line_items, key=lambda i: i.product_id):
                # Another order may have taken the stock since the read above
                if not self.product_repository.decrement_stock(item.product_id, item.quantity):
                    raise InsufficientStockError(names[item.product_id])
            order_id = order.id

        created = OrderResponse.model_validate(self._get_order(order_id))
        logger.info("Order %s created by user %s (total %s)", order_id, user_id, created.total_price)

        self.event_publisher.publish_order_created({
            "order_id": created.id,
            "user_id": created.user_id,
            "status": created.status.value,
            "total_price": str(created.total_price),
            "items": [
                {"product_id": i.product_id, "quantity": i.quantity, "price": str(i.price)}
                for i in created.items
            ],
        })
        return created

    def get_order_by_id(self, order_id: str, requester: Principal) -> OrderResponse:
        """Get order by ID; only its owner or an admin may read it"""
        order = self._get_order(order_id)
        require_owner_or_admin(requester, order.user_id)
        return OrderResponse.model_validate(order)

    def list_orders(
        self,
        requester: Principal,
        status: Optional[OrderStatus] = None,
        user_id: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[OrderResponse]:
        """
        List orders newest first

        A non-admin requester always sees only their own orders; any
        ``user_id`` they pass is ignored.
        """
        filters = OrderFilters(user_id=scope_user_filter(requester, user_id), status=status)
        return self._list(filters, page, limit)

    def list_user_orders(
        self,
        user_id: str,
        status: Optional[OrderStatus] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[OrderResponse]:
        """List one user's own orders newest first"""
        return self._list(OrderFilters(user_id=user_id, status=status), page, limit)

    def update_order_status(self, order_id: str, new_status: OrderStatus, requester: Principal) -> OrderResponse:
        """
        Move an order to a new status (admin only)

        Terminal orders (DELIVERED, CANCELLED) cannot change. Moving to
        CANCELLED goes through the cancellation workflow so stock is
        returned.
        """
        require_admin(requester, "Only administrators can change order status")
        order = self._get_order(order_id)
        old_status = order.status

        if old_status.is_terminal:
            raise InvalidStateError("Cannot change the status of a delivered or cancelled order")
        if not can_transition(old_status, new_status):
            raise InvalidStateError(f"Cannot move order from {old_status.value} to {new_status.value}")

        if new_status == OrderStatus.CANCELLED:
            return self._cancel(order, LIVE_STATUSES)

        with atomic(self.db):
            if not self.repository.transition_status(order_id, new_status, LIVE_STATUSES):
                raise InvalidStateError("Order status changed while updating; reload and retry")

        updated = OrderResponse.model_validate(self._get_order(order_id))
        logger.info("Order %s status changed %s -> %s", order_id, old_status.value, new_status.value)

        self.event_publisher.publish_order_status_changed({
            "order_id": updated.id,
            "old_status": old_status.value,
            "new_status": updated.status.value,
            "updated_at": updated.updated_at.isoformat(),
        })
        return updated

    def cancel_order(self, order_id: str, requester: Principal) -> OrderResponse:
        """
        Cancel an order and return its stock

        Only the owner or an admin may cancel, and only while the order is
        PENDING or PROCESSING.
        """
        order = self._get_order(order_id)
        require_owner_or_admin(requester, order.user_id)

        if not order.status.is_cancellable:
            raise InvalidStateError("Order cannot be cancelled in its current status")

        return self._cancel(order, CANCELLABLE_STATUSES)

    def _cancel(self, order: Order, allowed) -> OrderResponse:
        order_id = order.id
        old_status = order.status
        restock = sorted((item.product_id, item.quantity) for item in order.items)

        with atomic(self.db):
            # Restock only if this call is the one that moved the order to CANCELLED
            if not self.repository.transition_status(order_id, OrderStatus.CANCELLED, allowed):
                raise InvalidStateError("Order cannot be cancelled in its current status")
            for product_id, quantity in restock:
                self.product_repository.increment_stock(product_id, quantity)

        cancelled = OrderResponse.model_validate(self._get_order(order_id))
        logger.info("Order %s cancelled (was %s), %d line(s) restocked", order_id, old_status.value, len(restock))

        self.event_publisher.publish_order_cancelled({
            "order_id": cancelled.id,
            "user_id": cancelled.user_id,
            "old_status": old_status.value,
            "items": [{"product_id": pid, "quantity": qty} for pid, qty in restock],
        })
        return cancelled
