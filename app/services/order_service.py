# app/services/order_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.listing import filter_items, paginate
from app.core.query_cache import QueryCache, query_cache
from app.models.customer import Customer
from app.models.order import Order, OrderItem
from app.models.product import Product, utcnow
from app.repositories.customer_repo import CustomerRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.schemas.common import Page
from app.schemas.customer import CustomerRead
from app.schemas.order import (
    OrderAccept,
    OrderAcceptResult,
    OrderItemProduct,
    OrderItemRead,
    OrderRead,
    OrderWithItemsRead,
    StatusFilter,
    StockChange,
)
from app.services.product_service import ORDERS_KEY, PRODUCT_KEY, PRODUCTS_KEY

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
SEARCH_FIELDS = ("id", "customer.email", "track_id")


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - list orders with customer, items and item products
      - accept: deduct stock for every line item, then mark completed
      - cancel: clear tracking id, give stock back if it was taken

    Acceptance and cancellation each run in one transaction with the order
    and product rows locked, so a failure leaves stock untouched and a
    second acceptance of the same order is refused.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        cache: QueryCache = query_cache,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.customer_repo = customer_repo
        self.cache = cache

    # -------- Queries --------

    def list_orders(
        self,
        session: Session,
        status_filter: StatusFilter = "all",
        search: str | None = None,
        page: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> Page[OrderWithItemsRead]:
        orders = self.cache.get_or_fetch(ORDERS_KEY, lambda: self._load_orders(session))

        if status_filter == "completed":
            orders = [o for o in orders if o.status]
        elif status_filter == "pending":
            orders = [o for o in orders if not o.status]

        return paginate(filter_items(orders, search, SEARCH_FIELDS), page, page_size)

    def get_order(self, session: Session, order_id: uuid.UUID) -> OrderWithItemsRead:
        order = self._get_active(session, order_id)
        items = self.order_repo.list_items_for_order(session, order.id)
        products = self.product_repo.get_many(session, {it.product_id for it in items})
        customer = self.customer_repo.get_by_id(session, order.user_id)
        return self._build_order_with_items_dto(order, items, products, customer)

    # -------- Mutations --------

    def accept_order(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderAccept,
    ) -> OrderAcceptResult:
        """
        Accept an order and ship it under `payload.track_id`.

        Steps:
          1. Lock the order; 404 if missing, 409 if already completed.
          2. Load its line items; 400 if there are none.
          3. For each item, lock the product and write
             quantity = current - ordered (409 if that goes negative).
          4. Mark the order completed with the tracking id.
          5. Commit once; any failure rolls every step back.
        """
        try:
            order = self._get_active(session, order_id, lock=True)
            if order.status:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Order has already been accepted",
                )

            items = self.order_repo.list_items_for_order(session, order.id)
            if not items:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="No order items found for this order",
                )

            updated: dict[uuid.UUID, int] = {}
            for item in items:
                product = self._lock_product(session, item.product_id)
                new_quantity = product.quantity - item.quantity
                if new_quantity < 0:
                    raise HTTPException(
                        status_code=status.HTTP_409_CONFLICT,
                        detail=(
                            f"Insufficient stock for {product.name} "
                            f"(have {product.quantity}, ordered {item.quantity})"
                        ),
                    )
                product.quantity = new_quantity
                product.updated_at = utcnow()
                self.product_repo.stage(session, product)
                updated[product.id] = new_quantity

            order.status = True
            order.track_id = payload.track_id
            order.updated_at = utcnow()
            self.order_repo.update_order(session, order)

            session.commit()
        except Exception:
            session.rollback()
            logger.warning("Accepting order %s failed; changes rolled back", order_id)
            raise

        session.refresh(order)
        self._invalidate()
        logger.info("Order %s accepted with track id %s", order_id, payload.track_id)

        return OrderAcceptResult(
            order=OrderRead.model_validate(order),
            updated_products=[
                StockChange(product_id=pid, quantity=qty) for pid, qty in updated.items()
            ],
        )

    def cancel_order(self, session: Session, order_id: uuid.UUID) -> OrderRead:
        """
        Cancel an order: status back to False, tracking id cleared.

        If the order had been accepted, the quantities deducted on
        acceptance are added back to stock in the same transaction.
        """
        try:
            order = self._get_active(session, order_id, lock=True)

            if order.status:
                for item in self.order_repo.list_items_for_order(session, order.id):
                    product = self._lock_product(session, item.product_id)
                    product.quantity += item.quantity
                    product.updated_at = utcnow()
                    self.product_repo.stage(session, product)

            order.status = False
            order.track_id = ""
            order.updated_at = utcnow()
            self.order_repo.update_order(session, order)

            session.commit()
        except Exception:
            session.rollback()
            logger.warning("Canceling order %s failed; changes rolled back", order_id)
            raise

        session.refresh(order)
        self._invalidate()
        logger.info("Order %s canceled", order_id)
        return OrderRead.model_validate(order)

    # -------- Helpers --------

    def _invalidate(self) -> None:
        self.cache.invalidate(*ORDERS_KEY)
        self.cache.invalidate(*PRODUCTS_KEY)
        self.cache.invalidate(PRODUCT_KEY)

    def _get_active(self, session: Session, order_id: uuid.UUID, lock: bool = False) -> Order:
        if lock:
            order = self.order_repo.get_active_for_update(session, order_id)
        else:
            order = self.order_repo.get_active(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    def _lock_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.product_repo.get_for_update(session, product_id)
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Product {product_id} not found",
            )
        return product

    def _load_orders(self, session: Session) -> list[OrderWithItemsRead]:
        orders = self.order_repo.list_active(session)
        items_by_order = self.order_repo.list_items_for_orders(session, [o.id for o in orders])
        products = self.product_repo.get_many(
            session,
            {it.product_id for items in items_by_order.values() for it in items},
        )
        customers = self.customer_repo.get_many(session, {o.user_id for o in orders})

        return [
            self._build_order_with_items_dto(
                order,
                items_by_order.get(order.id, []),
                products,
                customers.get(order.user_id),
            )
            for order in orders
        ]

    def _build_order_with_items_dto(
        self,
        order: Order,
        items: list[OrderItem],
        products: dict[uuid.UUID, Product],
        customer: Customer | None,
    ) -> OrderWithItemsRead:
        """
        Compose OrderWithItemsRead from ORM models.
        """
        item_dtos: list[OrderItemRead] = []
        for it in items:
            product = products.get(it.product_id)
            item_dtos.append(
                OrderItemRead(
                    id=it.id,
                    order_id=it.order_id,
                    product_id=it.product_id,
                    price=it.price,
                    quantity=it.quantity,
                    colors=it.colors,
                    models=it.models,
                    total_amount=it.total_amount,
                    product=OrderItemProduct.model_validate(product) if product else None,
                )
            )

        return OrderWithItemsRead(
            id=order.id,
            user_id=order.user_id,
            total_amount=order.total_amount,
            status=order.status,
            track_id=order.track_id,
            created_at=order.created_at,
            updated_at=order.updated_at,
            customer=CustomerRead.model_validate(customer) if customer else None,
            items=item_dtos,
        )
