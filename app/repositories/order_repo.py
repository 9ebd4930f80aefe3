# app/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from app.models.order import Order, OrderItem


class OrderRepository:
    """
    Data access layer for orders and order_items.

    NOTE:
      - No commits here; acceptance/cancellation are multi-step
        transactions. The service is responsible for session.commit().
    """

    # ---- Orders ----

    def list_active(self, session: Session) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.is_deleted == False)  # noqa: E712
            .order_by(Order.created_at.desc())
        )
        return session.exec(stmt).all()

    def get_active(self, session: Session, order_id: uuid.UUID) -> Order | None:
        stmt = select(Order).where(
            Order.id == order_id,
            Order.is_deleted == False,  # noqa: E712
        )
        return session.exec(stmt).first()

    def get_active_for_update(self, session: Session, order_id: uuid.UUID) -> Order | None:
        stmt = (
            select(Order)
            .where(Order.id == order_id, Order.is_deleted == False)  # noqa: E712
            .with_for_update()
        )
        return session.exec(stmt).first()

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order

    # ---- Order items ----

    def list_items_for_order(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> list[OrderItem]:
        stmt = select(OrderItem).where(
            OrderItem.order_id == order_id,
            OrderItem.is_deleted == False,  # noqa: E712
        )
        return session.exec(stmt).all()

    def list_items_for_orders(
        self,
        session: Session,
        order_ids: list[uuid.UUID],
    ) -> dict[uuid.UUID, list[OrderItem]]:
        grouped: dict[uuid.UUID, list[OrderItem]] = {oid: [] for oid in order_ids}
        if not order_ids:
            return grouped
        stmt = select(OrderItem).where(
            OrderItem.order_id.in_(order_ids),
            OrderItem.is_deleted == False,  # noqa: E712
        )
        for item in session.exec(stmt).all():
            grouped[item.order_id].append(item)
        return grouped
