# app/repositories/product_repo.py
import uuid

from sqlmodel import Session, select

from app.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_for_update(self, session: Session, product_id: uuid.UUID) -> Product | None:
        """
        Load a product row with a row lock (Postgres SELECT ... FOR UPDATE).
        The lock is held until the surrounding transaction ends.
        """
        stmt = select(Product).where(Product.id == product_id).with_for_update()
        return session.exec(stmt).first()

    def get_many(self, session: Session, product_ids: set[uuid.UUID]) -> dict[uuid.UUID, Product]:
        if not product_ids:
            return {}
        stmt = select(Product).where(Product.id.in_(product_ids))
        return {p.id: p for p in session.exec(stmt).all()}

    def list_active(self, session: Session) -> list[Product]:
        """All non-deleted products, newest first."""
        stmt = (
            select(Product)
            .where(Product.is_deleted == False)  # noqa: E712
            .order_by(Product.created_at.desc())
        )
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def stage(self, session: Session, product: Product) -> Product:
        """
        Write changes without committing; used inside multi-step
        transactions owned by a service.
        """
        session.add(product)
        session.flush()
        return product
