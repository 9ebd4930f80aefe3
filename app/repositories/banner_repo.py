# app/repositories/banner_repo.py
import uuid

from sqlmodel import Session, select

from app.models.banner import HeroBanner


class BannerRepository:
    """
    Data access layer for hero banners.
    """

    def get_by_id(self, session: Session, banner_id: uuid.UUID) -> HeroBanner | None:
        return session.get(HeroBanner, banner_id)

    def list_active(self, session: Session) -> list[HeroBanner]:
        stmt = (
            select(HeroBanner)
            .where(HeroBanner.is_deleted == False)  # noqa: E712
            .order_by(HeroBanner.created_at.desc())
        )
        return session.exec(stmt).all()

    def create(self, session: Session, banner: HeroBanner) -> HeroBanner:
        session.add(banner)
        session.commit()
        session.refresh(banner)
        return banner

    def update(self, session: Session, banner: HeroBanner) -> HeroBanner:
        session.add(banner)
        session.commit()
        session.refresh(banner)
        return banner
