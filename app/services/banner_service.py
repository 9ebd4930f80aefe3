# app/services/banner_service.py
import logging
import uuid
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.query_cache import QueryCache, query_cache
from app.core.storage_utils import (
    delete_from_storage,
    filename_from_public_url,
    timestamped_name,
    upload_to_storage,
    validate_image,
)
from app.models.banner import HeroBanner
from app.models.product import utcnow
from app.repositories.banner_repo import BannerRepository
from app.schemas.banner import HeroBannerRead

settings = get_settings()

logger = logging.getLogger(__name__)

BANNERS_KEY = ("hero-banners",)


@dataclass
class BannerImage:
    content_type: str | None
    filename: str
    data: bytes


def resolve_link(
    link_url: str | None,
    brand: str | None,
    category: str | None,
    custom_url_added: bool,
) -> str:
    """
    Link a banner points at.

    - custom URL switched on: the operator's URL as typed
    - otherwise /brand/<brand>, or /products/<category> when no brand
    """
    if custom_url_added:
        link = (link_url or "").strip()
        if not link:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please enter a link URL",
            )
        return link

    brand = (brand or "").strip()
    category = (category or "").strip()
    if brand:
        return f"/brand/{brand}"
    if category:
        return f"/products/{category}"
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Please select a brand or category",
    )


class BannerService:
    """
    Business logic for storefront hero banners.

    The image object's lifetime follows the row: replacing or deleting a
    banner removes its old object from the banner bucket. Those removals
    are best-effort and never block the row update.
    """

    def __init__(self, repo: BannerRepository, cache: QueryCache = query_cache):
        self.repo = repo
        self.cache = cache

    # ----- Helpers -----

    def _remove_object(self, name: str) -> None:
        if not name:
            return
        try:
            delete_from_storage(settings.BANNER_BUCKET, name)
        except Exception:
            logger.warning("Error deleting banner image %s from storage", name, exc_info=True)

    def _upload(self, image: BannerImage) -> tuple[str, str]:
        validate_image(image.content_type, image.data)
        name = timestamped_name("banner", image.filename)
        url = upload_to_storage(settings.BANNER_BUCKET, name, image.data, image.content_type)
        return name, url

    # ----- Queries -----

    def list_banners(self, session: Session) -> list[HeroBannerRead]:
        return self.cache.get_or_fetch(
            BANNERS_KEY,
            lambda: [HeroBannerRead.model_validate(b) for b in self.repo.list_active(session)],
        )

    def get_banner(self, session: Session, banner_id: uuid.UUID) -> HeroBanner:
        banner = self.repo.get_by_id(session, banner_id)
        if not banner or banner.is_deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Banner not found",
            )
        return banner

    # ----- Mutations -----

    def create_banner(
        self,
        session: Session,
        image: BannerImage,
        link_url: str | None,
        brand: str | None,
        category: str | None,
        custom_url_added: bool,
    ) -> HeroBannerRead:
        """
        Upload the image, then insert the row.

        If the insert fails the freshly uploaded object is removed again.
        """
        link = resolve_link(link_url, brand, category, custom_url_added)
        name, url = self._upload(image)

        banner = HeroBanner(
            image_url=url,
            link_url=link,
            brand=(brand or "").strip() or None,
            category=(category or "").strip() or None,
            custom_url_added=custom_url_added,
        )
        try:
            banner = self.repo.create(session, banner)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Error inserting banner: %s", exc)
            self._remove_object(name)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to insert banner",
            ) from exc

        self.cache.invalidate(*BANNERS_KEY)
        return HeroBannerRead.model_validate(banner)

    def update_banner(
        self,
        session: Session,
        banner_id: uuid.UUID,
        link_url: str | None,
        brand: str | None,
        category: str | None,
        custom_url_added: bool,
        image: BannerImage | None = None,
    ) -> HeroBannerRead:
        """
        Update link settings and optionally swap the image.

        With a new image: the old object is removed first (best-effort),
        then the new one uploaded. Without one, image_url is unchanged.
        """
        banner = self.get_banner(session, banner_id)
        link = resolve_link(link_url, brand, category, custom_url_added)

        if image is not None:
            validate_image(image.content_type, image.data)
            self._remove_object(filename_from_public_url(banner.image_url))
            _, banner.image_url = self._upload(image)

        banner.link_url = link
        banner.brand = (brand or "").strip() or None
        banner.category = (category or "").strip() or None
        banner.custom_url_added = custom_url_added
        banner.updated_at = utcnow()

        banner = self.repo.update(session, banner)
        self.cache.invalidate(*BANNERS_KEY)
        return HeroBannerRead.model_validate(banner)

    def delete_banner(self, session: Session, banner_id: uuid.UUID) -> None:
        """
        Soft delete the row, then remove its image (best-effort).
        """
        banner = self.get_banner(session, banner_id)
        banner.is_deleted = True
        banner.updated_at = utcnow()
        banner = self.repo.update(session, banner)
        self.cache.invalidate(*BANNERS_KEY)

        self._remove_object(filename_from_public_url(banner.image_url))
