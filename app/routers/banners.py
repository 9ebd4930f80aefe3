# app/routers/banners.py
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.banner_repo import BannerRepository
from app.schemas.banner import HeroBannerRead
from app.services.banner_service import BannerImage, BannerService

router = APIRouter(
    prefix="/banners",
    tags=["Hero Banners"],
    dependencies=[Depends(require_admin)],
)

repo = BannerRepository()
service = BannerService(repo)


def _read_upload(file: UploadFile) -> BannerImage:
    return BannerImage(
        content_type=file.content_type,
        filename=file.filename or "image",
        data=file.file.read(),
    )


@router.get("", response_model=list[HeroBannerRead])
def list_banners(session: Session = Depends(get_session)):
    """
    List active hero banners, newest first.
    """
    return service.list_banners(session)


@router.post(
    "",
    response_model=HeroBannerRead,
    status_code=status.HTTP_201_CREATED,
)
def create_banner(
    image: UploadFile = File(...),
    link_url: str | None = Form(default=None),
    brand: str | None = Form(default=None),
    category: str | None = Form(default=None),
    custom_url_added: bool = Form(default=False),
    session: Session = Depends(get_session),
):
    """
    Create a banner (multipart form).

    - `custom_url_added=true`: `link_url` is used as-is.
    - otherwise the link is /brand/<brand> or /products/<category>.
    """
    return service.create_banner(
        session,
        image=_read_upload(image),
        link_url=link_url,
        brand=brand,
        category=category,
        custom_url_added=custom_url_added,
    )


@router.put("/{banner_id}", response_model=HeroBannerRead)
def update_banner(
    banner_id: uuid.UUID,
    image: UploadFile | None = File(default=None),
    link_url: str | None = Form(default=None),
    brand: str | None = Form(default=None),
    category: str | None = Form(default=None),
    custom_url_added: bool = Form(default=False),
    session: Session = Depends(get_session),
):
    """
    Update a banner; the image is replaced only when a new file is sent.
    """
    return service.update_banner(
        session,
        banner_id,
        link_url=link_url,
        brand=brand,
        category=category,
        custom_url_added=custom_url_added,
        image=_read_upload(image) if image is not None else None,
    )


@router.delete("/{banner_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_banner(
    banner_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Soft delete a banner and remove its image from storage.
    """
    service.delete_banner(session, banner_id)
    return None
