# app/routers/admin.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.models.admin import Admin
from app.repositories.admin_repo import AdminRepository
from app.schemas.admin import AccessToken, AdminLogin
from app.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])

repo = AdminRepository()
service = AdminService(repo)


@router.post("/login", response_model=AccessToken)
def login(
    payload: AdminLogin,
    session: Session = Depends(get_session),
):
    """
    Exchange the admin password for a bearer token.
    """
    return service.login(session, payload)


@router.get("/me")
def read_me(admin: Admin = Depends(require_admin)) -> dict[str, str | None]:
    """
    Identify the signed-in admin; lets the dashboard check its session.
    """
    return {"id": str(admin.id), "name": admin.name}
