# app/services/admin_service.py
import hmac
import logging

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.auth import create_access_token
from app.core.config import get_settings
from app.repositories.admin_repo import AdminRepository
from app.schemas.admin import AccessToken, AdminLogin

settings = get_settings()

logger = logging.getLogger(__name__)


class AdminService:
    """
    Dashboard sign-in against the admin table.
    """

    def __init__(self, repo: AdminRepository):
        self.repo = repo

    def login(self, session: Session, payload: AdminLogin) -> AccessToken:
        """
        Match the password against every admin row.

        Raises:
            HTTPException(401): no admin has this password.
        """
        supplied = payload.password.encode()
        for admin in self.repo.list_all(session):
            if hmac.compare_digest(admin.password.encode(), supplied):
                logger.info("Admin %s signed in", admin.id)
                return AccessToken(
                    access_token=create_access_token(admin.id),
                    expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
                )

        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )
