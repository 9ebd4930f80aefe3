# app/repositories/admin_repo.py
import uuid

from sqlmodel import Session, select

from app.models.admin import Admin


class AdminRepository:
    def get_by_id(self, session: Session, admin_id: uuid.UUID) -> Admin | None:
        return session.get(Admin, admin_id)

    def list_all(self, session: Session) -> list[Admin]:
        return session.exec(select(Admin)).all()
