# ===== app/services/catalog/catalog_repository.py =====
"""Read access to services, staff profiles and users"""
from typing import List, Optional
from sqlalchemy.orm import Session

from app.models.service import Service
from app.models.staff import Staff, StaffService
from app.models.user import User


class CatalogRepository:

    @staticmethod
    def list_services(db: Session, category: Optional[str] = None) -> List[Service]:
        query = db.query(Service).filter(Service.is_active.is_(True))
        if category:
            query = query.filter(Service.category == category)
        return query.order_by(Service.id.asc()).all()

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def list_staff(db: Session) -> List[Staff]:
        return db.query(Staff).order_by(Staff.id.asc()).all()

    @staticmethod
    def get_staff(db: Session, staff_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.id == staff_id).first()

    @staticmethod
    def get_staff_services(db: Session, staff_id: int) -> List[Service]:
        """Services linked to a staff member"""
        return db.query(Service).join(
            StaffService, StaffService.service_id == Service.id
        ).filter(
            StaffService.staff_id == staff_id
        ).order_by(Service.id.asc()).all()

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()
