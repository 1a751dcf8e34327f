# app/models/staff.py
from sqlalchemy import Column, String, Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.models.base import Base


class Staff(Base):
    """Service provider profile, distinct from the user account behind it"""
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)

    title = Column(String(100), nullable=False)  # e.g. Senior Hair Stylist
    bio = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True)  # out of 500
    review_count = Column(Integer, default=0)

    user = relationship("User", lazy="joined")

    def __repr__(self):
        return f"<Staff(id={self.id}, title={self.title})>"


class StaffService(Base):
    """Services a staff member can perform"""
    __tablename__ = "staff_services"
    __table_args__ = (UniqueConstraint("staff_id", "service_id", name="uq_staff_service"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
