# app/models/user.py
"""
User Model - clients and the accounts behind staff profiles.
Authentication lives outside this service; only identity is stored here.
"""
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
import enum
from app.models.base import Base


class UserRole(str, enum.Enum):
    CLIENT = "client"
    STAFF = "staff"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.CLIENT.value)
    profile_image = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
