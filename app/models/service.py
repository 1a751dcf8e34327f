# app/models/service.py
"""
Service Model - the salon's menu.
Duration drives slot length; price is kept in minor currency units.
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, CheckConstraint
from app.models.base import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (CheckConstraint("duration > 0", name="ck_services_duration_positive"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")

    duration = Column(Integer, nullable=False)  # minutes
    price = Column(Integer, nullable=False)  # cents

    category = Column(String(50), nullable=False, index=True)  # hair, nails, facial, massage, makeup
    image = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, duration={self.duration})>"

    @property
    def formatted_price(self) -> str:
        """Return human-readable price string"""
        return f"${self.price // 100}.{self.price % 100:02d}"

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
