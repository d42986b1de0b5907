"""
Relief provider model (NGOs, shelters, food banks).
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON, Float
from sqlalchemy.sql import func

from core.database import Base


class ReliefProvider(Base):
    __tablename__ = "relief_providers"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    type_of_relief = Column(JSON, nullable=False, default=list)
    capacity = Column(Integer, nullable=True)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    zone = Column(String(100), nullable=True)
    address = Column(Text, nullable=True)
    contact_number = Column(String(20), nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ReliefProvider(id={self.id}, name='{self.name}')>"
