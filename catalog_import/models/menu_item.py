import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Text, Boolean, DateTime, Numeric, ForeignKey, Enum, JSON
)
from sqlalchemy.orm import relationship
from .base import Base
from ..core.constants import ItemShape


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    restaurant_id = Column(String, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, index=True)
    image_url = Column(String)
    available = Column(Boolean, default=True, index=True)
    item_type = Column(
        Enum(*ItemShape.values(), name="menu_item_type"),
        default=ItemShape.SIMPLE.value,
        index=True,
    )
    # Variety: {"variants": [...]}, builder: {"configurations": [...]}
    options = Column(JSON)
    labels = Column(JSON, default=list)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    restaurant = relationship("Restaurant", back_populates="menu_items")

    def __repr__(self):
        return f"<MenuItem {self.name!r} ({self.item_type})>"
