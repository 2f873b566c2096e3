from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from .base import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    # Restaurant key (slug) used by catalog exports
    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    address = Column(Text)
    phone = Column(String)
    type_of_food = Column(String)
    logo_url = Column(String)
    featured = Column(Boolean, default=False)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    menu_items = relationship("MenuItem", back_populates="restaurant")

    def __repr__(self):
        return f"<Restaurant {self.id!r}>"
