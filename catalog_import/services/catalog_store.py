# catalog_import/services/catalog_store.py

import logging
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session

from catalog_import.models import Restaurant, MenuItem

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Persistence operations used by the menu importers.
    
    Every call runs on the caller's session so that one import is a single
    transaction; the store flushes but never commits.
    """
    
    def __init__(self, session: Session):
        self.session = session
    
    def find_restaurant(self, key: str) -> Optional[Restaurant]:
        if not key:
            return None
        return self.session.get(Restaurant, key)
    
    def create_restaurant(self, key: str, defaults: Dict[str, Any] = None) -> Restaurant:
        restaurant = Restaurant(id=key, **(defaults or {}))
        self.session.add(restaurant)
        self.session.flush()
        logger.info(f"🏪 Created restaurant: {key}")
        return restaurant
    
    def delete_all_items(self, restaurant_id: str) -> int:
        """Delete every menu item of a restaurant and return the count."""
        deleted = (
            self.session.query(MenuItem)
            .filter(MenuItem.restaurant_id == restaurant_id)
            .delete(synchronize_session="fetch")
        )
        return deleted
    
    def find_item_by_name(self, restaurant_id: str, name: str) -> Optional[MenuItem]:
        """Exact, case-sensitive name lookup within one restaurant."""
        return (
            self.session.query(MenuItem)
            .filter_by(restaurant_id=restaurant_id, name=name)
            .first()
        )
    
    def create_item(self, restaurant_id: str, fields: Dict[str, Any]) -> MenuItem:
        item = MenuItem(
            restaurant_id=restaurant_id,
            name=fields["name"],
            description=fields.get("description"),
            price=fields["price"],
            category=fields["category"],
            image_url=None,
            available=fields.get("available", True),
            item_type=fields["itemType"],
            options=fields.get("options"),
            labels=fields.get("labels") or [],
        )
        self.session.add(item)
        self.session.flush()
        return item
    
    def count_items(self, restaurant_id: str) -> int:
        return (
            self.session.query(MenuItem)
            .filter(MenuItem.restaurant_id == restaurant_id)
            .count()
        )
