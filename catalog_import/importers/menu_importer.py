# catalog_import/importers/menu_importer.py

import logging
from collections import OrderedDict
from typing import Callable, Dict, List

from catalog_import.core.config import Config
from catalog_import.core.exceptions import RestaurantNotFoundError
from catalog_import.core.types import ImportSummary, ItemError, ReconstructedItem
from catalog_import.core.utils import humanize_slug
from catalog_import.services.catalog_store import CatalogStore
from catalog_import.services.menu_item_validation import (
    normalize_menu_item_data,
    validate_menu_item,
)
from .base_importer import BaseImporter

logger = logging.getLogger(__name__)

Validator = Callable[[dict], List[str]]


class MenuImporter(BaseImporter):
    """
    Persist rebuilt menu items under one existing restaurant.
    
    The whole call is one transaction: it commits once at the end and rolls
    back on any storage failure, re-raising it. Items whose name already
    exists under the restaurant are skipped, so repeating an import without
    ``replace`` creates nothing new.
    """
    
    def __init__(self, session, store: CatalogStore = None, validator: Validator = None):
        super().__init__(session, store)
        self.validator = validator or validate_menu_item
    
    def import_items(
        self,
        restaurant_id: str,
        items: List[ReconstructedItem],
        replace: bool = False,
    ) -> ImportSummary:
        """
        Import items belonging to ``restaurant_id``.
        
        Args:
            restaurant_id: key of the target restaurant (never auto-created here)
            items: rebuilt items; those keyed to other restaurants are ignored
            replace: delete all of the restaurant's items first
        
        Returns:
            ImportSummary; a missing restaurant yields zero counts and one error
        """
        summary = ImportSummary()
        try:
            restaurant = self.store.find_restaurant(restaurant_id)
            if restaurant is None:
                raise RestaurantNotFoundError(
                    "Restaurant not found", details={"restaurant_id": restaurant_id}
                )
            candidates = [item for item in items if item.restaurant_key == restaurant.id]
            self._import_for_restaurant(restaurant.id, candidates, replace, summary)
        except RestaurantNotFoundError as e:
            self.session.rollback()
            logger.warning(f"⚠️ Menu import skipped: {e.message} ({restaurant_id})")
            return ImportSummary(errors=[ItemError(name=restaurant_id or "", reasons=[e.message])])
        except Exception as e:
            self.session.rollback()
            logger.error(f"❌ Menu import failed for {restaurant_id}: {e}")
            raise
        
        self.safe_commit(f"Menu import for {restaurant_id}")
        self._log_summary(summary)
        return summary
    
    def _import_for_restaurant(
        self,
        restaurant_id: str,
        items: List[ReconstructedItem],
        replace: bool,
        summary: ImportSummary,
    ):
        if replace and items:
            deleted = self.store.delete_all_items(restaurant_id)
            summary.replaced += deleted
            if deleted:
                logger.info(f"🗑️ Replaced {deleted} menu items for {restaurant_id}")
        
        for item in items:
            payload = normalize_menu_item_data(item.to_payload())
            name = payload["name"]
            if not name:
                continue
            
            if self.store.find_item_by_name(restaurant_id, name) is not None:
                summary.skipped += 1
                logger.debug(f"Skipping existing item '{name}' in {restaurant_id}")
                continue
            
            payload["category"] = payload["category"] or Config.imports.DEFAULT_CATEGORY
            
            reasons = self.validator(payload)
            if reasons:
                summary.errors.append(ItemError(name=item.name, reasons=reasons))
                logger.warning(f"⚠️ Invalid item '{item.name}': {'; '.join(reasons)}")
                continue
            
            self.store.create_item(restaurant_id, payload)
            summary.record_created(item.shape)
        
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"🍽️ {restaurant_id} now has {self.store.count_items(restaurant_id)} menu items")
    
    @staticmethod
    def _log_summary(summary: ImportSummary):
        logger.info(f"📦 {summary.message}")
        if summary.errors:
            logger.warning(f"⚠️ Validation skipped: {len(summary.errors)} items")


class BatchMenuImporter(MenuImporter):
    """
    Import items for every restaurant present in a bulk file.
    
    Unknown restaurant keys get a minimal restaurant created on the fly,
    named after the humanized key. All restaurants share one transaction.
    """
    
    RESTAURANT_DEFAULTS = {
        "address": None,
        "phone": None,
        "type_of_food": None,
        "logo_url": None,
        "featured": False,
        "active": True,
    }
    
    def import_all(self, items: List[ReconstructedItem], replace: bool = False) -> ImportSummary:
        summary = ImportSummary()
        by_restaurant: Dict[str, List[ReconstructedItem]] = OrderedDict()
        for item in items:
            by_restaurant.setdefault(item.restaurant_key, []).append(item)
        
        try:
            for restaurant_key, restaurant_items in by_restaurant.items():
                restaurant = self.resolve_restaurant(restaurant_key)
                self._import_for_restaurant(restaurant.id, restaurant_items, replace, summary)
        except Exception as e:
            self.session.rollback()
            logger.error(f"❌ Batch menu import failed: {e}")
            raise
        
        self.safe_commit(f"Batch menu import ({len(by_restaurant)} restaurants)")
        self._log_summary(summary)
        return summary
    
    def resolve_restaurant(self, restaurant_key: str):
        restaurant = self.store.find_restaurant(restaurant_key)
        if restaurant is None:
            defaults = dict(self.RESTAURANT_DEFAULTS, name=humanize_slug(restaurant_key))
            restaurant = self.store.create_restaurant(restaurant_key, defaults)
        return restaurant
