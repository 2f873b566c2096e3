# catalog_import/importers/base_importer.py

import logging

from catalog_import.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class BaseImporter:
    """Base class for importers working on one database session."""
    
    def __init__(self, session, store: CatalogStore = None):
        self.session = session
        self.store = store or CatalogStore(session)
    
    def safe_commit(self, operation_name: str):
        """Safe commit with error handling and rollback."""
        try:
            self.session.commit()
            logger.info(f"✅ {operation_name} committed successfully")
        except Exception as e:
            self.session.rollback()
            logger.error(f"❌ {operation_name} failed: {e}")
            raise
