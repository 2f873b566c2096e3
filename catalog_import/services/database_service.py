# catalog_import/services/database_service.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from catalog_import.core.config import Config
from catalog_import.models import Base
import logging


logger = logging.getLogger(__name__)

class DatabaseService:
    """Centralized database connection and session management."""
    
    def __init__(self, db_url: str = None):
        url = db_url or Config.database.DATABASE_URL
        self.engine = create_engine(url, **Config.database.get_engine_options(url))
        self.SessionLocal = sessionmaker(bind=self.engine)
    
    def init_db(self):
        """Create tables that don't exist yet."""
        Base.metadata.create_all(self.engine)
        logger.debug(f"Database schema ready on {self.engine.url}")
    
    @contextmanager
    def get_session(self) -> Session:
        """Context manager for database sessions."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()
