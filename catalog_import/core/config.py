# catalog_import/core/config.py

"""
Application configuration management.

Loads settings from environment variables with sensible defaults.
Provides database, logging and import-pipeline configuration.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .exceptions import InvalidConfigError

# Load environment variables
load_dotenv()


class PathConfig:
    """File and directory path configuration."""
    
    # Project root
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    
    # Data directories
    DATA_DIR = PROJECT_ROOT / "db_files"
    IMPORT_DIR = Path(os.getenv("IMPORT_DIR", DATA_DIR / "menus"))
    
    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        for attr_name in dir(cls):
            attr = getattr(cls, attr_name)
            if isinstance(attr, Path) and attr_name.endswith("_DIR"):
                attr.mkdir(parents=True, exist_ok=True)


class DatabaseConfig:
    """Database connection and settings."""
    
    DATABASE_URL = os.getenv(
        "DATABASE_URL",
        "sqlite:///catalog.db"
    )
    
    # Database engine options
    ECHO_SQL = os.getenv("DB_ECHO", "false").lower() == "true"
    POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
    MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    
    @classmethod
    def get_engine_options(cls, database_url: str = None) -> dict:
        """Get SQLAlchemy engine options."""
        url = database_url or cls.DATABASE_URL
        options = {
            "echo": cls.ECHO_SQL,
            "future": True,
        }
        
        # Only add pooling options for non-SQLite databases
        if not url.startswith("sqlite"):
            options.update({
                "pool_size": cls.POOL_SIZE,
                "max_overflow": cls.MAX_OVERFLOW,
                "pool_pre_ping": True,
            })
        
        return options


class AppConfig:
    """Application-level configuration."""
    
    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    VERBOSE = os.getenv("VERBOSE", "false").lower() == "true"
    
    # Upload settings
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE", 16 * 1024 * 1024))  # 16MB default
    ALLOWED_EXTENSIONS = {"tsv", "csv", "txt", "xlsx", "xlsm"}


class ImportConfig:
    """Catalog import pipeline configuration."""
    
    # Leading bytes inspected by the comma heuristic
    SNIFF_BYTES = int(os.getenv("SNIFF_BYTES", "500"))
    
    # Widest delimited row accepted by the payload reader
    MAX_COLUMNS = int(os.getenv("MAX_COLUMNS", "256"))
    
    DEFAULT_CATEGORY = os.getenv("DEFAULT_CATEGORY", "general")
    
    @classmethod
    def validate(cls):
        """Validate numeric limits."""
        for name in ("SNIFF_BYTES", "MAX_COLUMNS"):
            value = getattr(cls, name)
            if value < 1:
                raise InvalidConfigError(
                    f"{name} must be a positive integer",
                    details={"name": name, "value": value}
                )
        if not cls.DEFAULT_CATEGORY.strip():
            raise InvalidConfigError("DEFAULT_CATEGORY must not be blank")


class Config:
    """
    Unified configuration class combining all config sections.
    
    Usage:
        from catalog_import.core.config import Config
        
        db_url = Config.database.DATABASE_URL
        import_dir = Config.paths.IMPORT_DIR
        sniff = Config.imports.SNIFF_BYTES
    """
    
    paths = PathConfig
    database = DatabaseConfig
    app = AppConfig
    imports = ImportConfig
    
    @classmethod
    def initialize(cls):
        """Initialize configuration and validate settings."""
        cls.paths.ensure_directories()
        cls.imports.validate()
        if cls.app.MAX_CONTENT_LENGTH < 1:
            raise InvalidConfigError("MAX_UPLOAD_SIZE must be a positive integer")
    
    @classmethod
    def summary(cls) -> str:
        """Get configuration summary for logging."""
        return f"""
Configuration Summary:
  Database: {cls.database.DATABASE_URL}
  Import Directory: {cls.paths.IMPORT_DIR}
  Log Level: {cls.app.LOG_LEVEL}
  Max Upload Size: {cls.app.MAX_CONTENT_LENGTH}
  Default Category: {cls.imports.DEFAULT_CATEGORY}
        """.strip()
