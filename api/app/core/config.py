from pydantic_settings import BaseSettings
import os
from pathlib import Path

# Try to load .env file explicitly before creating Settings
try:
    from dotenv import load_dotenv
    import logging
    _logger = logging.getLogger(__name__)

    # Look for .env in api directory (parent of app directory)
    api_dir = Path(__file__).parent.parent.parent
    env_path = api_dir / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)
        _logger.info(f"Loaded .env file from: {env_path}")
    else:
        # Fallback to current directory
        current_env = Path(".env")
        if current_env.exists():
            load_dotenv(current_env, override=False)
            _logger.info(f"Loaded .env file from: {current_env.absolute()}")
        else:
            _logger.debug(f".env file not found at {env_path} or {current_env.absolute()}")
except Exception as e:
    import logging
    _logger = logging.getLogger(__name__)
    _logger.warning(f"Error loading .env file: {e}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - hosting platforms usually provide DATABASE_URL (uppercase)
    database_url: str = ""

    # API
    api_v1_prefix: str = "/api/v1"

    # CORS
    cors_origins: list[str] = ["*"]

    # Access tokens (signed, opaque to clients)
    token_secret_key: str = "change-me-in-production"
    token_max_age_seconds: int = 60 * 60 * 24

    # Pagination
    default_page_size: int = 20
    max_page_size: int = 100

    # Catalog policy: let operator managers edit the catalog without a change request
    allow_direct_catalog_edits: bool = False

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment (platforms provide it uppercase)
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        super().__init__(**kwargs)

    @property
    def sqlalchemy_database_url(self) -> str:
        """DATABASE_URL normalized for SQLAlchemy (postgresql:// rather than postgres://)."""
        if self.database_url.startswith("postgres://"):
            return self.database_url.replace("postgres://", "postgresql://", 1)
        return self.database_url


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
