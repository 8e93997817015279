from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import logging
import os
from pathlib import Path

_logger = logging.getLogger(__name__)

# Look for .env in the project root (parent of the package directory)
project_dir = Path(__file__).parent.parent.parent
env_path = project_dir / ".env"

if env_path.exists():
    load_dotenv(env_path)
    _logger.info(f"Loaded .env file from: {env_path}")
elif Path(".env").exists():
    load_dotenv(Path(".env"))
    _logger.info(f"Loaded .env file from: {Path('.env').absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - hosted providers expose DATABASE_URL (uppercase)
    database_url: str = ""

    # API
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # "development" enables tracebacks in error responses
    environment: str = "production"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Flashcards with percentage_correct below this need practice
    practice_threshold: float = 0.5

    # Category assigned to flashcards created by CSV import
    csv_import_category: str = "unassigned"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment even when .env is absent
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


# Create settings instance
settings = Settings()

# Validate required DATABASE_URL
if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")
