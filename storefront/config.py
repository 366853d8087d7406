from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import os
from pathlib import Path

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
    DB_ECHO: bool = False

    # Frontend
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # Search Settings
    SEARCH_TIMEOUT_SECONDS: float = 10.0
    MAX_QUERY_LENGTH: int = 200

    # Catalogue Settings
    DEFAULT_PAGE_SIZE: int = 100

    # Logging Settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Optional[str] = None  # File handlers are only attached when set

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached instance of settings.
    This way we don't have to load the environment every time we need settings.
    """
    return Settings()

# Create .env.example file if it doesn't exist
def create_env_example():
    env_example = """# Database
DATABASE_URL=sqlite:///./storefront.db
DB_ECHO=false

# Frontend
FRONTEND_URL=http://localhost:3000

# Search Settings
SEARCH_TIMEOUT_SECONDS=10
MAX_QUERY_LENGTH=200

# Catalogue Settings
DEFAULT_PAGE_SIZE=100

# Logging Settings
LOG_LEVEL=INFO
LOG_DIR=logs

# Environment
ENVIRONMENT=development
"""
    example_path = Path(".env.example")
    if not example_path.exists():
        with open(example_path, "w") as f:
            f.write(env_example)

if __name__ == "__main__":
    create_env_example()
