import sys
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


# Find .env next to the project, next to a frozen exe, or in the cwd
POSSIBLE_ENV_PATHS = [
    Path(__file__).resolve().parent.parent / ".env",
    Path(sys.executable).resolve().parent / ".env",
    Path.cwd() / ".env",
]

for env_path in POSSIBLE_ENV_PATHS:
    if env_path.exists():
        load_dotenv(env_path, override=False)
        break


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: str = "5432"
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_NAME: str = "trackntoms_db"
    DATABASE_ECHO: bool = False

    # Business rules
    MAX_UNIT_PRICE: Decimal = Decimal("99999.99")  # DECIMAL(7,2) ceiling
    PURCHASE_REQUIRES_APPROVAL: bool = False
    LOW_STOCK_DEFAULT_LIMIT: int = 100
    TIMEZONE: str = "Asia/Manila"

    # Logging
    LOG_FILE: str = "trackntoms.log"
    LOG_LEVEL: str = "INFO"
    LOG_ROTATION: str = "500 MB"

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )


settings = Settings()
