# roombook/core/config.py

import os
import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


DEFAULT_CORS_ORIGINS = [
    "https://bookingruangrapat.vercel.app",
    "http://localhost:5173",
    "http://localhost:4173",
]

# Only ever used outside production, and always with a warning.
DEV_JWT_SECRET = "roombook-insecure-dev-secret"


# -------------------------------
# Settings
# -------------------------------

class Settings(BaseModel):
    """
    Runtime configuration, passed explicitly to the app factory.
    Use Settings.from_env() to read it from the environment / .env file.
    """
    environment: str = "development"
    database_url: str = "sqlite:///./roombook.db"
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24
    cors_origins: List[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    bcrypt_rounds: int = 10
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        values = {
            "environment": os.getenv("ROOMBOOK_ENV"),
            "database_url": os.getenv("DATABASE_URL"),
            "jwt_secret": os.getenv("JWT_SECRET_KEY"),
            "jwt_algorithm": os.getenv("JWT_ALGORITHM"),
            "token_ttl_hours": os.getenv("ACCESS_TOKEN_EXPIRE_HOURS"),
            "bcrypt_rounds": os.getenv("BCRYPT_ROUNDS"),
            "log_level": os.getenv("LOG_LEVEL"),
        }
        origins = os.getenv("CORS_ORIGINS")
        if origins is not None:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        return cls(**{key: value for key, value in values.items() if value is not None})

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def resolve_jwt_secret(self) -> str:
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_production:
            raise RuntimeError("JWT_SECRET_KEY must be set when ROOMBOOK_ENV=production")
        logger.warning(
            "JWT_SECRET_KEY is not set; using an insecure development secret (environment=%s)",
            self.environment,
        )
        return DEV_JWT_SECRET


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
