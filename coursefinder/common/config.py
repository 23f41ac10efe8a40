import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

# Load environment variables from the correct .env file
env_file = ".env.production" if os.getenv("APP_ENV") == "production" else ".env"
load_dotenv(env_file)

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = True
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ALLOWED_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "info"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"

    # Catalog normalization
    DEFAULT_UNIVERSITY_TYPE: str = "government"
    ALLOW_PLACEHOLDER_UNIVERSITY: bool = False  # Bare-string universities fail unless enabled
    CATALOG_STRICT: bool = True
    CATALOG_SNAPSHOT_PATH: Optional[str] = None

    # Bookmarks
    BOOKMARK_CONFLICT_RETRIES: int = 1

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("DEFAULT_UNIVERSITY_TYPE")
    def check_university_type(cls, value):
        allowed = {"government", "private", "semi_government"}
        if value not in allowed:
            raise ValueError(f"DEFAULT_UNIVERSITY_TYPE must be one of {', '.join(sorted(allowed))}")
        return value

    @model_validator(mode="after")
    def validate_production_secrets(self):
        """Ensure critical secrets are set when running in production."""
        if self.APP_ENV == "production":
            if not self.JWT_SECRET or self.JWT_SECRET == "secret":
                raise ValueError("Missing required secrets for production: JWT_SECRET")
        return self

settings = Settings()
