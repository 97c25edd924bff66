"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Container Tracker API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./container_tracker.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "1440"))
    admin_user: str = getenv("ADMIN_USER", "admin")
    admin_pass: str = getenv("ADMIN_PASS", "admin123")
    admin_email: str = getenv("ADMIN_EMAIL", "admin@warehouse.com")
    reference_fields_editable: bool = getenv("CONTAINER_REFERENCE_FIELDS_EDITABLE", "0") == "1"
    cors_origins: list[str] = [
        origin.strip() for origin in getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
    ]


settings: Settings = Settings()
