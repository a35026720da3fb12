# app/core/config.py
import os
from typing import ClassVar, List
from pydantic import BaseModel, Field

def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'cleanorder.db')}")

def _csv(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    # Banco
    DATABASE_URL: str = Field(default_factory=_default_database_url)

    # JWT
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET_CLEANORDER_KEY"))
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = Field(default_factory=lambda: os.getenv("JWT_ISSUER", "CleanOrderAPI"))
    JWT_AUDIENCE: str = Field(default_factory=lambda: os.getenv("JWT_AUDIENCE", "CleanOrderClient"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")))
    TOKEN_REFRESH_THRESHOLD_MINUTES: int = Field(default_factory=lambda: int(os.getenv("TOKEN_REFRESH_THRESHOLD_MINUTES", "10")))

    # Cookie de sessão
    AUTH_COOKIE_NAME: str = Field(default_factory=lambda: os.getenv("AUTH_COOKIE_NAME", "AuthToken"))
    AUTH_COOKIE_MAX_AGE_SECONDS: int = Field(default_factory=lambda: int(os.getenv("AUTH_COOKIE_MAX_AGE_SECONDS", "3600")))

    # Front Angular/Ionic
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _csv(
        "CORS_ORIGINS",
        "http://localhost:4200,https://localhost:4200,"
        "http://localhost:8100,https://localhost:8100,"
        "http://localhost:8101,https://localhost:8101",
    ))

    # Cliente de ordens
    ORDERS_API_URL: str = Field(default_factory=lambda: os.getenv("ORDERS_API_URL", "https://localhost:7080/api/v1"))

    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

settings = Settings()
