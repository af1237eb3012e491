from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 signing secret for access tokens)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - PAYMENT_SIMULATION_DELAY_SECONDS / PAYMENT_SUCCESS_RATE
        (tune the simulated STK-push gateway)
    """

    PROJECT_NAME: str = "Art Gallery API"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./gallery.db"
    DATABASE_ECHO: bool = False

    # JWT issue/verification
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Simulated mobile-payment gateway
    PAYMENT_SIMULATION_DELAY_SECONDS: float = 2.0
    PAYMENT_SUCCESS_RATE: float = 0.9

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
