from pydantic_settings import BaseSettings, NoDecode
from pydantic import field_validator
from functools import lru_cache
from typing import Annotated


class Settings(BaseSettings):
    """EHR API configuration."""

    APP_NAME: str = "Arena EHR API"
    DEBUG: bool = False

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5001

    # CORS - comma separated origins are accepted from the environment
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:3001", "http://localhost:3002"]

    # Client (portal / admin shell)
    API_URL: str = "http://localhost:5001"
    REQUEST_TIMEOUT: float = 10.0

    # Dashboards
    UPCOMING_WINDOW_DAYS: int = 0
    RECENT_RECORDS_LIMIT: int = 5

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
