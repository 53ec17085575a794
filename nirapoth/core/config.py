"""
Client settings loaded from environment variables and an optional .env file.
"""
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """NiraPoth client settings"""

    # Backend
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TIMEOUT_SECONDS: Optional[float] = 30.0
    DEFAULT_PAGE_LIMIT: int = 20

    # Reverse geocoding (OpenStreetMap Nominatim)
    GEOCODING_URL: str = "https://nominatim.openstreetmap.org/reverse"
    GEOCODING_USER_AGENT: str = "nirapoth-client/0.1"
    GEOCODING_TIMEOUT_SECONDS: float = 10.0

    # Media host
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_UPLOAD_PRESET: Optional[str] = None
    CLOUDINARY_BASE_URL: str = "https://api.cloudinary.com/v1_1"

    # Dashboards
    POLL_INTERVAL_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NIRAPOTH_", extra="ignore")

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.CLOUDINARY_CLOUD_NAME and self.CLOUDINARY_UPLOAD_PRESET)

    @property
    def request_timeout(self) -> Optional[float]:
        """Timeout for backend calls; 0 or unset disables it."""
        return self.API_TIMEOUT_SECONDS or None


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()


settings = get_settings()
