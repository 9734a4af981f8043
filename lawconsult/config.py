"""
Configuration settings for LawConsult Backend
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "LawConsult Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    LOG_LEVEL: str = "INFO"

    # Firebase Configuration
    FIREBASE_CREDENTIALS_PATH: str = "./firebase-credentials.json"
    # Support for raw JSON credentials (env var)
    FIREBASE_CREDENTIALS_JSON: str = ""
    FIREBASE_EMULATOR_HOST: str = ""
    DEV_MODE: bool = False

    # JWT Configuration
    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated origins to list"""
        origins = [origin.strip()
                   for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]
        if self.DEBUG:
            for port in (3000, 5173):
                for host in ("localhost", "127.0.0.1"):
                    origin = f"http://{host}:{port}"
                    if origin not in origins:
                        origins.append(origin)
        return origins

    # Admin back-office API (consumed by the admin data client)
    ADMIN_API_BASE_URL: str = "http://localhost:3001/api/v1/admin"
    ADMIN_API_TOKEN: str = ""
    ADMIN_API_TIMEOUT_SECONDS: float = 10.0

    # Booking flow timings (seconds)
    BOOKING_SUBMIT_DELAY_SECONDS: float = 2.0
    BOOKING_REDIRECT_DELAY_SECONDS: float = 3.0

    # Consultation room timings (seconds)
    ROOM_CONNECT_DELAY_SECONDS: float = 2.0
    ROOM_REPLY_DELAY_MIN_SECONDS: float = 1.0
    ROOM_REPLY_DELAY_MAX_SECONDS: float = 3.0
    ROOM_LEAVE_DELAY_SECONDS: float = 2.0

    model_config = {"env_file": ".env",
                    "case_sensitive": True, "extra": "allow"}


# Global settings instance
settings = Settings()
