import json
from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be configured via .env file or environment variables.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Records API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = ""

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # =============================================================================
    # MONGODB
    # =============================================================================
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "student_records"
    MONGODB_STUDENTS_COLLECTION: str = "students"
    MONGODB_TIMEOUT_MS: int = 5000

    # =============================================================================
    # CORS
    # =============================================================================
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
    ]

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return json.loads(v)
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def get_masked_mongodb_uri(self) -> str:
        """Return MONGODB_URI with the password (if any) replaced by ***."""
        scheme, sep, rest = self.MONGODB_URI.partition("://")
        if not sep or "@" not in rest:
            return self.MONGODB_URI
        credentials, _, host = rest.rpartition("@")
        user, has_password, _ = credentials.partition(":")
        if has_password:
            credentials = f"{user}:***"
        return f"{scheme}://{credentials}@{host}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )


# Create global settings instance
settings = Settings()


# Helper function to display current config (for debugging)
def print_config():
    """Print current configuration (hide sensitive data)."""
    print("=" * 80)
    print("CURRENT CONFIGURATION")
    print("=" * 80)
    print(f"Project Name: {settings.PROJECT_NAME}")
    print(f"Version: {settings.APP_VERSION}")
    print(f"Debug Mode: {settings.DEBUG}")
    print(f"API Prefix: {settings.API_PREFIX or '/'}")
    print("-" * 80)
    print(f"MongoDB URI: {settings.get_masked_mongodb_uri()}")
    print(f"MongoDB Database: {settings.MONGODB_DB}")
    print(f"Students Collection: {settings.MONGODB_STUDENTS_COLLECTION}")
    print(f"Server Selection Timeout: {settings.MONGODB_TIMEOUT_MS} ms")
    print("-" * 80)
    print(f"CORS Origins: {', '.join(settings.BACKEND_CORS_ORIGINS)}")
    print(f"Log Level: {settings.LOG_LEVEL}")
    print("=" * 80)


if __name__ == "__main__":
    # Test config loading
    print_config()
