from typing import Optional
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from dispatch.errors import ConfigurationError

class Settings(BaseSettings):
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "wildrydes"
    rides_collection: str = "rides"
    store_timeout_seconds: float = Field(default=5.0, gt=0)
    allowed_origin: str = "*"
    secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    verify_token_signature: bool = True
    username_claim: str = "cognito:username"
    request_id_header: str = "X-Request-Id"
    fleet_file: Optional[str] = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

def load_settings() -> Settings:
    """
    Build Settings from the environment (and a .env file, if present).
    Unset variables keep their defaults.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
