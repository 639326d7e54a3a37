from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./gradpass.db"

    code_secret: str = "dev-code-secret-change-in-production"
    max_code_attempts: int = 5
    default_max_tickets: int = 5

    log_level: str = "INFO"
    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "testserver"]
    validation_rate_limit: str = "60/minute"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
