"""
Runtime knobs, read from FIELDPARAM_* environment variables or a .env file.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    debug: bool = False
    log_json: bool = True
    epoch_min_digits: int = 5  # digit-only strings at least this long are epoch millis
    date_dayfirst: bool = False

    class Config:
        env_prefix = "FIELDPARAM_"
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
