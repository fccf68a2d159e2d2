from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CUSTOM_EVENTS_", env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_JSON: bool = True
    LOG_LEVEL: Literal["debug", "info", "warning", "error"] = "info"
    # Event sink selection: "memory" or "log"
    SINK_ADAPTER: Literal["memory", "log"] = "memory"
    SINK_BUFFER_SIZE: int = 1000

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
