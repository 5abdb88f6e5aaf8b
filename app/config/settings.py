from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "SkillAlloc"
    debug: bool = True
    redis_url: str = Field("redis://localhost:6379/0", validation_alias="REDIS_URL")
    cache_enabled: bool = False
    cache_ttl_seconds: int = 3600
    default_task_count: int = 10
    default_resource_count: int = 5
    max_task_count: int = 500
    max_resource_count: int = 100


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
