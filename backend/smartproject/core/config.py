from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod
    LOG_LEVEL: str = Field(default="INFO")

    # WBS structure
    MAX_WBS_LEVEL: int = Field(default=3)

    # Scheduling
    CONSTRAINT_MAX_PASSES: int = Field(default=100)

    # Performance banding (CPI / SPI)
    PERF_EXCELLENT: float = Field(default=1.05)
    PERF_ON_TARGET: float = Field(default=1.0)
    PERF_SLIGHTLY_BEHIND: float = Field(default=0.95)

    # Progress status: how many percent behind plan still counts as "slightly"
    PROGRESS_TOLERANCE: float = Field(default=5.0)


settings = Settings()
