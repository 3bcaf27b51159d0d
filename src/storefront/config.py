"""Runtime settings for the storefront service, read from ``STOREFRONT_*`` variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOREFRONT_")

    env: str = "development"
    seed_catalog: bool = True
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str | None = None
    log_dir: str | None = None  # Rotating log files are written only when set


settings = Settings()
