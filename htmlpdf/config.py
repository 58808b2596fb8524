"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Chrome/Chromium settings
    chrome_binary: str | None = None
    chrome_user_data_base: str | None = None
    chrome_launch_timeout_seconds: float = 30.0
    cdp_command_timeout_seconds: float = 30.0

    # Viewport used for layout before printing
    viewport_width: int = 1920
    viewport_height: int = 1080
    device_scale_factor: float = 2

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(env_prefix="HTMLPDF_", env_file=".env")


settings = Settings()
