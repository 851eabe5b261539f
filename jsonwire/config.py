"""Library configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Logging
    debug: bool = False
    log_level: str = "INFO"

    # Wire protocol settings
    request_timeout_seconds: float = 60.0

    # Driver process settings
    start_timeout_seconds: float = 20.0
    probe_interval_seconds: float = 0.1

    # Driver binaries
    edge_driver_path: str = "MicrosoftWebDriver.exe"
    ie11_driver_path: str = "IEDriverServer.exe"
    safari_driver_path: str = "/usr/bin/safaridriver"

    class Config:
        env_prefix = "JSONWIRE_"
        env_file = ".env"


settings = Settings()
