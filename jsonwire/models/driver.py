"""Driver process configuration."""

from pydantic import BaseModel, Field

from jsonwire.config import settings


class DriverOptions(BaseModel):
    """Per-instance configuration for a driver process."""

    port: int = Field(..., gt=0, lt=65536, description="Port the driver listens on")
    base_url: str = Field(
        default="", description="URL path prefix for all WebDriver requests"
    )
    threads: int = Field(
        default=4, ge=1, description="HTTP handler threads (not honored by every driver)"
    )
    log_path: str | None = Field(
        default=None, description="Driver server log, checked for writability on start"
    )
    log_file: str | None = Field(
        default=None, description="File receiving driver stdout/stderr instead of the terminal"
    )
    start_timeout: float = Field(
        default_factory=lambda: settings.start_timeout_seconds,
        gt=0,
        description="Seconds to wait for the driver port to accept connections",
    )
