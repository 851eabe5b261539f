"""Session and driver status models."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

if TYPE_CHECKING:
    from jsonwire.browser.driver import WebDriver

Capabilities = dict[str, Any]


class Session(BaseModel):
    """A remote automation session hosted by a driver."""

    id: str
    capabilities: Capabilities = Field(default_factory=dict)

    # Owning driver, set by the driver that returned this session
    _driver: Any = PrivateAttr(default=None)

    @field_validator("capabilities", mode="before")
    @classmethod
    def _null_capabilities(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def driver(self) -> "WebDriver | None":
        """Driver that created or listed this session."""
        return self._driver

    def bind(self, driver: "WebDriver") -> "Session":
        """Attach the owning driver and return the session."""
        self._driver = driver
        return self


class BuildInfo(BaseModel):
    """Driver build information."""

    version: str | None = None
    revision: str | None = None
    time: str | None = None

    model_config = ConfigDict(extra="allow")


class OSInfo(BaseModel):
    """Operating system the driver runs on."""

    arch: str | None = None
    name: str | None = None
    version: str | None = None

    model_config = ConfigDict(extra="allow")


class Status(BaseModel):
    """Snapshot returned by GET /status."""

    build: BuildInfo = Field(default_factory=BuildInfo)
    os: OSInfo = Field(default_factory=OSInfo)
    ready: bool | None = None
    message: str | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("build", "os", mode="before")
    @classmethod
    def _null_section(cls, v: Any) -> Any:
        return {} if v is None else v
