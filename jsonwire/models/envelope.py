"""Wire protocol response envelope models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Envelope(BaseModel):
    """The {sessionId, status, value} wrapper of every response."""

    session_id: str = Field(default="", alias="sessionId")
    status: int = 0
    value: Any = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("session_id", mode="before")
    @classmethod
    def _null_session_id(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, v: Any) -> Any:
        return 0 if v is None else v


class StackFrame(BaseModel):
    """One frame of a server-side stack trace."""

    file_name: str | None = Field(default=None, alias="fileName")
    class_name: str | None = Field(default=None, alias="className")
    method_name: str | None = Field(default=None, alias="methodName")
    line_number: int | None = Field(default=None, alias="lineNumber")

    model_config = ConfigDict(populate_by_name=True)


class ErrorPayload(BaseModel):
    """Structured error value sent by legacy drivers."""

    error: str = ""
    message: str = ""
    screen: str = ""
    class_name: str = Field(default="", alias="class")
    stack_trace: list[StackFrame] = Field(default_factory=list, alias="stackTrace")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("error", "message", "screen", "class_name", mode="before")
    @classmethod
    def _null_string(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("stack_trace", mode="before")
    @classmethod
    def _null_stack_trace(cls, v: Any) -> Any:
        return [] if v is None else v
