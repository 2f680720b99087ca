"""
Outcome Classification.

Turns one transport result into one normalized outcome:

    {"success": true, ...metadata, "data": ...}
    {"success": false, "error": {"message": ..., ...}}

classify() is pure. report_failure() is the side effect that mirrors every
failure onto stderr as indented JSON at the moment it is classified; the
CLI prints the same document again on stdout as the command result.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console

from hass_cli.client import HttpResponse, NoResponse, SendFailure, TransportResult
from hass_cli.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

diagnostics = Console(stderr=True)

NO_RESPONSE_MESSAGE = "No response received from Home Assistant"
ASSUMED_SUCCESS_NOTE = "No response received from Home Assistant; assuming success"

TRANSIENT_NO_RESPONSE_CODES = frozenset({"ECONNRESET", "ECONNABORTED", "ETIMEDOUT"})
TRANSIENT_NO_RESPONSE_MESSAGE = "socket hang up"


class ConfigIssue(BaseModel):
    """Environment keys that were absent when the call failed."""

    missing: list[str]


class ErrorInfo(BaseModel):
    """The error record of a failed outcome. Unset fields are not serialized."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    status: int | None = None
    status_text: str | None = Field(default=None, alias="statusText")
    data: Any = None
    type: str | None = None
    config: ConfigIssue | None = None


@dataclass(frozen=True)
class Outcome:
    """Normalized result of one API call."""

    success: bool
    data: Any = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, data: Any, metadata: dict[str, Any] | None = None) -> "Outcome":
        return cls(success=True, data=data, metadata=dict(metadata or {}))

    @classmethod
    def failed(cls, error: ErrorInfo) -> "Outcome":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with metadata keys ahead of data, error only on failure."""
        if self.success:
            return {"success": True, **self.metadata, "data": self.data}
        if self.error is None:
            raise ValueError("Failed outcome has no error record")
        return {
            "success": False,
            "error": self.error.model_dump(by_alias=True, exclude_none=True),
        }


def is_transient_no_response(result: TransportResult) -> bool:
    """True when a dispatched request died in a way that usually means "accepted"."""
    if not isinstance(result, NoResponse):
        return False
    if result.code in TRANSIENT_NO_RESPONSE_CODES:
        return True
    return TRANSIENT_NO_RESPONSE_MESSAGE in (result.message or "").lower()


def _network_error() -> ErrorInfo:
    return ErrorInfo(message=NO_RESPONSE_MESSAGE, type="network")


def with_missing_config(error: ErrorInfo, missing: Sequence[str]) -> ErrorInfo:
    """Attach config.missing when any required environment key was absent."""
    if not missing:
        return error
    return error.model_copy(update={"config": ConfigIssue(missing=list(missing))})


def classify(
    result: TransportResult,
    *,
    missing: Sequence[str] = (),
    metadata: dict[str, Any] | None = None,
    transform: Callable[[HttpResponse], Any] | None = None,
    assume_success_metadata: dict[str, Any] | None = None,
) -> Outcome:
    """
    Classify a transport result.

    Args:
        result: What the transport client returned
        missing: Environment keys absent at startup; added to failures only
        metadata: Request echo fields placed before data on success
        transform: Builds the success payload from a 2xx response (default: body)
        assume_success_metadata: When set, a transient NoResponse becomes a
            success with data None and these fields plus a note

    Returns:
        Outcome
    """
    if isinstance(result, HttpResponse):
        if result.ok:
            data = transform(result) if transform else result.body
            return Outcome.ok(data, metadata)
        error = ErrorInfo(
            message=f"Request failed with status code {result.status}",
            status=result.status,
            status_text=result.reason,
            data=result.body,
        )
    elif isinstance(result, NoResponse):
        if assume_success_metadata is not None and is_transient_no_response(result):
            return Outcome.ok(None, {**assume_success_metadata, "note": ASSUMED_SUCCESS_NOTE})
        error = _network_error()
    elif isinstance(result, SendFailure):
        error = _network_error()
    else:
        raise TypeError(f"Unknown transport result: {result!r}")

    return Outcome.failed(with_missing_config(error, missing))


def failure_from_exception(exc: BaseException, missing: Sequence[str] = ()) -> Outcome:
    """Render an unexpected exception as a failed outcome."""
    return Outcome.failed(with_missing_config(ErrorInfo(message=str(exc) or type(exc).__name__), missing))


def report_failure(outcome: Outcome) -> Outcome:
    """Write a failed outcome to the diagnostic stream. Successes pass through."""
    if not outcome.success:
        error = outcome.error
        log_with_source(
            logger, "api", "warning", "API call failed",
            status=error.status if error else None,
            error_type=error.type if error else None,
        )
        diagnostics.print_json(data=outcome.to_dict(), indent=2, highlight=False)
    return outcome
