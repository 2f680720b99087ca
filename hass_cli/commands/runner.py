"""
Command Runner.

Shared plumbing for every subcommand: build the API, run one operation,
print one JSON document on stdout.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn

import typer

from hass_cli.api import HomeAssistantAPI
from hass_cli.core.config import get_settings
from hass_cli.core.exceptions import InvalidJSONError
from hass_cli.core.logging import get_logger
from hass_cli.outcome import Outcome, failure_from_exception, report_failure

logger = get_logger(__name__)

Operation = Callable[[HomeAssistantAPI], Awaitable[Outcome]]


def build_api() -> HomeAssistantAPI:
    """Create the API for this invocation from environment settings."""
    return HomeAssistantAPI(get_settings())


def emit(document: dict[str, Any]) -> None:
    """Print one indented JSON document on stdout."""
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))


def parse_json_option(raw: str, field: str = "data") -> Any:
    """
    Parse a JSON string passed through a command option. Any JSON value is accepted.

    Raises:
        InvalidJSONError: If the value is not valid JSON
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(f"Error parsing JSON {field}: {e}", field=field) from e


def reject_input(error: InvalidJSONError) -> NoReturn:
    """Report a user input error and exit non-zero without calling the API."""
    emit({"success": False, "error": {"message": error.message}})
    raise typer.Exit(1)


async def _run(operation: Operation) -> Outcome:
    api = build_api()
    try:
        return await operation(api)
    except Exception as e:
        logger.exception("Operation failed unexpectedly", source="cli")
        return report_failure(failure_from_exception(e, api.settings.missing))
    finally:
        await api.close()


def run_operation(operation: Operation) -> Outcome:
    """Run one API operation and print its outcome. API failures still exit 0."""
    outcome = asyncio.run(_run(operation))
    emit(outcome.to_dict())
    return outcome
