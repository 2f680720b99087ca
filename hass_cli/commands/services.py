"""
Service Commands.

List available services and call them.
"""

from typing import Any, Optional

import typer

from hass_cli.commands.runner import parse_json_option, reject_input, run_operation
from hass_cli.core.exceptions import InvalidJSONError


def merge_keys(value: Any) -> dict[str, Any]:
    """
    Keys a parsed --data value adds to the service data.

    Objects add their members, arrays and strings add one key per index,
    and other scalars add nothing.
    """
    if isinstance(value, dict):
        return value
    if isinstance(value, (list, str)):
        return {str(index): item for index, item in enumerate(value)}
    return {}


def services(
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Filter services by domain"),
) -> None:
    """List all available services in Home Assistant."""
    run_operation(lambda api: api.get_services(domain))


def call(
    domain: str = typer.Argument(..., help="Service domain (e.g., light)"),
    service: str = typer.Argument(..., help="Service name (e.g., turn_on)"),
    data: str = typer.Option("{}", "--data", "-d", help="JSON data to pass to the service"),
    entity_id: Optional[str] = typer.Option(None, "--entity-id", "-e", help="Entity ID to target"),
) -> None:
    """
    Call a service in Home Assistant.

    Examples:
        hass-cli call light turn_on -e light.kitchen
        hass-cli call light turn_on -d '{"entity_id": "light.kitchen", "brightness": 120}'
    """
    service_data: dict[str, Any] = {}
    if entity_id:
        service_data["entity_id"] = entity_id

    try:
        service_data.update(merge_keys(parse_json_option(data, "data")))
    except InvalidJSONError as e:
        reject_input(e)

    run_operation(lambda api: api.call_service(domain, service, service_data))
