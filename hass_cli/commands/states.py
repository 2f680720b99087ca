"""
State Commands.

Read and write entity states.
"""

from typing import Optional

import typer

from hass_cli.commands.runner import parse_json_option, reject_input, run_operation
from hass_cli.core.exceptions import InvalidJSONError


def states() -> None:
    """Get all states from Home Assistant."""
    run_operation(lambda api: api.get_states())


def state(
    entity_id: str = typer.Argument(..., help="Entity ID (e.g., sensor.outside_temperature)"),
) -> None:
    """Get the state of a specific entity."""
    run_operation(lambda api: api.get_entity_state(entity_id))


def set_state(
    entity_id: str = typer.Argument(..., help="Entity ID"),
    state: str = typer.Argument(..., help="New state value"),
    attributes: str = typer.Option(
        "{}", "--attributes", "-a", help="JSON attributes to include with the state",
    ),
) -> None:
    """Set the state of an entity."""
    try:
        parsed = parse_json_option(attributes, "attributes")
    except InvalidJSONError as e:
        reject_input(e)

    run_operation(lambda api: api.set_state(entity_id, state, parsed))


def entities(
    domain: Optional[str] = typer.Option(
        None, "--domain", "-d", help="Filter entities by domain (e.g., light, switch)",
    ),
) -> None:
    """List all entities from Home Assistant."""
    run_operation(lambda api: api.get_entities(domain))
