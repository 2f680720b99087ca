"""
Calendar Commands.
"""

from typing import Optional

import typer

from hass_cli.commands.runner import run_operation


def calendars() -> None:
    """Get all calendar entities from Home Assistant."""
    run_operation(lambda api: api.get_calendars())


def calendar_events(
    entity_id: str = typer.Argument(..., help="Calendar entity ID"),
    end: Optional[str] = typer.Option(None, "--end", "-e", help="End date for events (ISO format)"),
    start: Optional[str] = typer.Option(None, "--start", "-s", help="Start date for events (ISO format)"),
) -> None:
    """Get events for a calendar entity."""
    run_operation(lambda api: api.get_calendar_events(entity_id, start, end))
