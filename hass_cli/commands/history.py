"""
History Commands.

State history and logbook entries within an optional time window.
"""

from typing import Optional

import typer

from hass_cli.commands.runner import run_operation


def history(
    entity_id: Optional[str] = typer.Option(None, "--entity-id", "-e", help="Entity ID to filter history for"),
    end_time: Optional[str] = typer.Option(None, "--end-time", "-n", help="End time for history"),
    timestamp: Optional[str] = typer.Option(None, "--timestamp", "-t", help="Start time for history"),
) -> None:
    """Get state history from Home Assistant."""
    run_operation(lambda api: api.get_history(timestamp, entity_id, end_time))


def logbook(
    entity_id: Optional[str] = typer.Option(None, "--entity-id", "-e", help="Entity ID to filter logbook for"),
    end_time: Optional[str] = typer.Option(None, "--end-time", "-n", help="End time for logbook"),
    timestamp: Optional[str] = typer.Option(None, "--timestamp", "-t", help="Start time for logbook"),
) -> None:
    """Get logbook entries from Home Assistant."""
    run_operation(lambda api: api.get_logbook(timestamp, entity_id, end_time))
