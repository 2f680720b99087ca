"""
Camera Commands.
"""

from typing import Optional

import typer

from hass_cli.commands.runner import run_operation


def camera_proxy(
    entity_id: str = typer.Argument(..., help="Camera entity ID"),
    width: Optional[int] = typer.Option(None, "--width", "-w", help="Width of the image"),
    height: Optional[int] = typer.Option(None, "--height", "-h", help="Height of the image"),
) -> None:
    """Get camera snapshot as base64."""
    run_operation(lambda api: api.get_camera_proxy(entity_id, width, height))
