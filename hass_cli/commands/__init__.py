"""
CLI Commands.

Organized by API area. Each function is registered as one top-level
subcommand in hass_cli.main.
"""

from hass_cli.commands import automation, calendars, history, media, services, states, status

__all__ = [
    "automation",
    "calendars",
    "history",
    "media",
    "services",
    "states",
    "status",
]
