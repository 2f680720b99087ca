"""
Status Commands.

API reachability, instance configuration, and diagnostics.
"""

from hass_cli.commands.runner import run_operation


def check() -> None:
    """Check the Home Assistant API."""
    run_operation(lambda api: api.check_api())


def config() -> None:
    """Get Home Assistant configuration."""
    run_operation(lambda api: api.get_config())


def check_config() -> None:
    """Validate Home Assistant configuration files."""
    run_operation(lambda api: api.check_config())


def discovery() -> None:
    """Get Home Assistant discovery info."""
    run_operation(lambda api: api.get_discovery_info())


def error_log() -> None:
    """Get Home Assistant error log."""
    run_operation(lambda api: api.get_error_log())


def events() -> None:
    """Get all events from Home Assistant."""
    run_operation(lambda api: api.get_events())
