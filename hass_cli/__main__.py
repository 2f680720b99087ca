"""Allow running as ``python -m hass_cli``."""

from hass_cli.main import run

run()
