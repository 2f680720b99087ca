"""
Home Assistant CLI.

Command-line client for the Home Assistant REST API. Every subcommand
issues one request and prints one JSON document.

Architecture:
- core/: configuration, logging, exceptions
- client.py: httpx transport returning tagged results
- outcome.py: classification of results into success/failure outcomes
- api.py: one coroutine per REST endpoint
- commands/: Typer subcommands

Usage:
    hass-cli --help
    hass-cli states
    hass-cli call light turn_on -e light.kitchen
"""

__version__ = "1.0.0"
