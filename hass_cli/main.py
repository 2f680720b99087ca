"""
hass-cli entry point.

Typer application with one subcommand per Home Assistant REST endpoint.
Each invocation performs exactly one API call and prints one JSON document.

Usage:
    hass-cli --help
    hass-cli check
    hass-cli entities -d light
    hass-cli call light turn_on -e light.kitchen -d '{"brightness": 120}'
    hass-cli --debug state sun.sun

Options:
    --verbose, -v     Enable verbose output (INFO level logging on stderr)
    --debug           Enable debug mode (DEBUG level logging on stderr)
    --version         Show the version and exit
"""

import typer

from hass_cli import __version__
from hass_cli.commands import automation, calendars, history, media, services, states, status
from hass_cli.core.logging import setup_logging

app = typer.Typer(
    name="hass-cli",
    help="A CLI tool to interact with the Home Assistant REST API.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("calendar-events")(calendars.calendar_events)
app.command("calendars")(calendars.calendars)
app.command("call")(services.call)
app.command("camera-proxy")(media.camera_proxy)
app.command("check")(status.check)
app.command("check-config")(status.check_config)
app.command("config")(status.config)
app.command("discovery")(status.discovery)
app.command("entities")(states.entities)
app.command("error-log")(status.error_log)
app.command("events")(status.events)
app.command("history")(history.history)
app.command("logbook")(history.logbook)
app.command("services")(services.services)
app.command("set-state")(states.set_state)
app.command("state")(states.state)
app.command("states")(states.states)
app.command("template")(automation.template)
app.command("webhook")(automation.webhook)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode (DEBUG level logging)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    A CLI tool to interact with the Home Assistant REST API.

    Reads HASS_API_URL and HASS_API_TOKEN from the environment (or .env).
    Results are printed as JSON on stdout; logs go to stderr.
    """
    if debug:
        setup_logging(level="DEBUG", format_type="console")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
