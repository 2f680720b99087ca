"""
Automation Commands.

Template rendering and webhook triggers.
"""

import typer

from hass_cli.commands.runner import parse_json_option, reject_input, run_operation
from hass_cli.core.exceptions import InvalidJSONError


def template(
    template: str = typer.Argument(..., help="Template string (e.g., '{{ states(\"sun.sun\") }}')"),
) -> None:
    """Render a Home Assistant template."""
    run_operation(lambda api: api.render_template(template))


def webhook(
    webhook_id: str = typer.Argument(..., help="Webhook ID"),
    data: str = typer.Option("{}", "--data", "-d", help="JSON data to send with the webhook"),
) -> None:
    """Trigger a Home Assistant webhook."""
    try:
        payload = parse_json_option(data, "data")
    except InvalidJSONError as e:
        reject_input(e)

    run_operation(lambda api: api.trigger_webhook(webhook_id, payload))
