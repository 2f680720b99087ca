"""
Home Assistant REST API Operations.

One coroutine per endpoint. Each issues exactly one request through
HomeAssistantClient and classifies the result into an Outcome. Failures are
mirrored to stderr at classification time.

Usage:
    async with HomeAssistantAPI(get_settings()) as api:
        outcome = await api.get_entities("light")
"""

import base64
from collections.abc import Callable
from typing import Any

import httpx

from hass_cli.client import HomeAssistantClient, HttpResponse, TransportResult
from hass_cli.core.config import Settings
from hass_cli.outcome import Outcome, classify, report_failure


def filter_services(services: Any, domain: str) -> dict[str, Any]:
    """Reduce a services payload to a mapping holding only the given domain."""
    if isinstance(services, dict):
        return {domain: services[domain]} if domain in services else {}
    if isinstance(services, list):
        for entry in services:
            if isinstance(entry, dict) and entry.get("domain") == domain:
                return {domain: entry.get("services", {})}
    return {}


def filter_entities(entities: Any, domain: str) -> Any:
    """Keep only entities whose entity_id starts with "<domain>."."""
    if not isinstance(entities, list):
        return entities
    prefix = f"{domain}."
    return [
        entity for entity in entities
        if isinstance(entity, dict) and str(entity.get("entity_id", "")).startswith(prefix)
    ]


def _with_timestamp(timestamp: str | None, **fields: Any) -> dict[str, Any]:
    """Echo fields for time-window queries. An omitted timestamp is left out."""
    if timestamp is None:
        return fields
    return {"timestamp": timestamp, **fields}


def encode_snapshot(response: HttpResponse) -> dict[str, Any]:
    """Camera bytes as base64 plus the upstream content type."""
    return {
        "image": base64.b64encode(response.content).decode("ascii"),
        "contentType": response.headers.get("content-type"),
    }


class HomeAssistantAPI:
    """Endpoint operations against one Home Assistant instance."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.client = HomeAssistantClient(settings, transport=transport)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "HomeAssistantAPI":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _finish(
        self,
        result: TransportResult,
        metadata: dict[str, Any] | None = None,
        transform: Callable[[HttpResponse], Any] | None = None,
        assume_success_metadata: dict[str, Any] | None = None,
    ) -> Outcome:
        outcome = classify(
            result,
            missing=self.settings.missing,
            metadata=metadata,
            transform=transform,
            assume_success_metadata=assume_success_metadata,
        )
        return report_failure(outcome)

    # ------------------------------------------------------------------ #
    # Status & configuration
    # ------------------------------------------------------------------ #

    async def check_api(self) -> Outcome:
        """GET / - API running check."""
        return self._finish(await self.client.get("/"))

    async def get_config(self) -> Outcome:
        """GET /config"""
        return self._finish(await self.client.get("/config"))

    async def get_discovery_info(self) -> Outcome:
        """GET /discovery_info"""
        return self._finish(await self.client.get("/discovery_info"))

    async def check_config(self) -> Outcome:
        """POST /config/core/check_config - validate configuration.yaml."""
        return self._finish(await self.client.post("/config/core/check_config"))

    async def get_error_log(self) -> Outcome:
        """GET /error_log - plain text log of the current session."""
        return self._finish(await self.client.get("/error_log"))

    async def get_events(self) -> Outcome:
        """GET /events - event types and listener counts."""
        return self._finish(await self.client.get("/events"))

    # ------------------------------------------------------------------ #
    # Services
    # ------------------------------------------------------------------ #

    async def get_services(self, domain: str | None = None) -> Outcome:
        """GET /services, optionally reduced to a single domain."""
        result = await self.client.get("/services")
        if not domain:
            return self._finish(result)
        return self._finish(
            result,
            metadata={"domain": domain},
            transform=lambda response: filter_services(response.body, domain),
        )

    async def call_service(
        self,
        domain: str,
        service: str,
        data: dict[str, Any] | None = None,
    ) -> Outcome:
        """
        POST /services/<domain>/<service>.

        Some Home Assistant setups close the connection right after accepting
        a fire-and-forget service call. A dropped connection with a transient
        error code is therefore reported as success with a note.
        """
        payload = data if data is not None else {}
        echo = {"service": f"{domain}.{service}", "serviceData": payload}
        result = await self.client.post(f"/services/{domain}/{service}", json=payload)
        return self._finish(result, metadata=echo, assume_success_metadata=echo)

    # ------------------------------------------------------------------ #
    # States & entities
    # ------------------------------------------------------------------ #

    async def get_states(self) -> Outcome:
        """GET /states"""
        return self._finish(await self.client.get("/states"))

    async def get_entity_state(self, entity_id: str) -> Outcome:
        """GET /states/<entity_id>"""
        result = await self.client.get(f"/states/{entity_id}")
        return self._finish(result, metadata={"entityId": entity_id})

    async def set_state(
        self,
        entity_id: str,
        state: str,
        attributes: Any = None,
    ) -> Outcome:
        """POST /states/<entity_id> - write the state representation directly. None sends {}."""
        attributes = attributes if attributes is not None else {}
        result = await self.client.post(
            f"/states/{entity_id}",
            json={"state": state, "attributes": attributes},
        )
        return self._finish(
            result,
            metadata={"entityId": entity_id, "state": state, "attributes": attributes},
        )

    async def get_entities(self, domain: str | None = None) -> Outcome:
        """GET /states, optionally keeping only one entity domain."""
        result = await self.client.get("/states")
        transform = (lambda response: filter_entities(response.body, domain)) if domain else None
        return self._finish(result, metadata={"domain": domain or None}, transform=transform)

    # ------------------------------------------------------------------ #
    # History & logbook
    # ------------------------------------------------------------------ #

    async def get_history(
        self,
        timestamp: str | None = None,
        filter_entity_id: str | None = None,
        end_time: str | None = None,
    ) -> Outcome:
        """GET /history/period[/<timestamp>]"""
        path = f"/history/period/{timestamp}" if timestamp else "/history/period"
        result = await self.client.get(
            path,
            params={"filter_entity_id": filter_entity_id, "end_time": end_time},
        )
        return self._finish(
            result,
            metadata=_with_timestamp(timestamp, filterEntityId=filter_entity_id, endTime=end_time),
        )

    async def get_logbook(
        self,
        timestamp: str | None = None,
        entity_id: str | None = None,
        end_time: str | None = None,
    ) -> Outcome:
        """GET /logbook[/<timestamp>]"""
        path = f"/logbook/{timestamp}" if timestamp else "/logbook"
        result = await self.client.get(path, params={"entity": entity_id, "end_time": end_time})
        return self._finish(
            result,
            metadata=_with_timestamp(timestamp, entityId=entity_id, endTime=end_time),
        )

    # ------------------------------------------------------------------ #
    # Camera, templates, webhooks
    # ------------------------------------------------------------------ #

    async def get_camera_proxy(
        self,
        entity_id: str,
        width: int | None = None,
        height: int | None = None,
    ) -> Outcome:
        """GET /camera_proxy/<entity_id> - snapshot returned as base64."""
        result = await self.client.get(
            f"/camera_proxy/{entity_id}",
            params={"width": width, "height": height},
        )
        return self._finish(
            result,
            metadata={"entityId": entity_id, "width": width, "height": height},
            transform=encode_snapshot,
        )

    async def render_template(self, template: str) -> Outcome:
        """POST /template"""
        result = await self.client.post("/template", json={"template": template})
        return self._finish(
            result,
            metadata={"template": template},
            transform=lambda response: {"rendered": response.body},
        )

    async def trigger_webhook(self, webhook_id: str, data: Any = None) -> Outcome:
        """POST /webhook/<webhook_id>"""
        result = await self.client.post(f"/webhook/{webhook_id}", json=data if data is not None else {})
        return self._finish(result, metadata={"webhookId": webhook_id})

    # ------------------------------------------------------------------ #
    # Calendars
    # ------------------------------------------------------------------ #

    async def get_calendars(self) -> Outcome:
        """GET /calendars"""
        return self._finish(await self.client.get("/calendars"))

    async def get_calendar_events(
        self,
        entity_id: str,
        start: str | None = None,
        end: str | None = None,
    ) -> Outcome:
        """GET /calendars/<entity_id>"""
        result = await self.client.get(f"/calendars/{entity_id}", params={"start": start, "end": end})
        return self._finish(result, metadata={"entityId": entity_id, "start": start, "end": end})
