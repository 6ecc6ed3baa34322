"""
Google Calendar API Client

Async client for the Google Calendar v3 REST API. Access tokens are
obtained with the OAuth refresh-token grant and cached until shortly
before they expire.

Endpoints:
    - POST https://oauth2.googleapis.com/token - Refresh access token
    - POST /calendars/{calendarId}/events - Create event
    - PATCH /calendars/{calendarId}/events/{eventId} - Update event
    - DELETE /calendars/{calendarId}/events/{eventId} - Delete event
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import quote

import httpx

from turnos.core.domain import IntegrationException
from turnos.domains.scheduling.application.ports import CalendarEvent

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"

# Renovar el token cuando le queden menos de 5 minutos
TOKEN_REFRESH_MARGIN = timedelta(minutes=5)


class GoogleCalendarError(IntegrationException):
    """Google Calendar request failed."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__("google_calendar", message, original_error)


class GoogleCalendarClient:
    """
    Async HTTP client for Google Calendar.

    Example:
        async with GoogleCalendarClient(client_id, client_secret, refresh_token) as calendar:
            event = await calendar.create_event(
                summary="Turno: Cardiología con Dr. Ana Pérez",
                description="Paciente: ...",
                start="2025-03-10T09:00:00-03:00",
                end="2025-03-10T09:30:00-03:00",
                attendees=["paciente@example.com"],
                time_zone="America/Argentina/Buenos_Aires",
            )
    """

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        refresh_token: str | None,
        calendar_id: str = "primary",
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._calendar_id = calendar_id
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        self._access_token: str | None = None
        self._token_expires_at: datetime | None = None
        self._token_lock = asyncio.Lock()

        if not (client_id and client_secret and refresh_token):
            logger.error("[CALENDAR] Google OAuth credentials not configured")

    async def __aenter__(self) -> GoogleCalendarClient:
        self._get_client()
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def _events_url(self) -> str:
        return f"{GOOGLE_CALENDAR_API}/calendars/{quote(self._calendar_id, safe='')}/events"

    async def create_event(
        self,
        summary: str,
        description: str,
        start: str,
        end: str,
        attendees: list[str],
        time_zone: str,
    ) -> CalendarEvent:
        """
        Create an event.

        Args:
            start: ISO-8601 instant with UTC offset
            end: ISO-8601 instant with UTC offset
            attendees: Attendee emails

        Raises:
            GoogleCalendarError: Token refresh or request failed
        """
        event_data: dict[str, Any] = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start, "timeZone": time_zone},
            "end": {"dateTime": end, "timeZone": time_zone},
            "attendees": [{"email": email} for email in attendees],
        }
        response = await self._request("POST", self._events_url, json=event_data)
        if response.status_code not in (200, 201):
            logger.error(f"[CALENDAR] Failed to create event: {response.status_code} {response.text}")
            raise GoogleCalendarError(f"Could not create calendar event ({response.status_code})")

        data = response.json()
        event_id = data.get("id")
        if not event_id:
            raise GoogleCalendarError("Calendar response without event id")
        return CalendarEvent(id=event_id, html_link=data.get("htmlLink"))

    async def update_event(
        self,
        event_id: str,
        summary: str,
        start: str,
        end: str,
        time_zone: str,
    ) -> None:
        """Move an event and replace its summary."""
        event_data = {
            "summary": summary,
            "start": {"dateTime": start, "timeZone": time_zone},
            "end": {"dateTime": end, "timeZone": time_zone},
        }
        response = await self._request("PATCH", f"{self._events_url}/{quote(event_id, safe='')}", json=event_data)
        if response.status_code != 200:
            logger.error(f"[CALENDAR] Failed to update event {event_id}: {response.status_code} {response.text}")
            raise GoogleCalendarError(f"Could not update calendar event {event_id} ({response.status_code})")

    async def delete_event(self, event_id: str) -> None:
        """Delete an event. An event that is already gone counts as deleted."""
        response = await self._request("DELETE", f"{self._events_url}/{quote(event_id, safe='')}")
        if response.status_code in (404, 410):
            logger.warning(f"[CALENDAR] Event {event_id} was already deleted")
            return
        if response.status_code not in (200, 204):
            logger.error(f"[CALENDAR] Failed to delete event {event_id}: {response.status_code} {response.text}")
            raise GoogleCalendarError(f"Could not delete calendar event {event_id} ({response.status_code})")

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        access_token = await self._get_access_token()
        try:
            return await self._get_client().request(
                method,
                url,
                headers={"Authorization": f"Bearer {access_token}"},
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error(f"[CALENDAR] Request error: {e}")
            raise GoogleCalendarError(f"Could not reach Google Calendar: {e}", e) from e

    async def _get_access_token(self) -> str:
        """Return a cached access token, refreshing it when close to expiry."""
        async with self._token_lock:
            now = datetime.now(UTC)
            if self._access_token and self._token_expires_at and self._token_expires_at > now + TOKEN_REFRESH_MARGIN:
                return self._access_token

            if not (self._client_id and self._client_secret and self._refresh_token):
                raise GoogleCalendarError("Google OAuth credentials not configured")

            logger.info("[CALENDAR] Refreshing Google access token")
            try:
                response = await self._get_client().post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "client_id": self._client_id,
                        "client_secret": self._client_secret,
                        "refresh_token": self._refresh_token,
                        "grant_type": "refresh_token",
                    },
                )
            except httpx.HTTPError as e:
                logger.error(f"[CALENDAR] Token refresh error: {e}")
                raise GoogleCalendarError(f"Could not refresh Google token: {e}", e) from e

            if response.status_code != 200:
                logger.error(f"[CALENDAR] Token refresh failed: {response.text}")
                raise GoogleCalendarError(f"Token refresh failed ({response.status_code})")

            tokens = response.json()
            access_token = tokens.get("access_token")
            if not access_token:
                raise GoogleCalendarError("No access token in refresh response")

            self._access_token = access_token
            self._token_expires_at = now + timedelta(seconds=int(tokens.get("expires_in", 3600)))
            return access_token
