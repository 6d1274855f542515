from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .adapter import (
    destination_to_client,
    offer_group_to_client,
    point_to_client,
    point_to_server,
)
from .config import Settings
from .errors import TripApiError
from .models import Destination, OfferGroup, Point

logger = logging.getLogger(__name__)


class TripApiClient:
    """
    Client of the trip service REST API (``points``, ``destinations``,
    ``offers``).  Every call either returns domain objects or raises
    :class:`TripApiError`.
    """

    def __init__(
        self,
        endpoint: str,
        authorization: str,
        *,
        timeout_s: float = 15,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.authorization = authorization
        self.timeout_s = timeout_s

    @classmethod
    def from_settings(cls, settings: Settings) -> "TripApiClient":
        return cls(
            settings.endpoint,
            settings.authorization,
            timeout_s=settings.timeout_s,
        )

    # ──────────────────────────────────────────────────────────

    def fetch_points(self) -> list[Point]:
        """Return every point stored for this credential."""
        data = self._load("GET", "points")
        points = [self._to_point(item) for item in data or []]
        return [point for point in points if point]

    def fetch_destinations(self) -> list[Destination]:
        data = self._load("GET", "destinations")
        return [destination_to_client(item) for item in data or []]

    def fetch_offers(self) -> list[OfferGroup]:
        data = self._load("GET", "offers")
        return [offer_group_to_client(item) for item in data or []]

    def create_point(self, draft: Point) -> Point:
        """Send *draft* and return it with the id assigned by the service."""
        data = self._load("POST", "points", body=point_to_server(draft))
        return self._require_point(data)

    def update_point(self, point: Point) -> Point:
        if point.id is None:
            raise TripApiError("Cannot update a point without an id")
        data = self._load("PUT", f"points/{point.id}", body=point_to_server(point))
        return self._require_point(data)

    def delete_point(self, point_id: str) -> None:
        self._load("DELETE", f"points/{point_id}", expect_json=False)

    # ──────────────────────────────────────────────────────────

    def _headers(self, with_body: bool) -> dict:
        headers = {"Authorization": self.authorization}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _load(
        self,
        method: str,
        url: str,
        *,
        body: Optional[dict] = None,
        expect_json: bool = True,
    ) -> Any:
        full_url = f"{self.endpoint}/{url}"
        logger.info("%s %s", method, full_url)
        headers = self._headers(body is not None)
        try:
            resp = requests.request(
                method, full_url, json=body, headers=headers, timeout=self.timeout_s
            )
        except requests.RequestException as exc:
            raise TripApiError(f"{method} {url} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise TripApiError(
                f"HTTP {resp.status_code} – {resp.text[:120]}",
                status=resp.status_code,
            )
        if not expect_json:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise TripApiError(f"{method} {url} returned invalid JSON") from exc

    def _to_point(self, item: dict) -> Point | None:
        """Map a JSON record onto a Point, skipping malformed rows."""
        try:
            return point_to_client(item)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed point %r: %s", item.get("id"), exc)
            return None

    def _require_point(self, item: Any) -> Point:
        point = self._to_point(item) if isinstance(item, dict) else None
        if point is None or point.id is None:
            raise TripApiError("Service returned an invalid point")
        return point


__all__ = ["TripApiClient", "TripApiError"]
