"""Translation between the service's wire format and the domain models.

The service speaks snake_case JSON (``base_price``, ``date_from``,
``date_to``, ``is_favorite``); the rest of the package only ever sees the
dataclasses from :mod:`tripboard.models`.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Mapping

from .models import (
    DEFAULT_POINT_TYPE,
    ONE_HOUR,
    Destination,
    Offer,
    OfferGroup,
    Picture,
    Point,
    PointType,
)

logger = logging.getLogger(__name__)

INBOUND_PRICE_DEFAULT = 0
OUTBOUND_PRICE_FLOOR = 1


def parse_datetime(raw: Any) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(raw, datetime):
        value = raw
    else:
        text = str(raw).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_datetime(value: datetime) -> str:
    """Format *value* the way the service stores it (UTC, millis, ``Z``)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def coerce_price(value: Any, fallback: int) -> int:
    """Return *value* as a positive int, or *fallback* when it is not one."""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError:
            return fallback
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return fallback
        value = int(value)
    if not isinstance(value, int) or value < OUTBOUND_PRICE_FLOOR:
        return fallback
    return value


def parse_point_type(raw: Any) -> PointType:
    if not raw:
        return DEFAULT_POINT_TYPE
    try:
        return PointType(raw)
    except ValueError:
        logger.warning("Unknown point type %r, using %s", raw, DEFAULT_POINT_TYPE.value)
        return DEFAULT_POINT_TYPE


def point_to_client(item: Mapping[str, Any]) -> Point:
    """Map one wire record onto a :class:`Point`."""
    date_from = parse_datetime(item["date_from"])
    date_to = parse_datetime(item["date_to"])
    offers = item.get("offers") or []
    return Point(
        id=str(item["id"]) if item.get("id") is not None else None,
        type=parse_point_type(item.get("type")),
        destination_id=(
            str(item["destination"]) if item.get("destination") is not None else None
        ),
        date_from=date_from,
        date_to=date_to,
        base_price=coerce_price(item.get("base_price"), INBOUND_PRICE_DEFAULT),
        is_favorite=bool(item.get("is_favorite", False)),
        offer_ids=tuple(str(offer_id) for offer_id in offers),
    )


def point_to_server(point: Point) -> dict:
    """Map *point* onto the wire format, normalising it on the way out.

    * ``base_price`` below 1 or not a number is sent as 1.
    * ``date_to`` not after ``date_from`` is moved to ``date_from + 1h``.
    * a missing type becomes ``flight``; offers are always a list.
    """
    date_from = parse_datetime(point.date_from)
    date_to = parse_datetime(point.date_to)
    if date_from >= date_to:
        date_to = date_from + ONE_HOUR

    point_type = point.type or DEFAULT_POINT_TYPE
    offers = list(point.offer_ids) if point.offer_ids else []

    payload = {
        "base_price": coerce_price(point.base_price, OUTBOUND_PRICE_FLOOR),
        "date_from": format_datetime(date_from),
        "date_to": format_datetime(date_to),
        "destination": point.destination_id,
        "is_favorite": bool(point.is_favorite),
        "offers": offers,
        "type": PointType(point_type).value,
    }
    if point.id is not None:
        payload["id"] = point.id
    return payload


def destination_to_client(item: Mapping[str, Any]) -> Destination:
    pictures = tuple(
        Picture(src=pic.get("src", ""), description=pic.get("description", ""))
        for pic in item.get("pictures") or []
    )
    return Destination(
        id=str(item["id"]),
        name=item.get("name", ""),
        description=item.get("description", ""),
        pictures=pictures,
    )


def offer_group_to_client(item: Mapping[str, Any]) -> OfferGroup:
    offers = tuple(
        Offer(
            id=str(offer["id"]),
            title=offer.get("title", ""),
            price=coerce_price(offer.get("price"), INBOUND_PRICE_DEFAULT),
        )
        for offer in item.get("offers") or []
    )
    return OfferGroup(type=parse_point_type(item.get("type")), offers=offers)


__all__ = [
    "parse_datetime",
    "format_datetime",
    "coerce_price",
    "parse_point_type",
    "point_to_client",
    "point_to_server",
    "destination_to_client",
    "offer_group_to_client",
]
