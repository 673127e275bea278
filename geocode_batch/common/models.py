"""Data models for provider matches and CSV output rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

U64_MAX = 2**64 - 1


def _require(payload: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if key not in payload:
        raise ValueError(f"missing field `{key}`")
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"invalid type for `{key}`: {type(value).__name__}")
    return value


def _optional(payload: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    if payload.get(key) is None:
        return None
    return _require(payload, key, kind)


def _unsigned(value: int, key: str) -> int:
    if value < 0 or value > U64_MAX:
        raise ValueError(f"invalid value for `{key}`: {value}, expected u64")
    return value


@dataclass(frozen=True)
class GeoMatch:
    place_id: int
    licence: str
    osm_type: str | None
    osm_id: int | None
    lat: str
    lon: str
    display_name: str
    class_: str
    type: str
    importance: float

    @classmethod
    def from_payload(cls, payload: Any) -> "GeoMatch":
        """Build a match from one decoded JSON object.

        Unknown keys are ignored. Raises ``ValueError`` when a required key is
        missing or carries the wrong JSON type.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"invalid type: {type(payload).__name__}, expected a location object")
        osm_id = _optional(payload, "osm_id", int)
        return cls(
            place_id=_unsigned(_require(payload, "place_id", int), "place_id"),
            licence=_require(payload, "licence", str),
            osm_type=_optional(payload, "osm_type", str),
            osm_id=_unsigned(osm_id, "osm_id") if osm_id is not None else None,
            lat=_require(payload, "lat", str),
            lon=_require(payload, "lon", str),
            display_name=_require(payload, "display_name", str),
            class_=_require(payload, "class", str),
            type=_require(payload, "type", str),
            importance=float(_require(payload, "importance", (int, float))),
        )


@dataclass(frozen=True)
class OutputRecord:
    address: str
    place_id: int
    licence: str
    osm_type: str | None
    osm_id: int | None
    lat: str
    lon: str
    display_name: str
    class_: str
    type: str
    importance: float

    @classmethod
    def from_match(cls, address: str, match: GeoMatch) -> "OutputRecord":
        return cls(
            address=address,
            place_id=match.place_id,
            licence=match.licence,
            osm_type=match.osm_type,
            osm_id=match.osm_id,
            lat=match.lat,
            lon=match.lon,
            display_name=match.display_name,
            class_=match.class_,
            type=match.type,
            importance=match.importance,
        )

    def to_row(self) -> dict[str, Any]:
        row = {
            "address": self.address,
            "place_id": self.place_id,
            "licence": self.licence,
            "osm_type": self.osm_type,
            "osm_id": self.osm_id,
            "lat": self.lat,
            "lon": self.lon,
            "display_name": self.display_name,
            "class": self.class_,
            "type": self.type,
            "importance": self.importance,
        }
        return {key: "" if value is None else value for key, value in row.items()}
