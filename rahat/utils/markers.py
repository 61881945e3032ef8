from typing import Iterable, List, Optional
from pydantic import BaseModel

from rahat.utils.lifecycle import is_open
from rahat.utils.report_kinds import DAMAGE, MISSING, SOS, SUPPLY


MARKER_COLORS = {
    "missing": "blue",
    "damage": "red",
    "supply": "green",
    "sos": "orange",
}

MARKER_TITLES = {
    "missing": lambda r: f"Missing: {r.name}",
    "damage": lambda r: f"Damage: {r.type} ({r.severity})",
    "supply": lambda r: f"Supply Request: {r.type} ({r.urgency})",
    "sos": lambda r: f"SOS: {r.name}",
}


class MarkerFilter(BaseModel):
    missing: bool = True
    damage: bool = True
    supply: bool = True
    sos: bool = True


class Position(BaseModel):
    lat: float
    lng: float


class Marker(BaseModel):
    id: str
    position: Position
    title: str
    type: str  # "missing", "damage", "supply", "sos"
    color: str


def to_marker(tag: str, record) -> Marker:
    return Marker(
        id=f"{tag}-{record.id}",
        position=Position(lat=record.lat, lng=record.lng),
        title=MARKER_TITLES[tag](record),
        type=tag,
        color=MARKER_COLORS[tag],
    )


def aggregate_markers(
    missing: Iterable = (),
    damage: Iterable = (),
    supply: Iterable = (),
    sos: Iterable = (),
    filters: Optional[MarkerFilter] = None,
) -> List[Marker]:
    filters = filters or MarkerFilter()
    markers = []

    for kind, records in ((MISSING, missing), (DAMAGE, damage), (SUPPLY, supply), (SOS, sos)):
        if not getattr(filters, kind.tag):
            continue

        # damage reports have no status, is_open is always true for them
        markers.extend(to_marker(kind.tag, record) for record in records if is_open(record))

    return markers
