from dataclasses import dataclass
from typing import Any, Mapping

from ringview.core.errors import EventFormatError


@dataclass(frozen=True, slots=True)
class RingChange:
    """
    The ring topology changed. Carries the full member list and the
    description of the node emitting the event.
    """
    routes: list[Any]
    description: Any


@dataclass(frozen=True, slots=True)
class Sync:
    """Diagnostic event emitted after a synchronization round. Opaque."""
    data: Any


@dataclass(frozen=True, slots=True)
class Clean:
    """Diagnostic event emitted after a cleanup round. Opaque."""
    data: Any


Event = RingChange | Sync | Clean


def parse_event(envelope: Mapping[str, Any]) -> Event:
    """
    Build an Event from a decoded wire envelope:

        {"type": "RingChange" | "Sync" | "Clean", "data": ...}

    Raises EventFormatError for anything else. The raw nodes of a
    RingChange are not decoded here; RingState does that node by node.
    """
    if not isinstance(envelope, Mapping):
        raise EventFormatError(
            f"Event envelope must be a mapping, got {type(envelope).__name__}"
        )

    kind = envelope.get("type")
    data = envelope.get("data")

    match kind:
        case "RingChange":
            if not isinstance(data, Mapping):
                raise EventFormatError("RingChange data must be a mapping")
            routes = data.get("routes") or []
            if not isinstance(routes, list):
                raise EventFormatError("RingChange routes must be a list")
            return RingChange(routes=routes, description=data.get("description"))
        case "Sync":
            return Sync(data=data)
        case "Clean":
            return Clean(data=data)
        case _:
            raise EventFormatError(f"Unknown event kind {kind!r}")


def event_to_dict(event: Event) -> dict[str, Any]:
    """Return the wire envelope for an event."""
    match event:
        case RingChange(routes=routes, description=description):
            return {
                "type": "RingChange",
                "data": {"routes": list(routes), "description": description},
            }
        case Sync(data=data):
            return {"type": "Sync", "data": data}
        case Clean(data=data):
            return {"type": "Clean", "data": data}
