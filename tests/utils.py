from typing import Any

from ringview.core.space.identifier import IdentifierCodec


def make_raw_node(
    addr: str = "10.0.0.1:9000",
    identifier: int = 0,
    owned: int = 0,
    held: int = 0,
) -> dict[str, Any]:
    return {
        "Addr": addr,
        "Pos": IdentifierCodec.encode(identifier),
        "OwnedEntries": owned,
        "HeldEntries": held,
    }


def make_payload(routes: list[dict[str, Any]], description: dict[str, Any] | None = None) -> dict[str, Any]:
    if description is None:
        description = routes[0] if routes else make_raw_node()
    return {"routes": routes, "description": description}


def make_envelope(event: str, data: Any) -> dict[str, Any]:
    return {"type": event, "data": data}
