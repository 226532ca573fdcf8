import json

import yaml

from ringview.core.models.snapshot import RingSnapshot
from ringview.core.ports.render import Renderer


class TextRenderer(Renderer):
    """
    Operator-facing plain text: one label per member in ring order,
    followed by the panel describing the node the source runs on.
    """
    def render(self, snapshot: RingSnapshot) -> str:
        if snapshot.is_empty:
            return "(no ring members known yet)"

        lines = [f"ring v{snapshot.version}: {len(snapshot.members)} members"]
        for node in snapshot.ring():
            lines.append(f"  {node.label}  x={node.x:.1f} y={node.y:.1f}")

        node = snapshot.self_node
        if node is not None:
            lines.extend([
                "self:",
                f"  control address: {node.control_address}",
                f"  data address:    {node.data_address}",
                f"  position:        {node.hex_position}",
                f"  owned entries:   {node.owned_entries}",
                f"  held entries:    {node.held_entries}",
            ])

        for failure in snapshot.failures:
            where = "self" if failure.index is None else f"route #{failure.index}"
            lines.append(f"skipped {where}: {failure.error}")

        return "\n".join(lines)


class JsonRenderer(Renderer):
    def render(self, snapshot: RingSnapshot) -> str:
        normalized = self._normalize(snapshot.to_dict())
        return json.dumps(normalized, indent=2, sort_keys=False, default=str)

    def _normalize(self, obj):
        # raw nodes of failed routes may carry msgpack bin values or keys
        if isinstance(obj, bytes):
            return obj.hex()

        # identifiers exceed 64 bits; keep them exact for any JSON reader
        if isinstance(obj, dict):
            return {
                self._normalize(k): str(v) if k == "identifier" else self._normalize(v)
                for k, v in obj.items()
            }

        if isinstance(obj, (list, tuple)):
            return [self._normalize(x) for x in obj]

        return obj


class YamlRenderer(Renderer):
    def render(self, snapshot: RingSnapshot) -> str:
        normalized = self._normalize(snapshot.to_dict())
        return yaml.safe_dump(normalized, sort_keys=False)

    def _normalize(self, obj):
        if isinstance(obj, bytes):
            return obj.hex()

        if isinstance(obj, dict):
            return {self._normalize(k): self._normalize(v) for k, v in obj.items()}

        if isinstance(obj, (list, tuple)):
            return [self._normalize(x) for x in obj]

        return obj


RENDERERS: dict[str, type[Renderer]] = {
    "text": TextRenderer,
    "json": JsonRenderer,
    "yaml": YamlRenderer,
}
