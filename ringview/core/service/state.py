import logging
from typing import Any, Callable, Mapping

from ringview.core.errors import AddressFormatError, DecodeError
from ringview.core.models.event import Clean, Event, RingChange, Sync
from ringview.core.models.node import DecodeFailure, NodeDescriptor
from ringview.core.models.snapshot import RingSnapshot
from ringview.core.space.layout import RingLayout


SnapshotSubscriber = Callable[[RingSnapshot], None]
DiagnosticSink = Callable[[str, Any], None]


class RingState:
    """
    Owns the current RingSnapshot and applies topology events to it.

    RingState is the single mutable piece of the viewer. It is created once
    by the caller and handed to whatever drives it (an EventPump) and to
    whatever reads it (renderers). There is no module-level instance.

    Every RingChange builds a complete new snapshot off to the side, then
    publishes it by swapping a single reference. Readers between events
    always see a fully built snapshot, never a partial one. Subscribers are
    notified only after the swap, so rendering never interleaves with the
    update itself.

    Raw nodes are decoded one by one. A node that fails to decode is left
    out of the snapshot and recorded as a DecodeFailure; the rest of the
    payload still applies.

    Sync and Clean events carry opaque diagnostics. They are forwarded to
    the diagnostic sink and never touch the snapshot.
    """

    def __init__(
        self,
        layout: RingLayout | None = None,
        diagnostic_sink: DiagnosticSink | None = None,
    ) -> None:
        self._layout = layout or RingLayout()
        self._snapshot = RingSnapshot.empty()
        self._subscribers: list[SnapshotSubscriber] = []
        self._logger = logging.getLogger("core.service.state")
        self._diagnostic_sink = diagnostic_sink or self._log_diagnostic

    @property
    def snapshot(self) -> RingSnapshot:
        """The last published snapshot. Callers must treat it as read-only."""
        return self._snapshot

    @property
    def layout(self) -> RingLayout:
        return self._layout

    def subscribe(self, callback: SnapshotSubscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: SnapshotSubscriber) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def apply(self, event: Event) -> RingSnapshot:
        """Dispatch an event to the matching handler and return the current snapshot."""
        match event:
            case RingChange():
                return self.apply_ring_change(
                    {"routes": event.routes, "description": event.description}
                )
            case Sync(data=data):
                self.apply_sync(data)
            case Clean(data=data):
                self.apply_clean(data)
            case _:
                raise TypeError(f"Unsupported event {event!r}")
        return self._snapshot

    def apply_ring_change(self, payload: Mapping[str, Any]) -> RingSnapshot:
        """
        Replace the snapshot with one built from a RingChange payload:

            {"routes": [NodeRaw, ...], "description": NodeRaw}

        Members keep the order of ``routes``. The returned snapshot is the
        one now published.
        """
        routes = payload.get("routes") or []
        members: list[NodeDescriptor] = []
        failures: list[DecodeFailure] = []

        for index, raw in enumerate(routes):
            node = self._decode(raw, index, failures)
            if node is not None:
                members.append(node)

        self_node = self._decode(payload.get("description"), None, failures)

        snapshot = RingSnapshot(
            members=tuple(members),
            self_node=self_node,
            failures=tuple(failures),
            version=self._snapshot.version + 1,
        )
        self._snapshot = snapshot

        self._logger.info(
            f"Ring snapshot v{snapshot.version} published: "
            f"{len(members)} members, {len(failures)} skipped"
        )
        self._notify(snapshot)
        return snapshot

    def apply_sync(self, payload: Any) -> None:
        self._diagnostic_sink("Sync", payload)

    def apply_clean(self, payload: Any) -> None:
        self._diagnostic_sink("Clean", payload)

    def _decode(
        self,
        raw: Any,
        index: int | None,
        failures: list[DecodeFailure],
    ) -> NodeDescriptor | None:
        try:
            return NodeDescriptor.from_raw(raw, self._layout)
        except (DecodeError, AddressFormatError) as ex:
            where = "self description" if index is None else f"route #{index}"
            self._logger.warning(f"Skipping {where}: {ex}")
            failures.append(DecodeFailure(index=index, raw=raw, error=str(ex)))
            return None

    def _notify(self, snapshot: RingSnapshot) -> None:
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as ex:
                self._logger.error(
                    f"Snapshot subscriber {callback!r} failed: {ex}",
                    exc_info=ex
                )

    def _log_diagnostic(self, kind: str, payload: Any) -> None:
        self._logger.info(f"{kind}: {payload!r}")
