import pytest

from ringview.core.errors import ChannelError, EventFormatError
from ringview.core.models.event import Clean, RingChange, Sync, event_to_dict, parse_event
from tests.utils import make_envelope, make_payload, make_raw_node


@pytest.mark.ut
def test_parse_ring_change():
    payload = make_payload([make_raw_node()])

    event = parse_event(make_envelope("RingChange", payload))

    assert isinstance(event, RingChange)
    assert event.routes == payload["routes"]
    assert event.description == payload["description"]


@pytest.mark.ut
def test_parse_ring_change_without_routes():
    event = parse_event(make_envelope("RingChange", {"description": make_raw_node()}))

    assert event.routes == []


@pytest.mark.ut
def test_parse_reads_type_discriminator():
    raw = make_raw_node()
    envelope = {"type": "RingChange", "data": {"routes": [raw], "description": raw}}

    event = parse_event(envelope)

    assert event == RingChange(routes=[raw], description=raw)


@pytest.mark.ut
def test_parse_rejects_envelope_without_type():
    with pytest.raises(EventFormatError):
        parse_event({"event": "Sync", "data": None})


@pytest.mark.ut
@pytest.mark.parametrize("kind, cls", [("Sync", Sync), ("Clean", Clean)])
def test_parse_diagnostic_events_keep_payload_opaque(kind, cls):
    data = {"anything": [1, 2, 3]}

    event = parse_event(make_envelope(kind, data))

    assert isinstance(event, cls)
    assert event.data is data


@pytest.mark.ut
@pytest.mark.parametrize("envelope", [
    {"type": "Join", "data": {}},
    {"data": {}},
    {"type": "RingChange", "data": "routes"},
    {"type": "RingChange", "data": {"routes": "nope"}},
    ["RingChange"],
])
def test_parse_rejects_malformed_envelopes(envelope):
    with pytest.raises(EventFormatError):
        parse_event(envelope)


@pytest.mark.ut
def test_event_format_error_is_channel_error():
    with pytest.raises(ChannelError):
        parse_event({"type": "Unknown"})


@pytest.mark.ut
def test_event_to_dict_matches_wire_envelope():
    payload = make_payload([make_raw_node()])
    envelope = make_envelope("RingChange", payload)

    assert event_to_dict(parse_event(envelope)) == envelope
    assert event_to_dict(Sync(data=1)) == {"type": "Sync", "data": 1}
    assert event_to_dict(Clean(data=None)) == {"type": "Clean", "data": None}
