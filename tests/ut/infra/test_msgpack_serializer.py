import pytest

from ringview.core.errors import EventFormatError
from ringview.core.models.event import RingChange, parse_event
from tests.utils import make_envelope, make_payload, make_raw_node


@pytest.mark.ut
def test_envelope_survives_encoding(serializer):
    envelope = make_envelope("RingChange", make_payload([make_raw_node(identifier=5)]))

    decoded = serializer.deserialize(serializer.serialize(envelope))

    assert decoded == envelope
    assert isinstance(parse_event(decoded), RingChange)


@pytest.mark.ut
def test_strings_decode_as_text(serializer):
    decoded = serializer.deserialize(serializer.serialize({"Pos": "AAAA"}))

    assert isinstance(decoded["Pos"], str)


@pytest.mark.ut
@pytest.mark.parametrize("data", [b"\xc1", b"\x92\x01", b"\x01\x02"])
def test_malformed_payload_raises_event_format_error(serializer, data):
    with pytest.raises(EventFormatError):
        serializer.deserialize(data)
