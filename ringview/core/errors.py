class RingViewError(Exception):
    """Base class for every error raised by ringview."""


class DecodeError(RingViewError, ValueError):
    """
    A ring position could not be decoded.

    Raised when the wire value is not valid base64, or when it decodes to
    anything other than exactly 16 bytes. Also used when a raw node
    descriptor is missing a field or carries a field of the wrong type.
    """


class AddressFormatError(RingViewError, ValueError):
    """A data-plane address does not match the strict ``host:port`` form."""


class ChannelError(RingViewError):
    """Transport-level failure reported by an event channel."""


class EventFormatError(ChannelError):
    """An event envelope is malformed or names an unknown event kind."""
