"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ChannelClosedError(AdapterError):
    """Event handed to a channel that is not running."""

    pass


class ChannelFullError(AdapterError):
    """Event channel buffer is full; the event was dropped."""

    pass
