# messaging/exceptions.py


class ChatError(Exception):
    """Base class for errors raised while handling a chat socket event."""


class InvalidEvent(ChatError):
    """The client sent a frame the server cannot act on."""


class PersistenceFailure(ChatError):
    """A message could not be saved, so it must not be delivered live."""

    def __init__(self, reason, original=None):
        super().__init__(reason)
        self.reason = reason
        self.original = original
