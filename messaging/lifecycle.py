# messaging/lifecycle.py

import enum
import logging

logger = logging.getLogger(__name__)


class ConnectionState(enum.Enum):
    CONNECTED = 'connected'
    ANNOUNCED = 'announced'
    DISCONNECTED = 'disconnected'


"""
Follows a single socket from the moment it opens until it closes.
The user behind the socket is unknown until the client announces
itself, and the presence entry is released on disconnect no matter
how far the socket got.
RT: One of these lives inside every open chat WebSocket.
"""
class ConnectionLifecycle:

    def __init__(self, registry, connection_id):
        self.registry = registry
        self.connection_id = connection_id
        self.state = ConnectionState.CONNECTED
        self.user_id = None

    @property
    def is_closed(self):
        return self.state is ConnectionState.DISCONNECTED

    def announce(self, user_id):
        """
        Marks this connection as belonging to user_id. Returns True if the
        presence registry now points user_id at this connection.
        """
        if self.is_closed:
            logger.debug("Ignoring announcement for %s on closed %s", user_id, self.connection_id)
            return False

        self.registry.add_user(user_id, self.connection_id)
        self.user_id = user_id
        self.state = ConnectionState.ANNOUNCED

        entry = self.registry.get_user(user_id)
        return entry is not None and entry.connection_id == self.connection_id

    def disconnect(self):
        if self.is_closed:
            return
        self.registry.remove_user(self.connection_id)
        self.state = ConnectionState.DISCONNECTED
