# messaging/presence.py

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresenceEntry:
    user_id: str
    connection_id: str


"""
Keeps track of which user is online on which connection. There is
at most one entry per user, and each connection carries at most one
user. Removal is keyed by the connection, so a late disconnect from
an old socket can never evict a newer one.
RT: This is the in-memory "who is online" list the chat router reads
before pushing a message down a live socket.
"""
class PresenceRegistry:

    def __init__(self, replace_on_reannounce=False):
        self.replace_on_reannounce = replace_on_reannounce
        self._entries = {}        # user_id -> PresenceEntry
        self._connections = {}    # connection_id -> user_id
        self._lock = threading.Lock()

    def add_user(self, user_id, connection_id):
        """
        Registers user_id on connection_id. Returns True if the registry
        changed. A user that is already present keeps its first connection
        unless replace_on_reannounce is set.
        """
        with self._lock:
            previous_user = self._connections.get(connection_id)
            if previous_user == user_id:
                logger.debug("User %s already present on %s", user_id, connection_id)
                return False

            # A connection only speaks for one user at a time
            if previous_user is not None:
                del self._connections[connection_id]
                del self._entries[previous_user]
                logger.debug("User %s released %s", previous_user, connection_id)

            current = self._entries.get(user_id)
            if current is not None:
                if not self.replace_on_reannounce:
                    logger.debug("User %s already present on %s", user_id, current.connection_id)
                    return False
                del self._connections[current.connection_id]

            self._entries[user_id] = PresenceEntry(user_id, connection_id)
            self._connections[connection_id] = user_id
            logger.debug("User %s is online on %s", user_id, connection_id)
            return True

    def remove_user(self, connection_id):
        """Drops the entry owned by connection_id and returns it, or None."""
        with self._lock:
            user_id = self._connections.pop(connection_id, None)
            if user_id is None:
                return None
            entry = self._entries.pop(user_id)
            logger.debug("User %s went offline (%s)", user_id, connection_id)
            return entry

    def get_user(self, user_id):
        with self._lock:
            return self._entries.get(user_id)

    def online_user_ids(self):
        with self._lock:
            return set(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, user_id):
        with self._lock:
            return user_id in self._entries
