# messaging/router.py

# Import asyncio because saving a message is bounded with wait_for.
import asyncio
# Import enum because RouteOutcome reports what happened to a message.
import enum
# Import logging because dropped and failed deliveries are logged.
import logging

# Import PersistenceFailure from .exceptions because a failed save must stop the delivery.
from .exceptions import PersistenceFailure

logger = logging.getLogger(__name__)


class RouteOutcome(enum.Enum):
    DELIVERED = 'delivered'
    DROPPED = 'dropped'


"""
Author:
Decides what happens to a message after a user hits "Send". The
message is always saved first. Only once it is safely in the
database does the router look the recipient up and, if they are
online, push it to their socket. Offline recipients get nothing
live and read the message from the chat history later.
RT: This is the deliver-or-drop step of the real-time chat.

persist(text, sender_id, chat_id, receiver_id=...) is awaited and returns
a JSON-ready dict of the saved message; it refuses senders or receivers
that are not part of the chat. deliver(connection_id, event) is awaited
and should only hand the event to the transport.
"""
class MessageRouter:

    def __init__(self, registry, persist, deliver, timeout=None):
        self.registry = registry
        self.persist = persist
        self.deliver = deliver
        self.timeout = timeout

    async def route(self, event):
        record = await self._save(event)

        # The recipient may have disconnected while we were saving
        receiver = self.registry.get_user(event.receiver_id)
        if receiver is None:
            logger.debug("User %s is offline, message %s stored only", event.receiver_id, record.get('id'))
            return RouteOutcome.DROPPED

        payload = {
            'senderId': event.sender_id,
            'text': event.text,
            'message': record,
        }
        try:
            await self.deliver(receiver.connection_id, payload)
        except Exception as e:
            # Delivery is one-shot; the message is already persisted
            logger.warning("Live delivery to %s failed: %s", receiver.connection_id, e)
            return RouteOutcome.DROPPED
        return RouteOutcome.DELIVERED

    async def _save(self, event):
        try:
            if self.timeout:
                return await asyncio.wait_for(
                    self.persist(event.text, event.sender_id, event.chat_id, receiver_id=event.receiver_id),
                    timeout=self.timeout,
                )
            return await self.persist(event.text, event.sender_id, event.chat_id, receiver_id=event.receiver_id)
        except asyncio.TimeoutError as e:
            raise PersistenceFailure(f"Saving the message timed out after {self.timeout}s", e)
        except Exception as e:
            raise PersistenceFailure("The message could not be saved", e)
