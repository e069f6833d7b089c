# messaging/consumers.py

# Import json because frames are sent as JSON text.
import json
# Import logging because socket events and failed saves are logged.
import logging

# Import apps because the process-wide presence registry lives on the messaging app config.
from django.apps import apps
# Import settings because the save timeout is configurable.
from django.conf import settings
# Import DjangoJSONEncoder because saved messages carry datetimes.
from django.core.serializers.json import DjangoJSONEncoder
# Import AsyncWebsocketConsumer because it is the base class for the chat socket.
from channels.generic.websocket import AsyncWebsocketConsumer

# Import constants because they hold the frame names of the chat.
from . import constants
# Import the frame parsers because every inbound frame is validated before use.
from .events import decode_frame, parse_announcement, parse_send_message
# Import InvalidEvent and PersistenceFailure because they become 'error' and 'deliveryFailed' frames.
from .exceptions import InvalidEvent, PersistenceFailure
# Import ConnectionLifecycle because it tracks the state of this socket.
from .lifecycle import ConnectionLifecycle
# Import MessageRouter because it saves a message and then delivers or drops it.
from .router import MessageRouter
# Import persist_message because it is the default way to save a message.
from .services import persist_message

logger = logging.getLogger(__name__)

"""
Author:
This class is the real-time side of the chat. One instance serves
one open WebSocket. The socket's channel name is its connection
identity: a client announces which user it is with 'newUser', sends
messages with 'sendMessage', and receives 'getMessage' frames when
somebody writes to it while it is online.
RT: This entire class is the live chat connection.
"""
class ChatConsumer(AsyncWebsocketConsumer):
    registry = None
    persist = None

    def __init__(self, *args, registry=None, persist=None, **kwargs):
        super().__init__(*args, **kwargs)
        if registry is not None:
            self.registry = registry
        if persist is not None:
            self.persist = persist

    async def connect(self):
        if self.registry is None:
            self.registry = apps.get_app_config('messaging').presence
        self.lifecycle = ConnectionLifecycle(self.registry, self.channel_name)
        self.router = MessageRouter(
            self.registry,
            persist=self.persist or persist_message,
            deliver=self.deliver,
            timeout=settings.CHAT_PERSISTENCE_TIMEOUT,
        )
        await self.accept()
        logger.info("Chat socket connected: %s", self.channel_name)

    async def disconnect(self, close_code):
        if hasattr(self, 'lifecycle'):
            self.lifecycle.disconnect()
            logger.info("Chat socket disconnected: %s (user %s, code %s)",
                        self.channel_name, self.lifecycle.user_id, close_code)

    async def receive(self, text_data=None, bytes_data=None):
        if self.lifecycle.is_closed:
            return
        try:
            data = decode_frame(text_data)
            message_type = data['type']

            if message_type == constants.NEW_USER:
                await self.handle_announcement(parse_announcement(data))

            elif message_type == constants.SEND_MESSAGE:
                await self.handle_send_message(parse_send_message(data))

            else:
                raise InvalidEvent(f"Unknown frame type '{message_type}'")
        except InvalidEvent as e:
            logger.warning("Rejected frame on %s: %s", self.channel_name, e)
            await self.send_json({'type': constants.ERROR, 'reason': str(e)})

    def check_identity(self, user_id, action):
        # A logged-in socket may only speak for its own user
        user = self.scope.get('user')
        if user is not None and user.is_authenticated and str(user.pk) != user_id:
            raise InvalidEvent(f"Cannot {action} as another user")

    async def handle_announcement(self, user_id):
        self.check_identity(user_id, 'announce')
        registered = self.lifecycle.announce(user_id)
        logger.info("User %s announced on %s (registered=%s)", user_id, self.channel_name, registered)

    async def handle_send_message(self, event):
        self.check_identity(event.sender_id, 'send')
        try:
            outcome = await self.router.route(event)
        except PersistenceFailure as e:
            logger.error("Message from %s to %s in chat %s not saved: %s (%r)",
                         event.sender_id, event.receiver_id, event.chat_id, e.reason, e.original)
            await self.send_json({
                'type': constants.DELIVERY_FAILED,
                'receiverId': event.receiver_id,
                'chatId': event.chat_id,
                'text': event.text,
                'reason': e.reason,
            })
            return
        logger.debug("Message from %s to %s: %s", event.sender_id, event.receiver_id, outcome.value)

    async def deliver(self, connection_id, payload):
        await self.channel_layer.send(connection_id, {
            'type': constants.DELIVER_HANDLER,
            'payload': payload,
        })

    """
    Called by the channel layer when another socket routed a
    message to this one. Pushes it down to the browser.
    RT: This is the live delivery of a chat message.
    """
    async def get_message(self, event):
        await self.send_json({'type': constants.GET_MESSAGE, **event['payload']})

    # Sent by core.utils.disconnect_user when the account is deleted
    async def force_disconnect(self, event):
        self.lifecycle.disconnect()
        await self.close()

    async def send_json(self, content):
        await self.send(text_data=json.dumps(content, cls=DjangoJSONEncoder))
