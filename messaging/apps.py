# messaging/apps.py

from django.apps import AppConfig
from django.conf import settings

"""
This class tells Django that an app named "messaging" exists.
It also owns the presence registry for this server process, so
the chat sockets and the HTTP views look at the same list of
online users.
RT: This app contains the WebSocket consumer for real-time chat.
"""
class MessagingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'messaging'

    def ready(self):
        from .presence import PresenceRegistry
        self.presence = PresenceRegistry(
            replace_on_reannounce=settings.CHAT_PRESENCE_REPLACE_ON_REANNOUNCE,
        )
