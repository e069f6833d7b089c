# messaging/routing.py

# Import apps because the shared presence registry lives on the messaging app config.
from django.apps import apps
# Import path because WebSocket routes use the same URL patterns as HTTP ones.
from django.urls import path
# Import consumers because ChatConsumer serves the chat socket.
from . import consumers

"""
Author:
Builds the WebSocket addresses of the messaging app. The presence
registry is handed to every ChatConsumer so that all sockets in this
process share the same "who is online" list.
RT: This is the routing configuration for the real-time chat.
"""
def build_websocket_urlpatterns(registry, persist=None):
    return [
        path('ws/chat/', consumers.ChatConsumer.as_asgi(registry=registry, persist=persist)),
    ]


websocket_urlpatterns = build_websocket_urlpatterns(apps.get_app_config('messaging').presence)
