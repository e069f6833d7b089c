# config/asgi.py

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from channels.security.websocket import AllowedHostsOriginValidator
from messaging import routing as messaging_routing

"""
This file is the main entry-point for the server. It sends normal
HTTP requests to Django and WebSocket connections to the chat
routing, after loading the logged-in user from the session cookie.
RT: This is the core file that "turns on" the live chat.
"""
application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": AllowedHostsOriginValidator(
        AuthMiddlewareStack(
            URLRouter(messaging_routing.websocket_urlpatterns)
        )
    ),
})
