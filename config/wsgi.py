# config/wsgi.py

import os
from django.core.wsgi import get_wsgi_application

"""
Entry-point for plain WSGI servers. Only the HTTP API is available
this way; the live chat needs the ASGI application in asgi.py.
"""
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
