# core/utils.py

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.apps import apps

from messaging.constants import DISCONNECT_HANDLER

logger = logging.getLogger(__name__)

"""
Returns the ids of every user that currently has a live chat
socket in this server process.
RT: This function is the central source for all real-time
"who is online" data used by the HTTP views.
"""
def get_online_user_ids():
    return apps.get_app_config('messaging').presence.online_user_ids()


"""
Takes a user offline from a plain (sync) view: the presence entry
is dropped at once and the user's socket is told to close.
RT: Used when an account goes away while its chat socket is open.
"""
def disconnect_user(user_id):
    registry = apps.get_app_config('messaging').presence
    entry = registry.get_user(str(user_id))
    if entry is None:
        return None

    registry.remove_user(entry.connection_id)
    channel_layer = get_channel_layer()
    if channel_layer is not None:
        try:
            async_to_sync(channel_layer.send)(entry.connection_id, {'type': DISCONNECT_HANDLER})
        except Exception as e:
            # The entry is already gone; a socket that outlives this still can't receive
            logger.warning("Could not close socket %s of user %s: %s", entry.connection_id, user_id, e)
    return entry


def read_json(request):
    # Request bodies may be JSON (SPA clients) or form-encoded
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except ValueError:
            return None
        return data if isinstance(data, dict) else None
    return request.POST.dict()
