# messaging/events.py

import json
from dataclasses import dataclass

from .exceptions import InvalidEvent


@dataclass(frozen=True)
class SendMessage:
    sender_id: str
    receiver_id: str
    text: str
    chat_id: str


def normalize_id(value, field):
    # 7 and "7" must name the same user or chat
    if isinstance(value, bool) or value is None:
        raise InvalidEvent(f"'{field}' is required")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise InvalidEvent(f"'{field}' must be a non-empty string or integer")


def decode_frame(text_data):
    """Turns a raw text frame into a dict with a 'type' key."""
    try:
        data = json.loads(text_data)
    except (TypeError, ValueError):
        raise InvalidEvent("Frame is not valid JSON")
    if not isinstance(data, dict) or not isinstance(data.get('type'), str):
        raise InvalidEvent("Frame must be a JSON object with a 'type'")
    return data


def parse_announcement(data):
    return normalize_id(data.get('userId'), 'userId')


def parse_send_message(data):
    text = data.get('text')
    if not isinstance(text, str):
        raise InvalidEvent("'text' must be a string")
    return SendMessage(
        sender_id=normalize_id(data.get('senderId'), 'senderId'),
        receiver_id=normalize_id(data.get('receiverId'), 'receiverId'),
        text=text,
        chat_id=normalize_id(data.get('chatId'), 'chatId'),
    )
