import pytest

from messaging.events import decode_frame, parse_announcement, parse_send_message
from messaging.exceptions import InvalidEvent


def test_ids_are_normalised_to_strings():
    event = parse_send_message({'senderId': 1, 'receiverId': '2', 'text': 'hi', 'chatId': 3})
    assert event.sender_id == '1'
    assert event.receiver_id == '2'
    assert event.chat_id == '3'
    assert parse_announcement({'userId': 7}) == '7'


@pytest.mark.parametrize('payload', [
    {'receiverId': 2, 'text': 'hi', 'chatId': 3},
    {'senderId': 1, 'receiverId': 2, 'chatId': 3},
    {'senderId': 1, 'receiverId': '  ', 'text': 'hi', 'chatId': 3},
    {'senderId': True, 'receiverId': 2, 'text': 'hi', 'chatId': 3},
])
def test_bad_send_message(payload):
    with pytest.raises(InvalidEvent):
        parse_send_message(payload)


@pytest.mark.parametrize('raw', ['not json', '[1, 2]', '{"userId": 1}', '{"type": 5}'])
def test_bad_frames(raw):
    with pytest.raises(InvalidEvent):
        decode_frame(raw)
