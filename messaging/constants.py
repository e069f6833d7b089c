# messaging/constants.py

"""
Frame types spoken over the chat WebSocket. Clients send the
inbound ones and the server answers with the outbound ones.
RT: These names are the wire contract of the real-time chat.
"""
# Inbound
NEW_USER = 'newUser'
SEND_MESSAGE = 'sendMessage'

# Outbound
GET_MESSAGE = 'getMessage'
DELIVERY_FAILED = 'deliveryFailed'
ERROR = 'error'

# Channel layer handler that pushes a delivered message down the socket
DELIVER_HANDLER = 'get_message'

# Channel layer handler that closes a socket whose user went away
DISCONNECT_HANDLER = 'force_disconnect'
