# localchat

A small chat system for a local network. One server relays messages between
any number of terminal clients, and output is drawn in coloured boxes. Each
user who sends messages is shown in a colour of their own. Joins and
departures are announced in their own banners.

## Installation

```
pip install .
```

Only the standard library is needed at run time. To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
localchat-server [--port PORT] [--host HOST]
```

The server clears the screen and listens on port 12345 on all interfaces,
unless `--port` or `--host` says otherwise. If the port cannot be bound, it
tries the next nine ports in turn and prints the one it got. If none of them
can be bound, it prints some suggestions and exits with status 1. Press Enter
to stop the server.

## Running a client

```
localchat-client [--port PORT]
```

The client first asks for the server's IP address (the default is
`127.0.0.1`). It then asks for a username, which may not be empty, and
connects on port 12345 or on the port given with `--port`. Every line you type
is sent to everyone else in the chat. Two words are commands:

- `exit` leaves the chat
- `clear` clears the screen

If the connection fails, the client prints an error and exits with status 1.

## Using it as a library

```python
import threading

from localchat.server import ChatServer
from localchat.client import ChatClient

with ChatServer(12345) as server:
    threading.Thread(target=server.start, daemon=True).start()  # start() blocks
    print("listening on", server.port)

    with ChatClient() as client:
        client.connect("127.0.0.1", server.port)  # raises ConnectionError on failure
        client.send_message("alice")              # the first message is the username
        client.send_message("hello there")

    print(server.history)  # every relayed message, e.g. "alice:hello there"
```

`ChatServer(port, host="", attempts=10, output=None)` raises
`localchat.server.BindError` when no port in the range can be bound. Both
`ChatServer` and `ChatClient` take an `output` stream and write their console
text there; it defaults to standard output. Within the server, messages travel
as `name:content` text. Announcements come from the name `SERVER`.
`localchat.client.render_incoming` turns such a message into the text the
client prints.

`localchat.console` holds the formatting helpers:
`format_system_message`, `format_user_join`, `format_user_leave`,
`format_sent_message`, `format_received_message`, `create_bordered_message`
and `create_separator`. Each takes an optional `BoxStyle`. `UNICODE_STYLE` and
`ASCII_STYLE` are provided, and the default is ASCII on Windows and Unicode
elsewhere. `ColorRegistry` and `get_user_color` give every username a stable
colour from a palette.

## Limits

Chat history is kept only in the server's memory and is never sent to clients
who join later. Messages go over plain TCP with no framing, so each `recv` is
treated as one message. There is no authentication and no encryption.