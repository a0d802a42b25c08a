import io
import socket
import time

import pytest

from localchat.client import ChatClient, render_incoming
from localchat.console import (
    RESET_COLOR,
    YELLOW_COLOR,
    create_separator,
    format_received_message,
    format_sent_message,
    format_system_message,
    format_user_join,
    format_user_leave,
)


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def listener():
    server = socket.create_server(("127.0.0.1", 0))
    server.settimeout(5)
    yield server
    server.close()


def test_render_join_message():
    text = render_incoming("SERVER:bob joined the chat")
    assert text == format_user_join("bob joined the chat") + "\n" + create_separator()


def test_render_leave_message():
    text = render_incoming("SERVER:bob left the chat")
    assert text == format_user_leave("bob left the chat") + "\n" + create_separator()


def test_render_other_server_message():
    text = render_incoming("SERVER:maintenance soon")
    assert text == format_system_message("maintenance soon") + "\n" + create_separator()


def test_render_user_message_splits_on_first_colon():
    text = render_incoming("carol:time is 10:30")
    expected = format_received_message("carol", "time is 10:30") + "\n" + create_separator()
    assert text == expected


def test_render_message_without_colon():
    assert render_incoming("no separator") == YELLOW_COLOR + "no separator" + RESET_COLOR


def test_connect_failure_raises(listener):
    port = listener.getsockname()[1]
    listener.close()
    out = io.StringIO()
    client = ChatClient(out)
    with pytest.raises(ConnectionError):
        client.connect("127.0.0.1", port)
    assert "Failed to connect to server" in out.getvalue()
    client.disconnect()


def test_send_message_reaches_server_and_echoes(listener):
    out = io.StringIO()
    with ChatClient(out) as client:
        client.connect("127.0.0.1", listener.getsockname()[1])
        conn, _ = listener.accept()
        with conn:
            conn.settimeout(5)
            client.send_message("hello")
            assert conn.recv(1024) == b"hello"
    value = out.getvalue()
    assert "Connected to server successfully" in value
    assert format_sent_message("hello") in value


def test_incoming_messages_are_printed(listener):
    out = io.StringIO()
    with ChatClient(out) as client:
        client.connect("127.0.0.1", listener.getsockname()[1])
        conn, _ = listener.accept()
        with conn:
            conn.sendall(b"SERVER:dave joined the chat")
            arrived = wait_for(lambda: "dave joined the chat joined the chat!" in out.getvalue())
            assert arrived is True
            value = out.getvalue()
            assert format_user_join("dave joined the chat") in value
            assert create_separator() in value


def test_server_close_reports_disconnect(listener):
    out = io.StringIO()
    client = ChatClient(out)
    client.connect("127.0.0.1", listener.getsockname()[1])
    conn, _ = listener.accept()
    conn.close()
    assert wait_for(lambda: "Disconnected from server" in out.getvalue())
    client.disconnect()
    assert out.getvalue().count("Disconnected from server") == 1


def test_disconnect_is_idempotent_and_closes(listener):
    out = io.StringIO()
    client = ChatClient(out)
    client.connect("127.0.0.1", listener.getsockname()[1])
    conn, _ = listener.accept()
    with conn:
        client.disconnect()
        client.disconnect()
        assert "Disconnected from server" in out.getvalue()
        with pytest.raises(OSError):
            client.send_message("after close")