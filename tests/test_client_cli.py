import io
import socket
import sys
import threading
import time
from unittest import mock

import pytest

from localchat import client_cli
from localchat.server import ChatServer


def _wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def server():
    srv = ChatServer(0, host="127.0.0.1", output=io.StringIO())
    thread = threading.Thread(target=srv.start, daemon=True)
    thread.start()
    yield srv
    srv.stop()
    thread.join(timeout=5)


def _free_port():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_joins_and_leaves(server, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("127.0.0.1\nalice\nexit\n"))
    with mock.patch("subprocess.run"):
        code = client_cli.main(["--port", str(server.port)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Connected to server successfully" in out
    assert "===== Connected to Chat Server =====" in out
    assert "Disconnecting from server..." in out
    assert _wait_for(lambda: "SERVER:alice left the chat" in server.history)
    assert server.history[0] == "SERVER:alice joined the chat"


def test_empty_username_is_asked_again(server, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n\nbob\nexit\n"))
    with mock.patch("subprocess.run"):
        code = client_cli.main(["--port", str(server.port)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Username cannot be empty! Try again: " in out
    assert "Connecting to 127.0.0.1..." in out
    assert _wait_for(lambda: "SERVER:bob joined the chat" in server.history)


def test_clear_command_redraws_banner(server, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("127.0.0.1\ncarol\nclear\nexit\n"))
    with mock.patch("subprocess.run") as run:
        code = client_cli.main(["--port", str(server.port)])
    out = capsys.readouterr().out
    assert code == 0
    assert run.call_count == 2
    assert out.count("===== Connected to Chat Server =====") == 2


def test_missing_username_exits_with_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("127.0.0.1\n"))
    with mock.patch("subprocess.run"):
        code = client_cli.main(["--port", str(_free_port())])
    assert code == 1
    assert "Connecting to" not in capsys.readouterr().out


def test_connection_failure(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("127.0.0.1\ndave\n"))
    with mock.patch("subprocess.run"):
        code = client_cli.main(["--port", str(_free_port())])
    out = capsys.readouterr().out
    assert code == 1
    assert "Failed to connect to server." in out