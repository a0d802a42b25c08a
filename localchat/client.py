"""Chat client: connects to a server, sends lines and prints what arrives."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Optional, TextIO

from .console import (
    RESET_COLOR,
    YELLOW_COLOR,
    create_separator,
    format_received_message,
    format_sent_message,
    format_system_message,
    format_user_join,
    format_user_leave,
    init_console_colors,
)

_BUFFER_SIZE = 1024


def render_incoming(raw_message: str) -> str:
    """Turn a raw ``name:content`` message from the server into console text."""
    username, sep, content = raw_message.partition(":")
    if not sep:
        return f"{YELLOW_COLOR}{raw_message}{RESET_COLOR}"
    if username == "SERVER":
        if "joined" in content:
            body = format_user_join(content)
        elif "left" in content:
            body = format_user_leave(content)
        else:
            body = format_system_message(content)
    else:
        body = format_received_message(username, content)
    return f"{body}\n{create_separator()}"


class ChatClient:
    """A TCP chat client with a background thread printing incoming messages."""

    def __init__(self, output: Optional[TextIO] = None) -> None:
        self._output = output if output is not None else sys.stdout
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._write_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._closed = False
        init_console_colors()

    def _emit(self, text: str) -> None:
        with self._write_lock:
            self._output.write(text + "\n")
            self._output.flush()

    def connect(self, server_ip: str, port: int) -> None:
        """Connect to the server and start receiving; raise ConnectionError on failure."""
        try:
            self._socket.connect((server_ip, port))
        except OSError as exc:
            self._emit(format_system_message("Failed to connect to server"))
            raise ConnectionError(f"failed to connect to {server_ip}:{port}") from exc
        self._emit(format_system_message("Connected to server successfully"))
        self._running = True
        self._thread = threading.Thread(target=self._receive_messages, daemon=True)
        self._thread.start()

    def _receive_messages(self) -> None:
        try:
            while self._running:
                try:
                    data = self._socket.recv(_BUFFER_SIZE)
                except OSError:
                    break
                if not data:
                    break
                self._emit(render_incoming(data.decode("utf-8", errors="replace")))
        finally:
            self._emit(format_system_message("Disconnected from server"))

    def send_message(self, message: str) -> None:
        """Send *message* to the server and echo it locally."""
        self._socket.sendall(message.encode("utf-8"))
        self._emit(format_sent_message(message))
        self._emit(create_separator())

    def disconnect(self) -> None:
        """Stop receiving and close the connection; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        self._running = False
        if self._thread is not None:
            try:
                self._socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            if self._thread is not threading.current_thread():
                self._thread.join()
        self._socket.close()

    def __enter__(self) -> "ChatClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.disconnect()