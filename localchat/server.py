"""Chat server: accepts clients, relays their messages and announces arrivals."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Optional, TextIO

from .console import (
    BLUE_COLOR,
    CYAN_COLOR,
    GREEN_COLOR,
    RESET_COLOR,
    YELLOW_COLOR,
    format_system_message,
    format_user_join,
    format_user_leave,
    init_console_colors,
)

DEFAULT_PORT = 12345
DEFAULT_ATTEMPTS = 10

_BUFFER_SIZE = 1024
_ACCEPT_TIMEOUT = 0.2


class BindError(OSError):
    """Raised when none of the candidate ports could be bound."""

    def __init__(self, first_port: int, last_port: int) -> None:
        super().__init__(f"Failed to bind to any port from {first_port} to {last_port}")
        self.first_port = first_port
        self.last_port = last_port


class ChatServer:
    """A TCP chat server relaying each client's messages to all the others."""

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        host: str = "",
        attempts: int = DEFAULT_ATTEMPTS,
        output: Optional[TextIO] = None,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self._output = output if output is not None else sys.stdout
        self._write_lock = threading.Lock()
        self._lock = threading.Lock()
        self._clients: dict[socket.socket, str] = {}
        self._history: list[str] = []
        self._stopped = threading.Event()
        init_console_colors()

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        current = port
        for attempt in range(attempts):
            try:
                sock.bind((host, current))
                break
            except (OSError, OverflowError):
                if attempt == 0:
                    self._emit(
                        f"{YELLOW_COLOR}Port {current} is already in use, "
                        f"trying alternative ports...{RESET_COLOR}"
                    )
                current += 1
        else:
            sock.close()
            raise BindError(port, port + attempts - 1)

        if current != port:
            self._emit(f"{GREEN_COLOR}Successfully bound to alternative port: {current}{RESET_COLOR}")
            self._emit(
                f"{YELLOW_COLOR}Clients should connect to port {current} "
                f"instead of {port}{RESET_COLOR}"
            )

        try:
            sock.listen(socket.SOMAXCONN)
        except OSError:
            sock.close()
            raise
        sock.settimeout(_ACCEPT_TIMEOUT)
        self._socket = sock
        self._port = sock.getsockname()[1]

    @property
    def port(self) -> int:
        """The port the server is actually listening on."""
        return self._port

    @property
    def history(self) -> list[str]:
        """A copy of every message the server has relayed, in order."""
        with self._lock:
            return list(self._history)

    def _emit(self, text: str) -> None:
        with self._write_lock:
            self._output.write(text + "\n")
            self._output.flush()

    def start(self) -> None:
        """Accept clients until :meth:`stop` is called; blocks the calling thread."""
        if self._stopped.is_set():
            return
        self._emit(format_system_message("Server started. Waiting for connections..."))
        while not self._stopped.is_set():
            try:
                conn, _ = self._socket.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.settimeout(None)
            with self._lock:
                if self._stopped.is_set():
                    conn.close()
                    break
                self._clients[conn] = ""
            self._emit(f"{BLUE_COLOR}New client connected. Socket ID: {conn.fileno()}{RESET_COLOR}")
            threading.Thread(target=self._handle_client, args=(conn,), daemon=True).start()

    def _receive(self, conn: socket.socket) -> bytes:
        try:
            return conn.recv(_BUFFER_SIZE)
        except OSError:
            return b""

    def _record(self, message: str) -> None:
        with self._lock:
            self._history.append(message)

    def _handle_client(self, conn: socket.socket) -> None:
        data = self._receive(conn)
        if not data:
            with self._lock:
                self._clients.pop(conn, None)
            conn.close()
            return

        username = data.decode("utf-8", errors="replace")
        with self._lock:
            if conn in self._clients:
                self._clients[conn] = username
        join_message = f"SERVER:{username} joined the chat"
        self._record(join_message)
        self._broadcast(join_message, conn)
        self._emit(format_user_join(username))

        while not self._stopped.is_set():
            data = self._receive(conn)
            if not data:
                break
            content = data.decode("utf-8", errors="replace")
            formatted = f"{username}:{content}"
            self._emit(f"{CYAN_COLOR}[{username}]: {RESET_COLOR}{content}")
            self._record(formatted)
            self._broadcast(formatted, conn)

        with self._lock:
            self._clients.pop(conn, None)
        leave_message = f"SERVER:{username} left the chat"
        self._record(leave_message)
        self._broadcast(leave_message, None)
        self._emit(format_user_leave(username))
        conn.close()

    def _broadcast(self, message: str, sender: Optional[socket.socket]) -> None:
        payload = message.encode("utf-8")
        with self._lock:
            for client in self._clients:
                if client is sender:
                    continue
                try:
                    client.sendall(payload)
                except OSError:
                    pass

    def stop(self) -> None:
        """Disconnect every client and close the listening socket; safe to call twice."""
        if self._stopped.is_set():
            return
        self._stopped.set()
        self._emit(format_system_message("Shutting down server..."))
        with self._lock:
            clients = list(self._clients)
            self._clients.clear()
        for client in clients:
            try:
                client.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            client.close()
        self._socket.close()

    def __enter__(self) -> "ChatServer":
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()