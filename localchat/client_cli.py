"""Command that connects to a chat server and sends typed lines."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .client import ChatClient
from .console import (
    BOLD_TEXT,
    CYAN_COLOR,
    GREEN_COLOR,
    RED_COLOR,
    RESET_COLOR,
    YELLOW_COLOR,
    init_console_colors,
)
from .server import DEFAULT_PORT
from .server_cli import clear_screen

DEFAULT_SERVER_IP = "127.0.0.1"


def _prompt(text: str) -> Optional[str]:
    print(text, end="", flush=True)
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def _print_connected_banner() -> None:
    print(f"{GREEN_COLOR}{BOLD_TEXT}===== Connected to Chat Server ====={RESET_COLOR}")
    print(f"{YELLOW_COLOR}Type 'exit' to quit or 'clear' to clear screen{RESET_COLOR}", flush=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for a server and username, then relay standard input to the chat."""
    parser = argparse.ArgumentParser(prog="localchat-client", description="Join a local chat server.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server port")
    args = parser.parse_args(argv)

    init_console_colors()
    print(f"{YELLOW_COLOR}{BOLD_TEXT}===== Local Chat Client ====={RESET_COLOR}", flush=True)

    with ChatClient() as client:
        server_ip = _prompt(f"{CYAN_COLOR}Enter server IP{RESET_COLOR} (default {DEFAULT_SERVER_IP}): ")
        if not server_ip:
            server_ip = DEFAULT_SERVER_IP

        username = _prompt(f"{CYAN_COLOR}Enter your username: {RESET_COLOR}")
        while username == "":
            username = _prompt(f"{RED_COLOR}Username cannot be empty! Try again: {RESET_COLOR}")
        if username is None:
            return 1

        print(f"{YELLOW_COLOR}Connecting to {server_ip}...{RESET_COLOR}", flush=True)
        try:
            client.connect(server_ip, args.port)
        except ConnectionError:
            print(f"{RED_COLOR}{BOLD_TEXT}Failed to connect to server.{RESET_COLOR}", flush=True)
            return 1

        client.send_message(username)

        clear_screen()
        _print_connected_banner()

        for line in sys.stdin:
            message = line.rstrip("\r\n")
            if message == "exit":
                print(f"{YELLOW_COLOR}Disconnecting from server...{RESET_COLOR}", flush=True)
                break
            if message == "clear":
                clear_screen()
                _print_connected_banner()
                continue
            client.send_message(message)

    return 0


if __name__ == "__main__":
    sys.exit(main())