"""Command that runs a chat server until Enter is pressed."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import threading
from typing import Optional, Sequence

from .console import (
    BLUE_COLOR,
    BOLD_TEXT,
    CYAN_COLOR,
    GREEN_COLOR,
    RED_COLOR,
    RESET_COLOR,
    YELLOW_COLOR,
    init_console_colors,
)
from .server import DEFAULT_PORT, BindError, ChatServer


def clear_screen() -> None:
    """Clear the terminal using the platform's clear command."""
    command = "cls" if os.name == "nt" else "clear"
    try:
        subprocess.run(command, shell=True, check=False)
    except OSError:
        pass


def _report_bind_failure(exc: BindError) -> None:
    err = sys.stderr
    print(f"{RED_COLOR}{BOLD_TEXT}{exc}{RESET_COLOR}", file=err)
    print(f"{YELLOW_COLOR}Solutions:{RESET_COLOR}", file=err)
    print(f"1. Kill any existing server process: {CYAN_COLOR}pkill -f server{RESET_COLOR}", file=err)
    print("2. Wait a moment and try again", file=err)
    print("3. Restart your terminal/computer", file=err)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the server, wait for Enter on standard input, then shut it down."""
    parser = argparse.ArgumentParser(prog="localchat-server", description="Run a local chat server.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--host", default="", help="address to bind (default: all interfaces)")
    args = parser.parse_args(argv)

    init_console_colors()
    clear_screen()
    print(f"{BLUE_COLOR}{BOLD_TEXT}===== Local Chat Server ====={RESET_COLOR}", flush=True)

    try:
        server = ChatServer(args.port, host=args.host)
    except BindError as exc:
        _report_bind_failure(exc)
        return 1

    print(f"{BLUE_COLOR}Server starting on port {server.port}{RESET_COLOR}")
    print(f"{YELLOW_COLOR}Press Enter to stop the server.{RESET_COLOR}", flush=True)

    thread = threading.Thread(target=server.start, daemon=True)
    thread.start()

    sys.stdin.readline()

    print(f"{RED_COLOR}Stopping server...{RESET_COLOR}", flush=True)
    server.stop()
    thread.join()
    print(f"{GREEN_COLOR}Server stopped successfully.{RESET_COLOR}", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())