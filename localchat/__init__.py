"""A local TCP chat server and terminal client with styled console output."""

__version__ = "0.1.0"