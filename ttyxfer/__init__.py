"""XMODEM serial file transfer, a console shell, and in-memory peripheral register helpers."""

__version__ = "0.1.0"