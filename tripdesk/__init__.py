"""tripdesk: custom trip inquiry backend."""

__version__ = "0.1.0"
