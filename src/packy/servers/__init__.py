"""Server tools package - pack tools."""

from .pack_tools import pack_server

__all__ = ["pack_server"]
