"""Chat transport module."""

from .chat_client import ChatClient, IChatTransport

__all__ = ["ChatClient", "IChatTransport"]
