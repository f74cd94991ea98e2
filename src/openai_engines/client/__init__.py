"""Request dispatch: parameters, transport and the client facade."""

from .api import OpenAIClient
from .transport import HTTPXTransport, Transport

__all__ = ["HTTPXTransport", "OpenAIClient", "Transport"]
