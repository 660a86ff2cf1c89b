"""
Upstream content provider clients.

ContentGateway wraps one provider (Quran API or Hadith API) behind a single
fetch() call that returns decoded JSON or raises GatewayError.
"""

from src.clients.gateway import (
    ContentGateway,
    ContentGatewayProtocol,
    FakeContentGateway,
)

__all__ = [
    "ContentGateway",
    "ContentGatewayProtocol",
    "FakeContentGateway",
]
