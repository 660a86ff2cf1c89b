"""
ZEE Search Service - Custom Exceptions

Anti-Patterns Avoided:
- Exception shadowing: namespaced exceptions rooted at ZeeError instead of
  reusing builtins like ConnectionError or TimeoutError
"""


class ZeeError(Exception):
    """Base exception for ZEE Search Service.

    All custom exceptions inherit from this base class.
    """
    pass


class GatewayError(ZeeError):
    """Raised when an upstream content provider call fails.

    Attributes:
        status: Upstream HTTP status, or 0 when no response was received
        path: Request path (never includes query parameters)
    """

    def __init__(self, status: int, path: str, provider: str = "content") -> None:
        super().__init__(f"{provider} API {status} - {path}")
        self.status = status
        self.path = path
        self.provider = provider

    @property
    def no_response(self) -> bool:
        """True when the request never produced an HTTP response."""
        return self.status == 0


class SourceTimeoutError(GatewayError):
    """Raised when a search source does not settle within its time budget."""

    def __init__(self, source: str, timeout: float) -> None:
        super().__init__(0, f"search:{source}", provider=source)
        self.source = source
        self.timeout = timeout


class NotFoundError(ZeeError):
    """Raised when a well-formed reference does not resolve to a record."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"Not found: {resource}")
        self.resource = resource


class DualSourceFailure(ZeeError):
    """Raised when both the Quran and the Hadith source fail for one search.

    Both reasons are kept so callers can report each source separately.
    """

    def __init__(self, quran_reason: Exception, hadith_reason: Exception) -> None:
        super().__init__(
            f"All search sources failed (quran: {quran_reason}; hadith: {hadith_reason})"
        )
        self.quran_reason = quran_reason
        self.hadith_reason = hadith_reason


class ConfigurationError(ZeeError):
    """Raised when configuration is invalid or missing."""
    pass
