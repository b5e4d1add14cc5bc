"""
Session lookup against the external identity provider.

Authentication itself happens upstream; this module only asks "who is the
session subject for this request?".

The default provider trusts a subject header written by the auth proxy.
Deploy the service only behind that proxy: a client reaching it directly
can claim any subject and read that user's history. Setting
SESSION_PROXY_SECRET makes the provider ignore subject headers that do not
arrive with the proxy's shared secret.
"""
import hmac
from abc import ABC, abstractmethod
from typing import Optional
from fastapi import Request

from neuroscope.core.config import settings
from neuroscope.core.logging import get_logger

logger = get_logger("api.session")


class SessionProvider(ABC):
    """Resolves the session subject (user id) for a request."""

    @abstractmethod
    def get_subject(self, request: Request) -> Optional[str]:
        """Return the subject id, or None for anonymous requests."""
        pass


class HeaderSessionProvider(SessionProvider):
    """Trusts a subject header set by the upstream auth proxy."""

    def __init__(
        self,
        header_name: str,
        proxy_secret: str = "",
        secret_header: str = "X-Proxy-Secret"
    ):
        self.header_name = header_name
        self.proxy_secret = proxy_secret
        self.secret_header = secret_header

    def _from_proxy(self, request: Request) -> bool:
        if not self.proxy_secret:
            return True
        presented = request.headers.get(self.secret_header, "")
        return hmac.compare_digest(presented.encode("utf-8"), self.proxy_secret.encode("utf-8"))

    def get_subject(self, request: Request) -> Optional[str]:
        subject = request.headers.get(self.header_name, "").strip()
        if not subject:
            return None
        if not self._from_proxy(request):
            logger.warning(f"Ignoring {self.header_name} without a valid {self.secret_header}")
            return None
        return subject


_provider: SessionProvider = HeaderSessionProvider(
    settings.session_header,
    proxy_secret=settings.session_proxy_secret,
    secret_header=settings.session_secret_header,
)


def set_session_provider(provider: SessionProvider) -> SessionProvider:
    """Replace the session provider (e.g. with a real IdP client).

    Returns the previous provider so callers can restore it.
    """
    global _provider
    previous = _provider
    _provider = provider
    return previous


def get_session_subject(request: Request) -> Optional[str]:
    """Dependency: current session subject or None."""
    return _provider.get_subject(request)
