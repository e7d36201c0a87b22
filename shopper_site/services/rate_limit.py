"""Per-client rate limiting for form submissions."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from shopper_site.config import get_settings


def client_ip(request: Request) -> str:
    """Client address: first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return get_remote_address(request) or "unknown"


def contact_rate_limit() -> str:
    return get_settings().CONTACT_RATE_LIMIT


# Storage comes from settings so several instances can share e.g. redis://
limiter = Limiter(key_func=client_ip, storage_uri=get_settings().RATE_LIMIT_STORAGE_URI)
