from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from core.config import settings


def get_client_key(request: Request) -> str:
    """
    Rate-limit bucket for a request.

    Order kiosks usually sit behind a reverse proxy, so the first
    X-Forwarded-For hop identifies the client when present.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        client = forwarded.split(",")[0].strip()
        if client:
            return client

    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_key,
    default_limits=["300/hour"],
    enabled=settings.ENV != "testing"
)
