from __future__ import annotations

from urllib.parse import urlsplit

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class MalformedReferer(ValueError):
    pass


def _origin_of(url: str) -> str:
    parsed = urlsplit(url.strip())
    if not parsed.scheme or not parsed.netloc:
        raise MalformedReferer(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_request_origin(origin: str | None, referer: str | None) -> str | None:
    """Origin header if present, otherwise the origin part of the Referer; None when neither is sent."""
    if origin:
        return origin.strip().rstrip("/")
    if referer:
        return _origin_of(referer)
    return None


def _is_localhost(origin: str) -> bool:
    host = urlsplit(origin).hostname or ""
    return host == "localhost"


def is_origin_allowed(origin: str, allowed: list[str]) -> bool:
    # Any localhost port is accepted once a localhost origin is on the list.
    for candidate in allowed:
        if origin == candidate:
            return True
        if _is_localhost(candidate) and _is_localhost(origin):
            return True
    return False
