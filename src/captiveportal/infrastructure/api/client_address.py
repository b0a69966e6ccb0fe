"""Client address resolution shared by routes and middleware."""

from starlette.requests import HTTPConnection


def client_ip(request: HTTPConnection) -> str | None:
    """Return the first X-Forwarded-For hop, or the peer address.

    Guests reach the portal through the gateway, so the peer address is
    the gateway's own.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else None
