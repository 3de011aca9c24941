from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address


# keyed per seller when the client header is present
def seller_or_remote_address(request: Request) -> str:
    client_id = request.headers.get("x-client-id")
    if client_id:
        return f"client:{client_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=seller_or_remote_address)


def rate_limit_handler(request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429, content={"detail": "Too many requests. Slow down!"}
    )
