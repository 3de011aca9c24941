from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException

from logger import logger

# defining the context variables to store different types of required data

context_user_data: ContextVar[str] = ContextVar("user_data", default="")


@dataclass(frozen=True)
class SellerContext:
    client_id: int

    def __str__(self):
        return f"client_id={self.client_id}"


# whenever an api is hit, define the context variables for it
async def build_request_context():
    context_user_data.set("")
    logger.info(msg="REQUEST_INITIATED")


# the seller is identified upstream, this service only trusts the forwarded header
async def build_seller_context(x_client_id: Optional[int] = Header(default=None)):
    if x_client_id is None:
        raise HTTPException(
            status_code=401,
            detail={"message": "X-Client-Id header is required", "status": False},
        )

    seller = SellerContext(client_id=x_client_id)
    context_user_data.set(seller)
    return seller
