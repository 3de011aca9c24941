import http

from fastapi import APIRouter, Depends

# schema
from schema.base import GenericResponseModel

# utils
from utils.response_handler import build_api_response, build_error_response
from utils.exceptions import RateCalculationError
from context_manager.context import SellerContext, build_seller_context
from context_manager.services import get_rate_card_store
from logger import logger

# services
from .rate_card_store import RateCardStore
from .rate_card_service import RateCardService


rate_card_router = APIRouter(tags=["rate_card"])


@rate_card_router.get(
    "/rate-card",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
def get_rate_card(
    seller: SellerContext = Depends(build_seller_context),
    store: RateCardStore = Depends(get_rate_card_store),
):
    try:
        rate_card = RateCardService(store).get_rate_card(seller.client_id)
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=rate_card,
                message="Rate Card fetched successfully",
            )
        )

    except RateCalculationError as e:
        return build_error_response(e)

    except Exception as e:
        logger.error(extra=seller, msg=f"Unhandled error in get_rate_card: {str(e)}")
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the rate card.",
            )
        )
