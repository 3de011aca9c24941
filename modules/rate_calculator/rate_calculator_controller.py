import http

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

# schema
from schema.base import GenericResponseModel
from modules.rate_calculator.rate_calculator_schema import RateCalculatorParamsModel
from modules.rate_calculator.rate_calculator_config import RATE_CALCULATOR_RATE_LIMIT

# utils
from utils.response_handler import build_api_response, build_error_response
from utils.exception_handler import handle_validation_error
from utils.exceptions import RateCalculationError
from context_manager.context import SellerContext, build_seller_context
from context_manager.services import get_rate_card_store, get_serviceability_service
from limiter import limiter
from logger import logger

# services
from modules.rate_card.rate_card_store import RateCardStore
from modules.serviceability.serviceability_service import ServiceabilityService
from .rate_calculator_service import RateCalculatorService


rate_calculator_router = APIRouter(tags=["rate_calculator"])


@rate_calculator_router.post(
    "/ratecalculator",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
@limiter.limit(RATE_CALCULATOR_RATE_LIMIT)
# plain def: FastAPI runs it in the threadpool while the courier fan-out waits
def calculate_rate(
    request: Request,
    rate_calculator_params: RateCalculatorParamsModel,
    seller: SellerContext = Depends(build_seller_context),
    store: RateCardStore = Depends(get_rate_card_store),
    serviceability: ServiceabilityService = Depends(get_serviceability_service),
):
    try:
        spec = rate_calculator_params.to_shipment_spec()
        result = RateCalculatorService(store, serviceability).calculate_rates(
            spec, seller_id=seller.client_id
        )

        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=result.to_display(),
                message="Rates calculated successfully",
            )
        )

    except ValidationError as e:
        return handle_validation_error(e)

    except RateCalculationError as e:
        return build_error_response(e)

    except Exception as e:
        logger.error(
            extra=seller,
            msg=f"Unhandled error in calculate_rate: {str(e)}",
        )
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while calculating the rate.",
            )
        )
