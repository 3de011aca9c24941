import http

from fastapi import APIRouter, Depends

# schema
from schema.base import GenericResponseModel

# utils
from utils.response_handler import build_api_response, build_error_response
from utils.exceptions import RateCalculationError
from context_manager.services import get_serviceability_service
from logger import logger

# services
from .serviceability_service import ServiceabilityService


serviceability_router = APIRouter(tags=["serviceability"])


@serviceability_router.get(
    "/pincode/details",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
def get_pincode_details(
    pincode: str,
    service: ServiceabilityService = Depends(get_serviceability_service),
):
    try:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=service.get_pincode_details(pincode),
                message="Pincode data fetched successfully",
            )
        )

    except RateCalculationError as e:
        return build_error_response(e)

    except Exception as e:
        logger.error(msg=f"Error while fetching pincode details: {str(e)}")
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Could not fetch pincode details",
            )
        )


@serviceability_router.get(
    "/pincode/zone",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
def get_zone(
    origin: str,
    destination: str,
    service: ServiceabilityService = Depends(get_serviceability_service),
):
    try:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=service.get_zone_details(origin, destination),
                message="Zone calculated successfully",
            )
        )

    except RateCalculationError as e:
        return build_error_response(e)

    except Exception as e:
        logger.error(msg=f"Error calculating zone: {str(e)}")
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Could not calculate the zone",
            )
        )
